"""Figma REST API Client.

Async Figma API client with rate-limit aware retries and an in-memory
TTL/LRU response cache.
"""

# Core
from .cache import (
    Cache,
    CacheEntry,
    create_cache,
)
from .rate_limit import (
    RateLimitInfo,
    parse_headers,
)
from .retry import (
    should_retry,
    with_retry,
    get_retry_after,
)
from .errors import (
    FigmaError,
    is_rate_limit_error,
    parse_figma_error_response,
)

# Base client
from .client import (
    FigmaClient,
    FigmaConfig,
)

# File methods
from .files import (
    figma_get_file,
    figma_get_file_nodes,
    figma_get_images,
    figma_get_image_fills,
    figma_get_file_versions,
)

# Comment methods
from .comments import (
    figma_get_comments,
    figma_post_comment,
)

# Team and project methods
from .teams import (
    figma_get_team_projects,
    figma_get_project_files,
)

# Component methods
from .components import (
    figma_get_file_components,
    figma_get_component,
    figma_get_file_component_sets,
)

# Style methods
from .styles import (
    figma_get_file_styles,
    figma_get_style,
)


__all__ = [
    # Core
    "Cache",
    "CacheEntry",
    "create_cache",
    "RateLimitInfo",
    "parse_headers",
    "should_retry",
    "with_retry",
    "get_retry_after",
    "FigmaError",
    "is_rate_limit_error",
    "parse_figma_error_response",
    # Client
    "FigmaClient",
    "FigmaConfig",
    # Files
    "figma_get_file",
    "figma_get_file_nodes",
    "figma_get_images",
    "figma_get_image_fills",
    "figma_get_file_versions",
    # Comments
    "figma_get_comments",
    "figma_post_comment",
    # Teams
    "figma_get_team_projects",
    "figma_get_project_files",
    # Components
    "figma_get_file_components",
    "figma_get_component",
    "figma_get_file_component_sets",
    # Styles
    "figma_get_file_styles",
    "figma_get_style",
]
