"""MCP server exposing the Figma REST API as tools.

Usage:
    figma-rest-mcp            (stdio transport)

Requires FIGMA_API_KEY in the environment or a .env file.
"""
import json
import logging
import sys
from typing import Optional, List

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from figma_rest import Cache, FigmaClient, FigmaConfig
from . import tools

logger = logging.getLogger("figma_mcp")

CACHE_MAX_SIZE = 100

mcp = FastMCP("figma")

_client: Optional[FigmaClient] = None


def get_client() -> FigmaClient:
    """Get or create the shared Figma client."""
    global _client
    if _client is None:
        config = FigmaConfig.from_env()
        _client = FigmaClient(
            config,
            cache=Cache(max_size=CACHE_MAX_SIZE, default_ttl_ms=config.cache_ttl_ms),
            logger=logging.getLogger("figma_mcp.http"),
        )
    return _client


def _dump(result: dict) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


@mcp.tool()
async def get_file(file_key: str, depth: Optional[int] = None, version: Optional[str] = None) -> str:
    """Get a Figma file's name, pages and component/style counts."""
    return _dump(await tools.get_file(get_client(), file_key, depth=depth, version=version))


@mcp.tool()
async def get_file_nodes(file_key: str, node_ids: List[str], depth: Optional[int] = None) -> str:
    """Get the node documents for the given node IDs in a file."""
    return _dump(await tools.get_file_nodes(get_client(), file_key, node_ids, depth=depth))


@mcp.tool()
async def get_components(file_key: str, name: Optional[str] = None) -> str:
    """List published components in a file, optionally filtered by name."""
    return _dump(await tools.get_components(get_client(), file_key, name=name))


@mcp.tool()
async def get_styles(file_key: str, style_type: Optional[str] = None) -> str:
    """List published styles in a file (style_type: FILL, TEXT, EFFECT, GRID)."""
    return _dump(await tools.get_styles(get_client(), file_key, style_type=style_type))


@mcp.tool()
async def export_images(file_key: str, node_ids: List[str], format: str = "png", scale: float = 1) -> str:
    """Render nodes as png, jpg, svg or pdf and return download URLs."""
    return _dump(await tools.export_images(get_client(), file_key, node_ids, format=format, scale=scale))


@mcp.tool()
async def get_comments(file_key: str) -> str:
    """List comment threads in a file."""
    return _dump(await tools.get_comments(get_client(), file_key))


@mcp.tool()
async def post_comment(
    file_key: str,
    message: str,
    node_id: Optional[str] = None,
    reply_to: Optional[str] = None
) -> str:
    """Post a comment on a file, a node, or as a reply to another comment."""
    return _dump(await tools.post_comment(get_client(), file_key, message, node_id=node_id, reply_to=reply_to))


@mcp.tool()
async def get_versions(file_key: str, limit: Optional[int] = None) -> str:
    """List the version history of a file."""
    return _dump(await tools.get_versions(get_client(), file_key, limit=limit))


@mcp.tool()
async def get_team_projects(team_id: str) -> str:
    """List projects in a team."""
    return _dump(await tools.get_team_projects(get_client(), team_id))


@mcp.tool()
async def get_project_files(project_id: str) -> str:
    """List files in a project."""
    return _dump(await tools.get_project_files(get_client(), project_id))


@mcp.tool()
def parse_figma_url(url: str) -> str:
    """Extract file_key and node_id from a Figma URL."""
    return _dump(tools.parse_figma_url(url))


def main():
    load_dotenv()
    # All output goes to stderr so the stdio transport stays clean
    logging.basicConfig(
        level=logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logger.info("Starting Figma MCP server")
    mcp.run()


if __name__ == "__main__":
    main()
