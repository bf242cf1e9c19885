"""Figma REST - Style Methods."""
from .client import FigmaClient


async def figma_get_file_styles(client: FigmaClient, file_key: str) -> dict:
    """Get styles in a file.
    
    Args:
        client: Figma API client
        file_key: The file key
    
    Returns:
        List of styles with metadata
    """
    return await client.get(f"/v1/files/{file_key}/styles")


async def figma_get_style(client: FigmaClient, style_key: str) -> dict:
    """Get a published style by key."""
    return await client.get(f"/v1/styles/{style_key}")
