"""Figma REST - Component Methods.

Methods for working with components and component sets.
"""
from .client import FigmaClient


async def figma_get_file_components(client: FigmaClient, file_key: str) -> dict:
    """Get components in a file.
    
    Args:
        client: Figma API client
        file_key: The file key
    
    Returns:
        List of components with metadata
    """
    return await client.get(f"/v1/files/{file_key}/components")


async def figma_get_component(client: FigmaClient, component_key: str) -> dict:
    """Get a published component by key."""
    return await client.get(f"/v1/components/{component_key}")


async def figma_get_file_component_sets(client: FigmaClient, file_key: str) -> dict:
    """Get component sets in a file.
    
    Args:
        client: Figma API client
        file_key: The file key
    
    Returns:
        List of component sets
    """
    return await client.get(f"/v1/files/{file_key}/component_sets")
