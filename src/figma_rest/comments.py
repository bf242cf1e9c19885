"""Figma REST - Comment Methods."""
from typing import Optional

from .client import FigmaClient


async def figma_get_comments(client: FigmaClient, file_key: str, as_md: bool = False) -> dict:
    """Get comments in a Figma file.
    
    Args:
        client: Figma API client
        file_key: The file key
        as_md: Return comments as markdown
    
    Returns:
        List of comments
    """
    params = {"as_md": "true"} if as_md else None
    return await client.get(f"/v1/files/{file_key}/comments", params=params)


async def figma_post_comment(
    client: FigmaClient,
    file_key: str,
    message: str,
    client_meta: Optional[dict] = None,
    comment_id: Optional[str] = None
) -> dict:
    """Add a comment to a Figma file.
    
    Args:
        client: Figma API client
        file_key: The file key
        message: Comment text
        client_meta: Position metadata (x, y, node_id, node_offset)
        comment_id: Parent comment ID for replies
    
    Returns:
        Created comment data
    """
    data = {"message": message}
    if client_meta:
        data["client_meta"] = client_meta
    if comment_id:
        data["comment_id"] = comment_id
    
    return await client.post(f"/v1/files/{file_key}/comments", json_data=data)
