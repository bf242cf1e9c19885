"""Figma tools exposed over MCP.

Each tool validates its arguments, calls the Figma REST client and
returns a JSON-ready dict. API failures are reported as {"error": ...}.
"""
import functools
import re
from typing import Optional, List
from urllib.parse import unquote

from figma_rest import (
    FigmaClient,
    FigmaError,
    figma_get_file,
    figma_get_file_nodes,
    figma_get_images,
    figma_get_file_versions,
    figma_get_comments,
    figma_post_comment,
    figma_get_team_projects,
    figma_get_project_files,
    figma_get_file_components,
    figma_get_file_styles,
)


IMAGE_FORMATS = ("png", "jpg", "svg", "pdf")
MIN_IMAGE_SCALE = 0.01
MAX_IMAGE_SCALE = 4


def _tool(fn):
    """Turn API and validation failures into an error payload."""
    @functools.wraps(fn)
    async def wrapper(*args, **kwargs) -> dict:
        try:
            return await fn(*args, **kwargs)
        except FigmaError as e:
            result = {"error": e.message, "status": e.status}
            if e.rate_limit_info is not None:
                result["rate_limit"] = _rate_limit_dict(e.rate_limit_info)
            return result
        except ValueError as e:
            return {"error": str(e)}
    return wrapper


def _rate_limit_dict(info) -> dict:
    return {
        "remaining": info.remaining,
        "reset": info.reset.isoformat() if info.reset else None,
    }


def _require(value: Optional[str], name: str) -> str:
    if not value or not str(value).strip():
        raise ValueError(f"{name} is required")
    return str(value).strip()


def _require_ids(node_ids: Optional[List[str]]) -> List[str]:
    ids = [i.strip() for i in (node_ids or []) if i and i.strip()]
    if not ids:
        raise ValueError("node_ids must contain at least one node ID")
    return ids


@_tool
async def get_file(
    client: FigmaClient,
    file_key: str,
    depth: Optional[int] = None,
    version: Optional[str] = None
) -> dict:
    """Get file metadata and its top-level pages."""
    file_key = _require(file_key, "file_key")
    if depth is not None and depth < 1:
        raise ValueError("depth must be a positive integer")

    data = await figma_get_file(client, file_key, version=version, depth=depth)
    document = data.get("document", {})
    return {
        "name": data.get("name"),
        "last_modified": data.get("lastModified"),
        "version": data.get("version"),
        "thumbnail_url": data.get("thumbnailUrl"),
        "pages": [
            {"id": page.get("id"), "name": page.get("name")}
            for page in document.get("children", [])
        ],
        "component_count": len(data.get("components", {})),
        "style_count": len(data.get("styles", {})),
    }


@_tool
async def get_file_nodes(
    client: FigmaClient,
    file_key: str,
    node_ids: List[str],
    depth: Optional[int] = None
) -> dict:
    """Get the documents of specific nodes."""
    file_key = _require(file_key, "file_key")
    ids = _require_ids(node_ids)

    data = await figma_get_file_nodes(client, file_key, ids, depth=depth)
    nodes = data.get("nodes", {})
    return {
        "name": data.get("name"),
        "nodes": {
            node_id: (entry or {}).get("document")
            for node_id, entry in nodes.items()
        },
    }


@_tool
async def get_components(client: FigmaClient, file_key: str, name: Optional[str] = None) -> dict:
    """List published components in a file, optionally filtered by name."""
    file_key = _require(file_key, "file_key")

    data = await figma_get_file_components(client, file_key)
    components = data.get("meta", {}).get("components", [])
    if name:
        name_lower = name.lower()
        components = [c for c in components if name_lower in c.get("name", "").lower()]

    return {
        "total": len(components),
        "components": [
            {
                "key": c.get("key"),
                "node_id": c.get("node_id"),
                "name": c.get("name"),
                "description": c.get("description", ""),
                "frame": c.get("containing_frame", {}).get("name"),
            }
            for c in components
        ],
    }


@_tool
async def get_styles(client: FigmaClient, file_key: str, style_type: Optional[str] = None) -> dict:
    """List published styles in a file, optionally of one type (FILL, TEXT, ...)."""
    file_key = _require(file_key, "file_key")

    data = await figma_get_file_styles(client, file_key)
    styles = data.get("meta", {}).get("styles", [])
    if style_type:
        styles = [s for s in styles if s.get("style_type") == style_type.upper()]

    return {
        "total": len(styles),
        "styles": [
            {
                "key": s.get("key"),
                "node_id": s.get("node_id"),
                "name": s.get("name"),
                "style_type": s.get("style_type"),
                "description": s.get("description", ""),
            }
            for s in styles
        ],
    }


@_tool
async def export_images(
    client: FigmaClient,
    file_key: str,
    node_ids: List[str],
    format: str = "png",
    scale: float = 1
) -> dict:
    """Render nodes to images and return their URLs."""
    file_key = _require(file_key, "file_key")
    ids = _require_ids(node_ids)
    if format not in IMAGE_FORMATS:
        raise ValueError(f"format must be one of: {', '.join(IMAGE_FORMATS)}")
    if not MIN_IMAGE_SCALE <= scale <= MAX_IMAGE_SCALE:
        raise ValueError(f"scale must be between {MIN_IMAGE_SCALE} and {MAX_IMAGE_SCALE}")

    data = await figma_get_images(client, file_key, ids, scale=scale, format=format)
    if data.get("err"):
        return {"error": data["err"]}

    images = data.get("images", {})
    return {
        "images": images,
        "failed": [node_id for node_id in ids if not images.get(node_id)],
    }


@_tool
async def get_comments(client: FigmaClient, file_key: str) -> dict:
    """List comments in a file, replies grouped under their parent."""
    file_key = _require(file_key, "file_key")

    data = await figma_get_comments(client, file_key)
    comments = data.get("comments", [])

    threads = {}
    replies = []
    for c in comments:
        entry = {
            "id": c.get("id"),
            "message": c.get("message"),
            "author": c.get("user", {}).get("handle"),
            "created_at": c.get("created_at"),
            "resolved": bool(c.get("resolved_at")),
        }
        if c.get("parent_id"):
            replies.append((c["parent_id"], entry))
        else:
            entry["replies"] = []
            threads[entry["id"]] = entry

    for parent_id, entry in replies:
        if parent_id in threads:
            threads[parent_id]["replies"].append(entry)

    return {"total": len(comments), "threads": list(threads.values())}


@_tool
async def post_comment(
    client: FigmaClient,
    file_key: str,
    message: str,
    node_id: Optional[str] = None,
    reply_to: Optional[str] = None
) -> dict:
    """Post a comment, optionally pinned to a node or as a reply."""
    file_key = _require(file_key, "file_key")
    message = _require(message, "message")

    client_meta = {"node_id": node_id, "node_offset": {"x": 0, "y": 0}} if node_id else None
    return await figma_post_comment(client, file_key, message, client_meta=client_meta, comment_id=reply_to)


@_tool
async def get_versions(client: FigmaClient, file_key: str, limit: Optional[int] = None) -> dict:
    """List the version history of a file, newest first."""
    file_key = _require(file_key, "file_key")

    data = await figma_get_file_versions(client, file_key)
    versions = data.get("versions", [])
    if limit is not None:
        versions = versions[:max(limit, 0)]

    return {
        "versions": [
            {
                "id": v.get("id"),
                "label": v.get("label"),
                "description": v.get("description"),
                "created_at": v.get("created_at"),
                "author": v.get("user", {}).get("handle"),
            }
            for v in versions
        ],
    }


@_tool
async def get_team_projects(client: FigmaClient, team_id: str) -> dict:
    """List projects in a team."""
    team_id = _require(team_id, "team_id")
    data = await figma_get_team_projects(client, team_id)
    return {"name": data.get("name"), "projects": data.get("projects", [])}


@_tool
async def get_project_files(client: FigmaClient, project_id: str) -> dict:
    """List files in a project."""
    project_id = _require(project_id, "project_id")
    data = await figma_get_project_files(client, project_id)
    return {
        "name": data.get("name"),
        "files": [
            {
                "key": f.get("key"),
                "name": f.get("name"),
                "last_modified": f.get("last_modified"),
                "url": f"https://www.figma.com/file/{f.get('key')}",
            }
            for f in data.get("files", [])
        ],
    }


def parse_figma_url(url: str) -> dict:
    """Extract file_key and node_id from a Figma URL."""
    # https://www.figma.com/file/KEY/Name?node-id=15635%3A61453
    # https://www.figma.com/design/KEY/Name?node-id=15635-61453
    key_match = re.search(r"/(?:file|design|proto|board)/([a-zA-Z0-9]+)", url or "")
    if not key_match:
        return {"error": "Could not find a file key in the URL"}

    file_key = key_match.group(1)

    node_id = None
    node_match = re.search(r"[?&]node-id=([^&#]+)", url)
    if node_match:
        raw_id = unquote(node_match.group(1))
        # Newer URLs use 1-2 where the API expects 1:2
        node_id = raw_id.replace("-", ":") if ":" not in raw_id else raw_id

    return {
        "file_key": file_key,
        "node_id": node_id
    }
