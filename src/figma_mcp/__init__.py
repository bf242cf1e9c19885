"""Figma MCP tools and server."""
