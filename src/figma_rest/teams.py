"""Figma REST - Team and Project Methods.

Methods for working with teams and projects.
"""
from .client import FigmaClient


async def figma_get_team_projects(client: FigmaClient, team_id: str) -> dict:
    """Get projects in a team.
    
    Args:
        client: Figma API client
        team_id: Team ID
    
    Returns:
        List of projects
    """
    return await client.get(f"/v1/teams/{team_id}/projects")


async def figma_get_project_files(
    client: FigmaClient,
    project_id: str,
    branch_data: bool = False
) -> dict:
    """Get files in a project.
    
    Args:
        client: Figma API client
        project_id: Project ID
        branch_data: Include branch metadata
    
    Returns:
        List of files in project
    """
    params = {"branch_data": "true"} if branch_data else None
    return await client.get(f"/v1/projects/{project_id}/files", params=params)
