"""List a team's Figma projects and the files of one project.

Usage: python scripts/list_figma_files.py <team_id> [project_id]

This is READ-ONLY - no modifications to Figma files.
"""
import asyncio
import sys

from dotenv import load_dotenv

from figma_rest import (
    FigmaClient,
    FigmaConfig,
    FigmaError,
    figma_get_team_projects,
    figma_get_project_files,
)

load_dotenv()


async def main(team_id: str, project_id: str = None):
    client = FigmaClient(FigmaConfig.from_env())

    print(f"Team {team_id} projects:")
    print("-" * 50)
    try:
        team_data = await figma_get_team_projects(client, team_id)
        for project in team_data.get("projects", []):
            marker = "→" if str(project["id"]) == project_id else " "
            print(f"  {marker} [{project['id']}] {project['name']}")
    except FigmaError as e:
        print(f"  Error: {e.status} - {e.message[:100]}")

    if client.rate_limit_info:
        print(f"\n  Requests remaining: {client.rate_limit_info.remaining}")

    if not project_id:
        return

    print()
    print(f"Project {project_id} files:")
    print("-" * 50)
    try:
        project_data = await figma_get_project_files(client, project_id)
        for file in project_data.get("files", []):
            print(f"  {file['name']}")
            print(f"     Key: {file['key']}")
            print(f"     URL: https://www.figma.com/file/{file['key']}")
            print(f"     Modified: {file.get('last_modified', 'N/A')}")
            print()
    except FigmaError as e:
        print(f"  Error: {e.status} - {e.message[:100]}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/list_figma_files.py <team_id> [project_id]")
        sys.exit(1)

    asyncio.run(main(*sys.argv[1:3]))
