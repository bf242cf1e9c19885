import asyncio
import importlib
import importlib.metadata
import logging
import sys

import pytest

from figma_mcp import server


def test_all_tools_registered():
    names = {tool.name for tool in asyncio.run(server.mcp.list_tools())}
    assert names == {
        "get_file",
        "get_file_nodes",
        "get_components",
        "get_styles",
        "export_images",
        "get_comments",
        "post_comment",
        "get_versions",
        "get_team_projects",
        "get_project_files",
        "parse_figma_url",
    }


def test_get_client_is_built_once_from_env(monkeypatch):
    monkeypatch.setattr(server, "_client", None)
    monkeypatch.setenv("FIGMA_API_KEY", "env-token")

    client = server.get_client()

    assert client is server.get_client()
    assert client.config.api_key == "env-token"
    assert client.cache.max_size == server.CACHE_MAX_SIZE


def test_get_client_without_token(monkeypatch):
    monkeypatch.setattr(server, "_client", None)
    monkeypatch.delenv("FIGMA_API_KEY", raising=False)
    monkeypatch.delenv("FIGMA_ACCESS_TOKEN", raising=False)

    with pytest.raises(ValueError):
        server.get_client()


def test_import_leaves_logging_alone(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    importlib.reload(server)

    assert calls == []


def test_main_logs_to_stderr_and_runs(monkeypatch):
    calls = []
    runs = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setattr(server, "load_dotenv", lambda: None)
    monkeypatch.setattr(server.mcp, "run", lambda: runs.append(True))

    server.main()

    assert runs == [True]
    (handler,) = calls[0]["handlers"]
    assert handler.stream is sys.stderr


def test_mcp_requirement_is_bounded_below_2():
    try:
        requirements = importlib.metadata.requires("figma-rest-mcp") or []
    except importlib.metadata.PackageNotFoundError:
        pytest.skip("package metadata not installed")

    (mcp_requirement,) = [r for r in requirements if r.replace(" ", "").startswith("mcp")]
    assert "<2" in mcp_requirement.replace(" ", "")
