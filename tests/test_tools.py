import asyncio
import json

import httpx
import pytest

from figma_rest import FigmaClient, FigmaConfig
from figma_mcp import tools


def _client(routes, status=200, headers=None):
    """Client whose transport answers each path from `routes`."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"status": 404, "err": "Not found"})
        return httpx.Response(status, json=body, headers=headers)

    client = FigmaClient(
        FigmaConfig(api_key="test-token", max_retries=1),
        transport=httpx.MockTransport(handler),
    )
    client.seen = seen
    return client


FILE = {
    "name": "Design System",
    "lastModified": "2024-01-01T00:00:00Z",
    "version": "123",
    "thumbnailUrl": "https://example.com/thumb.png",
    "document": {
        "id": "0:0",
        "children": [
            {"id": "0:1", "name": "Cover", "type": "CANVAS"},
            {"id": "0:2", "name": "Components", "type": "CANVAS"},
        ],
    },
    "components": {"1:1": {}, "1:2": {}},
    "styles": {"2:1": {}},
}


def test_get_file_summary():
    client = _client({"/v1/files/abc": FILE})

    result = asyncio.run(tools.get_file(client, "abc", depth=1))

    assert result["name"] == "Design System"
    assert result["pages"] == [
        {"id": "0:1", "name": "Cover"},
        {"id": "0:2", "name": "Components"},
    ]
    assert result["component_count"] == 2
    assert result["style_count"] == 1
    assert client.seen[0].url.params["depth"] == "1"


def test_get_file_validates_arguments():
    client = _client({})
    assert asyncio.run(tools.get_file(client, "  ")) == {"error": "file_key is required"}
    assert "depth" in asyncio.run(tools.get_file(client, "abc", depth=0))["error"]
    assert client.seen == []


def test_api_errors_become_error_payloads():
    client = _client({})
    result = asyncio.run(tools.get_file(client, "missing"))
    assert result == {"error": "Not found", "status": 404}


def test_rate_limit_reported_with_error():
    client = _client(
        {"/v1/files/abc": {"status": 429, "err": "Rate limit exceeded"}},
        status=429,
        headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "0"},
    )

    result = asyncio.run(tools.get_file(client, "abc"))

    assert result["status"] == 429
    assert result["rate_limit"] == {"remaining": 0, "reset": "1970-01-01T00:00:00+00:00"}


def test_get_file_nodes():
    client = _client({
        "/v1/files/abc/nodes": {
            "name": "Design System",
            "nodes": {"1:2": {"document": {"id": "1:2", "name": "Button"}}, "9:9": None},
        }
    })

    result = asyncio.run(tools.get_file_nodes(client, "abc", ["1:2", "9:9"]))

    assert result["nodes"] == {"1:2": {"id": "1:2", "name": "Button"}, "9:9": None}


def test_get_file_nodes_requires_ids():
    client = _client({})
    result = asyncio.run(tools.get_file_nodes(client, "abc", ["", " "]))
    assert "node_ids" in result["error"]


def test_get_components_filters_by_name():
    client = _client({
        "/v1/files/abc/components": {
            "meta": {
                "components": [
                    {"key": "k1", "node_id": "1:1", "name": "Button/Primary", "containing_frame": {"name": "Buttons"}},
                    {"key": "k2", "node_id": "1:2", "name": "Avatar", "containing_frame": {"name": "Avatars"}},
                ]
            }
        }
    })

    result = asyncio.run(tools.get_components(client, "abc", name="button"))

    assert result["total"] == 1
    assert result["components"][0]["key"] == "k1"
    assert result["components"][0]["frame"] == "Buttons"


def test_get_styles_filters_by_type():
    client = _client({
        "/v1/files/abc/styles": {
            "meta": {
                "styles": [
                    {"key": "s1", "name": "Primary", "style_type": "FILL"},
                    {"key": "s2", "name": "Heading", "style_type": "TEXT"},
                ]
            }
        }
    })

    result = asyncio.run(tools.get_styles(client, "abc", style_type="text"))

    assert [s["key"] for s in result["styles"]] == ["s2"]


def test_export_images_reports_failed_nodes():
    client = _client({"/v1/images/abc": {"err": None, "images": {"1:1": "https://img/1", "1:2": None}}})

    result = asyncio.run(tools.export_images(client, "abc", ["1:1", "1:2"], format="svg"))

    assert result["images"]["1:1"] == "https://img/1"
    assert result["failed"] == ["1:2"]


@pytest.mark.parametrize("kwargs", [{"format": "gif"}, {"scale": 5}, {"scale": 0}])
def test_export_images_validates_options(kwargs):
    client = _client({})
    result = asyncio.run(tools.export_images(client, "abc", ["1:1"], **kwargs))
    assert "error" in result
    assert client.seen == []


def test_get_comments_groups_replies():
    client = _client({
        "/v1/files/abc/comments": {
            "comments": [
                {"id": "1", "message": "Question", "user": {"handle": "ann"}, "created_at": "t1"},
                {"id": "2", "message": "Answer", "parent_id": "1", "user": {"handle": "bob"}, "created_at": "t2"},
                {"id": "3", "message": "Done", "resolved_at": "t3", "user": {"handle": "ann"}},
            ]
        }
    })

    result = asyncio.run(tools.get_comments(client, "abc"))

    assert result["total"] == 3
    first, second = result["threads"]
    assert first["replies"][0]["author"] == "bob"
    assert second["resolved"] is True


def test_post_comment_pins_to_node():
    client = _client({"/v1/files/abc/comments": {"id": "c1"}})

    result = asyncio.run(tools.post_comment(client, "abc", "Nice", node_id="1:2"))

    assert result == {"id": "c1"}
    body = json.loads(client.seen[0].read())
    assert body["client_meta"]["node_id"] == "1:2"


def test_post_comment_requires_message():
    client = _client({})
    assert asyncio.run(tools.post_comment(client, "abc", "")) == {"error": "message is required"}


def test_get_versions_limit():
    client = _client({
        "/v1/files/abc/versions": {
            "versions": [
                {"id": "3", "label": "v3", "user": {"handle": "ann"}},
                {"id": "2", "label": "v2", "user": {"handle": "bob"}},
                {"id": "1", "label": "v1", "user": {"handle": "ann"}},
            ]
        }
    })

    result = asyncio.run(tools.get_versions(client, "abc", limit=2))

    assert [v["id"] for v in result["versions"]] == ["3", "2"]
    assert result["versions"][1]["author"] == "bob"


def test_team_projects_and_project_files():
    client = _client({
        "/v1/teams/t1/projects": {"name": "Team", "projects": [{"id": "p1", "name": "DS"}]},
        "/v1/projects/p1/files": {"name": "DS", "files": [{"key": "abc", "name": "Kit", "last_modified": "t"}]},
    })

    projects = asyncio.run(tools.get_team_projects(client, "t1"))
    files = asyncio.run(tools.get_project_files(client, "p1"))

    assert projects["projects"] == [{"id": "p1", "name": "DS"}]
    assert files["files"][0]["url"] == "https://www.figma.com/file/abc"


@pytest.mark.parametrize(
    "url, expected",
    [
        (
            "https://www.figma.com/file/fRi3HAgxLDuHW4MJQPf5r3/UI-Kit?type=design&node-id=15635%3A61453",
            {"file_key": "fRi3HAgxLDuHW4MJQPf5r3", "node_id": "15635:61453"},
        ),
        (
            "https://www.figma.com/design/abc123/Name?node-id=1-2&t=xyz",
            {"file_key": "abc123", "node_id": "1:2"},
        ),
        (
            "https://www.figma.com/proto/abc123/Name",
            {"file_key": "abc123", "node_id": None},
        ),
    ],
)
def test_parse_figma_url(url, expected):
    assert tools.parse_figma_url(url) == expected


def test_parse_figma_url_invalid():
    assert "error" in tools.parse_figma_url("https://example.com/nothing")
    assert "error" in tools.parse_figma_url("")
