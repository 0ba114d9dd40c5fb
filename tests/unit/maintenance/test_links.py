"""
Unit tests for link verification and graph health checks.
"""

import json
from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from landscape.core.types import Node, NodeType
from landscape.maintenance.links import (
    LinkCheck,
    attempt_url_fix,
    check_url,
    extract_urls,
    find_duplicate_nodes,
    find_orphaned_nodes,
    fixed_dataset_path,
    is_valid_url_format,
    verify_links,
    write_report,
)


def response(status, reason="OK", url="https://a.example", history=None):
    resp = MagicMock()
    resp.status_code = status
    resp.reason = reason
    resp.url = url
    resp.history = history or []
    return resp


def mock_session(outcome):
    session = MagicMock()
    if isinstance(outcome, Exception):
        session.get.side_effect = outcome
    else:
        session.get.return_value = outcome
    return session


class TestUrlRepair:
    @pytest.mark.parametrize("url,expected", [
        ("example.com", "https://example.com"),
        ("ttps://example.com", "https://example.com"),
        ("http://github.com/a/b", "https://github.com/a/b"),
        ("https://example.com/", "https://example.com"),
        ("https://example.com//docs//api", "https://example.com/docs/api"),
        ("https://github.con/a/b", "https://github.com/a/b"),
    ])
    def test_fixes(self, url, expected):
        changed, fixed = attempt_url_fix(url)
        assert changed
        assert fixed == expected

    def test_valid_url_unchanged(self):
        assert attempt_url_fix("https://example.com/docs") == (False, "https://example.com/docs")

    def test_slash_collapse_leaves_query_alone(self):
        changed, fixed = attempt_url_fix("https://example.com//login?next=https://example.com/home")

        assert changed
        assert fixed == "https://example.com/login?next=https://example.com/home"

    def test_format_check(self):
        assert is_valid_url_format("https://example.com")
        assert not is_valid_url_format("example.com")
        assert not is_valid_url_format("https://exa mple.com")


class TestExtractUrls:
    def test_all(self, graph):
        records = extract_urls(graph)
        assert {(r.node_id, r.property_name) for r in records} == {("A", "url"), ("A", "github")}

    def test_github_only(self, graph):
        records = extract_urls(graph, "github")
        assert [r.url for r in records] == ["https://github.com/alpha/agents"]

    def test_website_only(self, graph):
        records = extract_urls(graph, "website")
        assert [r.url for r in records] == ["https://alpha.example.com"]


class TestGraphHealth:
    def test_duplicates(self, graph):
        graph.add_node(Node(id="B2", label="Beta Builder", type=NodeType.SERVICE))

        groups = find_duplicate_nodes(graph)
        assert len(groups) == 1
        assert groups[0].label == "Beta Builder"
        assert groups[0].count == 2

    def test_orphans(self, graph):
        assert [o.id for o in find_orphaned_nodes(graph)] == ["D"]


class TestCheckUrl:
    def test_ok_response(self):
        session = mock_session(response(200))

        result = check_url("https://example.com", session=session)
        assert result.ok
        assert result.status == 200
        assert result.redirect_count == 0
        assert result.redirect_url is None
        session.get.return_value.close.assert_called_once()

    def test_follows_redirects(self):
        session = mock_session(response(200, url="https://a.example/new", history=[response(301)]))

        result = check_url("https://a.example/old", max_redirects=3, session=session)
        assert result.ok
        assert result.redirect_count == 1
        assert result.redirect_url == "https://a.example/new"
        assert session.max_redirects == 3

    def test_redirect_without_location_is_ok(self):
        session = mock_session(response(302, reason="Found"))

        result = check_url("https://a.example", session=session)
        assert result.ok
        assert result.status == 302

    def test_too_many_redirects(self):
        session = mock_session(requests.TooManyRedirects("Exceeded 2 redirects."))

        result = check_url("https://a.example/loop", max_redirects=2, session=session)
        assert not result.ok
        assert result.status_text == "Too many redirects"

    def test_not_found(self):
        result = check_url("https://a.example", session=mock_session(response(404, reason="Not Found")))
        assert not result.ok
        assert result.status == 404
        assert result.status_text == "Not Found"

    def test_timeout(self):
        result = check_url("https://slow.example", session=mock_session(requests.Timeout()))
        assert result.status == 0
        assert result.status_text == "Request timed out"

    def test_network_error(self):
        session = mock_session(requests.ConnectionError("Name or service not known"))

        result = check_url("https://nowhere.invalid", session=session)
        assert not result.ok
        assert result.status == 0
        assert "Name or service not known" in result.status_text


class TestVerifyLinks:
    def test_sorts_outcomes(self, graph):
        graph.update_node_properties("B", {"url": "beta.example.com"})
        graph.update_node_properties("C", {"url": "not a url"})

        def checker(url):
            if "github" in url:
                return LinkCheck(status=404, status_text="Not Found")
            return LinkCheck(status=200, ok=True, status_text="OK")

        report = verify_links(graph, checker=checker)

        assert {o.record.node_id for o in report.valid} == {"A", "B"}
        assert [o.record.node_id for o in report.broken] == ["A"]
        assert [o.record.node_id for o in report.invalid] == ["C"]
        assert report.fixed[0].url == "https://beta.example.com"
        assert report.fixed[0].original_url == "beta.example.com"
        assert [o.id for o in report.orphans] == ["D"]
        # without fix the graph is left alone
        assert graph.get_node("B").properties["url"] == "beta.example.com"

    def test_fix_writes_back(self, graph):
        graph.update_node_properties("B", {"url": "beta.example.com/"})

        verify_links(graph, fix=True, checker=lambda url: LinkCheck(status=200, ok=True))
        assert graph.get_node("B").properties["url"] == "https://beta.example.com"

    def test_kind_limits_checked_links(self, graph):
        checked = []

        def checker(url):
            checked.append(url)
            return LinkCheck(status=200, ok=True)

        verify_links(graph, kind="github", checker=checker)
        assert checked == ["https://github.com/alpha/agents"]

    def test_summary(self, graph):
        report = verify_links(graph, checker=lambda url: LinkCheck(status=200, ok=True))
        summary = report.summary()

        assert summary["total"] == 2
        assert summary["valid"] == 2
        assert summary["orphaned_nodes"] == 1


class TestReportFiles:
    def test_write_report(self, graph, tmp_path):
        report = verify_links(graph, checker=lambda url: LinkCheck(status=200, ok=True))

        out = write_report(report, tmp_path, today=date(2024, 3, 1))
        data = json.loads(out.read_text())

        assert out.name == "link-verification-2024-03-01.json"
        assert data["summary"]["valid"] == 2
        assert "timestamp" in data
        assert len(data["valid"]) == 2

    def test_fixed_dataset_path(self, tmp_path):
        assert fixed_dataset_path(tmp_path / "data.json") == tmp_path / "data-fixed.json"
