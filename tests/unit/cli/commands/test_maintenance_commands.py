"""
Tests for the 'stats', 'enrich' and 'verify' commands.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from landscape.cli.main import main
from landscape.maintenance.github import EnrichmentReport
from landscape.maintenance.links import LinkCheck


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


class TestStatsCommand:
    def test_stats_json(self, graph_file):
        result = CliRunner().invoke(main, ["stats", str(graph_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["total_edges"] == 2
        assert data["orphans"] == 1
        assert data["duplicate_labels"] == 0

    def test_stats_table(self, graph_file):
        result = CliRunner().invoke(main, ["stats", str(graph_file)])

        assert result.exit_code == 0
        assert "Orphaned nodes" in result.output


class TestEnrichCommand:
    def test_requires_token(self, graph_file):
        result = CliRunner().invoke(main, ["enrich", str(graph_file)])

        assert result.exit_code == 1
        assert "GITHUB_TOKEN" in result.output

    @patch("landscape.cli.commands.enrich.enrich_graph")
    def test_writes_enriched_file(self, mock_enrich, graph_file, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        mock_enrich.return_value = EnrichmentReport(total=1, success=1)

        result = CliRunner().invoke(main, ["enrich", str(graph_file)])

        assert result.exit_code == 0
        assert (graph_file.parent / "data.enriched.json").exists()
        mock_enrich.assert_called_once()

    @patch("landscape.cli.commands.enrich.enrich_graph")
    def test_dry_run(self, mock_enrich, graph_file, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        mock_enrich.return_value = EnrichmentReport(total=1, failed=1, errors={"A": "boom"})

        result = CliRunner().invoke(main, ["enrich", str(graph_file), "--dry-run"])

        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert not (graph_file.parent / "data.enriched.json").exists()


class TestVerifyCommand:
    @patch("landscape.cli.commands.verify.check_url")
    def test_verify_writes_report(self, mock_check, graph_file, tmp_path):
        mock_check.return_value = LinkCheck(status=200, ok=True, status_text="OK")

        result = CliRunner().invoke(main, ["verify", str(graph_file)])

        assert result.exit_code == 0
        reports = list(tmp_path.glob("link-verification-*.json"))
        assert len(reports) == 1
        assert json.loads(reports[0].read_text())["summary"]["valid"] == 2

    @patch("landscape.cli.commands.verify.check_url")
    def test_verify_fix(self, mock_check, tmp_path, document):
        document["nodes"][1]["data"]["properties"]["url"] = "beta.example.com"
        path = tmp_path / "data.json"
        path.write_text(json.dumps(document))
        mock_check.return_value = LinkCheck(status=200, ok=True, status_text="OK")

        result = CliRunner().invoke(main, ["verify", str(path), "--fix"])

        assert result.exit_code == 0
        fixed = json.loads((tmp_path / "data-fixed.json").read_text())
        node_b = next(n["data"] for n in fixed["nodes"] if n["data"]["id"] == "B")
        assert node_b["properties"]["url"] == "https://beta.example.com"

    @patch("landscape.cli.commands.verify.check_url")
    def test_verify_type_filter(self, mock_check, graph_file, tmp_path):
        mock_check.return_value = LinkCheck(status=200, ok=True, status_text="OK")

        result = CliRunner().invoke(main, ["verify", str(graph_file), "--type", "github"])

        assert result.exit_code == 0
        mock_check.assert_called_once()
        assert mock_check.call_args.args[0] == "https://github.com/alpha/agents"
