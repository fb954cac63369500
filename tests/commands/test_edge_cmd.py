"""Tests for the edge command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner, Result

from chainvertex.cli import cli


def _run(runner: CliRunner, *args: str) -> Result:
    return runner.invoke(cli, ["--state", "graph.json", "--caller", "alice", "--sync", *args])


def _seed(runner: CliRunner) -> None:
    _run(runner, "vertex", "create", "V1")
    _run(runner, "vertex", "create", "V2")


@pytest.mark.usefixtures("_isolated_cwd")
class TestEdgeCreate:
    def test_create(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = _run(
            cli_runner, "--json", "edge", "create", "0", "1", "--weight", "100", "--type", "connection"
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data == {
            "from_id": 0,
            "to_id": 1,
            "weight": 100,
            "edge_type": "connection",
            "live": True,
        }

    def test_short_options(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = _run(cli_runner, "edge", "create", "0", "1", "-w", "5", "-t", "linked")
        assert result.exit_code == 0
        assert "0 -> 1" in result.output
        assert "[linked]" in result.output

    def test_duplicate(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        _run(cli_runner, "edge", "create", "0", "1", "-w", "1", "-t", "a")
        result = _run(cli_runner, "edge", "create", "0", "1", "-w", "2", "-t", "b")
        assert result.exit_code == 1
        assert "Edge already exists" in result.output

    def test_self_loop(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = _run(cli_runner, "edge", "create", "0", "0", "-w", "100", "-t", "self")
        assert result.exit_code == 1
        assert "Cannot create self-loops" in result.output

    def test_zero_weight(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = _run(cli_runner, "--json", "edge", "create", "0", "1", "-w", "0", "-t", "x")
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["message"] == "Weight must be positive"

    def test_missing_endpoint_checked_before_weight(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = _run(cli_runner, "edge", "create", "0", "9", "-w", "0", "-t", "")
        assert result.exit_code == 1
        assert "Vertex does not exist" in result.output

    def test_empty_type(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = _run(cli_runner, "edge", "create", "0", "1", "-w", "1", "-t", "")
        assert result.exit_code == 1
        assert "Edge type cannot be empty" in result.output

    def test_weight_required(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = _run(cli_runner, "edge", "create", "0", "1", "-t", "x")
        assert result.exit_code == 2

    def test_deleted_endpoint_warns(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        _run(cli_runner, "vertex", "delete", "1")
        result = _run(cli_runner, "edge", "create", "0", "1", "-w", "1", "-t", "x")
        assert result.exit_code == 0
        assert "WARNING: Vertex 1 is not live" in result.output


@pytest.mark.usefixtures("_isolated_cwd")
class TestEdgeGet:
    def test_get(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        _run(cli_runner, "edge", "create", "0", "1", "-w", "7", "-t", "follows")
        result = _run(cli_runner, "--json", "edge", "get", "0", "1")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["weight"] == 7

    def test_reverse_direction_missing(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        _run(cli_runner, "edge", "create", "0", "1", "-w", "7", "-t", "follows")
        result = _run(cli_runner, "edge", "get", "1", "0")
        assert result.exit_code == 1
        assert "Edge does not exist" in result.output
