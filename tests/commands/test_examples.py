"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from chainvertex.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["vertex", "--examples"], ["chainvertex --state graph.json vertex create"]),
    (["vertex", "create", "--examples"], ["--caller alice"]),
    (["vertex", "get", "--examples"], ["chainvertex vertex get 0"]),
    (["vertex", "delete", "--examples"], ["chainvertex vertex delete 0"]),
    (["vertex", "exists", "--examples"], ["-q vertex exists"]),
    (["vertex", "adjacent", "--examples"], ["chainvertex vertex adjacent 0"]),
    (["edge", "--examples"], ["--weight 100 --type connection"]),
    (["edge", "create", "--examples"], ["-w 5 -t linked"]),
    (["edge", "get", "--examples"], ["chainvertex edge get 0 1"]),
    (["query", "--examples"], ["chainvertex query owner"]),
    (["query", "owner", "--examples"], ["query owner alice"]),
    (["query", "stats", "--examples"], ["chainvertex query stats"]),
    (["snapshot", "--examples"], ["--output backup.json"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples_flag(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_help_does_not_include_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["vertex", "create", "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output
    assert "Examples for" not in result.output
