"""Parametrized help and --examples tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from passhash.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--help"], ["guess", "bump", "hash", "fill", "tags", "forget", "--data-dir"]),
    (["guess", "--help"], ["URL", "--mode"]),
    (["bump", "--help"], ["TAG"]),
    (["hash", "--help"], ["--url", "--tag", "--bump", "--length", "--no-special"]),
    (["fill", "--help"], ["--url", "--digits-only", "--mixed-case"]),
    (["tags", "--help"], ["remembered version"]),
    (["forget", "--help"], ["master key"]),
]

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["guess", "--examples"], ["passhash guess --mode name"]),
    (["bump", "--examples"], ["example.com:5"]),
    (["hash", "--examples"], ["--bump --length 12"]),
    (["fill", "--examples"], ["passhash fill --url"]),
    (["tags", "--examples"], ["passhash --json tags"]),
]


def _args_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a.lstrip("-") for a in args)


@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=[_args_id(item) for item in HELP_COMMANDS],
)
def test_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_args_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


def test_forget_has_no_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["forget", "--help"])
    assert "--examples" not in result.output
