"""CLI tests."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from core.orchestrator import Orchestrator
from ui.cli.cli import app
from ui.cli.commands import ShellInputError, parse_shell_line

runner = CliRunner()


def test_generate_complete_prints_graph() -> None:
    result = runner.invoke(app, ["generate", "complete", "3"])

    assert result.exit_code == 0
    graph = json.loads(result.stdout)
    assert [n["id"] for n in graph["nodes"]] == [0, 1, 2]
    assert [(e["source"], e["target"]) for e in graph["edges"]] == [(0, 1), (0, 2), (1, 2)]


def test_generate_random_with_seed_is_stable() -> None:
    first = runner.invoke(app, ["generate", "random", "6", "--seed", "3", "--align"])
    second = runner.invoke(app, ["generate", "random", "6", "--seed", "3", "--align"])

    assert first.exit_code == 0
    assert first.stdout == second.stdout
    assert len(json.loads(first.stdout)["nodes"]) == 6


def test_shell_session_runs_commands() -> None:
    script = "\n".join(
        [
            "add_node 10 20",
            "add_node 30 40",
            "add_edge 0 1",
            "add_edge 0",
            "add_edge 0 x",
            "delete_node 7",
            "delete_node 0",
            "get_graph",
            "exit",
        ]
    )
    result = runner.invoke(app, ["shell"], input=script + "\n")

    assert result.exit_code == 0
    assert "Please enter both source and target node IDs." in result.stdout
    assert "Invalid node IDs. Please enter numbers." in result.stdout
    assert '"error": "Node not found"' in result.stdout
    assert result.stdout.rstrip().endswith("bye")


def test_parse_shell_line_maps_positional_args() -> None:
    bundle = Orchestrator().build(seed=1)

    assert parse_shell_line("update_node_position 2 5.5 6", bundle) == (
        "update_node_position",
        {"node_id": "2", "x": "5.5", "y": "6"},
    )
    assert parse_shell_line("add_edge 1 2", bundle) == ("add_edge", {"source": 1, "target": 2})
    assert parse_shell_line("spin 1", bundle) == ("spin", {})

    name, args = parse_shell_line("add_node", bundle)
    assert name == "add_node"
    assert 0.0 <= args["x"] < 400.0 and 0.0 <= args["y"] < 400.0

    for line in ("clear_graph now", "", "add_edge"):
        try:
            parse_shell_line(line, bundle)
        except ShellInputError:
            continue
        raise AssertionError(f"expected rejection for {line!r}")


def test_commands_lists_surface() -> None:
    result = runner.invoke(app, ["commands"])
    assert result.exit_code == 0
    assert "generate_random_graph num_nodes" in result.stdout


def test_config_show_prints_effective_config(tmp_path: Path) -> None:
    user = tmp_path / "user.yaml"
    user.write_text("graph:\n  seed: 42\n", encoding="utf-8")

    result = runner.invoke(app, ["config", "show", "--config", str(user)])

    assert result.exit_code == 0
    config = json.loads(result.stdout)
    assert config["graph"]["seed"] == 42
    assert config["graph"]["layout"]["radius"] == 150.0


def test_shell_watch_prints_graph_before_each_result() -> None:
    result = runner.invoke(app, ["shell", "--watch"], input="add_node 1 2\nexit\n")

    assert result.exit_code == 0
    graph_at = result.stdout.index('"nodes": [')
    result_at = result.stdout.index('"command": "add_node"')
    assert graph_at < result_at


def test_shell_without_watch_prints_only_results() -> None:
    result = runner.invoke(app, ["shell"], input="add_node 1 2\nexit\n")

    assert result.exit_code == 0
    assert '"nodes": [' not in result.stdout
    assert '"command": "add_node"' in result.stdout


def test_shell_ends_cleanly_at_end_of_input() -> None:
    result = runner.invoke(app, ["shell"], input="add_node 1 2\n")

    assert result.exit_code == 0
    assert '"success": true' in result.stdout
    assert result.stdout.rstrip().endswith("bye")
