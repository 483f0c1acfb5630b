"""Typer command handlers."""

from __future__ import annotations

import json
import logging
import shlex
from pathlib import Path
from typing import Any

import typer

from core.event_bus import GRAPH_CHANGED
from core.orchestrator import Orchestrator, RuntimeBundle
from core.policy_runtime import configure_logging

logger = logging.getLogger("canvas.cli")

EXIT_WORDS = {"exit", "quit"}


class ShellInputError(ValueError):
    """A shell line that cannot be turned into a command."""


def _runtime(config_path: Path | None = None, seed: int | None = None) -> RuntimeBundle:
    bundle = Orchestrator(config_path=config_path).build(seed=seed)
    configure_logging(bundle.config)
    return bundle


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2))


def parse_shell_line(line: str, bundle: RuntimeBundle) -> tuple[str, dict[str, Any]]:
    """Turn ``<command> [args...]`` into a command name and argument mapping.

    Positional values map onto the command's argument fields in order and are
    left as strings; the router does the type coercion. ``add_node`` without
    coordinates drops the node somewhere on the canvas.
    """
    try:
        tokens = shlex.split(line)
    except ValueError as exc:
        raise ShellInputError(str(exc)) from exc
    if not tokens:
        raise ShellInputError("Empty command.")
    name, values = tokens[0], tokens[1:]

    if name == "add_node" and not values:
        canvas = bundle.settings.canvas
        rng = bundle.store.rng
        return name, {"x": rng.random() * canvas.width, "y": rng.random() * canvas.height}

    if name == "add_edge":
        if len(values) < 2 or not values[0] or not values[1]:
            raise ShellInputError("Please enter both source and target node IDs.")
        try:
            source, target = int(values[0]), int(values[1])
        except ValueError as exc:
            raise ShellInputError("Invalid node IDs. Please enter numbers.") from exc
        return name, {"source": source, "target": target}

    spec = bundle.router.get(name)
    if spec is None:
        # Unknown names still go through the router so they get its error shape.
        return name, {}
    fields = spec.fields
    if len(values) > len(fields):
        raise ShellInputError(f"{name} takes {len(fields)} argument(s), got {len(values)}.")
    return name, dict(zip(fields, values))


def shell(config_path: Path | None = None, seed: int | None = None, watch: bool = False) -> None:
    """Run interactive command loop over one in-memory graph.

    With ``watch`` the full graph is printed whenever it changes, ahead of the
    command result that caused the change.
    """
    bundle = _runtime(config_path=config_path, seed=seed)

    def print_graph(_event: dict[str, Any]) -> None:
        _echo_json(bundle.store.get_graph().to_payload())

    if watch:
        bundle.event_bus.subscribe(GRAPH_CHANGED, print_graph)
    typer.echo("Graph shell. Type 'help' for commands, 'exit' to quit.")
    try:
        _shell_loop(bundle)
    finally:
        bundle.event_bus.unsubscribe(GRAPH_CHANGED, print_graph)
    typer.echo("bye")


def _shell_loop(bundle: RuntimeBundle) -> None:
    while True:
        try:
            line = typer.prompt("graph").strip()
        except typer.Abort:
            # End of input closes the session like ``exit``.
            typer.echo("")
            return
        if line.lower() in EXIT_WORDS:
            return
        if line.lower() == "help":
            _print_commands(bundle)
            continue
        try:
            name, args = parse_shell_line(line, bundle)
        except ShellInputError as exc:
            logger.debug("Shell input rejected: %r", line)
            typer.echo(f"error: {exc}")
            continue
        _echo_json(bundle.router.invoke(name, args))


def generate_complete(num_nodes: int, align: bool, config_path: Path | None = None) -> None:
    """Print a freshly generated complete graph."""
    bundle = _runtime(config_path=config_path)
    _generate(bundle, "generate_complete_graph", num_nodes, align)


def generate_random(
    num_nodes: int,
    align: bool,
    seed: int | None = None,
    config_path: Path | None = None,
) -> None:
    """Print a freshly generated random graph."""
    bundle = _runtime(config_path=config_path, seed=seed)
    _generate(bundle, "generate_random_graph", num_nodes, align)


def _generate(bundle: RuntimeBundle, command: str, num_nodes: int, align: bool) -> None:
    result = bundle.router.invoke(command, {"num_nodes": num_nodes})
    if not result["success"]:
        typer.echo(f"error: {result['error']}", err=True)
        raise typer.Exit(code=1)
    if align:
        bundle.router.invoke("align_graph")
    _echo_json(bundle.router.invoke("get_graph")["result"])


def commands_list(config_path: Path | None = None) -> None:
    """List the command surface."""
    _print_commands(_runtime(config_path=config_path))


def config_show(config_path: Path | None = None) -> None:
    """Show effective runtime config."""
    bundle = _runtime(config_path=config_path)
    _echo_json(bundle.config)


def _print_commands(bundle: RuntimeBundle) -> None:
    for entry in bundle.router.list_commands():
        args = " ".join(entry["args"])
        typer.echo(f"{entry['name']} {args}".rstrip() + f"  - {entry['help']}")
