"""Named command surface over the graph store.

The presentation layer addresses the store by command name with a mapping of
arguments and always gets a plain dict back: ``success``, ``command``,
``result`` and ``error``. Store lookups that miss, bad argument values and
unknown command names all come back as ``success: False`` with a descriptive
error string instead of an exception.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from world_model.graph_schemas import Edge, GraphSnapshot, Node
from world_model.graph_store import GraphStore, GraphStoreError

logger = logging.getLogger("canvas.commands")


class _Args(BaseModel):
    model_config = ConfigDict(extra="forbid")


class NoArgs(_Args):
    """Commands that take nothing."""


class AddNodeArgs(_Args):
    x: float
    y: float


class AddEdgeArgs(_Args):
    source: int
    target: int


class MoveNodeArgs(_Args):
    node_id: int
    x: float
    y: float


class NodeIdArgs(_Args):
    node_id: int


class EdgeIdArgs(_Args):
    edge_id: int


class GenerateArgs(_Args):
    num_nodes: int = Field(ge=0)


Handler = Callable[[GraphStore, Any], Any]


@dataclass(frozen=True)
class CommandSpec:
    """One entry of the command table."""

    name: str
    args_model: type[_Args]
    handler: Handler
    help: str = ""

    @property
    def fields(self) -> list[str]:
        return list(self.args_model.model_fields)


_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec("add_node", AddNodeArgs, lambda s, a: s.add_node(a.x, a.y), "Add a node at (x, y)."),
    CommandSpec(
        "add_edge",
        AddEdgeArgs,
        lambda s, a: s.add_edge(a.source, a.target),
        "Connect two existing nodes.",
    ),
    CommandSpec(
        "update_node_position",
        MoveNodeArgs,
        lambda s, a: s.update_node_position(a.node_id, a.x, a.y),
        "Move a node.",
    ),
    CommandSpec("get_graph", NoArgs, lambda s, a: s.get_graph(), "Return all nodes and edges."),
    CommandSpec(
        "delete_node",
        NodeIdArgs,
        lambda s, a: s.delete_node(a.node_id),
        "Delete a node and its edges.",
    ),
    CommandSpec("delete_edge", EdgeIdArgs, lambda s, a: s.delete_edge(a.edge_id), "Delete an edge."),
    CommandSpec("clear_graph", NoArgs, lambda s, a: s.clear_graph(), "Remove everything."),
    CommandSpec(
        "generate_complete_graph",
        GenerateArgs,
        lambda s, a: s.generate_complete_graph(a.num_nodes),
        "Replace the graph with a complete graph.",
    ),
    CommandSpec("align_graph", NoArgs, lambda s, a: s.align_graph(), "Lay nodes out on a circle."),
    CommandSpec(
        "generate_random_graph",
        GenerateArgs,
        lambda s, a: s.generate_random_graph(a.num_nodes),
        "Replace the graph with a random graph.",
    ),
)


class CommandRouter:
    """Validates command arguments and dispatches them to a GraphStore."""

    def __init__(self, store: GraphStore) -> None:
        self.store = store
        self._commands: dict[str, CommandSpec] = {spec.name: spec for spec in _COMMANDS}

    def get(self, name: str) -> CommandSpec | None:
        return self._commands.get(name)

    def list_commands(self) -> list[dict[str, Any]]:
        return [
            {"name": spec.name, "args": spec.fields, "help": spec.help}
            for spec in self._commands.values()
        ]

    def invoke(self, command: str, args: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run one command and return its structured result."""
        spec = self._commands.get(command)
        if spec is None:
            return self._failure(command, f"Unknown command: {command}")
        try:
            parsed = spec.args_model.model_validate(args or {})
        except ValidationError as exc:
            return self._failure(command, f"Invalid arguments for {command}: {_describe(exc)}")
        try:
            output = spec.handler(self.store, parsed)
        except (GraphStoreError, ValueError) as exc:
            return self._failure(command, str(exc))
        logger.debug("Command %s succeeded", command)
        return {
            "success": True,
            "command": command,
            "result": _to_plain(output),
            "error": "",
        }

    @staticmethod
    def _failure(command: str, error: str) -> dict[str, Any]:
        logger.warning("Command %s rejected: %s", command, error)
        return {
            "success": False,
            "command": command,
            "result": None,
            "error": error,
        }


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "args"
        parts.append(f"{location}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def _to_plain(output: Any) -> Any:
    if isinstance(output, GraphSnapshot):
        return output.to_payload()
    if isinstance(output, (Node, Edge)):
        return output.model_dump()
    return output
