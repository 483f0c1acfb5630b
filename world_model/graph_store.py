"""In-memory node/edge registry backing the graph editor."""

from __future__ import annotations

import logging
import random
import threading
from typing import Any

from core.event_bus import GRAPH_CHANGED, EventBus
from world_model.graph_layout import (
    all_pairs,
    circle_positions,
    diagonal_positions,
    random_positions,
    sampled_pairs,
)
from world_model.graph_schemas import Edge, GraphSettings, GraphSnapshot, Node

logger = logging.getLogger("canvas.store")


class GraphStoreError(LookupError):
    """Base class for lookups that miss the live graph."""


class NodeNotFoundError(GraphStoreError):
    """Referenced node id is not live."""


class EdgeNotFoundError(GraphStoreError):
    """Referenced edge id is not live."""


class GraphStore:
    """Owns nodes, edges and both id counters behind one lock.

    Ids are handed out sequentially from 0 and are never reused until
    ``clear_graph`` or one of the generators resets the counters. Every
    operation validates before writing, so a raised error leaves the store
    untouched. Successful mutations are announced on the event bus as
    ``graph.changed`` once the lock has been released.
    """

    def __init__(
        self,
        settings: GraphSettings | None = None,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or GraphSettings()
        self.event_bus = event_bus
        self.rng = rng or random.Random(self.settings.seed)
        self._lock = threading.RLock()
        self._nodes: list[Node] = []
        self._edges: list[Edge] = []
        self._next_node_id = 0
        self._next_edge_id = 0

    # ------------------------------------------------------------------
    # Single-item commands
    # ------------------------------------------------------------------

    def add_node(self, x: float, y: float) -> Node:
        with self._lock:
            node = self._append_node(x, y)
        logger.debug("Added node %d at (%.2f, %.2f)", node.id, node.x, node.y)
        self._notify("add_node", node_ids=[node.id])
        return node.model_copy()

    def add_edge(self, source: int, target: int) -> Edge:
        """Connect two live nodes. Self-loops and parallel edges are allowed."""
        with self._lock:
            if self._find_node(source) is None or self._find_node(target) is None:
                raise NodeNotFoundError("Source or target node not found")
            edge = self._append_edge(source, target)
        logger.debug("Added edge %d (%d -> %d)", edge.id, source, target)
        self._notify("add_edge", node_ids=[source, target], edge_ids=[edge.id])
        return edge.model_copy()

    def update_node_position(self, node_id: int, x: float, y: float) -> None:
        with self._lock:
            node = self._find_node(node_id)
            if node is None:
                raise NodeNotFoundError("Node not found")
            node.x = float(x)
            node.y = float(y)
        self._notify("update_node_position", node_ids=[node_id])

    def delete_node(self, node_id: int) -> None:
        """Remove a node and every edge incident to it."""
        with self._lock:
            node = self._find_node(node_id)
            if node is None:
                raise NodeNotFoundError("Node not found")
            self._nodes.remove(node)
            dropped = [edge.id for edge in self._edges if edge.touches(node_id)]
            self._edges = [edge for edge in self._edges if not edge.touches(node_id)]
        logger.debug("Deleted node %d and %d incident edge(s)", node_id, len(dropped))
        self._notify("delete_node", node_ids=[node_id], edge_ids=dropped)

    def delete_edge(self, edge_id: int) -> None:
        with self._lock:
            for index, edge in enumerate(self._edges):
                if edge.id == edge_id:
                    del self._edges[index]
                    break
            else:
                raise EdgeNotFoundError("Edge not found")
        logger.debug("Deleted edge %d", edge_id)
        self._notify("delete_edge", edge_ids=[edge_id])

    def get_graph(self) -> GraphSnapshot:
        with self._lock:
            return GraphSnapshot(
                nodes=[node.model_copy() for node in self._nodes],
                edges=[edge.model_copy() for edge in self._edges],
            )

    # ------------------------------------------------------------------
    # Whole-graph commands
    # ------------------------------------------------------------------

    def clear_graph(self) -> None:
        with self._lock:
            self._reset()
        logger.info("Cleared graph")
        self._notify("clear_graph")

    def generate_complete_graph(self, num_nodes: int) -> None:
        """Replace the graph with K_n laid out along the diagonal."""
        _check_count(num_nodes)
        with self._lock:
            self._reset()
            for x, y in diagonal_positions(num_nodes, self.settings.grid_spacing):
                self._append_node(x, y)
            for source, target in all_pairs(num_nodes):
                self._append_edge(source, target)
            node_ids, edge_ids = self._live_ids()
        logger.info("Generated complete graph: %d nodes, %d edges", len(node_ids), len(edge_ids))
        self._notify("generate_complete_graph", node_ids=node_ids, edge_ids=edge_ids)

    def generate_random_graph(self, num_nodes: int) -> None:
        """Replace the graph with scattered nodes and coin-flip edges."""
        _check_count(num_nodes)
        canvas = self.settings.canvas
        with self._lock:
            self._reset()
            for x, y in random_positions(num_nodes, canvas.width, canvas.height, self.rng):
                self._append_node(x, y)
            for source, target in sampled_pairs(num_nodes, self.settings.edge_probability, self.rng):
                self._append_edge(source, target)
            node_ids, edge_ids = self._live_ids()
        logger.info("Generated random graph: %d nodes, %d edges", len(node_ids), len(edge_ids))
        self._notify("generate_random_graph", node_ids=node_ids, edge_ids=edge_ids)

    def align_graph(self) -> None:
        """Move every node onto the layout circle in collection order."""
        layout = self.settings.layout
        with self._lock:
            positions = circle_positions(
                len(self._nodes), layout.radius, layout.center_x, layout.center_y
            )
            for node, (x, y) in zip(self._nodes, positions):
                node.x = x
                node.y = y
            node_ids = [node.id for node in self._nodes]
        if not node_ids:
            return
        logger.debug("Aligned %d node(s) on circle r=%.1f", len(node_ids), layout.radius)
        self._notify("align_graph", node_ids=node_ids)

    # ------------------------------------------------------------------
    # Internals (callers hold the lock)
    # ------------------------------------------------------------------

    def _append_node(self, x: float, y: float) -> Node:
        node = Node(id=self._next_node_id, x=x, y=y)
        self._nodes.append(node)
        self._next_node_id += 1
        return node

    def _append_edge(self, source: int, target: int) -> Edge:
        edge = Edge(id=self._next_edge_id, source=source, target=target)
        self._edges.append(edge)
        self._next_edge_id += 1
        return edge

    def _find_node(self, node_id: int) -> Node | None:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    def _live_ids(self) -> tuple[list[int], list[int]]:
        return [node.id for node in self._nodes], [edge.id for edge in self._edges]

    def _reset(self) -> None:
        self._nodes = []
        self._edges = []
        self._next_node_id = 0
        self._next_edge_id = 0

    def _notify(
        self,
        operation: str,
        node_ids: list[int] | None = None,
        edge_ids: list[int] | None = None,
    ) -> None:
        if self.event_bus is None:
            return
        payload: dict[str, Any] = {
            "operation": operation,
            "node_ids": list(node_ids or []),
            "edge_ids": list(edge_ids or []),
        }
        # The mutation is already committed; a failing subscriber must not undo that.
        try:
            self.event_bus.emit(GRAPH_CHANGED, payload)
        except Exception:
            logger.exception("graph.changed subscriber failed after %s", operation)


def _check_count(num_nodes: int) -> None:
    if num_nodes < 0:
        raise ValueError(f"num_nodes must be non-negative, got {num_nodes}")
