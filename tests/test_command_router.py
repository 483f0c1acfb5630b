"""Command surface tests."""

from __future__ import annotations

from core.event_bus import GRAPH_CHANGED, EventBus
from executor.command_router import CommandRouter
from world_model.graph_schemas import GraphSettings
from world_model.graph_store import GraphStore


def build_router() -> CommandRouter:
    return CommandRouter(GraphStore(settings=GraphSettings(seed=11), event_bus=EventBus()))


def test_add_node_and_edge_return_plain_dicts() -> None:
    router = build_router()

    first = router.invoke("add_node", {"x": 10, "y": 20.5})
    second = router.invoke("add_node", {"x": "30", "y": "40"})
    edge = router.invoke("add_edge", {"source": 0, "target": 1})

    assert first == {
        "success": True,
        "command": "add_node",
        "result": {"id": 0, "x": 10.0, "y": 20.5},
        "error": "",
    }
    assert second["result"] == {"id": 1, "x": 30.0, "y": 40.0}
    assert edge["result"] == {"id": 0, "source": 0, "target": 1}


def test_store_errors_become_error_strings() -> None:
    router = build_router()
    router.invoke("add_node", {"x": 0, "y": 0})

    missing_edge_end = router.invoke("add_edge", {"source": 0, "target": 3})
    missing_node = router.invoke("delete_node", {"node_id": 8})
    missing_move = router.invoke("update_node_position", {"node_id": 8, "x": 1, "y": 1})
    missing_edge = router.invoke("delete_edge", {"edge_id": 0})

    assert missing_edge_end["success"] is False
    assert missing_edge_end["error"] == "Source or target node not found"
    assert missing_node["error"] == "Node not found"
    assert missing_move["error"] == "Node not found"
    assert missing_edge["error"] == "Edge not found"
    assert missing_edge["result"] is None


def test_invalid_arguments_are_rejected_before_the_store() -> None:
    router = build_router()
    events: list[dict] = []
    router.store.event_bus.subscribe(GRAPH_CHANGED, events.append)

    bad_type = router.invoke("add_edge", {"source": "a", "target": 1})
    missing = router.invoke("add_node", {"x": 1})
    negative = router.invoke("generate_complete_graph", {"num_nodes": -2})
    extra = router.invoke("clear_graph", {"force": True})

    for result in (bad_type, missing, negative, extra):
        assert result["success"] is False
        assert result["error"].startswith(f"Invalid arguments for {result['command']}")
    assert "source" in bad_type["error"]
    assert "y" in missing["error"]
    assert events == []
    assert router.invoke("get_graph")["result"] == {"nodes": [], "edges": []}


def test_unknown_command() -> None:
    result = build_router().invoke("rotate_graph")
    assert result == {
        "success": False,
        "command": "rotate_graph",
        "result": None,
        "error": "Unknown command: rotate_graph",
    }


def test_generators_align_and_clear_through_router() -> None:
    router = build_router()

    assert router.invoke("generate_complete_graph", {"num_nodes": 4})["success"] is True
    graph = router.invoke("get_graph")["result"]
    assert len(graph["nodes"]) == 4
    assert len(graph["edges"]) == 6

    assert router.invoke("align_graph") == {
        "success": True,
        "command": "align_graph",
        "result": None,
        "error": "",
    }
    assert router.invoke("generate_random_graph", {"num_nodes": 5})["success"] is True
    assert len(router.invoke("get_graph")["result"]["nodes"]) == 5

    assert router.invoke("clear_graph")["success"] is True
    assert router.invoke("get_graph")["result"] == {"nodes": [], "edges": []}


def test_list_commands_covers_surface() -> None:
    listing = {entry["name"]: entry["args"] for entry in build_router().list_commands()}
    assert listing == {
        "add_node": ["x", "y"],
        "add_edge": ["source", "target"],
        "update_node_position": ["node_id", "x", "y"],
        "get_graph": [],
        "delete_node": ["node_id"],
        "delete_edge": ["edge_id"],
        "clear_graph": [],
        "generate_complete_graph": ["num_nodes"],
        "align_graph": [],
        "generate_random_graph": ["num_nodes"],
    }


def test_failing_subscriber_does_not_turn_success_into_error() -> None:
    router = build_router()

    def broken_listener(_event: dict) -> None:
        raise RuntimeError("listener exploded")

    router.store.event_bus.subscribe(GRAPH_CHANGED, broken_listener)

    result = router.invoke("add_node", {"x": 1, "y": 1})

    assert result["success"] is True
    assert result["result"] == {"id": 0, "x": 1.0, "y": 1.0}
    assert [n.id for n in router.store.get_graph().nodes] == [0]
