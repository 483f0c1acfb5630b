"""Top-level application orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.event_bus import EventBus
from core.policy_runtime import graph_settings, load_effective_config
from executor.command_router import CommandRouter
from world_model.graph_schemas import GraphSettings
from world_model.graph_store import GraphStore


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    settings: GraphSettings
    event_bus: EventBus
    store: GraphStore
    router: CommandRouter


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(self, root: Path | None = None, config_path: Path | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self.config_path = config_path

    def build(self, seed: int | None = None) -> RuntimeBundle:
        config = load_effective_config(self.root, self.config_path)
        settings = graph_settings(config)
        if seed is not None:
            settings = settings.model_copy(update={"seed": seed})

        event_bus = EventBus()
        store = GraphStore(settings=settings, event_bus=event_bus)
        return RuntimeBundle(
            config=config,
            settings=settings,
            event_bus=event_bus,
            store=store,
            router=CommandRouter(store),
        )
