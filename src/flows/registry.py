"""
Flow registry — maps every FlowId to the flow class that handles it.

The router only names a FlowId; the engine resolves the handler through
this registry at runtime, so flows never import the router or each other.
"""

import logging
from typing import Callable

from src.flows.base import Flow
from src.schemas.turn_schema import FlowId

logger = logging.getLogger(__name__)

_FLOW_REGISTRY: dict[FlowId, Callable[..., Flow]] = {}


def register_flow(flow_cls: Callable[..., Flow], flow_ids: tuple[FlowId, ...] = ()) -> None:
    """Register a flow factory for each FlowId it handles."""
    for flow_id in flow_ids or getattr(flow_cls, "handles", ()):
        _FLOW_REGISTRY[flow_id] = flow_cls
        logger.debug("Flow registered: %s -> %s", flow_id.value, flow_cls.__name__)


def get_registered_flows() -> list[FlowId]:
    """Return every FlowId that has a handler."""
    return list(_FLOW_REGISTRY.keys())


def build_flow_table(*overrides: Flow) -> dict[FlowId, Flow]:
    """Instantiate one handler per flow class and map every FlowId to it.

    ``overrides`` are ready-made handler instances that take over every
    FlowId they handle, e.g. ``build_flow_table(ClockingFlow(policy="keep_first"))``.

    Raises:
        KeyError: If a FlowId has no registered handler.
    """
    missing = [f.value for f in FlowId if f not in _FLOW_REGISTRY]
    if missing:
        raise KeyError(f"Flows not registered: {missing}")

    instances: dict[Callable[..., Flow], Flow] = {}
    table: dict[FlowId, Flow] = {}
    for flow_id in FlowId:
        override = next((f for f in overrides if flow_id in f.handles), None)
        if override is not None:
            table[flow_id] = override
            continue
        factory = _FLOW_REGISTRY[flow_id]
        if factory not in instances:
            instances[factory] = factory()
        table[flow_id] = instances[factory]
    return table


def _auto_register() -> None:
    """Auto-register all built-in flows. Called once at import time."""
    from src.flows.checklist import ChecklistFlow
    from src.flows.clocking import ClockingFlow
    from src.flows.fallback import DefaultFlow, ResetFlow
    from src.flows.forecast import ForecastFlow
    from src.flows.maintenance import MaintenanceFlow
    from src.flows.onboarding import OnboardingFlow

    for flow_cls in (
        ResetFlow, OnboardingFlow, ClockingFlow, ChecklistFlow,
        ForecastFlow, MaintenanceFlow, DefaultFlow,
    ):
        register_flow(flow_cls)


_auto_register()
