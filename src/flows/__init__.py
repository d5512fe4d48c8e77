from src.flows.base import Flow, TurnContext
from src.flows.registry import build_flow_table, get_registered_flows, register_flow

__all__ = [
    "Flow",
    "TurnContext",
    "build_flow_table",
    "get_registered_flows",
    "register_flow",
]
