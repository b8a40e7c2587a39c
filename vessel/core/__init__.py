"""Core flow modules for the Vessel container model."""

from vessel.core.container import Container, Properties, State
from vessel.core.flow import flow_frame, simulate_flow, steps_to_drain
from vessel.core.limiters import ConsumeLimiter, ProvideLimiter
from vessel.core.transfer import Participant, TransferEndpoint, transfer
from vessel.core.units import DEFAULT_TAG, ResourceTag, resolve_units_type

__all__ = [
    "Container",
    "ConsumeLimiter",
    "DEFAULT_TAG",
    "Participant",
    "Properties",
    "ProvideLimiter",
    "ResourceTag",
    "State",
    "TransferEndpoint",
    "flow_frame",
    "resolve_units_type",
    "simulate_flow",
    "steps_to_drain",
    "transfer",
]
