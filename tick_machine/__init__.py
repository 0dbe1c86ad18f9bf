"""tick-machine - Event-driven finite state machines with async transitions."""
from __future__ import annotations

from tick_machine.machine import FSM
from tick_machine.table import TransitionTable
from tick_machine.types import (
    WILDCARD,
    Callback,
    Dispatcher,
    Event,
    NoTransitionError,
    Transition,
    TransitionTuple,
)

__all__ = [
    "FSM",
    "TransitionTable",
    "Transition",
    "TransitionTuple",
    "Event",
    "Callback",
    "Dispatcher",
    "NoTransitionError",
    "WILDCARD",
]
