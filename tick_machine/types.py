"""Core data types for event-driven state machines."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol, Tuple, Union, runtime_checkable

WILDCARD = "*"

Callback = Callable[..., Union[Awaitable[Any], None]]

TransitionTuple = Union[
    Tuple[Any, Any, Any],
    Tuple[Any, Any, Any, Callback],
]


class NoTransitionError(LookupError):
    """Raised when no transition matches the current state and event."""

    def __init__(self, state: Any, event: Any) -> None:
        self.state = state
        self.event = event
        super().__init__(f"No transition from {state} on {event}")


@dataclass(frozen=True)
class Event:
    """An event type plus its positional payload."""

    type: Any
    payload: tuple[Any, ...] = ()

    @classmethod
    def of(cls, type: Any, *payload: Any) -> Event:
        return cls(type, payload)


@dataclass(frozen=True)
class Transition:
    """A single rule: on ``event`` in ``source``, move to ``target``.

    ``source`` may be ``WILDCARD`` to match any current state.
    ``callback`` receives the event payload positionally and may return an
    awaitable; it runs after the state has already changed.
    """

    source: Any
    event: Any
    target: Any
    callback: Callback | None = None

    @classmethod
    def from_tuple(cls, entry: TransitionTuple) -> Transition:
        """Build from ``(source, event, target[, callback])``.

        Raises ``TypeError`` for any other shape.
        """
        if not isinstance(entry, (tuple, list)) or len(entry) not in (3, 4):
            raise TypeError(
                "Transition tuple must be (source, event, target[, callback]), "
                f"got {entry!r}"
            )
        callback = entry[3] if len(entry) == 4 else None
        if callback is not None and not callable(callback):
            raise TypeError(f"Transition callback is not callable: {callback!r}")
        return cls(entry[0], entry[1], entry[2], callback)

    def matches(self, state: Any, event: Any) -> bool:
        """True if this rule fires for ``event`` in ``state``.

        A rule whose target equals ``state`` never matches.
        """
        if self.event != event or self.target == state:
            return False
        return self.source == WILDCARD or self.source == state


@runtime_checkable
class Dispatcher(Protocol):
    """Anything that accepts events and reports completion asynchronously."""

    def dispatch(self, event: Any, *payload: Any) -> Awaitable[None]: ...
