"""TransitionTable — ordered, append-only transition storage."""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Union

from tick_machine.types import Transition, TransitionTuple

TransitionLike = Union[Transition, TransitionTuple]


class TransitionTable:
    """Stores transitions in insertion order. First match wins.

    Overlapping and duplicate rules are legal; authors order ambiguous
    rules deliberately. Nothing is ever removed.
    """

    def __init__(self, transitions: Iterable[TransitionLike] = ()) -> None:
        self._transitions: list[Transition] = []
        self.add(transitions)

    def add(self, transitions: Iterable[TransitionLike]) -> None:
        """Append transitions after all existing ones.

        Accepts ``Transition`` records or compact tuples. Raises
        ``TypeError`` on a malformed entry, in which case nothing from
        this call is appended.
        """
        normalized = [
            t if isinstance(t, Transition) else Transition.from_tuple(t)
            for t in transitions
        ]
        self._transitions.extend(normalized)

    def match(self, state: Any, event: Any) -> Transition | None:
        """Return the first transition that fires for ``event`` in ``state``."""
        for transition in self._transitions:
            if transition.matches(state, event):
                return transition
        return None

    def has_source(self, state: Any) -> bool:
        """True if any transition lists exactly ``state`` as its source.

        Wildcard-sourced transitions are not counted.
        """
        return any(t.source == state for t in self._transitions)

    def events_from(self, state: Any) -> list[Any]:
        """Distinct events that would match from ``state``, first-seen order."""
        events: list[Any] = []
        for transition in self._transitions:
            if transition.event in events:
                continue
            if transition.matches(state, transition.event):
                events.append(transition.event)
        return events

    def __len__(self) -> int:
        return len(self._transitions)

    def __iter__(self) -> Iterator[Transition]:
        return iter(list(self._transitions))
