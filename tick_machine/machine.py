"""FSM — event-driven state machine with asynchronous transition callbacks.

State is committed synchronously when a transition matches, before its
callback runs. The future returned by ``dispatch`` only reports whether
the callback's work finished; it never undoes the state change.
"""
from __future__ import annotations

import asyncio
import inspect
import sys
from typing import Any, Callable, Iterable

from tick_machine.table import TransitionLike, TransitionTable
from tick_machine.types import Event, NoTransitionError, Transition

TransitionHook = Callable[[Any, Any, Any], None]


class FSM:
    """Finite state machine over caller-defined states and event types.

    ``on_transition(old_state, new_state, event)`` is called after each
    commit, before the transition callback.
    """

    def __init__(
        self,
        initial: Any,
        transitions: Iterable[TransitionLike] = (),
        on_transition: TransitionHook | None = None,
    ) -> None:
        self._state = initial
        self._table = TransitionTable()
        self._on_transition = on_transition
        self._pending: set[asyncio.Future[Any]] = set()
        self.add(transitions)

    def add(self, transitions: Iterable[TransitionLike]) -> None:
        """Append transitions. Earlier rules keep priority."""
        self._table.add(transitions)

    @property
    def state(self) -> Any:
        return self._state

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return tuple(self._table)

    # --- Queries ---

    def can(self, event: Any) -> bool:
        """True if ``event`` would move the machine to a different state."""
        return self._table.match(self._state, event) is not None

    def is_final(self) -> bool:
        """True if no transition starts from exactly the current state.

        Wildcard transitions do not count here, although ``can`` and
        ``dispatch`` honour them.
        """
        return not self._table.has_source(self._state)

    def available(self) -> list[Any]:
        """Events accepted in the current state, in registration order."""
        return self._table.events_from(self._state)

    # --- Dispatch ---

    def dispatch(self, event: Any, *payload: Any) -> asyncio.Future[None]:
        """Fire ``event`` with ``payload``.

        Must be called with a running event loop. Returns a future that
        fails with ``NoTransitionError`` when nothing matches, fails with
        the callback's own exception when the callback fails, and resolves
        to ``None`` otherwise.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[None] = loop.create_future()

        transition = self._table.match(self._state, event)
        if transition is None:
            future.set_exception(NoTransitionError(self._state, event))
            return future

        old = self._state
        self._state = transition.target
        self._notify(old, transition.target, event)

        if transition.callback is None:
            future.set_result(None)
            return future

        try:
            result = transition.callback(*payload)
        except StopIteration as exc:
            # Futures reject StopIteration; convert it as a coroutine would.
            error = RuntimeError("transition callback raised StopIteration")
            error.__cause__ = exc
            future.set_exception(error)
            return future
        except Exception as exc:
            future.set_exception(exc)
            return future

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            task.add_done_callback(lambda done: _chain(done, future))
        else:
            future.set_result(None)
        return future

    def dispatch_event(self, event: Event) -> asyncio.Future[None]:
        return self.dispatch(event.type, *event.payload)

    def _notify(self, old: Any, new: Any, event: Any) -> None:
        if self._on_transition is None:
            return
        try:
            self._on_transition(old, new, event)
        except Exception:
            print(
                f"tick-machine: on_transition callback error: {sys.exc_info()[1]}",
                file=sys.stderr,
            )

    def __repr__(self) -> str:
        return f"FSM(state={self._state!r}, transitions={len(self._table)})"


def _chain(source: asyncio.Future[Any], target: asyncio.Future[None]) -> None:
    """Copy the outcome of ``source`` onto ``target``."""
    if source.cancelled():
        target.cancel()
        return
    exc = source.exception()
    if target.done():
        return
    if exc is not None:
        target.set_exception(exc)
    else:
        target.set_result(None)
