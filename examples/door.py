"""Door -- intermediate "in flight" states and re-entrant dispatch.

Demonstrates:
- Enum states and events
- A callback that finishes its async work and then dispatches the
  follow-up event (closed -> opening -> open)
- Overlapping dispatches evaluated against the intermediate state
- An on_transition observer

Run: python -m examples.door
"""
from __future__ import annotations

import asyncio
from enum import Enum

from tick_machine import FSM, Dispatcher, NoTransitionError


class DoorState(Enum):
    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"


class DoorEvent(Enum):
    OPEN = "open"
    OPENED = "opened"
    CLOSE = "close"
    CLOSED = "closed"


async def settle(dispatcher: Dispatcher, event: DoorEvent, delay: float) -> None:
    """Wait out the motion, then report that it finished."""
    await asyncio.sleep(delay)
    await dispatcher.dispatch(event)


class Door:
    def __init__(self, travel: float = 0.05) -> None:
        self.travel = travel
        self.log: list[str] = []
        self.fsm = FSM(
            DoorState.CLOSED,
            [
                (DoorState.CLOSED, DoorEvent.OPEN, DoorState.OPENING, self._opening),
                (DoorState.OPENING, DoorEvent.OPENED, DoorState.OPEN),
                (DoorState.OPEN, DoorEvent.CLOSE, DoorState.CLOSING, self._closing),
                (DoorState.CLOSING, DoorEvent.CLOSED, DoorState.CLOSED),
            ],
            on_transition=self._record,
        )

    def open(self) -> asyncio.Future[None]:
        return self.fsm.dispatch(DoorEvent.OPEN)

    def close(self) -> asyncio.Future[None]:
        return self.fsm.dispatch(DoorEvent.CLOSE)

    async def _opening(self) -> None:
        await settle(self.fsm, DoorEvent.OPENED, self.travel)

    async def _closing(self) -> None:
        await settle(self.fsm, DoorEvent.CLOSED, self.travel)

    def _record(self, old: DoorState, new: DoorState, event: DoorEvent) -> None:
        self.log.append(f"{old.value} -[{event.value}]-> {new.value}")


async def main() -> None:
    print("=== Door ===\n")
    door = Door()

    pending = door.open()
    print(f"  after dispatch: {door.fsm.state.value}")

    # Still opening, so a close request is rejected.
    try:
        await door.close()
    except NoTransitionError as exc:
        print(f"  rejected: {exc}")

    await pending
    print(f"  settled: {door.fsm.state.value}")

    await door.close()
    print(f"  settled: {door.fsm.state.value}\n")

    for line in door.log:
        print(f"  {line}")


if __name__ == "__main__":
    asyncio.run(main())
