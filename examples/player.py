"""Player -- a game character driven by an event FSM.

Demonstrates:
- Declaring states and events as plain strings
- Compact tuple transitions, including a wildcard source
- Swapping a per-state strategy inside transition callbacks
- Payloads passed through to callbacks (run takes x, y)
- Capability queries with can() and is_final()

Run: python -m examples.player
"""
from __future__ import annotations

import asyncio

from tick_machine import FSM, WILDCARD


class StayStrategy:
    def on_update(self, dt: float) -> str:
        return "staying"


class RunStrategy:
    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x = x
        self.y = y

    def on_update(self, dt: float) -> str:
        return f"running to ({self.x}, {self.y})"


class DeadStrategy:
    def on_update(self, dt: float) -> str:
        return "dead"


def strategy_for(state: str) -> StayStrategy | RunStrategy | DeadStrategy:
    if state == "staying":
        return StayStrategy()
    if state == "running":
        return RunStrategy()
    if state == "dead":
        return DeadStrategy()
    raise ValueError(f"Unknown state: {state}")


class Player:
    def __init__(self, initial: str = "staying") -> None:
        self.strategy = strategy_for(initial)
        self.fsm = FSM(initial, [
            ("running", "stop", "staying", self._to_staying),
            ("staying", "run", "running", self._to_running),
            (WILDCARD, "die", "dead", self._to_dead),
        ])

    def stop(self) -> asyncio.Future[None]:
        return self.fsm.dispatch("stop")

    def run(self, x: float, y: float) -> asyncio.Future[None]:
        return self.fsm.dispatch("run", x, y)

    def die(self) -> asyncio.Future[None]:
        return self.fsm.dispatch("die")

    def is_controllable(self) -> bool:
        return not self.fsm.is_final()

    def on_update(self, dt: float) -> str:
        return self.strategy.on_update(dt)

    async def _to_staying(self) -> None:
        self.strategy = StayStrategy()
        await asyncio.sleep(0.01)  # emulate some async work

    async def _to_running(self, x: float, y: float) -> None:
        self.strategy = RunStrategy(x, y)
        await asyncio.sleep(0.01)

    def _to_dead(self) -> None:
        self.strategy = DeadStrategy()


async def main() -> None:
    print("=== Player ===\n")
    player = Player()
    print(f"  state={player.fsm.state}  available={player.fsm.available()}")

    await player.run(3, 4)
    print(f"  state={player.fsm.state}  update={player.on_update(0.05)!r}")

    await player.stop()
    print(f"  state={player.fsm.state}  update={player.on_update(0.05)!r}")

    await player.die()
    print(f"  state={player.fsm.state}  controllable={player.is_controllable()}")

    try:
        await player.run(0, 0)
    except LookupError as exc:
        print(f"  rejected: {exc}")


if __name__ == "__main__":
    asyncio.run(main())
