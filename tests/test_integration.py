"""Integration tests: the example game objects built on top of FSM."""
from __future__ import annotations

import asyncio

import pytest
from examples import door as door_example
from examples import player as player_example
from examples.door import Door, DoorEvent, DoorState
from examples.player import DeadStrategy, Player, RunStrategy, StayStrategy
from tick_machine import NoTransitionError


class TestPlayer:
    def test_initial_state(self) -> None:
        player = Player()
        assert player.fsm.state == "staying"
        assert isinstance(player.strategy, StayStrategy)
        assert player.is_controllable()

    def test_initial_strategy_follows_state(self) -> None:
        assert isinstance(Player("running").strategy, RunStrategy)
        assert isinstance(Player("dead").strategy, DeadStrategy)

    def test_unknown_initial_state(self) -> None:
        with pytest.raises(ValueError, match="Unknown state"):
            Player("flying")

    def test_dead_is_not_controllable(self) -> None:
        assert not Player("dead").is_controllable()

    def test_capabilities_per_state(self) -> None:
        assert Player("staying").fsm.available() == ["run", "die"]
        assert Player("running").fsm.available() == ["stop", "die"]
        assert Player("dead").fsm.available() == []

    @pytest.mark.asyncio
    async def test_full_lifecycle(self) -> None:
        player = Player()

        await player.run(3, 4)
        assert player.fsm.state == "running"
        assert player.on_update(0.05) == "running to (3, 4)"

        await player.stop()
        assert player.fsm.state == "staying"
        assert player.on_update(0.05) == "staying"

        await player.die()
        assert player.fsm.state == "dead"
        assert player.on_update(0.05) == "dead"
        assert not player.is_controllable()

    @pytest.mark.asyncio
    async def test_unreachable_target_rejected(self) -> None:
        player = Player("dead")
        assert not player.fsm.can("run")
        with pytest.raises(NoTransitionError):
            await player.run(0, 0)
        assert player.fsm.state == "dead"
        assert isinstance(player.strategy, DeadStrategy)

    @pytest.mark.asyncio
    async def test_transition_to_current_state_rejected(self) -> None:
        player = Player("running")
        assert not player.fsm.can("run")
        with pytest.raises(NoTransitionError):
            await player.run(0, 0)
        assert player.fsm.state == "running"

    @pytest.mark.asyncio
    async def test_die_twice_rejected(self) -> None:
        player = Player("running")
        await player.die()
        with pytest.raises(NoTransitionError):
            await player.die()
        assert player.fsm.state == "dead"

    @pytest.mark.asyncio
    async def test_state_changes_before_run_settles(self) -> None:
        player = Player()
        pending = player.run(1, 1)
        assert player.fsm.state == "running"
        assert player.fsm.can("stop")
        await pending


class TestDoor:
    @pytest.mark.asyncio
    async def test_open_chain_resolves_to_open(self) -> None:
        door = Door(travel=0.01)
        await door.open()
        assert door.fsm.state is DoorState.OPEN
        assert door.log == ["closed -[open]-> opening", "opening -[opened]-> open"]

    @pytest.mark.asyncio
    async def test_close_rejected_while_opening(self) -> None:
        door = Door(travel=0.01)
        pending = door.open()
        assert door.fsm.state is DoorState.OPENING
        with pytest.raises(NoTransitionError) as info:
            await door.close()
        assert info.value.state is DoorState.OPENING
        assert info.value.event is DoorEvent.CLOSE
        await pending
        assert door.fsm.state is DoorState.OPEN

    @pytest.mark.asyncio
    async def test_round_trip(self) -> None:
        door = Door(travel=0.01)
        await door.open()
        await door.close()
        assert door.fsm.state is DoorState.CLOSED
        assert len(door.log) == 4

    @pytest.mark.asyncio
    async def test_concurrent_opens_only_one_accepted(self) -> None:
        door = Door(travel=0.01)
        results = await asyncio.gather(
            door.open(),
            door.open(),
            return_exceptions=True,
        )
        assert results[0] is None
        assert isinstance(results[1], NoTransitionError)
        assert door.fsm.state is DoorState.OPEN
        assert len(door.log) == 2


class TestExampleScripts:
    @pytest.mark.asyncio
    async def test_player_main(self, capsys: pytest.CaptureFixture[str]) -> None:
        await player_example.main()
        out = capsys.readouterr().out
        assert "=== Player ===" in out
        assert "controllable=False" in out
        assert "rejected: No transition from dead on run" in out

    @pytest.mark.asyncio
    async def test_door_main(self, capsys: pytest.CaptureFixture[str]) -> None:
        await door_example.main()
        out = capsys.readouterr().out
        assert "=== Door ===" in out
        assert "after dispatch: opening" in out
        assert "rejected: No transition from DoorState.OPENING on DoorEvent.CLOSE" in out
        assert "closing -[closed]-> closed" in out
