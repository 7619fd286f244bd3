"""Tests for the CommandDispatcher."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from waverover.domain.models import ImuQuery, SpeedCommand
from waverover.rover.base import RoverLink, RoverLinkError
from waverover.rover.dispatcher import CommandDispatcher
from waverover.rover.registry import RoverRegistry, UnknownRoverError


class TestConnect:
    @pytest.mark.asyncio
    async def test_connect_registers_and_reports_id(
        self, dispatcher: CommandDispatcher, registry: RoverRegistry, stub_rover
    ) -> None:
        text = await dispatcher.connect("10.0.0.5")
        assert text == "Connected to: 10.0.0.5 with ID: rover1"
        assert registry.resolve("rover1") == "10.0.0.5"
        assert stub_rover.requests == []

    @pytest.mark.asyncio
    async def test_connect_ids_sequential(self, dispatcher: CommandDispatcher) -> None:
        texts = [await dispatcher.connect(f"10.0.0.{i}") for i in range(1, 4)]
        assert [t.rsplit(" ", 1)[-1] for t in texts] == ["rover1", "rover2", "rover3"]

    @pytest.mark.asyncio
    async def test_concurrent_connects_unique_ids(
        self, dispatcher: CommandDispatcher, registry: RoverRegistry
    ) -> None:
        texts = await asyncio.gather(*(dispatcher.connect(f"host-{i}") for i in range(150)))
        ids = {t.rsplit(" ", 1)[-1] for t in texts}
        assert ids == {f"rover{i}" for i in range(1, 151)}
        assert len(registry) == 150


class TestDeviceOperations:
    @pytest.mark.asyncio
    async def test_speed(self, dispatcher: CommandDispatcher, stub_rover) -> None:
        await dispatcher.connect("10.0.0.5")
        text = await dispatcher.speed("rover1", 50, -50)
        assert text == "Left wheel speed: 50, Right wheel speed: -50"
        assert stub_rover.commands == [{"T": 1, "L": 50, "R": -50}]
        assert stub_rover.requests[0].url.host == "10.0.0.5"

    @pytest.mark.asyncio
    async def test_pwm(self, dispatcher: CommandDispatcher, stub_rover) -> None:
        await dispatcher.connect("10.0.0.5")
        text = await dispatcher.pwm("rover1", 100, 120)
        assert "100" in text and "120" in text
        assert stub_rover.commands == [{"T": 11, "L": 100, "R": 120}]

    @pytest.mark.asyncio
    async def test_cmd_vel_renames_fields(self, dispatcher: CommandDispatcher, stub_rover) -> None:
        await dispatcher.connect("10.0.0.5")
        text = await dispatcher.cmd_vel("rover1", 0.5, -0.2)
        assert text == "Velocity: 0.5, Rotation: -0.2"
        assert stub_rover.commands == [{"T": 13, "X": 0.5, "Z": -0.2}]

    @pytest.mark.asyncio
    async def test_screen(self, dispatcher: CommandDispatcher, stub_rover) -> None:
        await dispatcher.connect("10.0.0.5")
        text = await dispatcher.screen("rover1", 1, "Hello & bye")
        assert text == "Line Number: 1, Text: Hello & bye"
        assert stub_rover.commands == [{"T": 3, "lineNum": 1, "Text": "Hello & bye"}]

    @pytest.mark.asyncio
    async def test_imu_returns_body_verbatim(self, dispatcher: CommandDispatcher, stub_rover) -> None:
        stub_rover.body = '{"roll":1}'
        await dispatcher.connect("10.0.0.5")
        text = await dispatcher.imu("rover1")
        assert '{"roll":1}' in text
        assert stub_rover.commands == [{"T": 126}]

    @pytest.mark.asyncio
    async def test_operations_target_their_own_rover(
        self, dispatcher: CommandDispatcher, stub_rover
    ) -> None:
        await dispatcher.connect("10.0.0.5")
        await dispatcher.connect("10.0.0.6")
        await dispatcher.speed("rover2", 1, 1)
        assert stub_rover.requests[0].url.host == "10.0.0.6"


class TestFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("operation", "args"),
        [
            ("speed", (50, -50)),
            ("pwm", (1, 1)),
            ("cmd_vel", (0.5, -0.2)),
            ("screen", (0, "hi")),
            ("imu", ()),
        ],
    )
    async def test_unknown_rover_sends_nothing(
        self, dispatcher: CommandDispatcher, stub_rover, operation: str, args: tuple
    ) -> None:
        with pytest.raises(UnknownRoverError, match="rover9"):
            await getattr(dispatcher, operation)("rover9", *args)
        assert stub_rover.requests == []

    @pytest.mark.asyncio
    async def test_transport_failure_propagates(
        self, dispatcher: CommandDispatcher, stub_rover
    ) -> None:
        stub_rover.status_code = 503
        await dispatcher.connect("10.0.0.5")
        with pytest.raises(RoverLinkError):
            await dispatcher.speed("rover1", 1, 1)
        # No retry
        assert len(stub_rover.requests) == 1

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_registry(self, registry: RoverRegistry) -> None:
        link = AsyncMock(spec=RoverLink)
        link.send.side_effect = RoverLinkError("boom", address="10.0.0.5")
        dispatcher = CommandDispatcher(registry, link)
        await dispatcher.connect("10.0.0.5")
        with pytest.raises(RoverLinkError):
            await dispatcher.imu("rover1")
        assert registry.resolve("rover1") == "10.0.0.5"


class TestWithMockLink:
    @pytest.mark.asyncio
    async def test_builds_typed_commands(self, registry: RoverRegistry) -> None:
        link = AsyncMock(spec=RoverLink)
        link.send.return_value = "{}"
        dispatcher = CommandDispatcher(registry, link)
        await dispatcher.connect("10.0.0.5")

        await dispatcher.speed("rover1", 3, 4)
        await dispatcher.imu("rover1")

        assert link.send.await_args_list[0].args == ("10.0.0.5", SpeedCommand(L=3, R=4))
        assert link.send.await_args_list[1].args == ("10.0.0.5", ImuQuery())
