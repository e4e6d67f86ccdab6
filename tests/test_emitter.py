"""Tests for command rendering and batch emission."""

import pytest

from galaxy_devices.base import DeviceCommunicationError
from galaxy_devices.emitter import build_commands, describe_assignment, emit, output_commands
from galaxy_devices.factory_reset import FACTORY_RESET_COMMANDS, factory_reset_commands
from galaxy_devices.planner import ArrayRequest, OutputAssignment, build_plan


def _assignment(n=3, **kwargs):
    values = dict(output_number=n, role="primary", speaker="LINA", first_element=1,
                  last_element=1, type_id="79",
                  calibration_commands=("/processing/output/{}/gain='-2'",),
                  delay_ms=2.5)
    values.update(kwargs)
    return OutputAssignment(**values)


class TestOutputCommands:

    def test_fixed_order(self):
        request = ArrayRequest(primary_speaker="LINA", link_group=2, reset_to_factory=True)
        commands = output_commands(_assignment(), request)

        reset = len(FACTORY_RESET_COMMANDS)
        assert commands[:reset] == factory_reset_commands(3)
        assert commands[reset:] == [
            "/processing/output/3/delay_integration/type=79",
            "/processing/output/3/gain='-2'",
            "/processing/output/3/delay=240",
            "/device/output/3/output_link_group='2'",
        ]

    def test_optional_parts_omitted(self):
        request = ArrayRequest(primary_speaker="LINA")
        commands = output_commands(_assignment(type_id=None, calibration_commands=(), delay_ms=0), request)
        assert commands == []

    def test_factory_reset_substitutes_output(self):
        commands = factory_reset_commands(11)
        assert len(commands) == 117
        assert all("{ch}" not in c for c in commands)
        assert all("/output/11/" in c for c in commands)


class TestBuildCommands:

    def test_sorted_by_output_number(self):
        request = ArrayRequest(primary_speaker="LINA")
        assignments = [_assignment(5), _assignment(2), _assignment(4)]
        commands = build_commands(assignments, request)
        types = [c for c in commands if "delay_integration" in c]
        assert types == [f"/processing/output/{n}/delay_integration/type=79" for n in (2, 4, 5)]

    @pytest.mark.parametrize("enable,value", [(True, "false"), (False, "true")])
    def test_group_bypass_last(self, enable, value):
        request = ArrayRequest(primary_speaker="LINA", link_group=4, link_group_enable=enable)
        commands = build_commands([_assignment(1), _assignment(2)], request)
        assert commands[-1] == f"/device/output_link_group/4/bypass='{value}'"
        assert sum("bypass=" in c for c in commands) == 1

    def test_no_link_group_commands_without_group(self):
        request = ArrayRequest(primary_speaker="LINA")
        commands = build_commands([_assignment(1)], request)
        assert not any("link_group" in c for c in commands)

    def test_calibration_rendered_per_output(self, catalog):
        request = ArrayRequest(primary_speaker="LINA", primary_elements=2, primary_starting_point="0")
        commands = build_commands(build_plan(request, catalog, 16), request)
        assert "/processing/output/1/gain='-2'" in commands
        assert "/processing/output/2/mute='false'" in commands

    def test_describe_assignment(self):
        line = describe_assignment(_assignment(7, first_element=3, last_element=4,
                                               starting_point_title="LINA Flown"))
        assert line == "Output 7 - LINA Elements 3-4 (2 elements) | 2.50ms delay | LINA Flown"


class TestEmit:

    @pytest.mark.asyncio
    async def test_sends_one_ordered_batch(self, catalog, sink, state):
        request = ArrayRequest(primary_speaker="LINA", primary_elements=3, link_group=1)
        plan = build_plan(request, catalog, 16)

        sent = await emit(plan, request, sink, state)

        assert sink.sent == build_commands(plan, request)
        assert sent == len(sink.sent)

    @pytest.mark.asyncio
    async def test_records_link_group_state(self, catalog, sink, state):
        request = ArrayRequest(primary_speaker="LINA", primary_elements=2, start_output=3,
                               link_group=5, link_group_enable=False)
        await emit(build_plan(request, catalog, 16), request, sink, state)

        assert state.output_link_group == {3: 5, 4: 5}
        assert state.link_group_bypass == {5: True}

    @pytest.mark.asyncio
    async def test_sink_failure_propagates_without_state_update(self, catalog, failing_sink, state):
        request = ArrayRequest(primary_speaker="LINA", primary_elements=4, link_group=1)
        plan = build_plan(request, catalog, 16)

        with pytest.raises(DeviceCommunicationError):
            await emit(plan, request, failing_sink, state)

        # Commands before the failure stay sent; nothing is rolled back
        assert failing_sink.sent == build_commands(plan, request)[:3]
        assert state.output_link_group == {}
