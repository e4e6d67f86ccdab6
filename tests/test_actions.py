"""Tests for the line array and LMBC actions."""

import logging

import pytest

from galaxy_devices.actions import (
    ActionResult,
    STATUS_ERROR,
    STATUS_REJECTED,
    STATUS_SUCCESS,
    design_line_array,
    line_array_design,
    lmbc_configure,
    preview_line_array,
)
from galaxy_devices.planner import ArrayRequest
from galaxy_devices.state import DeviceState


class TestLineArrayDesign:

    @pytest.mark.asyncio
    async def test_success(self, catalog, sink, state, caplog):
        caplog.set_level(logging.INFO)
        result = await line_array_design(
            {"primary_speaker": "LINA", "primary_elements": 8, "mixed_array": True,
             "secondary_elements": 4, "link_group": 2},
            catalog, sink, state)

        assert result.status == STATUS_SUCCESS
        assert result.ok
        assert result.commands_sent == len(sink.sent)
        assert len(result.details["outputs"]) == 12
        assert "Mixed array with LEO" in result.message
        assert "Link Group 2" in result.message
        assert "Output 9 - LEO Elements 1-1" in caplog.text
        assert state.output_link_group[12] == 2

    @pytest.mark.asyncio
    async def test_capacity_rejection_sends_nothing(self, catalog, sink, state, caplog):
        request = ArrayRequest(primary_speaker="LEO", primary_elements=12, start_output=10)
        result = await design_line_array(request, catalog, sink, state)

        assert result.status == STATUS_REJECTED
        assert result.details == {"required_outputs": 12, "available_outputs": 7}
        assert sink.sent == []
        assert "Not enough outputs" in caplog.text

    @pytest.mark.asyncio
    async def test_missing_primary_rejected(self, catalog, sink, state):
        result = await line_array_design({}, catalog, sink, state)
        assert result.status == STATUS_REJECTED
        assert sink.sent == []

    @pytest.mark.asyncio
    async def test_capacity_follows_device_state(self, catalog, sink):
        small = DeviceState(num_outputs=8)
        result = await line_array_design({"primary_speaker": "LEO", "primary_elements": 10},
                                         catalog, sink, small)
        assert result.status == STATUS_REJECTED

    @pytest.mark.asyncio
    async def test_sink_failure_is_error(self, catalog, failing_sink, state, caplog):
        result = await line_array_design({"primary_speaker": "LINA", "primary_elements": 4},
                                         catalog, failing_sink, state)

        assert result.status == STATUS_ERROR
        assert "connection reset" in result.message
        assert result.commands_sent == len(failing_sink.sent) == 3
        assert any(r.levelno == logging.ERROR for r in caplog.records)

    @pytest.mark.asyncio
    async def test_failure_in_lmbc_counts_both_batches(self, catalog, failing_sink_factory, state):
        sink = failing_sink_factory(fail_after=6)
        result = await line_array_design(
            {"primary_speaker": "LYON", "primary_elements": 4, "enable_lmbc": True},
            catalog, sink, state)
        # 4 integration type commands, then 2 of the 8 beam control commands
        assert result.status == STATUS_ERROR
        assert result.commands_sent == 6

    @pytest.mark.asyncio
    async def test_lmbc_sent_after_array(self, catalog, sink, state):
        result = await line_array_design(
            {"primary_speaker": "LYON", "primary_elements": 12, "elements_per_output": 2,
             "start_output": 3, "enable_lmbc": True, "lmbc_beam_angle": 150},
            catalog, sink, state)

        assert result.ok
        lmbc = sink.sent[-8:]
        assert lmbc[0] == "/processing/beam_control_array/1/beam_angle='99'"
        assert "/processing/beam_control_array/1/bypass='false'" in lmbc
        assert "/processing/beam_control_array/1/number_of_elements='12'" in lmbc
        assert "/processing/beam_control_array/1/elements_per_output='2'" in lmbc
        assert "/processing/beam_control_array/1/starting_output_number='3'" in lmbc
        assert "/processing/beam_control_array/1/product_type='1'" in lmbc
        assert "LMBC Enabled" in result.message

    @pytest.mark.asyncio
    async def test_lmbc_skipped_for_m1d(self, catalog, sink, state):
        result = await line_array_design(
            {"primary_speaker": "M1D", "primary_elements": 4, "enable_lmbc": True},
            catalog, sink, state)
        assert result.ok
        assert not any("beam_control_array" in c for c in sink.sent)

    def test_preview_matches_sent(self, catalog):
        request = ArrayRequest(primary_speaker="LYON", primary_elements=3, enable_lmbc=True)
        commands = preview_line_array(request, catalog, 16)
        assert len([c for c in commands if "beam_control_array" in c]) == 8
        assert commands[0] == "/processing/output/1/delay_integration/type=6"

    def test_to_dict(self):
        result = ActionResult(STATUS_REJECTED, "nope", details={"required_outputs": 3})
        assert result.to_dict() == {
            "status": "rejected", "message": "nope", "commands_sent": 0, "required_outputs": 3,
        }


class TestLmbcConfigure:

    @pytest.mark.asyncio
    async def test_standalone(self, sink, state):
        result = await lmbc_configure(
            {"array_index": 3, "product_type": "LEOPARD", "number_of_elements": 16,
             "bypass": True, "control_type": "1"},
            sink, state)

        assert result.ok
        assert result.commands_sent == 8
        assert "/processing/beam_control_array/3/bypass='true'" in sink.sent
        assert "LEOPARD" in result.message
        assert "Steer Up" in result.message
        assert "Bypassed" in result.message

    @pytest.mark.asyncio
    async def test_status_appended(self, sink, state):
        state.apply_line("/status/beam_control_array/1/error_code=0")
        state.apply_line("/status/beam_control_array/1/error_code_label='OK'")
        state.apply_line("/status/beam_control_array/1/error_string='Angle limited'")
        result = await lmbc_configure({}, sink, state)
        assert result.message.endswith("| Status: OK | Angle limited")

    @pytest.mark.asyncio
    async def test_sink_failure(self, failing_sink, state):
        result = await lmbc_configure({}, failing_sink, state)
        assert result.status == STATUS_ERROR
        assert result.commands_sent == 3
