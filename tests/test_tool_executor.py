"""Tests for the tool layer shared by the MCP server and the form."""

import pytest

from galaxy_devices.config import DEFAULTS
from tools import TOOLS, execute_tool, execute_tool_async
from tools import tool_executor


@pytest.fixture
def context(catalog, sink, state):
    config = {section: dict(values) for section, values in DEFAULTS.items()}
    tool_executor.configure(config=config, catalog=catalog, state=state, sink=sink)
    yield sink
    tool_executor.configure()


def test_every_tool_is_dispatched(context):
    for tool in TOOLS:
        result = execute_tool(tool["name"], {})
        assert result["status"] in ("success", "rejected"), tool["name"]


def test_unknown_tool(context):
    result = execute_tool("set_gain", {})
    assert result == {"status": "error", "message": "Unknown tool: set_gain"}


def test_list_speakers(context):
    result = execute_tool("list_speakers", {"category": "line-array"})
    speakers = {s["key"]: s for s in result["speakers"]}
    assert set(speakers) == {"LEO", "LINA", "LYON", "M1D"}
    assert speakers["LINA"]["compatible_secondary"] == "LEO"
    assert speakers["LINA"]["starting_points"][0] == {"id": "0", "title": "LINA Flown", "commands": 2}
    assert speakers["M1D"]["lmbc"] is False


def test_line_array_design_sends(context):
    result = execute_tool("line_array_design", {"primary_speaker": "LEO", "primary_elements": 2})
    assert result["status"] == "success"
    assert result["commands_sent"] == len(context.sent) == 2
    assert [o["output"] for o in result["outputs"]] == [1, 2]


def test_line_array_design_preview_sends_nothing(context):
    result = execute_tool("line_array_design",
                          {"primary_speaker": "LEO", "primary_elements": 2, "preview": True})
    assert result["status"] == "success"
    assert result["commands"] == [
        "/processing/output/1/delay_integration/type=3",
        "/processing/output/2/delay_integration/type=3",
    ]
    assert context.sent == []


def test_line_array_design_rejected(context):
    result = execute_tool("line_array_design",
                          {"primary_speaker": "LEO", "primary_elements": 12, "start_output": 10})
    assert result["status"] == "rejected"
    assert result["available_outputs"] == 7


@pytest.mark.asyncio
async def test_lmbc_configure_and_status(context, state):
    result = await execute_tool_async("lmbc_configure", {"array_index": 2, "bypass": True})
    assert result["status"] == "success"
    assert result["array_index"] == 2

    state.apply_line("/status/beam_control_array/2/error_code=1")
    status = await execute_tool_async("lmbc_status", {"array_index": 2})
    assert status["bypassed"] is True
    assert status["active"] is False
    assert status["message"] == "-- No error message --"


@pytest.mark.asyncio
async def test_device_variables(context, state):
    state.apply_line("/device/output/1/name='Main L'")
    result = await execute_tool_async("device_variables", {})
    assert result["variables"]["output_1_name"] == "Main L"


def test_connection_failure_is_error_dict(catalog, state):
    config = {section: dict(values) for section, values in DEFAULTS.items()}
    config["device"]["handler"] = "no-such-handler"
    tool_executor.configure(config=config, catalog=catalog, state=state)
    try:
        result = execute_tool("line_array_design", {"primary_speaker": "LEO"})
    finally:
        tool_executor.configure()
    assert result["status"] == "error"
    assert "Unknown handler" in result["message"]


def test_subwoofer_design_sends(context, state):
    result = execute_tool("subwoofer_design",
                          {"mode": "endfire", "taps": [[1], [2]], "link_group": 5})
    assert result["status"] == "success"
    assert result["commands_sent"] == len(context.sent) == 5
    assert [o["position"] for o in result["outputs"]] == ["T0", "T1"]
    assert state.output_link_group == {1: 5, 2: 5}


def test_subwoofer_design_preview_sends_nothing(context):
    result = execute_tool("subwoofer_design",
                          {"mode": "array", "num_subs": 3, "start_output": 1, "preview": True})
    assert result["commands"] == [
        "/processing/output/1/delay=73",
        "/processing/output/2/delay=0",
        "/processing/output/3/delay=73",
    ]
    assert context.sent == []
