"""
Tool executor for Galaxy array control
Implements the tool logic on top of galaxy_devices
"""

import asyncio
import logging

from galaxy_devices import (
    ArrayRequest,
    ArrayValidationError,
    DeviceState,
    GalaxyError,
    HandlerRegistry,
    SubwooferRequest,
    line_array_design,
    lmbc_configure,
    load_catalog,
    load_config,
    preview_line_array,
    preview_subwoofer,
    subwoofer_design,
)
from galaxy_devices.beam_control import supports_lmbc
from galaxy_devices.state import LMBC_ACTIVE, LMBC_BYPASS

logger = logging.getLogger(__name__)

# Shared context: one catalog, one state mirror and one device connection
_config = None
_catalog = None
_state = None
_sink = None


def configure(config=None, catalog=None, state=None, sink=None):
    """Replace the shared context. Anything left as None is rebuilt lazily."""
    global _config, _catalog, _state, _sink
    shutdown()
    _config = config
    _catalog = catalog
    _state = state
    _sink = sink


def shutdown():
    """Disconnect the shared sink if it is connected"""
    if _sink is not None and _sink.is_connected:
        _sink.disconnect()


def _get_config():
    global _config
    if _config is None:
        _config = load_config()
    return _config


def _get_catalog():
    """Get or create the singleton speaker catalog."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog(_get_config()['catalog'].get('starting_points'))
    return _catalog


def _get_state():
    global _state
    if _state is None:
        _state = DeviceState(num_outputs=int(_get_config()['device']['num_outputs']))
    return _state


def _get_sink():
    """Get the singleton sink, connecting (and subscribing) on first use."""
    global _sink
    if _sink is None:
        device = _get_config()['device']
        registry = HandlerRegistry(debug=False)
        _sink = registry.create(device['handler'], host=device['host'], port=device['port'])
    if not _sink.is_connected:
        _sink.connect()
        # Only the network handler has a live feed to subscribe to
        if hasattr(_sink, 'subscribe'):
            _sink.subscribe(_get_state().subscription_paths())
    return _sink


async def _refresh_state() -> int:
    """Apply any lines the device has sent since the last call"""
    sink = _get_sink()
    if not hasattr(sink, 'read_lines'):
        return 0
    state = _get_state()
    lines = await asyncio.to_thread(sink.read_lines)
    return sum(1 for line in lines if state.apply_line(line))


def execute_tool(tool_name: str, tool_input: dict) -> dict:
    """
    Execute a tool and return results.

    Args:
        tool_name: Name of the tool to execute
        tool_input: Input parameters for the tool

    Returns:
        dict: Tool execution result
    """
    return asyncio.run(execute_tool_async(tool_name, tool_input))


async def execute_tool_async(tool_name: str, tool_input: dict) -> dict:
    """Async variant of execute_tool, for callers that already run an event loop."""
    tool_input = dict(tool_input or {})

    if tool_name == "list_speakers":
        return _list_speakers(tool_input.get("category"))
    elif tool_name == "line_array_design":
        return await _line_array_design(tool_input)
    elif tool_name == "subwoofer_design":
        return await _subwoofer_design(tool_input)
    elif tool_name == "lmbc_configure":
        return await _lmbc_configure(tool_input)
    elif tool_name == "lmbc_status":
        return await _lmbc_status(tool_input.get("array_index", 1))
    elif tool_name == "device_variables":
        return await _device_variables()

    else:
        return {"status": "error", "message": f"Unknown tool: {tool_name}"}


# ============================================================================
# Catalog tools
# ============================================================================

def _list_speakers(category: str = None) -> dict:
    """List speaker models with their phases and starting points."""
    catalog = _get_catalog()
    entries = catalog.speakers_in_category(category) if category else catalog.sorted_speakers()

    speakers = []
    for entry in entries:
        speakers.append({
            "key": entry.key,
            "label": entry.label,
            "category": catalog.category(entry.key),
            "phases": [{"id": p.id, "label": p.label, "type_id": p.type_id} for p in entry.phases],
            "starting_points": [
                {"id": sp.id, "title": sp.title, "commands": len(sp.control_points)}
                for sp in catalog.starting_points(entry.key)
            ],
            "compatible_secondary": catalog.secondary_for(entry.key),
            "lmbc": supports_lmbc(entry.key),
        })

    return {
        "status": "success",
        "message": f"Found {len(speakers)} speaker model(s)",
        "speakers": speakers
    }


# ============================================================================
# Device tools
# ============================================================================

async def _line_array_design(options: dict) -> dict:
    """Plan a line array and send it (or return the preview)."""
    preview = options.pop("preview", False) is True
    catalog = _get_catalog()

    if preview:
        request = ArrayRequest.from_options(options, catalog)
        try:
            commands = preview_line_array(request, catalog, _get_state().num_outputs)
        except ArrayValidationError as e:
            return {"status": "rejected", "message": str(e), "commands": []}
        return {
            "status": "success",
            "message": f"Preview: {len(commands)} commands",
            "commands": commands
        }

    try:
        sink = _get_sink()
    except (GalaxyError, ValueError) as e:
        return {"status": "error", "message": f"Error connecting to device: {str(e)}"}

    result = await line_array_design(options, catalog, sink, _get_state())
    return result.to_dict()


async def _subwoofer_design(options: dict) -> dict:
    """Plan a subwoofer design and send it (or return the preview)."""
    preview = options.pop("preview", False) is True
    catalog = _get_catalog()

    if preview:
        num_outputs = _get_state().num_outputs
        request = SubwooferRequest.from_options(options, num_outputs)
        try:
            commands = preview_subwoofer(request, catalog, num_outputs)
        except ArrayValidationError as e:
            return {"status": "rejected", "message": str(e), "commands": []}
        return {
            "status": "success",
            "message": f"Preview: {len(commands)} commands",
            "commands": commands
        }

    try:
        sink = _get_sink()
    except (GalaxyError, ValueError) as e:
        return {"status": "error", "message": f"Error connecting to device: {str(e)}"}

    result = await subwoofer_design(options, catalog, sink, _get_state())
    return result.to_dict()


async def _lmbc_configure(options: dict) -> dict:
    """Configure one beam control array."""
    try:
        sink = _get_sink()
    except (GalaxyError, ValueError) as e:
        return {"status": "error", "message": f"Error connecting to device: {str(e)}"}

    result = await lmbc_configure(options, sink, _get_state())
    return result.to_dict()


async def _lmbc_status(array_index: int = 1) -> dict:
    """Report the mirrored status of one beam control array."""
    try:
        await _refresh_state()
    except (GalaxyError, ValueError) as e:
        return {"status": "error", "message": f"Error reading device status: {str(e)}"}

    state = _get_state()
    array_index = int(array_index or 1)
    status = state.lmbc_status(array_index)
    code = status.error_code if status else None
    return {
        "status": "success",
        "message": state.lmbc_status_preview(array_index),
        "array_index": array_index,
        "error_code": code,
        "error_code_label": status.error_code_label if status else "",
        "active": code == LMBC_ACTIVE,
        "bypassed": code == LMBC_BYPASS,
    }


async def _device_variables() -> dict:
    """Return all mirrored device variables."""
    try:
        await _refresh_state()
    except (GalaxyError, ValueError) as e:
        return {"status": "error", "message": f"Error reading device status: {str(e)}"}

    values = _get_state().variable_values()
    return {
        "status": "success",
        "message": f"{len(values)} variables",
        "variables": values
    }
