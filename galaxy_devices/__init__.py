"""Galaxy Array Control Layer

Plans line arrays (and mixed arrays) and subwoofer designs for a Galaxy
loudspeaker processor and sends the resulting command batches through a
handler-based command sink.
"""

from .base import (
    CommandSink,
    SpeakerPhase,
    SpeakerEntry,
    StartingPoint,
    CompatibilityEntry,
    GalaxyError,
    DeviceNotConnectedError,
    DeviceCommunicationError,
    ArrayValidationError,
    CapacityExceededError,
)
from .catalog import SpeakerCatalog, load_catalog
from .planner import ArrayRequest, OutputAssignment, build_plan, resolve_delay, resolve_settings
from .beam_control import BeamControlRequest, build_beam_control_commands
from .state import DeviceState
from .sub_design import SubwooferRequest, build_sub_plan
from .actions import (
    ActionResult,
    line_array_design,
    lmbc_configure,
    preview_line_array,
    preview_subwoofer,
    subwoofer_design,
)
from .config import load_config
from .registry import HandlerRegistry

__all__ = [
    'CommandSink',
    'HandlerRegistry',
    'SpeakerPhase',
    'SpeakerEntry',
    'StartingPoint',
    'CompatibilityEntry',
    'SpeakerCatalog',
    'load_catalog',
    'ArrayRequest',
    'OutputAssignment',
    'build_plan',
    'resolve_delay',
    'resolve_settings',
    'BeamControlRequest',
    'build_beam_control_commands',
    'DeviceState',
    'ActionResult',
    'line_array_design',
    'lmbc_configure',
    'preview_line_array',
    'SubwooferRequest',
    'build_sub_plan',
    'subwoofer_design',
    'preview_subwoofer',
    'load_config',
    'GalaxyError',
    'DeviceNotConnectedError',
    'DeviceCommunicationError',
    'ArrayValidationError',
    'CapacityExceededError',
]
