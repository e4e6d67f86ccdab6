"""Operator actions: line array design, subwoofer design and standalone LMBC configuration

Actions never raise. Guard failures are logged as warnings and reported as
'rejected'; sink failures are logged as errors and reported as 'error'
with the number of commands that went out before the failure.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .base import ArrayValidationError, CapacityExceededError, CommandSink
from .beam_control import (
    BeamControlRequest,
    build_beam_control_commands,
    product_type_code,
    supports_lmbc,
)
from .catalog import SpeakerCatalog
from .emitter import build_commands, emit, record_link_group
from .planner import ArrayRequest, OutputAssignment, build_plan
from .state import DEFAULT_NUM_OUTPUTS, DeviceState
from .sub_design import (
    MODE_ARRAY_ENDFIRE,
    MODE_ENDFIRE,
    MODE_LABELS,
    SubwooferRequest,
    build_sub_commands,
    build_sub_plan,
    describe_request,
    describe_sub_output,
)

logger = logging.getLogger(__name__)

STATUS_SUCCESS = 'success'
STATUS_REJECTED = 'rejected'
STATUS_ERROR = 'error'


@dataclass
class ActionResult:
    status: str
    message: str
    commands_sent: int = 0
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status,
            'message': self.message,
            'commands_sent': self.commands_sent,
            **self.details,
        }


def _capacity(num_outputs: Optional[int], state: Optional[DeviceState]) -> int:
    if num_outputs:
        return num_outputs
    if state is not None:
        return state.num_outputs
    return DEFAULT_NUM_OUTPUTS


def lmbc_request_for_array(request: ArrayRequest) -> BeamControlRequest:
    """Beam control settings shared with a line array plan (always active)"""
    return BeamControlRequest.create(
        array_index=request.lmbc_array_index,
        beam_angle=request.lmbc_beam_angle,
        control_type=request.lmbc_control_type,
        elements_per_output=request.elements_per_output,
        total_elements=request.total_elements,
        product_type=product_type_code(request.primary_speaker),
        starting_output=request.start_output,
        starting_element=request.lmbc_starting_element,
        bypass=False,
    )


def plan_line_array(request: ArrayRequest, catalog: SpeakerCatalog,
                    capacity: int) -> List[OutputAssignment]:
    """Validate and plan; raises ArrayValidationError on guard failures"""
    return build_plan(request, catalog, capacity)


def preview_line_array(request: ArrayRequest, catalog: SpeakerCatalog, capacity: int) -> List[str]:
    """Every command a design would send, without sending anything"""
    assignments = plan_line_array(request, catalog, capacity)
    commands = build_commands(assignments, request)
    if request.enable_lmbc and supports_lmbc(request.primary_speaker):
        commands.extend(build_beam_control_commands(lmbc_request_for_array(request)))
    return commands


def _summary(request: ArrayRequest, num_outputs: int) -> str:
    line = (
        f"{request.primary_speaker} | {request.total_elements} elements, "
        f"{request.elements_per_output} per output | Starting at Output {request.start_output} "
        f"({num_outputs} outputs)"
    )
    if request.is_mixed:
        line += f" | Mixed array with {request.secondary_speaker}"
    if request.link_group:
        line += f" | Link Group {request.link_group}"
    if request.enable_lmbc and supports_lmbc(request.primary_speaker):
        line += " | LMBC Enabled"
    return line


async def design_line_array(request: ArrayRequest, catalog: SpeakerCatalog, sink: CommandSink,
                            state: Optional[DeviceState] = None,
                            num_outputs: Optional[int] = None) -> ActionResult:
    """Plan a line array and send it to the device"""
    capacity = _capacity(num_outputs, state)
    try:
        assignments = plan_line_array(request, catalog, capacity)
    except CapacityExceededError as e:
        logger.warning("Line Array Design: %s", e)
        return ActionResult(STATUS_REJECTED, str(e), details={
            'required_outputs': e.required,
            'available_outputs': e.available,
        })
    except ArrayValidationError as e:
        logger.warning("Line Array Design: %s", e)
        return ActionResult(STATUS_REJECTED, str(e))

    sent = 0
    try:
        sent = await emit(assignments, request, sink, state)

        if request.enable_lmbc and supports_lmbc(request.primary_speaker):
            lmbc = lmbc_request_for_array(request)
            sent += await sink.send_batch(build_beam_control_commands(lmbc))
            logger.info(
                "Line Array Design: LMBC Array %d configured - Active, %s, %s° beam angle, "
                "%d elements starting at element %d",
                lmbc.array_index, lmbc.control_type_label, lmbc.beam_angle,
                lmbc.total_elements, lmbc.starting_element,
            )
    except Exception as e:
        sent += getattr(e, 'commands_sent', 0)
        logger.error("Line Array Design failed after %d commands: %s", sent, e)
        return ActionResult(STATUS_ERROR, f"Line Array Design failed: {e}", commands_sent=sent)

    summary = _summary(request, len(assignments))
    logger.info("Line Array Design: %s", summary)
    return ActionResult(STATUS_SUCCESS, summary, commands_sent=sent, details={
        'outputs': [
            {
                'output': a.output_number,
                'role': a.role,
                'speaker': a.speaker,
                'first_element': a.first_element,
                'last_element': a.last_element,
                'type_id': a.type_id,
                'delay_ms': a.delay_ms,
                'starting_point': a.starting_point_title,
            }
            for a in assignments
        ],
    })


async def line_array_design(options: Mapping[str, Any], catalog: SpeakerCatalog, sink: CommandSink,
                            state: Optional[DeviceState] = None,
                            num_outputs: Optional[int] = None) -> ActionResult:
    """Line array design from raw action options"""
    request = ArrayRequest.from_options(options, catalog)
    return await design_line_array(request, catalog, sink, state, num_outputs)


async def lmbc_configure(options: Mapping[str, Any], sink: CommandSink,
                         state: Optional[DeviceState] = None,
                         num_outputs: Optional[int] = None) -> ActionResult:
    """Standalone LMBC configuration with a user-chosen bypass state"""
    request = BeamControlRequest.from_options(options, _capacity(num_outputs, state))
    try:
        sent = await sink.send_batch(build_beam_control_commands(request))
    except Exception as e:
        sent = getattr(e, 'commands_sent', 0)
        logger.error("LMBC configuration failed after %d commands: %s", sent, e)
        return ActionResult(STATUS_ERROR, f"LMBC configuration failed: {e}", commands_sent=sent)

    message = (
        f"LMBC: {request.product_label} | {request.total_elements} elements "
        f"({request.elements_per_output}/output) | {request.beam_angle}° {request.control_type_label} "
        f"| Output {request.starting_output} | {'Bypassed' if request.bypass else 'Active'}"
    )
    status = state.lmbc_status(request.array_index) if state is not None else None
    if status is not None:
        if status.error_code_label:
            message += f" | Status: {status.error_code_label}"
        if status.error_string.strip():
            message += f" | {status.error_string}"

    logger.info(message)
    return ActionResult(STATUS_SUCCESS, message, commands_sent=sent, details={
        'array_index': request.array_index,
    })


def preview_subwoofer(request: SubwooferRequest, catalog: SpeakerCatalog, capacity: int) -> List[str]:
    """Every command a subwoofer design would send, without sending anything"""
    return build_sub_commands(build_sub_plan(request, catalog, capacity), request)


async def subwoofer_design(options: Mapping[str, Any], catalog: SpeakerCatalog, sink: CommandSink,
                           state: Optional[DeviceState] = None,
                           num_outputs: Optional[int] = None) -> ActionResult:
    """Plan an end-fire, arc, array end-fire or gradient subwoofer design and send it"""
    capacity = _capacity(num_outputs, state)
    request = SubwooferRequest.from_options(options, capacity)
    action = MODE_LABELS.get(request.mode, 'Sub Design')
    try:
        plan = build_sub_plan(request, catalog, capacity)
    except CapacityExceededError as e:
        logger.warning("%s: %s", action, e)
        return ActionResult(STATUS_REJECTED, str(e), details={
            'required_outputs': e.required,
            'available_outputs': e.available,
        })
    except ArrayValidationError as e:
        logger.warning("%s: %s", action, e)
        return ActionResult(STATUS_REJECTED, str(e))

    commands = build_sub_commands(plan, request)
    logger.debug("Sending %d commands via %s", len(commands), sink.name)
    try:
        sent = await sink.send_batch(commands)
    except Exception as e:
        sent = getattr(e, 'commands_sent', 0)
        logger.error("%s failed after %d commands: %s", action, sent, e)
        return ActionResult(STATUS_ERROR, f"{action} failed: {e}", commands_sent=sent)

    for output in plan:
        logger.info("%s: %s", action, describe_sub_output(output, request.speaker))
    if request.link_group:
        record_link_group(state, [o.output_number for o in plan],
                          request.link_group, request.link_group_enable, action)

    summary = describe_request(request, plan)
    logger.info(summary)
    details = {
        'mode': request.mode,
        'speed_of_sound_mps': round(request.speed_of_sound, 2),
        'outputs': [
            {
                'output': o.output_number,
                'position': o.label,
                'type_id': o.type_id,
                'delay_ms': o.delay_ms,
                'starting_point': o.starting_point_title,
            }
            for o in plan
        ],
    }
    if request.mode in (MODE_ENDFIRE, MODE_ARRAY_ENDFIRE):
        details['spacing_m'] = round(request.spacing_for_endfire_m, 3)
    return ActionResult(STATUS_SUCCESS, summary, commands_sent=sent, details=details)
