"""Render planned output assignments into Galaxy commands and send them"""

import logging
from typing import Iterable, List, Optional

from .base import CommandSink
from .factory_reset import factory_reset_commands
from .planner import ArrayRequest, OutputAssignment
from .speakers import render_template
from .state import DeviceState

logger = logging.getLogger(__name__)


def integration_type_command(output: int, type_id: str) -> str:
    return f"/processing/output/{output}/delay_integration/type={type_id}"


def delay_command(output: int, samples: int) -> str:
    return f"/processing/output/{output}/delay={samples}"


def link_group_command(output: int, group: int) -> str:
    return f"/device/output/{output}/output_link_group='{group}'"


def link_group_bypass_command(group: int, bypassed: bool) -> str:
    return f"/device/output_link_group/{group}/bypass='{'true' if bypassed else 'false'}'"


def render_calibration(templates: Iterable[str], output: int) -> List[str]:
    """Render control-point templates for one output, dropping empty ones"""
    rendered = []
    for template in templates:
        cmd = render_template(template, output)
        if cmd:
            rendered.append(cmd)
    return rendered


def output_commands(assignment: OutputAssignment, request: ArrayRequest) -> List[str]:
    """Commands for a single output, in device order

    factory reset -> integration type -> calibration -> delay -> link group
    """
    n = assignment.output_number
    commands = []
    if request.reset_to_factory:
        commands.extend(factory_reset_commands(n))
    if assignment.type_id:
        commands.append(integration_type_command(n, assignment.type_id))
    commands.extend(render_calibration(assignment.calibration_commands, n))
    if assignment.delay_ms > 0:
        commands.append(delay_command(n, assignment.delay_samples))
    if request.link_group:
        commands.append(link_group_command(n, request.link_group))
    return commands


def build_commands(assignments: List[OutputAssignment], request: ArrayRequest) -> List[str]:
    """Full command batch for a plan, ordered by output number"""
    commands = []
    for assignment in sorted(assignments, key=lambda a: a.output_number):
        commands.extend(output_commands(assignment, request))
    if request.link_group and assignments:
        # Enabled group = not bypassed
        commands.append(link_group_bypass_command(request.link_group, not request.link_group_enable))
    return commands


def describe_assignment(assignment: OutputAssignment) -> str:
    """One-line summary of an output for the log"""
    count = assignment.element_count
    line = (
        f"Output {assignment.output_number} - {assignment.speaker} "
        f"Elements {assignment.first_element}-{assignment.last_element} "
        f"({count} element{'s' if count > 1 else ''})"
    )
    if assignment.delay_ms > 0:
        line += f" | {assignment.delay_ms:.2f}ms delay"
    if assignment.starting_point_title:
        line += f" | {assignment.starting_point_title}"
    return line


async def emit(assignments: List[OutputAssignment], request: ArrayRequest,
               sink: CommandSink, state: Optional[DeviceState] = None) -> int:
    """Send a planned array to the device as one ordered batch

    Link group assignment and bypass are recorded in state once the batch
    has gone out. A sink failure propagates; commands already sent stay applied.

    Returns:
        int: Number of commands sent
    """
    commands = build_commands(assignments, request)
    logger.debug("Sending %d commands via %s", len(commands), sink.name)
    sent = await sink.send_batch(commands)

    for assignment in assignments:
        logger.info("Line Array Design: %s", describe_assignment(assignment))

    if request.link_group and assignments:
        record_link_group(state, [a.output_number for a in assignments],
                          request.link_group, request.link_group_enable, "Line Array Design")
    return sent


def record_link_group(state: Optional[DeviceState], outputs: Iterable[int], group: int,
                      enabled: bool, action: str) -> None:
    """Mirror a sent link group assignment and bypass into device state"""
    bypassed = not enabled
    if state is not None:
        for output in outputs:
            state.assign_link_group(output, group)
        state.set_link_group_bypass(group, bypassed)
    logger.info("%s: Link Group %d - %s", action, group, 'Disabled (Bypassed)' if bypassed else 'Enabled')
