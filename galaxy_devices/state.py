"""Live device state mirrored from Galaxy subscription lines

State is read and written without locking; concurrent actions that touch the
same outputs simply leave whatever was written last.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional


DEFAULT_NUM_OUTPUTS = 16
NUM_LINK_GROUPS = 8
NUM_BEAM_CONTROL_ARRAYS = 4

# error_code values reported for a beam control array
LMBC_ACTIVE = 0
LMBC_BYPASS = 1

_LINE = re.compile(r'^\+?(?P<path>/[^=\s]+)\s*=\s*(?P<value>.*)$')
_OUTPUT_NAME = re.compile(r'^/device/output/(\d+)/name$')
_OUTPUT_LINK_GROUP = re.compile(r'^/device/output/(\d+)/output_link_group$')
_LINK_GROUP_BYPASS = re.compile(r'^/device/output_link_group/(\d+)/bypass$')
_BEAM_STATUS = re.compile(r'^/status/beam_control_array/(\d+)/(error_code|error_code_label|error_string)$')
_OUTPUT_COUNT = '/entity/output_channel_count'


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ('true', '1')


def _to_int(value: str) -> Optional[int]:
    try:
        return int(float(value))
    except ValueError:
        return None


@dataclass
class BeamControlStatus:
    """Last reported status of one beam control array"""
    error_code: Optional[int] = None
    error_code_label: str = ''
    error_string: str = ''


class DeviceState:
    """Key/value mirror of the parts of device state the actions use"""

    def __init__(self, num_outputs: int = DEFAULT_NUM_OUTPUTS):
        self.num_outputs = num_outputs
        self.output_names: Dict[int, str] = {}
        self.output_link_group: Dict[int, int] = {}
        self.link_group_bypass: Dict[int, bool] = {}
        self.beam_control_status: Dict[int, BeamControlStatus] = {}

    # -- writes from actions ----------------------------------------------

    def assign_link_group(self, output: int, group: int) -> None:
        self.output_link_group[output] = group

    def set_link_group_bypass(self, group: int, bypassed: bool) -> None:
        self.link_group_bypass[group] = bypassed

    # -- subscription feed ---------------------------------------------------

    def subscription_paths(self) -> List[str]:
        """Paths to subscribe to (and seed) for this state"""
        paths = [_OUTPUT_COUNT]
        for ch in range(1, self.num_outputs + 1):
            paths.append(f"/device/output/{ch}/name")
            paths.append(f"/device/output/{ch}/output_link_group")
        for group in range(1, NUM_LINK_GROUPS + 1):
            paths.append(f"/device/output_link_group/{group}/bypass")
        for idx in range(1, NUM_BEAM_CONTROL_ARRAYS + 1):
            for leaf in ('error_code', 'error_code_label', 'error_string'):
                paths.append(f"/status/beam_control_array/{idx}/{leaf}")
        return paths

    def apply_line(self, line: str) -> bool:
        """Apply one 'path=value' line from the device

        Returns:
            bool: True if the line updated state
        """
        m = _LINE.match(line.strip())
        if not m:
            return False
        path = m.group('path')
        value = _unquote(m.group('value'))

        if path == _OUTPUT_COUNT:
            count = _to_int(value)
            if count:
                self.num_outputs = count
                return True
            return False

        name = _OUTPUT_NAME.match(path)
        if name:
            self.output_names[int(name.group(1))] = value
            return True

        link = _OUTPUT_LINK_GROUP.match(path)
        if link:
            group = _to_int(value)
            if group is None:
                return False
            self.assign_link_group(int(link.group(1)), group)
            return True

        bypass = _LINK_GROUP_BYPASS.match(path)
        if bypass:
            self.set_link_group_bypass(int(bypass.group(1)), _to_bool(value))
            return True

        beam = _BEAM_STATUS.match(path)
        if beam:
            status = self.beam_control_status.setdefault(int(beam.group(1)), BeamControlStatus())
            leaf = beam.group(2)
            if leaf == 'error_code':
                status.error_code = _to_int(value)
            elif leaf == 'error_code_label':
                status.error_code_label = value
            else:
                status.error_string = value
            return True

        return False

    # -- beam control status -------------------------------------------------

    def lmbc_status(self, array_index: int) -> Optional[BeamControlStatus]:
        return self.beam_control_status.get(array_index)

    def lmbc_status_preview(self, array_index: int = 1) -> str:
        """Human-readable status line shown before an LMBC action runs"""
        status = self.lmbc_status(array_index)
        if status is None or status.error_code is None:
            return f"-- Waiting for status from Galaxy (Array {array_index}) --"
        if status.error_string.strip():
            return status.error_string
        return '-- No error message --'

    def lmbc_active(self, array_index: int) -> bool:
        status = self.lmbc_status(array_index)
        return status is not None and status.error_code == LMBC_ACTIVE

    def lmbc_bypassed(self, array_index: int) -> bool:
        status = self.lmbc_status(array_index)
        return status is not None and status.error_code == LMBC_BYPASS

    # -- variables -----------------------------------------------------------

    def variable_definitions(self) -> List[Dict[str, str]]:
        defs = []
        for ch in range(1, self.num_outputs + 1):
            defs.append({'variableId': f"output_{ch}_name", 'name': f"Output {ch} name"})
            defs.append({'variableId': f"output_{ch}_link_group", 'name': f"Output {ch} link group"})
        for group in range(1, NUM_LINK_GROUPS + 1):
            defs.append({'variableId': f"link_group_{group}_bypass", 'name': f"Link group {group} bypassed"})
        for idx in range(1, NUM_BEAM_CONTROL_ARRAYS + 1):
            defs.append({'variableId': f"lmbc_{idx}_status", 'name': f"Beam control array {idx} status"})
        return defs

    def variable_values(self) -> Dict[str, str]:
        values = {}
        for ch in range(1, self.num_outputs + 1):
            values[f"output_{ch}_name"] = self.output_names.get(ch, '')
            group = self.output_link_group.get(ch, 0)
            values[f"output_{ch}_link_group"] = str(group) if group else 'Unassigned'
        for group in range(1, NUM_LINK_GROUPS + 1):
            values[f"link_group_{group}_bypass"] = str(self.link_group_bypass.get(group, False)).lower()
        for idx in range(1, NUM_BEAM_CONTROL_ARRAYS + 1):
            values[f"lmbc_{idx}_status"] = self.lmbc_status_preview(idx)
        return values

    def output_label(self, output: int) -> str:
        """'3 - Main L' when the output has a name, else '3'"""
        name = self.output_names.get(output, '').strip()
        return f"{output} - {name}" if name else str(output)
