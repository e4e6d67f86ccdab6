"""Line array planning: output allocation, speaker settings and delay compensation

Everything here is pure. build_plan() turns an ArrayRequest into an ordered
list of OutputAssignment records; the emitter renders those into commands.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from .base import ArrayValidationError, CapacityExceededError, CompatibilityEntry
from .catalog import SpeakerCatalog
from .speakers import normalize_speaker_key

ROLE_PRIMARY = 'primary'
ROLE_SECONDARY = 'secondary'

SAMPLES_PER_MS = 96  # device delay units (96 kHz clock)
MAX_LINK_GROUP = 8

DEFAULT_PRIMARY_ELEMENTS = 12
DEFAULT_SECONDARY_ELEMENTS = 6


def delay_to_samples(delay_ms: float) -> int:
    """Convert milliseconds to device delay units, rounding halves up"""
    return int(math.floor(delay_ms * SAMPLES_PER_MS + 0.5))


def option_number(value, default):
    # Blank, zero or non-numeric options fall back to the default
    try:
        n = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(n) or n == 0:
        return default
    return int(n) if n.is_integer() else n


def option_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return value is True


@dataclass(frozen=True)
class SpeakerSettings:
    """Resolved per-role settings"""
    type_id: Optional[str] = None
    phase_id: str = ''
    calibration_commands: Tuple[str, ...] = ()
    starting_point_title: str = ''


@dataclass(frozen=True)
class DelayCompensation:
    primary_delay_ms: float = 0.0
    secondary_delay_ms: float = 0.0


@dataclass(frozen=True)
class OutputAssignment:
    """One device output of a planned array"""
    output_number: int
    role: str
    speaker: str
    first_element: int
    last_element: int
    type_id: Optional[str] = None
    calibration_commands: Tuple[str, ...] = ()
    delay_ms: float = 0.0
    starting_point_title: str = ''

    @property
    def element_count(self) -> int:
        return self.last_element - self.first_element + 1

    @property
    def delay_samples(self) -> int:
        return delay_to_samples(self.delay_ms) if self.delay_ms > 0 else 0


@dataclass(frozen=True)
class ArrayRequest:
    """Parameters of a line array design invocation"""
    primary_speaker: str
    primary_elements: int = DEFAULT_PRIMARY_ELEMENTS
    elements_per_output: int = 1
    start_output: int = 1
    mixed_array: bool = False
    secondary_speaker: str = ''
    secondary_elements: int = DEFAULT_SECONDARY_ELEMENTS
    primary_phase: str = ''
    secondary_phase: str = ''
    primary_starting_point: str = ''
    secondary_starting_point: str = ''
    link_group: int = 0  # 0 = unassigned
    link_group_enable: bool = True
    reset_to_factory: bool = False
    enable_lmbc: bool = False
    lmbc_array_index: int = 1
    lmbc_beam_angle: float = 15
    lmbc_control_type: str = '0'
    lmbc_starting_element: int = 1

    @property
    def is_mixed(self) -> bool:
        return self.mixed_array and bool(self.secondary_speaker)

    @property
    def total_elements(self) -> int:
        return self.primary_elements + (self.secondary_elements if self.is_mixed else 0)

    @property
    def num_outputs(self) -> int:
        return math.ceil(self.total_elements / self.elements_per_output)

    @property
    def primary_outputs(self) -> int:
        return math.ceil(self.primary_elements / self.elements_per_output)

    def validate(self) -> None:
        """Check required selections and ranges

        Raises:
            ArrayValidationError: If the request cannot be planned
        """
        if not self.primary_speaker:
            raise ArrayValidationError("No primary speaker selected")
        if self.primary_elements < 1:
            raise ArrayValidationError(
                f"Primary element count must be at least 1, got {self.primary_elements}")
        if self.elements_per_output not in (1, 2):
            raise ArrayValidationError(
                f"Elements per output must be 1 or 2, got {self.elements_per_output}")
        if self.start_output < 1:
            raise ArrayValidationError(f"Starting output must be at least 1, got {self.start_output}")
        if self.is_mixed and self.secondary_elements < 1:
            raise ArrayValidationError(
                f"Secondary element count must be at least 1, got {self.secondary_elements}")
        if not 0 <= self.link_group <= MAX_LINK_GROUP:
            raise ArrayValidationError(
                f"Link group must be between 0 and {MAX_LINK_GROUP}, got {self.link_group}")

    @classmethod
    def from_options(cls, options: Mapping[str, Any],
                     catalog: Optional[SpeakerCatalog] = None) -> 'ArrayRequest':
        """Build a request from raw action/form options

        With a catalog, the secondary is limited to the model declared
        compatible with the primary or the primary itself; anything else
        (including no choice) becomes the compatible model. A primary with no
        compatible model never forms a mixed array.
        """
        primary = normalize_speaker_key(options.get('primary_speaker'))
        mixed = option_flag(options.get('mixed_array'))

        secondary = normalize_speaker_key(options.get('secondary_speaker'))
        if catalog is not None:
            compatible = catalog.secondary_for(primary) if primary else None
            if not compatible:
                secondary = ''
            elif secondary not in (compatible, primary):
                secondary = compatible

        return cls(
            primary_speaker=primary,
            primary_elements=int(option_number(options.get('primary_elements'), DEFAULT_PRIMARY_ELEMENTS)),
            elements_per_output=int(option_number(options.get('elements_per_output'), 1)),
            start_output=int(option_number(options.get('start_output'), 1)),
            mixed_array=mixed,
            secondary_speaker=secondary if mixed else '',
            secondary_elements=int(option_number(options.get('secondary_elements'), DEFAULT_SECONDARY_ELEMENTS)),
            primary_phase=str(options.get('primary_phase') or '').strip(),
            secondary_phase=str(options.get('secondary_phase') or '').strip(),
            primary_starting_point=str(options.get('primary_starting_point') or '').strip(),
            secondary_starting_point=str(options.get('secondary_starting_point') or '').strip(),
            link_group=int(option_number(options.get('link_group'), 0)),
            link_group_enable=option_flag(options.get('link_group_enable', True)),
            reset_to_factory=option_flag(options.get('reset_to_factory')),
            enable_lmbc=option_flag(options.get('enable_lmbc')),
            lmbc_array_index=int(option_number(options.get('lmbc_array_index'), 1)),
            lmbc_beam_angle=option_number(options.get('lmbc_beam_angle'), 15),
            lmbc_control_type=str(options.get('lmbc_control_type') or '0'),
            lmbc_starting_element=int(option_number(options.get('lmbc_starting_element'), 1)),
        )


def resolve_settings(speaker_key: str, phase_selection: str, starting_point_selection: str,
                     catalog: SpeakerCatalog) -> SpeakerSettings:
    """Resolve integration type and starting-point commands for one speaker

    Unknown phases fall back to the speaker's first phase; an unknown or empty
    starting point simply yields no calibration commands.
    """
    entry = catalog.speaker(speaker_key)
    default_phase = entry.default_phase if entry else None

    phase_id = str(phase_selection or '').strip()
    if not phase_id and default_phase:
        phase_id = default_phase.id

    type_id = None
    if phase_id:
        type_id = catalog.type_id(speaker_key, phase_id)
        if not type_id and entry:
            exact = next((p for p in entry.phases if p.id == phase_id), None)
            if exact:
                type_id = exact.type_id

    if not type_id and default_phase:
        phase_id = default_phase.id
        type_id = default_phase.type_id

    commands: Tuple[str, ...] = ()
    title = ''
    selection = str(starting_point_selection or '').strip()
    if selection:
        match = next((sp for sp in catalog.starting_points(speaker_key) if sp.id == selection), None)
        if match and match.control_points:
            commands = match.control_points
            title = match.title

    return SpeakerSettings(
        type_id=type_id,
        phase_id=phase_id if type_id else '',
        calibration_commands=commands,
        starting_point_title=title,
    )


def resolve_delay(primary_key: str, secondary_key: str,
                  compatibility_table: Mapping[str, CompatibilityEntry],
                  legacy_table: Mapping[str, Mapping[str, Any]]) -> DelayCompensation:
    """Delay offsets for a primary/secondary pair

    A matching compatibility entry wins; otherwise the legacy table keyed by the
    secondary alone sets a primary-side delay. Unknown pairs get no delay.
    """
    primary = normalize_speaker_key(primary_key)
    secondary = normalize_speaker_key(secondary_key)

    combo = compatibility_table.get(primary)
    if combo and combo.secondary == secondary:
        return DelayCompensation(combo.primary_delay_ms, combo.secondary_delay_ms)

    legacy = legacy_table.get(secondary)
    if legacy:
        delay = legacy.get('delayMs')
        if isinstance(delay, (int, float)) and not isinstance(delay, bool):
            return DelayCompensation(float(delay), 0.0)

    return DelayCompensation()


def _element_range(index: int, per_output: int, count: int) -> Tuple[int, int]:
    return index * per_output + 1, min((index + 1) * per_output, count)


def build_plan(request: ArrayRequest, catalog: SpeakerCatalog,
               device_output_capacity: int) -> List[OutputAssignment]:
    """Allocate array elements to device outputs

    Args:
        request: Array parameters
        catalog: Speaker catalog
        device_output_capacity: Number of outputs on the device

    Returns:
        Assignments ordered by output number

    Raises:
        ArrayValidationError: If a required selection is missing
        CapacityExceededError: If the array does not fit from start_output
    """
    request.validate()

    num_outputs = request.num_outputs
    if request.start_output + num_outputs - 1 > device_output_capacity:
        raise CapacityExceededError(
            required=num_outputs,
            available=max(0, device_output_capacity - request.start_output + 1),
            start_output=request.start_output,
        )

    delays = DelayCompensation()
    if request.is_mixed:
        delays = resolve_delay(request.primary_speaker, request.secondary_speaker,
                               catalog.combinations, catalog.compensation)

    primary_settings = resolve_settings(
        request.primary_speaker, request.primary_phase, request.primary_starting_point, catalog)
    secondary_settings = None
    if request.is_mixed:
        secondary_settings = resolve_settings(
            request.secondary_speaker, request.secondary_phase,
            request.secondary_starting_point, catalog)

    primary_outputs = request.primary_outputs
    per_output = request.elements_per_output
    assignments = []
    for i in range(num_outputs):
        output_number = request.start_output + i
        if output_number > device_output_capacity:
            break

        if i < primary_outputs:
            role, speaker, settings = ROLE_PRIMARY, request.primary_speaker, primary_settings
            first, last = _element_range(i, per_output, request.primary_elements)
            delay_ms = delays.primary_delay_ms
        else:
            role, speaker, settings = ROLE_SECONDARY, request.secondary_speaker, secondary_settings
            first, last = _element_range(i - primary_outputs, per_output, request.secondary_elements)
            delay_ms = delays.secondary_delay_ms

        assignments.append(OutputAssignment(
            output_number=output_number,
            role=role,
            speaker=speaker,
            first_element=first,
            last_element=last,
            type_id=settings.type_id,
            calibration_commands=settings.calibration_commands,
            delay_ms=delay_ms,
            starting_point_title=settings.starting_point_title,
        ))

    return assignments
