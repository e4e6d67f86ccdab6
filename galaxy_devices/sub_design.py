"""Subwoofer design assist: end-fire, arc array, array end-fire and gradient

Planning is pure. build_sub_plan() turns a SubwooferRequest into per-output
records carrying the integration type, starting-point commands and delay;
build_sub_commands() renders them in the same per-output order the line
array emitter uses.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .base import ArrayValidationError, CapacityExceededError
from .catalog import OFF_KEY, SpeakerCatalog
from .emitter import (
    delay_command,
    integration_type_command,
    link_group_bypass_command,
    link_group_command,
    render_calibration,
)
from .factory_reset import factory_reset_commands
from .planner import (
    MAX_LINK_GROUP,
    SAMPLES_PER_MS,
    SpeakerSettings,
    delay_to_samples,
    option_flag,
    option_number,
    resolve_settings,
)
from .speakers import normalize_speaker_key

logger = logging.getLogger(__name__)

MODE_ENDFIRE = 'endfire'
MODE_ARRAY = 'array'
MODE_ARRAY_ENDFIRE = 'array_endfire'
MODE_GRADIENT = 'gradient'
MODES = (MODE_ENDFIRE, MODE_ARRAY, MODE_ARRAY_ENDFIRE, MODE_GRADIENT)

MODE_LABELS = {
    MODE_ENDFIRE: 'End-Fire',
    MODE_ARRAY: 'Sub Arc',
    MODE_ARRAY_ENDFIRE: 'Array End-Fire',
    MODE_GRADIENT: 'Gradient',
}

METERS_PER_FOOT = 0.3048
FEET_PER_METER = 3.28084

DEPTH_RANGE = (2, 8)
ARC_ANGLE_RANGE = (0, 120)

DEFAULT_FREQUENCY = 80  # Hz
DEFAULT_TEMPERATURE = 20  # degrees C
DEFAULT_NUM_SUBS = 6
DEFAULT_SPACING = 1.0  # metres
DEFAULT_ARC_ANGLE = 60  # degrees

ROW_NAMES = ('Front', 'Second', 'Third', 'Fourth', 'Fifth', 'Sixth', 'Seventh', 'Eighth')

LABEL_FRONT = 'Front'
LABEL_REVERSED = 'Reversed'


def speed_of_sound(temperature_c: float) -> float:
    """Speed of sound in air (m/s) at a temperature in degrees C"""
    return 331.3 + 0.606 * temperature_c


def to_celsius(value: float, unit: str) -> float:
    if str(unit or '').strip().upper() == 'F':
        return (value - 32) * 5 / 9
    return value


def round_ms(value: float) -> float:
    """Round milliseconds to 0.01 ms, halves up"""
    return math.floor(value * 100 + 0.5) / 100


def endfire_spacing_m(frequency_hz: float, c: float) -> float:
    """Quarter-wavelength spacing between end-fire rows"""
    return c / (4 * frequency_hz)


def tap_delay_samples(frequency_hz: float) -> int:
    """Per-tap end-fire delay in device units (quarter period, rounded to 0.01 ms)"""
    return delay_to_samples(round_ms(1000 / (4 * frequency_hz)))


def arc_delays_ms(count: int, spacing_m: float, arc_angle_deg: float, c: float) -> List[float]:
    """Relative delays (ms) that bend a straight row of subs into a virtual arc

    Positions are laid out on an arc of arc_angle_deg with spacing_m between
    neighbours; each delay is the distance to the straight reference line,
    relative to the nearest sub. The result is symmetric about the centre.
    """
    if count < 2 or arc_angle_deg == 0:
        return [0.0] * count

    splay = arc_angle_deg / (count - 1)
    radius = spacing_m / math.radians(splay)
    even = count % 2 == 0
    base_angle = splay / 2 if even else 0.0
    base_offset = spacing_m / 2 if even else 0.0

    raw = []
    for i in range(count):
        steps = count - 1 - i
        angle = math.radians(base_angle + steps * splay)
        x = radius * math.cos(angle) - radius
        y = radius * math.sin(angle)
        reference = base_offset + steps * spacing_m
        raw.append(math.hypot(x, reference - y) / c * 1000)

    nearest = min(raw)
    relative = [v - nearest for v in raw]

    half = math.ceil(count / 2)
    inner = relative[count - half:]
    mirrored = inner if even else inner[:-1]
    return inner + list(reversed(mirrored))


def _finite(value, default: float) -> float:
    # Zero is a valid reading here (0 degrees, straight arc)
    try:
        n = float(value)
    except (TypeError, ValueError):
        return default
    return n if math.isfinite(n) else default


def _clamp(value: float, bounds: Tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


def _outputs(values, num_outputs: int) -> Tuple[int, ...]:
    """Output numbers from a list (or a single value), dropping anything out of range"""
    if values is None or values == '':
        return ()
    if not isinstance(values, (list, tuple)):
        values = [values]
    result = []
    for value in values:
        try:
            n = int(value)
        except (TypeError, ValueError):
            continue
        if 1 <= n <= num_outputs:
            result.append(n)
    return tuple(result)


def _optional_output(value, num_outputs: int) -> Optional[int]:
    found = _outputs(value, num_outputs)
    return found[0] if found else None


@dataclass(frozen=True)
class SubOutput:
    """One device output of a planned subwoofer design"""
    output_number: int
    label: str  # 'T0'..'T7', row name, 'Arc', 'Front' or 'Reversed'
    type_id: Optional[str] = None
    calibration_commands: Tuple[str, ...] = ()
    starting_point_title: str = ''
    delay_samples: Optional[int] = None  # None = delay left untouched
    endfire_ms: float = 0.0
    arc_ms: float = 0.0

    @property
    def delay_ms(self) -> Optional[float]:
        if self.delay_samples is None:
            return None
        return self.delay_samples / SAMPLES_PER_MS


@dataclass(frozen=True)
class SubwooferRequest:
    """Parameters of a subwoofer design invocation

    Output lists are already filtered to the device's range. Only the fields
    of the selected mode are used.
    """
    mode: str = MODE_ENDFIRE
    speaker: str = ''
    starting_point: str = ''
    reversed_starting_point: str = ''  # gradient only
    reset_to_factory: bool = False
    link_group: int = 0
    link_group_enable: bool = True
    frequency_hz: float = DEFAULT_FREQUENCY
    temperature_c: float = DEFAULT_TEMPERATURE
    depth: int = DEPTH_RANGE[0]
    taps: Tuple[Tuple[int, ...], ...] = ()
    num_subs: int = DEFAULT_NUM_SUBS
    start_output: Optional[int] = None
    spacing_m: float = DEFAULT_SPACING
    arc_angle_deg: float = DEFAULT_ARC_ANGLE
    row_starts: Tuple[Optional[int], ...] = ()
    front_outputs: Tuple[int, ...] = ()
    reversed_outputs: Tuple[int, ...] = ()

    @property
    def speed_of_sound(self) -> float:
        return speed_of_sound(self.temperature_c)

    @property
    def spacing_for_endfire_m(self) -> float:
        return endfire_spacing_m(self.frequency_hz, self.speed_of_sound)

    @property
    def tap_samples(self) -> int:
        return tap_delay_samples(self.frequency_hz)

    def validate(self) -> None:
        """Check mode-independent ranges

        Raises:
            ArrayValidationError: If the request cannot be planned
        """
        if self.mode not in MODES:
            raise ArrayValidationError(
                f"Unknown subwoofer mode '{self.mode}'. Available: {', '.join(MODES)}")
        if not 0 <= self.link_group <= MAX_LINK_GROUP:
            raise ArrayValidationError(
                f"Link group must be between 0 and {MAX_LINK_GROUP}, got {self.link_group}")
        if self.frequency_hz <= 0:
            raise ArrayValidationError(f"Target frequency must be positive, got {self.frequency_hz}")
        if self.spacing_m < 0:
            raise ArrayValidationError(f"Sub spacing must not be negative, got {self.spacing_m}")
        if self.mode == MODE_ARRAY and self.start_output is None:
            raise ArrayValidationError("No starting output selected")
        if self.mode == MODE_GRADIENT and not self.speaker:
            raise ArrayValidationError("Please select a loudspeaker for Gradient mode")

    @classmethod
    def from_options(cls, options: Mapping[str, Any], num_outputs: int) -> 'SubwooferRequest':
        """Build a request from raw action/form options

        Temperatures in Fahrenheit (temperature_unit 'F') and spacing in feet
        (units 'ft') are converted; depth and arc angle are clamped.
        """
        speaker = normalize_speaker_key(options.get('speaker'))
        if speaker == OFF_KEY:
            speaker = ''

        spacing = _finite(options.get('spacing'), DEFAULT_SPACING)
        if str(options.get('units') or '').strip().lower() == 'ft':
            spacing *= METERS_PER_FOOT

        temperature = to_celsius(_finite(options.get('temperature'), DEFAULT_TEMPERATURE),
                                 options.get('temperature_unit'))

        taps = tuple(_outputs(t, num_outputs) for t in (options.get('taps') or ()))
        row_starts = tuple(_optional_output(r, num_outputs) for r in (options.get('row_starts') or ()))

        num_subs = int(option_number(options.get('num_subs'), DEFAULT_NUM_SUBS))
        # Without an explicit depth every given tap or row is used
        depth = int(option_number(options.get('depth'), max(len(taps), len(row_starts))))

        return cls(
            mode=str(options.get('mode') or MODE_ENDFIRE).strip().lower(),
            speaker=speaker,
            starting_point=str(options.get('starting_point') or '').strip(),
            reversed_starting_point=str(options.get('reversed_starting_point') or '').strip(),
            reset_to_factory=option_flag(options.get('reset_to_factory')),
            link_group=int(option_number(options.get('link_group'), 0)),
            link_group_enable=option_flag(options.get('link_group_enable', True)),
            frequency_hz=option_number(options.get('frequency'), DEFAULT_FREQUENCY),
            temperature_c=temperature,
            depth=int(_clamp(depth, DEPTH_RANGE)),
            taps=taps,
            num_subs=int(_clamp(num_subs, (1, num_outputs))),
            start_output=_optional_output(options.get('start_output'), num_outputs),
            spacing_m=spacing,
            arc_angle_deg=_clamp(_finite(options.get('arc_angle'), DEFAULT_ARC_ANGLE), ARC_ANGLE_RANGE),
            row_starts=row_starts,
            front_outputs=_outputs(options.get('front_outputs'), num_outputs),
            reversed_outputs=_outputs(options.get('reversed_outputs'), num_outputs),
        )


def _settings(request: SubwooferRequest, starting_point: str, catalog: SpeakerCatalog) -> SpeakerSettings:
    # Subwoofer modes always use the speaker's first phase
    if not request.speaker:
        return SpeakerSettings()
    return resolve_settings(request.speaker, '', starting_point, catalog)


def _check_capacity(start: int, count: int, capacity: int) -> None:
    if start + count - 1 > capacity:
        raise CapacityExceededError(required=count, available=max(0, capacity - start + 1),
                                    start_output=start)


def _with_settings(output: int, label: str, settings: SpeakerSettings, **delay) -> SubOutput:
    return SubOutput(
        output_number=output,
        label=label,
        type_id=settings.type_id,
        calibration_commands=settings.calibration_commands,
        starting_point_title=settings.starting_point_title,
        **delay,
    )


def _plan_endfire(request: SubwooferRequest, settings: SpeakerSettings) -> List[SubOutput]:
    plan = []
    for tap, outputs in enumerate(request.taps[:request.depth]):
        samples = tap * request.tap_samples
        for output in outputs:
            plan.append(_with_settings(output, f"T{tap}", settings, delay_samples=samples,
                                       endfire_ms=samples / SAMPLES_PER_MS))
    return plan


def _plan_array(request: SubwooferRequest, settings: SpeakerSettings, capacity: int) -> List[SubOutput]:
    _check_capacity(request.start_output, request.num_subs, capacity)
    offsets = arc_delays_ms(request.num_subs, request.spacing_m, request.arc_angle_deg,
                            request.speed_of_sound)
    plan = []
    for i, offset in enumerate(offsets):
        ms = round_ms(offset)
        plan.append(_with_settings(request.start_output + i, 'Arc', settings,
                                   delay_samples=delay_to_samples(ms), arc_ms=offset))
    return plan


def _plan_array_endfire(request: SubwooferRequest, settings: SpeakerSettings,
                        capacity: int) -> List[SubOutput]:
    offsets = arc_delays_ms(request.num_subs, request.spacing_m, request.arc_angle_deg,
                            request.speed_of_sound)
    plan = []
    for row, start in enumerate(request.row_starts[:request.depth]):
        if start is None:
            continue
        _check_capacity(start, request.num_subs, capacity)
        endfire_ms = row * request.tap_samples / SAMPLES_PER_MS
        for i, arc_ms in enumerate(offsets):
            combined = round_ms(endfire_ms + arc_ms)
            plan.append(_with_settings(start + i, ROW_NAMES[row], settings,
                                       delay_samples=delay_to_samples(combined),
                                       endfire_ms=endfire_ms, arc_ms=arc_ms))
    return plan


def _plan_gradient(request: SubwooferRequest, catalog: SpeakerCatalog) -> List[SubOutput]:
    front = _settings(request, request.starting_point, catalog)
    reversed_ = _settings(request, request.reversed_starting_point, catalog)
    if not front.type_id:
        raise ArrayValidationError(f"Invalid product integration selection for speaker {request.speaker}")

    overlap = sorted(set(request.front_outputs) & set(request.reversed_outputs))
    if overlap:
        logger.warning(
            "Gradient: outputs %s are selected in both Front and Reversed; "
            "the Reversed settings overwrite the Front settings",
            ', '.join(str(o) for o in overlap),
        )

    plan = [_with_settings(o, LABEL_FRONT, front) for o in request.front_outputs]
    plan.extend(_with_settings(o, LABEL_REVERSED, reversed_) for o in request.reversed_outputs)
    return plan


def build_sub_plan(request: SubwooferRequest, catalog: SpeakerCatalog,
                   device_output_capacity: int) -> List[SubOutput]:
    """Plan a subwoofer design

    Args:
        request: Subwoofer parameters
        catalog: Speaker catalog
        device_output_capacity: Number of outputs on the device

    Returns:
        Planned outputs in send order (gradient: front outputs, then reversed)

    Raises:
        ArrayValidationError: If a selection is missing or nothing is selected
        CapacityExceededError: If an arc row does not fit from its starting output
    """
    request.validate()

    if request.mode == MODE_GRADIENT:
        plan = _plan_gradient(request, catalog)
    else:
        settings = _settings(request, request.starting_point, catalog)
        if request.mode == MODE_ENDFIRE:
            plan = _plan_endfire(request, settings)
        elif request.mode == MODE_ARRAY:
            plan = _plan_array(request, settings, device_output_capacity)
        else:
            plan = _plan_array_endfire(request, settings, device_output_capacity)

    if not plan:
        raise ArrayValidationError(f"No outputs selected for {MODE_LABELS[request.mode]} mode")
    return plan


def sub_output_commands(output: SubOutput, request: SubwooferRequest) -> List[str]:
    """factory reset -> integration type -> calibration -> delay -> link group"""
    n = output.output_number
    commands = []
    if request.reset_to_factory:
        commands.extend(factory_reset_commands(n))
    if output.type_id:
        commands.append(integration_type_command(n, output.type_id))
    commands.extend(render_calibration(output.calibration_commands, n))
    if output.delay_samples is not None:
        commands.append(delay_command(n, output.delay_samples))
    if request.link_group:
        commands.append(link_group_command(n, request.link_group))
    return commands


def build_sub_commands(plan: Sequence[SubOutput], request: SubwooferRequest) -> List[str]:
    commands = []
    for output in plan:
        commands.extend(sub_output_commands(output, request))
    if request.link_group and plan:
        commands.append(link_group_bypass_command(request.link_group, not request.link_group_enable))
    return commands


def describe_sub_output(output: SubOutput, speaker: str = '') -> str:
    """One-line summary of a planned output for the log"""
    if output.delay_samples is None:
        line = f"{output.label} Output {output.output_number}"
        if output.starting_point_title:
            line += f" ({output.starting_point_title})"
        return line

    line = f"{output.label}: Output {output.output_number} = {output.delay_ms:.2f} ms"
    if output.endfire_ms and output.arc_ms:
        line += f" (EF: {output.endfire_ms:.2f} + Arc: {output.arc_ms:.2f})"
    if speaker:
        title = f": {output.starting_point_title}" if output.starting_point_title else ''
        line += f" [{speaker}{title}]"
    return line


def describe_request(request: SubwooferRequest, plan: Sequence[SubOutput]) -> str:
    """Summary line for a planned design"""
    c = request.speed_of_sound
    climate = f"{request.temperature_c:.1f}°C, c≈{c:.1f} m/s"

    if request.mode == MODE_GRADIENT:
        fronts = sum(1 for o in plan if o.label == LABEL_FRONT)
        line = (f"Gradient: {request.speaker} (type {plan[0].type_id}) | "
                f"{fronts} front, {len(plan) - fronts} reversed")
    elif request.mode == MODE_ARRAY:
        last = request.start_output + request.num_subs - 1
        line = (f"Sub Arc: {request.num_subs} subs, Outputs {request.start_output}-{last} | "
                f"spacing {request.spacing_m:.2f} m, {request.arc_angle_deg:g}° arc | {climate}")
    else:
        spacing = request.spacing_for_endfire_m
        per_tap = request.tap_samples / SAMPLES_PER_MS
        line = (f"{MODE_LABELS[request.mode]}: {request.frequency_hz:g} Hz | {climate} | "
                f"spacing {spacing:.3f} m ({spacing * FEET_PER_METER:.2f} ft) | "
                f"{per_tap:.2f} ms per tap | {len(plan)} outputs")

    if request.link_group:
        line += f" | Link Group {request.link_group}"
    return line
