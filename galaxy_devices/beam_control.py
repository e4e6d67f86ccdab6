"""Low-Mid Beam Control (LMBC) parameter resolution

Stateless: a BeamControlRequest becomes a fixed batch of eight set commands.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Mapping

from .speakers import normalize_speaker_key

BEAM_ANGLE_RANGE = (10, 99)
STARTING_ELEMENT_RANGE = (1, 32)
ELEMENTS_PER_OUTPUT_RANGE = (1, 2)
ARRAY_INDEX_RANGE = (1, 4)
STANDALONE_ELEMENT_RANGE = (8, 32)

DEFAULT_BEAM_ANGLE = 15

CONTROL_SPREAD = '0'
CONTROL_STEER_UP = '1'
CONTROL_TYPE_LABELS = {CONTROL_SPREAD: 'Spread', CONTROL_STEER_UP: 'Steer Up'}

# Galaxy beam control product types, keyed by normalized speaker key
PRODUCT_TYPE_CODES = {
    'LEO': '0',  # LEO-M
    'LYON': '1',
    'LEOPARD': '2',
    'MICA': '3',
    'MELODIE': '4',
    'MINA': '5',
    'LINA': '5',
    'MILO': '6',
    'M3D': '7',
    'M2D': '8',
    'PANTHER': '9',
}

PRODUCT_TYPE_LABELS = {
    '0': 'LEO-M',
    '1': 'LYON',
    '2': 'LEOPARD',
    '3': 'MICA',
    '4': 'MELODIE',
    '5': 'MINA',
    '6': 'MILO',
    '7': 'M3D',
    '8': 'M2D',
    '9': 'PANTHER',
}

# Models without low-mid beam control
LMBC_UNSUPPORTED = {'M1D'}


def clamp(value, bounds, default):
    """Clamp to bounds; blank, zero or non-numeric values use the default"""
    try:
        n = float(value)
    except (TypeError, ValueError):
        n = default
    if not math.isfinite(n) or n == 0:
        n = default
    lo, hi = bounds
    n = max(lo, min(hi, n))
    return int(n) if float(n).is_integer() else n


def product_type_code(speaker) -> str:
    """Beam control product type for a speaker model ('0' when unknown)"""
    return PRODUCT_TYPE_CODES.get(normalize_speaker_key(speaker), '0')


def supports_lmbc(speaker) -> bool:
    return normalize_speaker_key(speaker) not in LMBC_UNSUPPORTED


@dataclass(frozen=True)
class BeamControlRequest:
    """Parameters for one beam control array

    Use BeamControlRequest.create() to get clamped values.
    """
    array_index: int = 1
    beam_angle: float = DEFAULT_BEAM_ANGLE
    control_type: str = CONTROL_SPREAD
    elements_per_output: int = 1
    total_elements: int = 12
    product_type: str = '0'
    starting_output: int = 1
    starting_element: int = 1
    bypass: bool = False

    @classmethod
    def create(cls, array_index=1, beam_angle=DEFAULT_BEAM_ANGLE, control_type=CONTROL_SPREAD,
               elements_per_output=1, total_elements=12, product_type='0',
               starting_output=1, starting_element=1, bypass=False) -> 'BeamControlRequest':
        """Build a request, clamping out-of-range values instead of rejecting them"""
        return cls(
            array_index=int(clamp(array_index, ARRAY_INDEX_RANGE, 1)),
            beam_angle=clamp(beam_angle, BEAM_ANGLE_RANGE, DEFAULT_BEAM_ANGLE),
            control_type=CONTROL_STEER_UP if str(control_type) == CONTROL_STEER_UP else CONTROL_SPREAD,
            elements_per_output=int(clamp(elements_per_output, ELEMENTS_PER_OUTPUT_RANGE, 1)),
            total_elements=int(total_elements),
            product_type=str(product_type or '0'),
            starting_output=int(starting_output),
            starting_element=int(clamp(starting_element, STARTING_ELEMENT_RANGE, 1)),
            bypass=bool(bypass),
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any], num_outputs: int) -> 'BeamControlRequest':
        """Standalone LMBC action options (user-chosen model, bypass and counts)"""
        product_type = str(options.get('product_type') or '0')
        if product_type not in PRODUCT_TYPE_LABELS:
            product_type = product_type_code(product_type)
        bypass = options.get('bypass')
        if isinstance(bypass, str):
            bypass = bypass.strip().lower() == 'true'
        return cls.create(
            array_index=options.get('array_index'),
            beam_angle=options.get('beam_angle'),
            control_type=options.get('control_type'),
            elements_per_output=options.get('elements_per_output'),
            total_elements=clamp(options.get('number_of_elements'), STANDALONE_ELEMENT_RANGE, 12),
            product_type=product_type,
            starting_output=clamp(options.get('starting_output'), (1, num_outputs), 1),
            starting_element=options.get('starting_element'),
            bypass=bypass is True,
        )

    @property
    def control_type_label(self) -> str:
        return CONTROL_TYPE_LABELS[self.control_type]

    @property
    def product_label(self) -> str:
        return PRODUCT_TYPE_LABELS.get(self.product_type, 'Unknown')


def build_beam_control_commands(request: BeamControlRequest) -> List[str]:
    """The eight beam control set commands, in canonical order"""
    base = f"/processing/beam_control_array/{request.array_index}"
    bypass = 'true' if request.bypass else 'false'
    return [
        f"{base}/beam_angle='{request.beam_angle}'",
        f"{base}/bypass='{bypass}'",
        f"{base}/control_type='{request.control_type}'",
        f"{base}/elements_per_output='{request.elements_per_output}'",
        f"{base}/number_of_elements='{request.total_elements}'",
        f"{base}/product_type='{request.product_type}'",
        f"{base}/starting_output_number='{request.starting_output}'",
        f"{base}/starting_element='{request.starting_element}'",
    ]
