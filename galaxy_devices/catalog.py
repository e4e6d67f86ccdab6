"""Loudspeaker catalog: phase variants, starting points and mixed-array pairings

The catalog is built once (from the product integration table and an optional
starting-points JSON document) and never mutated afterwards. Planner code takes
it as an explicit argument.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .base import CompatibilityEntry, SpeakerEntry, SpeakerPhase, StartingPoint
from .integration_types import PRODUCT_INTEGRATION_RAW
from .speakers import canonicalize_speaker_key, normalize_speaker_key

logger = logging.getLogger(__name__)

CATEGORY_LINE_ARRAY = 'line-array'
CATEGORY_SUBWOOFER = 'subwoofer'

OFF_KEY = 'OFF'

_TYPE_PREFIX = 'DelayIntegrationType_'
_PHASE_PATTERN = re.compile(r'^(.*)_pc(\d+)$', re.IGNORECASE)
_DIGITS = re.compile(r'(\d+)')

EMPTY_SOURCE = {
    'startingPoints': {},
    'categories': {},
    'compensation': {},
    'combinations': {},
}


def _natural_key(label: str) -> list:
    # 'X 22' sorts before 'X 100', case-insensitive
    return [int(tok) if tok.isdigit() else tok.lower() for tok in _DIGITS.split(label)]


def _format_speaker_label(raw: str) -> str:
    return ' '.join(str(raw or '').replace('_', ' ').split())


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_starting_points_document(raw: Any) -> Dict[str, dict]:
    """Split a starting-points JSON document into its four tables

    Accepts either the full document (with 'startingPoint', 'speakerCategories',
    'mixedArrayCompensation', 'mixedArrayCombinations') or a bare
    speaker -> presets mapping.
    """
    if not isinstance(raw, dict):
        return dict(EMPTY_SOURCE)

    def table(key):
        value = raw.get(key)
        return value if isinstance(value, dict) else {}

    starting = raw.get('startingPoint')
    return {
        'startingPoints': starting if isinstance(starting, dict) else raw,
        'categories': table('speakerCategories'),
        'compensation': table('mixedArrayCompensation'),
        'combinations': table('mixedArrayCombinations'),
    }


def _parse_starting_points(source: Mapping[str, Any]) -> Dict[str, Tuple[StartingPoint, ...]]:
    """Index starting-point presets by compact speaker key"""
    result = {}
    for raw_key, entries in source.items():
        canonical = canonicalize_speaker_key(raw_key)
        if not canonical or not isinstance(entries, list):
            continue

        cleaned = []
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                continue
            title = str(entry.get('title') or '').strip() or f"Starting point {idx + 1}"
            raw_points = entry.get('controlPoints')
            points = tuple(
                str(cp).strip() for cp in raw_points if cp and str(cp).strip()
            ) if isinstance(raw_points, list) else ()
            if not points:
                continue
            # id is the position in the source list, so it survives dropped entries
            cleaned.append(StartingPoint(id=str(idx), title=title, control_points=points))

        if cleaned:
            result[canonical] = tuple(cleaned)
    return result


def _parse_combinations(source: Mapping[str, Any]) -> Dict[str, CompatibilityEntry]:
    """Index mixed-array pairings by normalized primary key"""
    result = {}
    for raw_primary, combo in source.items():
        primary = normalize_speaker_key(raw_primary)
        if not primary or not isinstance(combo, dict):
            continue
        secondary = normalize_speaker_key(combo.get('secondary'))
        if not secondary:
            continue
        primary_delay = combo.get('primaryDelayMs')
        secondary_delay = combo.get('secondaryDelayMs')
        try:
            result[primary] = CompatibilityEntry(
                primary=primary,
                secondary=secondary,
                primary_delay_ms=float(primary_delay) if _is_number(primary_delay) else 0.0,
                secondary_delay_ms=float(secondary_delay) if _is_number(secondary_delay) else 0.0,
            )
        except ValueError as e:
            logger.warning("Skipping mixed-array combination %s: %s", primary, e)
    return result


def _parse_integration_types(raw_types) -> Tuple[Dict[str, SpeakerEntry], Dict[Tuple[str, str], str]]:
    """Build speakers and the (speaker, phase) -> type id index"""
    labels: Dict[str, str] = {}
    phases: Dict[str, List[SpeakerPhase]] = {}
    lookup: Dict[Tuple[str, str], str] = {}

    for entry in raw_types:
        type_id, sep, raw_name = str(entry or '').partition(':')
        type_id = type_id.strip()
        raw_name = raw_name.strip()
        if raw_name.startswith(_TYPE_PREFIX):
            raw_name = raw_name[len(_TYPE_PREFIX):]
        if not sep or not type_id or not raw_name:
            continue

        if raw_name.upper() == OFF_KEY:
            labels.setdefault(OFF_KEY, 'Off')
            phases.setdefault(OFF_KEY, [])
            lookup[(OFF_KEY, '')] = type_id
            continue

        match = _PHASE_PATTERN.match(raw_name)
        if not match:
            continue

        key = normalize_speaker_key(match.group(1))
        if not key:
            continue
        digits = match.group(2)
        phase_id = f"pc{digits}"
        labels.setdefault(key, _format_speaker_label(key) or key)
        speaker_phases = phases.setdefault(key, [])
        if not any(p.id == phase_id for p in speaker_phases):
            speaker_phases.append(SpeakerPhase(
                id=phase_id,
                label=f"PC{digits}",
                type_id=type_id,
                numeric=int(digits),
            ))
        lookup[(key, phase_id)] = type_id

    labels.setdefault(OFF_KEY, 'Off')
    phases.setdefault(OFF_KEY, [])

    speakers = {
        key: SpeakerEntry(
            key=key,
            label=labels[key],
            phases=tuple(sorted(phases[key], key=lambda p: p.numeric)),
        )
        for key in labels
    }
    return speakers, lookup


@dataclass(frozen=True)
class SpeakerCatalog:
    """Immutable lookup tables for loudspeaker models"""
    speakers: Mapping[str, SpeakerEntry] = field(default_factory=lambda: MappingProxyType({}))
    lookup: Mapping[Tuple[str, str], str] = field(default_factory=lambda: MappingProxyType({}))
    starting_point_table: Mapping[str, Tuple[StartingPoint, ...]] = field(
        default_factory=lambda: MappingProxyType({}))
    categories: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    combinations: Mapping[str, CompatibilityEntry] = field(default_factory=lambda: MappingProxyType({}))
    compensation: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, raw_types=None, source: Optional[Mapping[str, Any]] = None) -> 'SpeakerCatalog':
        """Build a catalog

        Args:
            raw_types: Product integration entries (defaults to the built-in table)
            source: Parsed starting-points tables, as returned by
                parse_starting_points_document()
        """
        if raw_types is None:
            raw_types = PRODUCT_INTEGRATION_RAW
        source = source or EMPTY_SOURCE

        speakers, lookup = _parse_integration_types(raw_types)

        categories = {
            canonicalize_speaker_key(k): str(v)
            for k, v in (source.get('categories') or {}).items()
            if canonicalize_speaker_key(k)
        }
        compensation = {
            normalize_speaker_key(k): MappingProxyType(dict(v))
            for k, v in (source.get('compensation') or {}).items()
            if normalize_speaker_key(k) and isinstance(v, dict)
        }

        return cls(
            speakers=MappingProxyType(speakers),
            lookup=MappingProxyType(lookup),
            starting_point_table=MappingProxyType(
                _parse_starting_points(source.get('startingPoints') or {})),
            categories=MappingProxyType(categories),
            combinations=MappingProxyType(_parse_combinations(source.get('combinations') or {})),
            compensation=MappingProxyType(compensation),
        )

    # -- lookups -----------------------------------------------------------

    def speaker(self, key) -> Optional[SpeakerEntry]:
        return self.speakers.get(normalize_speaker_key(key))

    def type_id(self, key, phase_id: str) -> Optional[str]:
        """Exact (speaker, phase) -> delay integration type id"""
        return self.lookup.get((normalize_speaker_key(key), str(phase_id or '')))

    def starting_points(self, key) -> Tuple[StartingPoint, ...]:
        return self.starting_point_table.get(canonicalize_speaker_key(key), ())

    def compatibility(self, primary) -> Optional[CompatibilityEntry]:
        return self.combinations.get(normalize_speaker_key(primary))

    def legacy_compensation(self, secondary) -> Optional[float]:
        """Single-sided delay (ms) keyed by secondary speaker only"""
        data = self.compensation.get(normalize_speaker_key(secondary))
        if not data:
            return None
        delay = data.get('delayMs')
        return float(delay) if _is_number(delay) else None

    def secondary_for(self, primary) -> Optional[str]:
        """The secondary speaker declared compatible with a primary"""
        entry = self.compatibility(primary)
        return entry.secondary if entry else None

    def category(self, key) -> Optional[str]:
        return self.categories.get(canonicalize_speaker_key(key))

    # -- choice lists ------------------------------------------------------

    def sorted_speakers(self) -> List[SpeakerEntry]:
        """All speakers except OFF, in natural label order"""
        entries = [s for s in self.speakers.values() if s.key != OFF_KEY]
        return sorted(entries, key=lambda s: _natural_key(s.label))

    def speakers_in_category(self, category: str) -> List[SpeakerEntry]:
        return [s for s in self.sorted_speakers() if self.category(s.key) == category]

    def line_array_speakers(self) -> List[SpeakerEntry]:
        return self.speakers_in_category(CATEGORY_LINE_ARRAY)

    def subwoofer_speakers(self) -> List[SpeakerEntry]:
        return self.speakers_in_category(CATEGORY_SUBWOOFER)

    def speaker_choices(self, category: Optional[str] = None) -> List[Dict[str, str]]:
        """Dropdown choices; OFF first for the full list, '-- None --' for a category"""
        if category is None:
            return [{'id': OFF_KEY, 'label': 'Off'}] + [
                {'id': s.key, 'label': s.label} for s in self.sorted_speakers()
            ]
        return [{'id': '', 'label': '-- None --'}] + [
            {'id': s.key, 'label': s.label} for s in self.speakers_in_category(category)
        ]


def load_catalog(path: Optional[Union[str, Path]] = None, raw_types=None) -> SpeakerCatalog:
    """Load the catalog, reading starting points from a JSON file if given

    A missing or unreadable file leaves the starting-point tables empty.
    """
    source = EMPTY_SOURCE
    if path:
        try:
            with open(path, encoding='utf-8') as f:
                source = parse_starting_points_document(json.load(f))
        except FileNotFoundError:
            logger.warning("Starting points file not found: %s", path)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load starting points from %s: %s", path, e)

    catalog = SpeakerCatalog.build(raw_types=raw_types, source=source)
    logger.debug(
        "Catalog loaded: %d speakers, %d starting-point sets, %d combinations",
        len(catalog.speakers), len(catalog.starting_point_table), len(catalog.combinations),
    )
    return catalog
