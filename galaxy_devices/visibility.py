"""Declarative visibility rules for the line array form

Each option id maps to a small expression over named fields. evaluate() is a
fixed interpreter; nothing is generated at runtime.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple, Union

from .beam_control import LMBC_UNSUPPORTED
from .catalog import SpeakerCatalog
from .speakers import normalize_speaker_key


@dataclass(frozen=True)
class Field:
    name: str


@dataclass(frozen=True)
class Const:
    value: Any


@dataclass(frozen=True)
class Truthy:
    operand: 'Rule'


@dataclass(frozen=True)
class Equals:
    left: 'Rule'
    right: 'Rule'


@dataclass(frozen=True)
class NotEquals:
    left: 'Rule'
    right: 'Rule'


@dataclass(frozen=True)
class In:
    operand: 'Rule'
    values: frozenset


@dataclass(frozen=True)
class Not:
    operand: 'Rule'


@dataclass(frozen=True)
class And:
    operands: Tuple['Rule', ...]


@dataclass(frozen=True)
class Or:
    operands: Tuple['Rule', ...]


Rule = Union[Field, Const, Truthy, Equals, NotEquals, In, Not, And, Or]


def all_of(*rules: Rule) -> And:
    return And(tuple(rules))


def any_of(*rules: Rule) -> Or:
    return Or(tuple(rules))


def evaluate(rule: Rule, env: Mapping[str, Any]) -> Any:
    """Evaluate a rule against an environment of field values"""
    if isinstance(rule, Field):
        return env.get(rule.name)
    if isinstance(rule, Const):
        return rule.value
    if isinstance(rule, Truthy):
        return bool(evaluate(rule.operand, env))
    if isinstance(rule, Equals):
        return evaluate(rule.left, env) == evaluate(rule.right, env)
    if isinstance(rule, NotEquals):
        return evaluate(rule.left, env) != evaluate(rule.right, env)
    if isinstance(rule, In):
        return evaluate(rule.operand, env) in rule.values
    if isinstance(rule, Not):
        return not evaluate(rule.operand, env)
    if isinstance(rule, And):
        return all(evaluate(r, env) for r in rule.operands)
    if isinstance(rule, Or):
        return any(evaluate(r, env) for r in rule.operands)
    raise TypeError(f"Unknown rule node: {rule!r}")


# Shared conditions
HAS_PRIMARY = Truthy(Field('primary_speaker'))
HAS_SECONDARY = Truthy(Field('has_secondary'))
MIXED = Truthy(Field('mixed_array'))
SECONDARY_ACTIVE = all_of(MIXED, HAS_SECONDARY, HAS_PRIMARY)
LMBC_AVAILABLE = all_of(HAS_PRIMARY, Not(In(Field('primary_speaker'), frozenset(LMBC_UNSUPPORTED))))
LMBC_ON = all_of(Truthy(Field('enable_lmbc')), LMBC_AVAILABLE)
ALWAYS = Const(True)


def line_array_visibility() -> Dict[str, Rule]:
    """Option id -> visibility rule for the line array design form"""
    return {
        'primary_speaker': ALWAYS,
        'primary_elements': ALWAYS,
        'elements_per_output': ALWAYS,
        'start_output': ALWAYS,
        'primary_phase': all_of(HAS_PRIMARY, Truthy(Field('primary_has_phases'))),
        'primary_starting_point': all_of(HAS_PRIMARY, Truthy(Field('primary_has_starting_points'))),
        'mixed_array': all_of(HAS_PRIMARY, HAS_SECONDARY),
        'secondary_speaker': SECONDARY_ACTIVE,
        'secondary_elements': SECONDARY_ACTIVE,
        'secondary_phase': all_of(SECONDARY_ACTIVE, Truthy(Field('secondary_has_phases'))),
        'secondary_starting_point': all_of(SECONDARY_ACTIVE, Truthy(Field('secondary_has_starting_points'))),
        'link_group': ALWAYS,
        'link_group_enable': NotEquals(Field('link_group'), Const('0')),
        'reset_to_factory': ALWAYS,
        'enable_lmbc': LMBC_AVAILABLE,
        'lmbc_array_index': LMBC_ON,
        'lmbc_beam_angle': LMBC_ON,
        'lmbc_control_type': LMBC_ON,
        'lmbc_starting_element': LMBC_ON,
        'lmbc_status_info': LMBC_ON,
    }


def form_environment(options: Mapping[str, Any], catalog: SpeakerCatalog) -> Dict[str, Any]:
    """Named fields the rules read, resolved once per request"""
    primary = normalize_speaker_key(options.get('primary_speaker'))
    secondary = catalog.secondary_for(primary) if primary else None
    chosen_secondary = normalize_speaker_key(options.get('secondary_speaker')) or secondary or ''

    primary_entry = catalog.speaker(primary) if primary else None
    secondary_entry = catalog.speaker(chosen_secondary) if chosen_secondary else None

    return {
        'primary_speaker': primary,
        'has_secondary': bool(secondary),
        'secondary_speaker': chosen_secondary,
        'mixed_array': options.get('mixed_array') is True,
        'link_group': str(options.get('link_group') or '0'),
        'enable_lmbc': options.get('enable_lmbc') is True,
        'primary_has_phases': bool(primary_entry and primary_entry.phases),
        'secondary_has_phases': bool(secondary_entry and secondary_entry.phases),
        'primary_has_starting_points': bool(primary and catalog.starting_points(primary)),
        'secondary_has_starting_points': bool(chosen_secondary and catalog.starting_points(chosen_secondary)),
    }


def visible_options(options: Mapping[str, Any], catalog: SpeakerCatalog) -> Dict[str, bool]:
    """Evaluate every line array rule for the current option values"""
    env = form_environment(options, catalog)
    return {option_id: bool(evaluate(rule, env)) for option_id, rule in line_array_visibility().items()}
