"""Speaker key normalization and control-point template rendering"""

import re
from typing import Optional

_SEPARATORS = re.compile(r'[\s-]+')
_NON_WORD = re.compile(r'[^\w]')
_UNDERSCORES = re.compile(r'_+')
_CH_PLACEHOLDER = re.compile(r'\{ch\}', re.IGNORECASE)

# Legacy aliases that the device tables list under another name
SPEAKER_ALIASES = {
    'LEO_M': 'LEO',
    'LEOM': 'LEO',
}


def normalize_speaker_key(key) -> str:
    """Normalize a speaker key to upper case with single underscores

    'leo m', 'LEO-M' and 'leoM' all become 'LEO'. Never raises; None or
    unusable input gives an empty string.
    """
    if key is None:
        return ''
    normalized = _SEPARATORS.sub('_', str(key).strip().upper())
    normalized = _NON_WORD.sub('', normalized)
    normalized = _UNDERSCORES.sub('_', normalized)
    return SPEAKER_ALIASES.get(normalized, normalized)


def canonicalize_speaker_key(key) -> str:
    """Compact form of a speaker key (normalized, underscores removed)"""
    compact = normalize_speaker_key(key).replace('_', '')
    return SPEAKER_ALIASES.get(compact, compact)


def render_template(template, output_number: int) -> Optional[str]:
    """Substitute an output number into a control-point template

    '{}' takes precedence; otherwise '{ch}' is replaced case-insensitively.
    Returns None for empty templates so callers can drop them.
    """
    cmd = str(template or '').strip()
    if not cmd:
        return None
    if '{}' in cmd:
        return cmd.replace('{}', str(output_number))
    return _CH_PLACEHOLDER.sub(str(output_number), cmd)
