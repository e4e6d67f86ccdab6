"""Configuration loading from config.toml"""

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

CONFIG_ENV_VAR = 'GALAXY_CONFIG'
DEFAULT_CONFIG_PATH = Path('config.toml')

DEFAULTS: Dict[str, Dict[str, Any]] = {
    'device': {
        'host': '192.168.0.100',
        'port': 25003,
        'handler': 'galaxy',
        'num_outputs': 16,
    },
    'catalog': {
        'starting_points': 'starting-points.json',
    },
    'ui': {
        'page_title': 'Galaxy Array Designer',
        'page_icon': '🔊',
    },
}


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Dict[str, Any]]:
    """Read config.toml, filling in defaults for anything missing

    The path defaults to $GALAXY_CONFIG, then ./config.toml. A missing file
    yields the defaults; a malformed one raises tomllib.TOMLDecodeError.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    path = Path(path)

    loaded: Dict[str, Any] = {}
    if path.is_file():
        with open(path, 'rb') as f:
            loaded = tomllib.load(f)

    config = {}
    for section, defaults in DEFAULTS.items():
        values = loaded.get(section)
        config[section] = {**defaults, **(values if isinstance(values, dict) else {})}

    # Relative catalog paths are resolved against the config file's directory
    sp = config['catalog'].get('starting_points')
    if sp and not Path(sp).is_absolute():
        config['catalog']['starting_points'] = str(path.parent / sp)
    return config
