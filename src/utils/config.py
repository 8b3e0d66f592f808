"""
Configuration loading for the play and benchmark scripts.

Engine constants are fixed; only the surrounding session is configurable.
"""
import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml

DEFAULT_CONFIG: Dict[str, Any] = {
    'game': {
        'seed': None,
    },
    'play': {
        'mode': 'manual',
        'player_name': None,
        'frame_delay': 0.05,
    },
    'benchmark': {
        'num_games': 100,
        'max_ticks': 100_000,
    },
    'logging': {
        'enabled': True,
        'log_dir': 'logs',
        'name': 'session',
    },
}


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file on top of the defaults.

    A missing file yields the defaults.
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    path = Path(config_path)
    if not path.exists():
        print(f"Config file not found: {path}")
        print("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(path, 'r') as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return merge_config(DEFAULT_CONFIG, loaded)
