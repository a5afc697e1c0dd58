"""Configuration command implementations."""
from typing import List

from ...core import config
from ...utils.exceptions import ConfigValidationError


def config_set_command(args) -> None:
    """Set one or more global config values.

    Args:
        args: Command line arguments containing KEY=VALUE pairs
    """
    pairs: List[str] = args.pairs
    updates = {}
    for pair in pairs:
        if '=' not in pair:
            raise ConfigValidationError(f"Argument '{pair}' should be in the form KEY=VALUE")
        key, value = pair.split('=', 1)
        config.validate_key(key)
        updates[key] = value

    for key, value in updates.items():
        config.set_config_value(key, value)
    print(f"Updated {len(updates)} global config keys.")

def config_get_command(args) -> None:
    """Print the effective value of a config key.

    Args:
        args: Command line arguments containing key
    """
    config.validate_key(args.key)
    print(args.settings[args.key])

def config_list_command(args) -> None:
    """Print all effective config values."""
    for key, value in args.settings.items():
        print(f"{key}: {value}")
