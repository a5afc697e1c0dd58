"""Command implementations for godl CLI."""

from .versions import list_command
from .install import install_command, link_command
from .config import (
    config_set_command,
    config_get_command,
    config_list_command
)

__all__ = [
    'list_command',
    'install_command',
    'link_command',
    'config_set_command',
    'config_get_command',
    'config_list_command'
]
