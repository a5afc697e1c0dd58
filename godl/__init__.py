"""godl - Discover, download and install released versions."""
__version__ = "0.1.0"

from .core.config import init_paths

# Initialize global paths
init_paths()

from .cli.cli import main

__all__ = ['main']
