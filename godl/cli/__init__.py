"""Command-line interface module for godl."""
from .cli import main
from . import commands

__all__ = ['main', 'commands']
