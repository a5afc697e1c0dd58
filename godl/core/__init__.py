"""Core functionality for godl."""

from . import version
from . import platform
from . import download
from . import catalog
from . import config
from . import link
from . import install

__all__ = ['version', 'platform', 'download', 'catalog', 'config', 'link', 'install']
