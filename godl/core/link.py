"""Stable aliases pointing at an installed version."""
import logging
import os
import shutil
from pathlib import Path
from typing import Union

from ..utils.exceptions import LinkError
from .platform import is_windows

logger = logging.getLogger(__name__)


def create_symlink_path(destination_dir: Union[str, Path], link_name: str) -> Path:
    """Return where the alias for link_name is created.

    Absolute link names are used as given, except on Windows where the alias
    always lives inside destination_dir.
    """
    if not is_windows() and os.path.isabs(link_name):
        return Path(link_name)
    return Path(destination_dir) / link_name


def _copy_directory(src: Path, dst: Path) -> None:
    if dst.exists() or dst.is_symlink():
        if dst.is_dir() and not dst.is_symlink():
            shutil.rmtree(dst)
        else:
            dst.unlink()
    shutil.copytree(src, dst)


def _symlink(src: Path, dst: Path) -> None:
    if dst.is_symlink():
        dst.unlink()
    elif dst.exists():
        raise LinkError(f"{dst} exists and is not a symbolic link")
    os.symlink(src, dst, target_is_directory=True)


def link(src: Union[str, Path], dst: Union[str, Path]) -> Path:
    """Point dst at the installed directory src.

    On POSIX systems dst becomes a symbolic link, replacing an older link.
    On Windows the directory tree is copied instead.

    Raises:
        LinkError: If src is missing or dst cannot be replaced
    """
    src, dst = Path(src), Path(dst)
    if not src.is_dir():
        raise LinkError(f"{src} is not an installed version directory")
    try:
        if is_windows():
            _copy_directory(src, dst)
        else:
            _symlink(src, dst)
    except OSError as e:
        raise LinkError(f"Could not link {dst} to {src}: {e}") from e
    logger.debug("linked %s -> %s", dst, src)
    return dst
