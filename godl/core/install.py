"""Install a released version into a destination directory."""
import logging
import shutil
from pathlib import Path
from typing import Optional, Union

import requests

from .. import constants
from ..utils.archive import extract_archive
from ..utils.exceptions import InstallError
from . import download
from . import link as link_module
from .catalog import Catalog

logger = logging.getLogger(__name__)


def staging_path(destination: Path, version: str) -> Path:
    return destination / f"_{version}"


def install_path(destination: Path, version: str) -> Path:
    return destination / version


def _validate_destination(destination: Path) -> None:
    if not destination.exists():
        raise InstallError(f"{destination} does not exist")
    if not destination.is_dir():
        raise InstallError(f"{destination} is not a directory")


def install_version(
    catalog: Catalog,
    version: str,
    destination: Union[str, Path],
    link_name: Optional[str] = None,
    force: bool = False,
    archive_root: str = constants.DEFAULT_ARCHIVE_ROOT,
    session: Optional[requests.Session] = None,
) -> Path:
    """Download and unpack version as <destination>/<version>.

    The archive is fetched and extracted inside <destination>/_<version>;
    its top-level directory is then renamed into place and the staging
    directory removed. On failure the staging directory is removed as well,
    so a rejected or broken archive leaves nothing behind.

    Args:
        catalog: Catalog to resolve version with, refreshed before lookup
        version: Exact version string as listed, e.g. 1.21.3
        destination: Existing directory holding installed versions
        link_name: Optional alias to point at the installed version
        force: Replace an existing installation of the same version
        archive_root: Top-level directory expected inside the archive
        session: Optional requests session for all transfers

    Returns:
        Path: The installed version directory

    Raises:
        InstallError: If destination is unusable or the archive layout is unexpected
        VersionNotFoundError: If version is not in the listing
        DownloadError: If fetching the listing or archive fails
        ArchiveError: If extraction fails
        LinkError: If the alias cannot be created
    """
    destination = Path(destination)
    _validate_destination(destination)

    target = install_path(destination, version)
    if target.exists() or target.is_symlink():
        if not force:
            raise InstallError(f"{target} already exists, use --force to replace it")

    catalog.query(session=session)
    entry = catalog.lookup(version)

    staging = staging_path(destination, version)
    if staging.exists():
        logger.warning("%s already exists, removing it", staging)
        shutil.rmtree(staging)
    staging.mkdir(parents=True)

    try:
        print(f"downloading {entry.url} to {staging}")
        archive = download.download_file(entry.url, staging / entry.file_name, session=session)
        extract_archive(archive, staging, entry.file_name)
        archive.unlink()

        root = staging / archive_root
        if not root.is_dir():
            raise InstallError(f"{root} expected but not found")

        if target.is_symlink():
            target.unlink()
        elif target.exists():
            shutil.rmtree(target)
        root.rename(target)
    finally:
        shutil.rmtree(staging, ignore_errors=True)

    print(f"installed {version} at {target}")

    if link_name:
        alias = link_module.create_symlink_path(destination, link_name)
        link_module.link(target, alias)
        print(f"linked {alias} -> {target}")

    return target
