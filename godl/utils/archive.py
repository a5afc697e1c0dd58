"""Archive handling utilities.

Both extractors stream entries to disk one at a time and share the same
path traversal guard. Extraction is not atomic: on failure whatever was
already written stays in the destination and the caller cleans it up.
"""
import gzip
import logging
import os
import shutil
import stat
import tarfile
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .exceptions import (
    ExtractionError,
    PathTraversalError,
    UnsupportedArchiveError,
)

logger = logging.getLogger(__name__)

TAR_GZ_SUFFIX = '.tar.gz'
ZIP_SUFFIX = '.zip'

_READ_ERRORS = (tarfile.TarError, zipfile.BadZipFile, zlib.error, EOFError, OSError, ValueError)


def is_within_directory(directory: Path, target: Path) -> bool:
    """Check whether target resolves to directory or a path below it."""
    abs_directory = directory.resolve()
    abs_target = target.resolve()
    prefix = os.path.commonpath([abs_directory])
    return prefix == os.path.commonpath([prefix, abs_target])


def resolve_member_path(destination: Path, name: str, is_dir: bool = False) -> Path:
    """Join an archive entry name onto destination and guard the result.

    A directory entry may resolve to destination itself ("./"); anything
    else has to land strictly inside it.

    Raises:
        PathTraversalError: If the entry would be written outside destination
    """
    target = destination / name
    if not is_within_directory(destination, target):
        raise PathTraversalError(name, destination)
    target = target.resolve()
    if not is_dir and target == destination.resolve():
        raise PathTraversalError(name, destination)
    return target


def _write_member(target: Path, source: BinaryIO, mode: Optional[int]) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, 'wb') as dst:
        shutil.copyfileobj(source, dst)
    if mode:
        os.chmod(target, mode)


def extract_tar_gz(source: BinaryIO, destination: Path) -> None:
    """Extract a gzip compressed tar stream into destination.

    The stream is read sequentially, so entries written before a failure
    are left in place.

    Args:
        source: Binary stream positioned at the start of the .tar.gz data
        destination: Directory to extract to, created if absent

    Raises:
        PathTraversalError: If an entry would be written outside destination
        ExtractionError: If the stream cannot be read or an entry cannot be written
    """
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    try:
        with gzip.GzipFile(fileobj=source, mode='rb') as stream:
            # tarfile rejects a zero length stream, treat it as an empty archive
            if not stream.peek(1):
                return
            with tarfile.open(fileobj=stream, mode='r|') as tar:
                for member in tar:
                    target = resolve_member_path(destination, member.name, is_dir=member.isdir())
                    logger.debug("tar content: %s", target)

                    if member.isdir():
                        target.mkdir(parents=True, exist_ok=True)
                    elif member.isreg():
                        entry = tar.extractfile(member)
                        try:
                            _write_member(target, entry, stat.S_IMODE(member.mode))
                        finally:
                            entry.close()
                    else:
                        logger.debug("skipping unsupported tar entry %s (type %r)", member.name, member.type)
    except PathTraversalError:
        raise
    except _READ_ERRORS as e:
        raise ExtractionError(f"Failed to extract tar.gz archive into {destination}: {e}") from e


def _zip_mode(info: zipfile.ZipInfo) -> int:
    # Only archives written on Unix store st_mode in the high bits
    if info.create_system != 3:
        return 0
    return info.external_attr >> 16


def extract_zip(source: Union[str, Path, BinaryIO], destination: Path) -> None:
    """Extract a zip archive into destination.

    Every entry is checked against the traversal guard before anything is
    written, so a rejected archive leaves destination untouched.

    Args:
        source: Path to the zip file or a seekable binary file object
        destination: Directory to extract to, created if absent

    Raises:
        PathTraversalError: If an entry would be written outside destination
        ExtractionError: If the archive cannot be read or an entry cannot be written
    """
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(source, 'r') as archive:
            members = [
                (info, resolve_member_path(destination, info.filename, is_dir=info.is_dir()))
                for info in archive.infolist()
            ]
            for info, target in members:
                logger.debug("unzipping file %s", target)
                mode = _zip_mode(info)

                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                elif stat.S_IFMT(mode) and not stat.S_ISREG(mode):
                    logger.debug("skipping unsupported zip entry %s (mode %o)", info.filename, mode)
                else:
                    with archive.open(info) as entry:
                        _write_member(target, entry, stat.S_IMODE(mode))
    except PathTraversalError:
        raise
    except _READ_ERRORS as e:
        raise ExtractionError(f"Failed to extract zip archive into {destination}: {e}") from e


def get_archive_suffix(file_name: str) -> str:
    """Return the supported suffix of an archive file name.

    Raises:
        UnsupportedArchiveError: If the name ends in neither .tar.gz nor .zip
    """
    if file_name.endswith(TAR_GZ_SUFFIX):
        return TAR_GZ_SUFFIX
    if file_name.endswith(ZIP_SUFFIX):
        return ZIP_SUFFIX
    raise UnsupportedArchiveError(f"Unsupported archive format: {file_name}")


def extract_archive(archive_path: Path, extract_dir: Path, file_name: Optional[str] = None) -> None:
    """Extract a zip or tar.gz archive.

    Args:
        archive_path: Path to the archive file
        extract_dir: Directory to extract to
        file_name: Name deciding the format, defaults to archive_path's name

    Raises:
        UnsupportedArchiveError: If archive format is not supported
        PathTraversalError: If an entry would escape extract_dir
        ExtractionError: If extraction fails
    """
    archive_path = Path(archive_path)
    suffix = get_archive_suffix(file_name or archive_path.name)

    if suffix == ZIP_SUFFIX:
        extract_zip(archive_path, extract_dir)
        return

    try:
        source = open(archive_path, 'rb')
    except OSError as e:
        raise ExtractionError(f"Failed to open archive {archive_path}: {e}") from e
    with source:
        extract_tar_gz(source, extract_dir)
