"""Install and link command implementations."""
from pathlib import Path

from ...core import install, link
from ...core.version import parse_version_strict
from ...utils.exceptions import InstallError
from .versions import build_catalog


def _destination(args) -> Path:
    destination = args.destination or args.settings.get("destination")
    if not destination:
        raise InstallError("no destination provided, pass --destination or set 'destination'")
    return Path(destination).expanduser()


def install_command(args) -> None:
    """Download, extract and optionally link a version.

    Args:
        args: Command line arguments containing version, destination, link and force
    """
    parse_version_strict(args.version)
    destination = _destination(args)
    link_name = args.link or args.settings.get("link_name") or None

    catalog = build_catalog(args)
    install.install_version(catalog, args.version, destination, link_name=link_name, force=args.force)


def link_command(args) -> None:
    """Point an alias at an already installed version.

    Args:
        args: Command line arguments containing version, destination and link
    """
    destination = _destination(args)
    link_name = args.link or args.settings.get("link_name")
    if not link_name:
        raise InstallError("no link name provided, pass --link or set 'link_name'")

    target = install.install_path(destination, args.version)
    if not target.is_dir():
        raise InstallError(f"{args.version} is not installed in {destination}")

    alias = link.create_symlink_path(destination, link_name)
    link.link(target, alias)
    print(f"linked {alias} -> {target}")
