"""Version listing command implementation."""
from ...core import config
from ...core.catalog import Catalog


def build_catalog(args) -> Catalog:
    """Create a catalog from the merged settings attached to args."""
    return Catalog(config.catalog_config_from_settings(args.settings))


def list_command(args) -> None:
    """Print every version available for the selected platform, newest first.

    Args:
        args: Command line arguments containing settings and the urls flag
    """
    catalog = build_catalog(args)
    catalog.query()

    if not catalog.downloads:
        print(f"No versions found for {catalog.platform}")
        return

    for entry in catalog:
        print(entry.url if args.urls else entry.version)
