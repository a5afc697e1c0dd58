"""Command-line interface for godl."""
import argparse
import sys
from typing import Any, Dict, List, Optional

from .. import __version__, constants
from ..core import config
from ..utils.exceptions import GodlError, VersionNotFoundError
from ..utils.logging_config import setup_logging
from .commands import config as config_commands
from .commands import install as install_commands
from .commands import versions as versions_commands

EXIT_NOT_FOUND = 2

def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(prog="godl", description="Download and install released versions from a listing page")
    parser.add_argument('-V', '--version', action='version', version=f'godl {__version__}')
    parser.add_argument('--base-url', help=f'Listing to discover versions on (default: {constants.BASE_URL})')
    parser.add_argument('--include-rc', action='store_true', default=None, dest='include_release_candidates',
                        help='Include release candidates')
    parser.add_argument('--os', dest='os_override', help='Select archives for this OS instead of the running one')
    parser.add_argument('--arch', dest='arch_override', help='Select archives for this architecture (amd64, arm64, etc)')
    parser.add_argument('-v', '--verbose', action='store_true', default=None, help='Show debug output')
    subparsers = parser.add_subparsers(dest='command', required=False)

    # List command
    list_parser = subparsers.add_parser('list', help='List available versions, newest first')
    list_parser.add_argument('--urls', action='store_true', help='Print download URLs instead of versions')
    list_parser.set_defaults(func=versions_commands.list_command)

    # Install command
    install_parser = subparsers.add_parser('install', help='Download and extract a version')
    install_parser.add_argument('version', help='Exact version to install, e.g. 1.21.3')
    install_parser.add_argument('-d', '--destination', help='Directory holding installed versions')
    install_parser.add_argument('--link', help='Alias to point at the installed version')
    install_parser.add_argument('--force', action='store_true', help='Replace an existing installation')
    install_parser.set_defaults(func=install_commands.install_command)

    # Link command
    link_parser = subparsers.add_parser('link', help='Point an alias at an installed version')
    link_parser.add_argument('version', help='Installed version')
    link_parser.add_argument('-d', '--destination', help='Directory holding installed versions')
    link_parser.add_argument('--link', help='Alias name or absolute path')
    link_parser.set_defaults(func=install_commands.link_command)

    # Config commands
    config_parser = subparsers.add_parser('config', help='Global configuration commands',
                                          description="Global keys: " + ", ".join(constants.DEFAULT_CONFIG.keys()))
    config_subparsers = config_parser.add_subparsers(dest='config_command')

    config_set = config_subparsers.add_parser('set', help='Set global config values')
    config_set.add_argument('pairs', nargs='+', metavar='KEY=VALUE', help='Values to set')
    config_set.set_defaults(func=config_commands.config_set_command)

    config_get = config_subparsers.add_parser('get', help='Show a config value')
    config_get.add_argument('key', help='Config key')
    config_get.set_defaults(func=config_commands.config_get_command)

    config_list = config_subparsers.add_parser('list', help='Show all config values')
    config_list.set_defaults(func=config_commands.config_list_command)

    return parser

def resolve_settings(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    """Merge stored settings with the global command line options."""
    settings = config.load_settings()
    if parsed_args.base_url:
        settings['base_url'] = parsed_args.base_url
    if parsed_args.include_release_candidates is not None:
        settings['include_release_candidates'] = parsed_args.include_release_candidates
    if parsed_args.os_override:
        settings['os_override'] = parsed_args.os_override
    if parsed_args.arch_override:
        settings['arch_override'] = parsed_args.arch_override
    if parsed_args.verbose is not None:
        settings['verbose'] = parsed_args.verbose
    return settings

def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments, if None uses sys.argv[1:]

    Returns:
        int: Exit code
    """
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not hasattr(parsed_args, 'func'):
        parser.print_help()
        return 1

    try:
        parsed_args.settings = resolve_settings(parsed_args)
        setup_logging(parsed_args.settings['verbose'])
        parsed_args.func(parsed_args)
        return 0
    except VersionNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except (GodlError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

if __name__ == '__main__':
    sys.exit(main())
