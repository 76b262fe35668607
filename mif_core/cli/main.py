"""CLI main entry point with subcommand structure."""
import argparse
import sys
from typing import Optional

from mif_core import __version__
from mif_core.exceptions import (
    ConfigurationError, DataError, InputReadError, OutputWriteError
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIGURATION = 2
EXIT_INPUT = 3
EXIT_OUTPUT = 4


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='osm2mif',
        description='osm2mif - Convert OpenStreetMap XML to MapInfo MIF/MID',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  osm2mif convert map.osm roads.rules roads
  osm2mif convert map.osm roads.rules roads --no-relations
  osm2mif convert map.osm roads.rules roads --format shapefile
  osm2mif rules roads.rules
'''
    )

    # Global options
    parser.add_argument('--version', '-V', action='version',
                        version=f'osm2mif {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress non-error output')
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Increase verbosity')

    subparsers = parser.add_subparsers(dest='command', title='commands',
                                       description='Available commands')

    from mif_core.cli.commands.convert import setup_parser as setup_convert
    setup_convert(subparsers)

    from mif_core.cli.commands.rules import setup_parser as setup_rules
    setup_rules(subparsers)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # No command specified - show help
    if not parsed_args.command:
        parser.print_help()
        return EXIT_OK

    try:
        if parsed_args.command == 'convert':
            from mif_core.cli.commands.convert import run as cmd_convert
            return cmd_convert(parsed_args)
        elif parsed_args.command == 'rules':
            from mif_core.cli.commands.rules import run as cmd_rules
            return cmd_rules(parsed_args)
        else:
            parser.print_help()
            return EXIT_OK

    except ConfigurationError as e:
        print(f"osm2mif: error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION
    except (InputReadError, FileNotFoundError) as e:
        print(f"osm2mif: error: {e}", file=sys.stderr)
        return EXIT_INPUT
    except (OutputWriteError, PermissionError) as e:
        print(f"osm2mif: error: {e}", file=sys.stderr)
        return EXIT_OUTPUT
    except DataError as e:
        print(f"osm2mif: error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        print(f"osm2mif: error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_FAILURE


if __name__ == '__main__':
    sys.exit(main())
