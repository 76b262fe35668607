"""Command-line interface for osm2mif.

Usage:
    # After pip install:
    osm2mif --help
    osm2mif convert map.osm roads.rules roads
    osm2mif rules roads.rules

    # Or via Python:
    python -m mif_core convert map.osm roads.rules roads
"""

import sys
from mif_core.cli.main import main as _main, create_parser

__all__ = ['main', 'create_parser']


def main() -> int:
    """Entry point for the osm2mif console script.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        return _main() or 0
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"osm2mif: fatal error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
