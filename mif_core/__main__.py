"""Allow running mif_core as a module.

Usage:
    python -m mif_core --help
    python -m mif_core convert map.osm roads.rules roads
"""

import sys
from mif_core.cli import main

if __name__ == "__main__":
    sys.exit(main())
