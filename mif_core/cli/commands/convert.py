"""Convert command - OSM XML to MIF/MID."""
import sys
import time

from mif_core.config import ConversionOptions, OUTPUT_FORMATS
from mif_core.converter import OSMConverter
from mif_core.models.statistics import ConversionStats
from mif_core.rules.rule_parser import load_rule_table

USAGE = "usage: osm2mif convert INPUT RULES OUTPUT_BASE [--no-relations] [--format {mif,shapefile}]"


def setup_parser(subparsers):
    """Setup the convert subcommand parser."""
    parser = subparsers.add_parser(
        'convert',
        help='Convert an OSM file to MIF/MID',
        description='Convert the ways of an OSM XML file to a MIF/MID pair '
                    'according to a rule description'
    )

    # Checked in run() so a wrong count prints usage instead of failing
    parser.add_argument('paths', nargs='*', metavar='PATH',
                        help='INPUT (OSM XML), RULES (rule description) and '
                             'OUTPUT_BASE (output path without extension)')
    parser.add_argument(
        '--no-relations', '-no_relations',
        dest='no_relations',
        action='store_true',
        help='Skip turn restrictions and the Restrictions column'
    )
    parser.add_argument(
        '-f', '--format',
        choices=list(OUTPUT_FORMATS),
        default='mif',
        help='Output format (default: mif)'
    )

    parser.set_defaults(func=run)
    return parser


def print_summary(stats: ConversionStats, files, elapsed: float) -> None:
    """Print a conversion summary to stdout."""
    print(f"\nConversion complete")
    print("=" * 40)
    print(f"Nodes read:      {stats.nodes_read:,} ({stats.nodes_skipped:,} outside bbox)")
    print(f"Ways read:       {stats.ways_read:,}")
    print(f"  written:       {stats.ways_written:,}")
    print(f"  excluded:      {stats.ways_excluded:,}")
    print(f"  unmatched:     {stats.ways_unmatched:,}")
    print(f"  too short:     {stats.ways_too_short:,}")
    print(f"Records written: {stats.records_written:,}")
    if stats.relations_indexed:
        print(f"Restrictions:    {stats.relations_indexed:,} indexed, "
              f"{stats.restrictions_written:,} banned turns written")
    for path in files:
        print(f"Output: {path}")
    print(f"Time: {elapsed:.3f}s")


def run(args):
    """Execute the convert command."""
    if len(args.paths) != 3:
        print(USAGE)
        return 0

    input_path, rules_path, output_base = args.paths
    quiet = getattr(args, 'quiet', False)
    verbose = getattr(args, 'verbose', 0)

    def progress(kind, count):
        print(f"  {count:,} {kind}...", file=sys.stderr)

    start_time = time.time()
    rule_table = load_rule_table(rules_path)
    options = ConversionOptions(
        process_relations=not args.no_relations,
        output_format=args.format
    )

    converter = OSMConverter(rule_table, options,
                             progress=progress if verbose and not quiet else None)

    def on_stage(stage, detail):
        label = "Indexing" if stage == 'index' else "Writing"
        print(f"{label} {detail}...", file=sys.stderr)

    stats = converter.convert(input_path, output_base,
                              on_stage=on_stage if verbose and not quiet else None)

    if not quiet:
        print_summary(stats, converter.output_files, time.time() - start_time)
    return 0
