"""Rules command - validate a rule description and show its schema."""
import json

from mif_core.config import DEFAULT_STYLE, DEFAULT_GEOMETRY_TYPE
from mif_core.export.base import RESTRICTIONS_COLUMN
from mif_core.rules.rule_parser import load_rule_table
from mif_core.rules.rule_table import RuleTable


def setup_parser(subparsers):
    """Setup the rules subcommand parser."""
    parser = subparsers.add_parser(
        'rules',
        help='Validate a rule description',
        description='Parse a rule description and print the output schema '
                    'it produces'
    )

    parser.add_argument('rules', help='Rule description file')
    parser.add_argument('--json', action='store_true',
                        help='Print the schema as JSON')
    parser.add_argument('--no-relations', '-no_relations',
                        dest='no_relations', action='store_true',
                        help='Leave out the Restrictions column')

    parser.set_defaults(func=run)
    return parser


def describe(rule_table: RuleTable, process_relations: bool = True):
    """Build a plain dict description of a rule table."""
    columns = rule_table.column_types
    if process_relations:
        columns = columns + [RESTRICTIONS_COLUMN]

    rules = [str(rule_table.inclusion(key)) for key in rule_table.columns]
    rules += [str(rule_table.exclusion(key)) for key in rule_table.excluded_keys]

    return {
        'columns': [{'name': name, 'type': column_type} for name, column_type in columns],
        'mandatory_keys': rule_table.mandatory_keys,
        'bbox': rule_table.bbox.to_dict() if rule_table.bbox else None,
        'rules': rules,
        'defaults': {
            'style': DEFAULT_STYLE,
            'geometry_type': DEFAULT_GEOMETRY_TYPE
        }
    }


def run(args):
    """Execute the rules command."""
    rule_table = load_rule_table(args.rules)
    description = describe(rule_table, not args.no_relations)

    if args.json:
        print(json.dumps(description, indent=2))
        return 0

    if getattr(args, 'quiet', False):
        return 0

    print(f"Rule description: {args.rules}")
    print("=" * 40)
    print(f"Columns {len(description['columns'])}")
    for column in description['columns']:
        print(f"    {column['name']} {column['type']}")

    if description['mandatory_keys']:
        print(f"Mandatory keys: {', '.join(description['mandatory_keys'])}")
    else:
        print("Mandatory keys: none")

    bbox = rule_table.bbox
    if bbox is not None:
        print(f"Bounding box: lat {bbox.min_lat}..{bbox.max_lat}, "
              f"lon {bbox.min_lon}..{bbox.max_lon}")
    else:
        print("Bounding box: none")

    print("\nRules:")
    for rule in description['rules']:
        print(f"  {rule}")
    return 0
