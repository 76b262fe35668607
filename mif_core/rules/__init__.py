"""Rule table: tag inclusion/exclusion, styling and column schema."""

from mif_core.rules.base import WILDCARD, ExclusionRule, InclusionRule, TagMatch
from mif_core.rules.bbox import BoundingBoxFilter
from mif_core.rules.rule_table import RuleTable
from mif_core.rules.rule_parser import RuleDescriptionParser, load_rule_table
from mif_core.rules.way_context import WayContext

__all__ = [
    'WILDCARD', 'ExclusionRule', 'InclusionRule', 'TagMatch',
    'BoundingBoxFilter', 'RuleTable', 'RuleDescriptionParser', 'load_rule_table',
    'WayContext',
]
