"""Per-way rule evaluation state for the emit pass."""
from typing import Dict, Optional

from mif_core.config import DEFAULT_GEOMETRY_TYPE, DEFAULT_STYLE
from mif_core.rules.rule_table import RuleTable

ID_COLUMN = 'id'

# Skip reasons, matching the ConversionStats counters
EXCLUDED = 'excluded'
UNMATCHED = 'unmatched'


class WayContext:
    """Accumulates the outcome of a way's tags against the rule table.

    Every tag of the way is applied in document order. Exclusion marks the
    way but scanning continues so the column values stay complete; a later
    matching tag overrides style and geometry type set by an earlier one.
    """

    def __init__(self, rule_table: RuleTable, way_id: int,
                 default_style: str = DEFAULT_STYLE,
                 default_geometry_type: str = DEFAULT_GEOMETRY_TYPE):
        self.rule_table = rule_table
        self.way_id = way_id
        self.style = default_style
        self.geometry_type = default_geometry_type
        self.suppress_breakup = False
        self.is_excluded = False
        self.matched_count = 0
        self.mandatory_count = 0
        self.values: Dict[str, str] = {column: '' for column in rule_table.columns}
        if ID_COLUMN in self.values:
            self.values[ID_COLUMN] = str(way_id)

    def apply_tag(self, key: str, value: str) -> None:
        """Apply one of the way's tags.

        Args:
            key: Tag key
            value: Tag value
        """
        if self.rule_table.is_excluded(key, value):
            self.is_excluded = True
            return

        match = self.rule_table.classify(key, value)
        if match is None:
            return

        self.matched_count += 1
        if match.is_mandatory:
            self.mandatory_count += 1
        self.values[match.column] = match.value
        if match.style is not None:
            self.style = match.style
        if match.geometry_type is not None:
            self.geometry_type = match.geometry_type
        if match.suppress_breakup:
            self.suppress_breakup = True

    @property
    def skip_reason(self) -> Optional[str]:
        """Why this way produces no output, or None if it should be emitted."""
        if self.is_excluded:
            return EXCLUDED
        if self.matched_count == 0:
            return UNMATCHED
        if self.rule_table.has_mandatory_keys and self.mandatory_count == 0:
            return UNMATCHED
        return None

    @property
    def should_emit(self) -> bool:
        return self.skip_reason is None
