"""Rule table deciding which ways are emitted and how.

The table is built once from a rule description and only read afterwards.
Inclusion and exclusion rules are kept in two parallel maps keyed by tag key.
"""
from typing import Dict, List, Optional, Tuple

from mif_core.config import DEFAULT_COLUMN_TYPE
from mif_core.exceptions import ConfigurationError
from mif_core.rules.base import ExclusionRule, InclusionRule, TagMatch
from mif_core.rules.bbox import BoundingBoxFilter


class RuleTable:
    """Inclusion/exclusion policy, styling and column schema per tag key."""

    def __init__(self, inclusions: Dict[str, InclusionRule],
                 exclusions: Dict[str, ExclusionRule],
                 bbox: Optional[BoundingBoxFilter] = None):
        """Initialize rule table.

        Args:
            inclusions: Tag key -> inclusion rule
            exclusions: Tag key -> exclusion rule
            bbox: Optional bounding box for node retention

        Raises:
            ConfigurationError: If a key is both an all-values inclusion
                and an all-values exclusion
        """
        for key, rule in inclusions.items():
            exclusion = exclusions.get(key)
            if rule.match_all and exclusion is not None and exclusion.match_all:
                raise ConfigurationError(
                    f"key '{key}' cannot have iv=\"*\" and ev=\"*\" at the same time"
                )

        self._inclusions = dict(inclusions)
        self._exclusions = dict(exclusions)
        self.bbox = bbox
        self._columns = sorted(self._inclusions)
        self._has_mandatory = any(r.is_mandatory for r in self._inclusions.values())

    @property
    def columns(self) -> List[str]:
        """Output column names in their fixed order."""
        return list(self._columns)

    @property
    def column_types(self) -> List[Tuple[str, str]]:
        """Output (name, type) pairs in column order."""
        return [(key, self.column_type(key)) for key in self._columns]

    @property
    def excluded_keys(self) -> List[str]:
        return sorted(self._exclusions)

    @property
    def has_mandatory_keys(self) -> bool:
        return self._has_mandatory

    @property
    def mandatory_keys(self) -> List[str]:
        return [key for key in self._columns if self._inclusions[key].is_mandatory]

    def column_type(self, key: str) -> str:
        """Get the declared output type of a column."""
        return self._inclusions[key].column_type or DEFAULT_COLUMN_TYPE

    def inclusion(self, key: str) -> Optional[InclusionRule]:
        return self._inclusions.get(key)

    def exclusion(self, key: str) -> Optional[ExclusionRule]:
        return self._exclusions.get(key)

    def is_excluded(self, key: str, value: str) -> bool:
        """Check if a single tag vetoes its way.

        Args:
            key: Tag key
            value: Tag value

        Returns:
            True if an exclusion rule matches the tag
        """
        rule = self._exclusions.get(key)
        return rule is not None and rule.matches(value)

    def classify(self, key: str, value: str) -> Optional[TagMatch]:
        """Match a single tag against the inclusion rules.

        Args:
            key: Tag key
            value: Tag value

        Returns:
            TagMatch describing the column value and overrides, or None
        """
        rule = self._inclusions.get(key)
        if rule is None or not rule.matches(value):
            return None

        transformed = rule.lookup(rule.transforms, value)
        return TagMatch(
            column=key,
            value=value if transformed is None else transformed,
            is_mandatory=rule.is_mandatory,
            style=rule.lookup(rule.styles, value),
            geometry_type=rule.lookup(rule.geometry_types, value),
            suppress_breakup=rule.suppress_breakup
        )

    def __len__(self) -> int:
        return len(self._inclusions)

    def __repr__(self) -> str:
        return (f"RuleTable(columns={self._columns}, "
                f"exclusions={sorted(self._exclusions)}, bbox={self.bbox!r})")
