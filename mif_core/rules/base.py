"""Rule entries and match results."""
from dataclasses import dataclass, field
from typing import Dict, Optional, Set

WILDCARD = '*'


@dataclass
class ExclusionRule:
    """Values of one tag key that veto a way outright."""
    key: str
    match_all: bool = False
    values: Set[str] = field(default_factory=set)

    def add_value(self, value: str) -> None:
        if value == WILDCARD:
            self.match_all = True
        else:
            self.values.add(value)

    def matches(self, value: str) -> bool:
        """Check if a tag value is excluded by this rule."""
        return self.match_all or value in self.values

    def __str__(self) -> str:
        value_str = WILDCARD if self.match_all else ','.join(sorted(self.values))
        return f"reject:{self.key}={value_str}"


@dataclass
class InclusionRule:
    """Values of one tag key that are passed through to the output.

    Style, transformed value and geometry type are stored per included
    value. A value declared after ``iv="*"`` is stored under the wildcard
    and applies to every value without a specific override.
    """
    key: str
    is_mandatory: bool = False
    match_all: bool = False
    values: Set[str] = field(default_factory=set)
    column_type: Optional[str] = None
    suppress_breakup: bool = False
    styles: Dict[str, str] = field(default_factory=dict)
    transforms: Dict[str, str] = field(default_factory=dict)
    geometry_types: Dict[str, str] = field(default_factory=dict)

    def add_value(self, value: str) -> None:
        if value == WILDCARD:
            self.match_all = True
        else:
            self.values.add(value)

    def matches(self, value: str) -> bool:
        """Check if a tag value is included by this rule.

        An empty value never matches, not even the wildcard.
        """
        if not value:
            return False
        return self.match_all or value in self.values

    def lookup(self, overrides: Dict[str, str], value: str) -> Optional[str]:
        """Return the override for a value, falling back to the wildcard's."""
        if value in overrides:
            return overrides[value]
        return overrides.get(WILDCARD)

    def __str__(self) -> str:
        value_str = WILDCARD if self.match_all else ','.join(sorted(self.values))
        prefix = 'mk' if self.is_mandatory else 'k'
        return f"accept:{prefix}:{self.key}={value_str}"


@dataclass
class TagMatch:
    """Result of classifying one tag against the rule table."""
    column: str
    value: str
    is_mandatory: bool = False
    style: Optional[str] = None
    geometry_type: Optional[str] = None
    suppress_breakup: bool = False
