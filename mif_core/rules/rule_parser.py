"""Rule description parsing.

A rule description is a text file of ``name="value"`` tokens, e.g.::

    // bounding box (optional, all four or none)
    min_lon="-0.2" max_lon="0.1" min_lat="51.4" max_lat="51.6"

    mk="highway" iv="residential" iv="primary" style="Pen(2,2,255)"
    k="name" iv="*"
    k="oneway" iv="*" type="Integer"
    k="route" ev="ferry" ev="ski"
    k="natural" iv="water" style="Pen(3,2,255)" mif_type="Region" break_up="no"

``k`` declares an optional key, ``mk`` a mandatory one. ``iv``/``ev`` add
included/excluded values (``*`` for all). ``style``, ``tv`` and ``mif_type``
apply to the most recent ``iv`` on the same line; ``type`` and ``break_up``
apply to the key. A line may end with a ``//`` comment; any other
trailing text is an error.
"""
import re
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from mif_core.exceptions import ConfigurationError
from mif_core.rules.base import ExclusionRule, InclusionRule
from mif_core.rules.bbox import BoundingBoxFilter
from mif_core.rules.rule_table import RuleTable

COMMENT_MARKER = '//'

BBOX_NAMES = ('min_lon', 'max_lon', 'min_lat', 'max_lat')
KEY_NAMES = ('k', 'mk')
VALUE_NAMES = ('iv', 'ev', 'style', 'tv', 'mif_type', 'type', 'break_up')

TOKEN_PATTERN = re.compile(r'\s*([^\s="]*)="([^"]*)"')


class RuleDescriptionParser:
    """Builds a RuleTable from rule description lines."""

    def __init__(self):
        self._inclusions: Dict[str, InclusionRule] = {}
        self._exclusions: Dict[str, ExclusionRule] = {}
        self._bounds: Dict[str, float] = {}

    def parse_file(self, file_path: Union[str, Path]) -> RuleTable:
        """Parse a rule description file.

        Args:
            file_path: Path to the rule description

        Returns:
            Validated RuleTable

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: If any line is malformed or not UTF-8
        """
        with open(file_path, 'rb') as f:
            return self.parse_lines(self._decode_lines(f, file_path))

    @staticmethod
    def _decode_lines(raw_lines, file_path):
        for line_number, raw_line in enumerate(raw_lines, start=1):
            try:
                yield raw_line.decode('utf-8')
            except UnicodeDecodeError:
                raise ConfigurationError(
                    f"line {line_number} of {file_path} is not valid UTF-8",
                    line_number=line_number
                )

    def parse_lines(self, lines: Iterable[str]) -> RuleTable:
        """Parse rule description lines into a RuleTable."""
        for line_number, line in enumerate(lines, start=1):
            self.parse_line(line.rstrip('\r\n'), line_number)
        return self.build()

    def parse_line(self, line: str, line_number: Optional[int] = None) -> None:
        """Parse one rule description line into the pending rules.

        Args:
            line: Line text without the line terminator
            line_number: 1-based line number for error messages
        """
        text = line.strip()
        if not text or text.startswith(COMMENT_MARKER):
            return

        tokens = []
        pos = 0
        while pos < len(line):
            match = TOKEN_PATTERN.match(line, pos)
            if match is None:
                rest = line[pos:].strip()
                if rest and not rest.startswith(COMMENT_MARKER):
                    raise ConfigurationError("expected name=\"value\"", line, line_number)
                break
            name, value = match.group(1), match.group(2)
            if not name or not value:
                raise ConfigurationError("empty name or value", line, line_number)
            tokens.append((name, value))
            pos = match.end()

        first_name = tokens[0][0]
        if first_name in BBOX_NAMES:
            for name, value in tokens:
                self._parse_bound(name, value, line, line_number)
        elif first_name in KEY_NAMES:
            self._parse_key_line(tokens, line, line_number)
        elif first_name in VALUE_NAMES:
            raise ConfigurationError(
                f"'{first_name}' must follow k=\"...\" or mk=\"...\"", line, line_number
            )
        else:
            raise ConfigurationError("unrecognised key", line, line_number)

    def _parse_bound(self, name: str, value: str, line: str,
                     line_number: Optional[int]) -> None:
        if name not in BBOX_NAMES:
            raise ConfigurationError(
                f"'{name}' cannot appear on a bounding box line", line, line_number
            )
        try:
            self._bounds[name] = float(value)
        except ValueError:
            raise ConfigurationError("value is not a lat/long", line, line_number)

    def _parse_key_line(self, tokens, line: str, line_number: Optional[int]) -> None:
        key_name, key = tokens[0]
        is_mandatory = key_name == 'mk'
        current_value = None

        for name, value in tokens[1:]:
            if name == 'iv':
                rule = self._inclusion(key, is_mandatory)
                rule.add_value(value)
                current_value = value
            elif name == 'ev':
                self._exclusion(key).add_value(value)
            elif name in ('style', 'tv', 'mif_type'):
                if current_value is None:
                    raise ConfigurationError(
                        f"'{name}' must follow an iv=\"...\" for key '{key}'",
                        line, line_number
                    )
                rule = self._inclusions[key]
                if name == 'style':
                    rule.styles[current_value] = value
                elif name == 'tv':
                    rule.transforms[current_value] = value
                else:
                    rule.geometry_types[current_value] = value
            elif name == 'type':
                rule = self._inclusion(key, is_mandatory)
                if rule.column_type is not None:
                    raise ConfigurationError(
                        f"type defined twice for {key}", line, line_number
                    )
                rule.column_type = value
            elif name == 'break_up':
                if value not in ('yes', 'no'):
                    raise ConfigurationError(
                        "break_up must be \"yes\" or \"no\"", line, line_number
                    )
                if value == 'no':
                    self._inclusion(key, is_mandatory).suppress_breakup = True
            else:
                raise ConfigurationError("unrecognised key", line, line_number)

    def _inclusion(self, key: str, is_mandatory: bool) -> InclusionRule:
        rule = self._inclusions.get(key)
        if rule is None:
            rule = InclusionRule(key=key, is_mandatory=is_mandatory)
            self._inclusions[key] = rule
        elif is_mandatory:
            rule.is_mandatory = True
        return rule

    def _exclusion(self, key: str) -> ExclusionRule:
        rule = self._exclusions.get(key)
        if rule is None:
            rule = ExclusionRule(key=key)
            self._exclusions[key] = rule
        return rule

    def build(self) -> RuleTable:
        """Validate the pending rules and freeze them into a RuleTable.

        Raises:
            ConfigurationError: On a partial bounding box or an ambiguous
                wildcard policy
        """
        bbox = None
        if self._bounds:
            missing = [name for name in BBOX_NAMES if name not in self._bounds]
            if missing:
                raise ConfigurationError(
                    f"bounding box is missing {', '.join(missing)}"
                )
            bbox = BoundingBoxFilter(
                min_lat=self._bounds['min_lat'],
                min_lon=self._bounds['min_lon'],
                max_lat=self._bounds['max_lat'],
                max_lon=self._bounds['max_lon']
            )
        return RuleTable(self._inclusions, self._exclusions, bbox)


def load_rule_table(file_path: Union[str, Path]) -> RuleTable:
    """Load a rule description file into a RuleTable."""
    return RuleDescriptionParser().parse_file(file_path)
