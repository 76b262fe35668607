"""
MIF Core - OpenStreetMap XML to MapInfo MIF/MID conversion.

This package converts the ways of an OSM XML extract into MapInfo
interchange files, selecting, styling and splitting them according to a
rule description and annotating banned right turns from restriction
relations.
"""

__version__ = "1.0.0"

# Exceptions
from mif_core.exceptions import (
    ConversionError, ConfigurationError, InputReadError, OutputWriteError, DataError
)

# Configuration
from mif_core.config import ConversionOptions

# Data models
from mif_core.models.elements import TurnRestriction, WaySegment
from mif_core.models.features import MifRecord
from mif_core.models.statistics import ConversionStats

# Rules
from mif_core.rules.bbox import BoundingBoxFilter
from mif_core.rules.rule_table import RuleTable
from mif_core.rules.rule_parser import RuleDescriptionParser, load_rule_table

# Main API
from mif_core.converter import OSMConverter, convert_file

__all__ = [
    # Version
    '__version__',
    # Exceptions
    'ConversionError', 'ConfigurationError', 'InputReadError',
    'OutputWriteError', 'DataError',
    # Configuration
    'ConversionOptions',
    # Models
    'TurnRestriction', 'WaySegment', 'MifRecord', 'ConversionStats',
    # Rules
    'BoundingBoxFilter', 'RuleTable', 'RuleDescriptionParser', 'load_rule_table',
    # API
    'OSMConverter', 'convert_file',
]
