"""Conversion options.

The rule description carries the domain configuration (which tags, which
styles, the bounding box); ConversionOptions carries the run settings.
"""
from dataclasses import dataclass

DEFAULT_STYLE = "Pen (2,54,32768)"
DEFAULT_GEOMETRY_TYPE = "Pline"
DEFAULT_COLUMN_TYPE = "Char(250)"

# Lines of at least this many bytes are unreadable
MAX_LINE_LENGTH = 100000

# Output writers are flushed every this many records
FLUSH_INTERVAL = 10000

OUTPUT_FORMATS = ('mif', 'shapefile')


@dataclass
class ConversionOptions:
    """Settings for a single conversion run."""
    process_relations: bool = True
    output_format: str = 'mif'
    flush_interval: int = FLUSH_INTERVAL
    default_style: str = DEFAULT_STYLE
    default_geometry_type: str = DEFAULT_GEOMETRY_TYPE
    max_line_length: int = MAX_LINE_LENGTH

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Output format must be one of: {', '.join(OUTPUT_FORMATS)}"
            )
        if self.flush_interval < 1:
            raise ValueError("Flush interval must be positive")
        if self.max_line_length < 1:
            raise ValueError("Maximum line length must be positive")
