"""Record writers for the supported output formats."""

from mif_core.export.base import BaseRecordWriter, RESTRICTIONS_COLUMN
from mif_core.export.mif_writer import MifMidWriter

# Shapefile writer raises ImportError on use when pyshp is missing
from mif_core.export.shapefile_writer import ShapefileRecordWriter, shapefile_available

__all__ = [
    'BaseRecordWriter', 'RESTRICTIONS_COLUMN', 'MifMidWriter',
    'ShapefileRecordWriter', 'shapefile_available', 'create_writer',
]


def create_writer(output_format: str, *args, **kwargs) -> BaseRecordWriter:
    """Create the writer for an output format ('mif' or 'shapefile')."""
    if output_format == 'mif':
        return MifMidWriter(*args, **kwargs)
    if output_format == 'shapefile':
        return ShapefileRecordWriter(*args, **kwargs)
    raise ValueError(f"Unsupported output format: {output_format}")
