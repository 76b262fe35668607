"""Shapefile export functionality.

Requires pyshp: pip install osm2mif[shapefile]

Shapefiles require homogeneous geometry types, so records are split by
geometry type:
- {basename}_lines.shp for polyline records
- {basename}_regions.shp for region records
"""
from typing import Dict, List, Optional

from mif_core.exceptions import OutputWriteError
from mif_core.export.base import BaseRecordWriter
from mif_core.models.features import MifRecord
from mif_core.utils.geo_utils import ensure_winding_order
from mif_core.utils.text_utils import unescape_entities

# Optional import - graceful handling if pyshp not installed
try:
    import shapefile
    HAS_PYSHP = True
except ImportError:
    HAS_PYSHP = False
    shapefile = None


# WGS84 projection definition for .prj file
WGS84_PRJ = (
    'GEOGCS["GCS_WGS_1984",DATUM["D_WGS_1984",'
    'SPHEROID["WGS_1984",6378137,298.257223563]],'
    'PRIMEM["Greenwich",0],UNIT["Degree",0.017453292519943295]]'
)


class ShapefileRecordWriter(BaseRecordWriter):
    """Export records to ESRI Shapefiles.

    Each shapefile includes .shp, .shx, .dbf and a WGS84 .prj. Every
    column becomes a character field; names are truncated to the DBF
    limit and made unique.

    Requires pyshp: pip install osm2mif[shapefile]
    """

    # Maximum field name length for DBF format
    MAX_FIELD_NAME = 10

    # Maximum character field width for DBF format
    MAX_FIELD_WIDTH = 254

    def __init__(self, *args, **kwargs):
        """Initialize Shapefile writer.

        Raises:
            ImportError: If pyshp is not installed
        """
        if not HAS_PYSHP:
            raise ImportError(
                "pyshp is required for Shapefile export. "
                "Install with: pip install osm2mif[shapefile]"
            )
        super().__init__(*args, **kwargs)
        self.lines_path = f"{self.base_path}_lines"
        self.regions_path = f"{self.base_path}_regions"
        self.field_mapping: Dict[str, str] = {}
        self._writers: Dict[str, Optional['shapefile.Writer']] = {}
        self._counts = {'lines': 0, 'regions': 0}

    def get_format_name(self) -> str:
        return 'shapefile'

    def output_files(self) -> List[str]:
        return [f"{self.lines_path}.shp", f"{self.regions_path}.shp"]

    def open(self) -> None:
        self.field_mapping = {}
        for name, _ in self.output_columns:
            self.field_mapping[name] = self._truncate_field_name(
                name, self.field_mapping.values()
            )
        try:
            self._writers['lines'] = self._create_writer(self.lines_path, shapefile.POLYLINE)
            self._writers['regions'] = self._create_writer(self.regions_path, shapefile.POLYGON)
        except OSError as e:
            raise OutputWriteError(f"Could not open {e.filename} for writing: {e.strerror}")

    def _create_writer(self, path: str, geom_type: int) -> 'shapefile.Writer':
        w = shapefile.Writer(path, shapeType=geom_type)
        for name in self.field_mapping.values():
            w.field(name, 'C', self.MAX_FIELD_WIDTH)
        with open(f"{path}.prj", 'w', encoding='utf-8') as prj:
            prj.write(WGS84_PRJ)
        return w

    def _truncate_field_name(self, name: str, existing) -> str:
        """Truncate field name to DBF limit, ensuring uniqueness.

        Args:
            name: Original field name
            existing: Already used truncated names

        Returns:
            Unique truncated field name (max 10 chars)
        """
        existing = list(existing)
        truncated = name[:self.MAX_FIELD_NAME]
        if truncated not in existing:
            return truncated

        counter = 1
        while True:
            suffix = str(counter)
            max_base = self.MAX_FIELD_NAME - len(suffix)
            candidate = f"{name[:max_base]}{suffix}"
            if candidate not in existing:
                return candidate
            counter += 1

    def write_record(self, record: MifRecord) -> None:
        points = [[lon, lat] for lat, lon in record.coordinates]
        if record.is_region:
            writer = self._writers['regions']
            writer.poly([ensure_winding_order(points, 'cw')])
            self._counts['regions'] += 1
        else:
            writer = self._writers['lines']
            writer.line([points])
            self._counts['lines'] += 1

        attributes = {}
        for name, _ in self.columns:
            value = unescape_entities(record.values.get(name, ''))
            attributes[self.field_mapping[name]] = value[:self.MAX_FIELD_WIDTH]
        if self.write_restrictions:
            restrictions = record.restrictions or ''
            attributes[self.field_mapping['Restrictions']] = restrictions[:self.MAX_FIELD_WIDTH]
        writer.record(**attributes)

    def flush(self) -> None:
        # Headers are only finalised on close; this flushes the shape bodies
        for writer in self._writers.values():
            if writer is None:
                continue
            for f in (writer.shp, writer.shx, writer.dbf):
                if f is not None:
                    f.flush()

    def close(self) -> None:
        for key, writer in self._writers.items():
            if writer is not None:
                writer.close()
            self._writers[key] = None

    def build_metadata(self):
        metadata = super().build_metadata()
        metadata['lines_exported'] = self._counts['lines']
        metadata['regions_exported'] = self._counts['regions']
        return metadata

    @staticmethod
    def is_available() -> bool:
        """Check if pyshp is installed."""
        return HAS_PYSHP


def shapefile_available() -> bool:
    """Check if shapefile export is available.

    Returns:
        True if pyshp is installed
    """
    return HAS_PYSHP
