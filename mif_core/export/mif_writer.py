"""MapInfo Interchange (MIF/MID) export.

``<base>.mif`` holds the header and one geometry block per record;
``<base>.mid`` holds the matching attribute row for each block, in the
same order.
"""
import csv
from typing import List, Optional, TextIO

from mif_core.exceptions import OutputWriteError
from mif_core.export.base import BaseRecordWriter
from mif_core.models.features import MifRecord
from mif_core.utils.text_utils import unescape_entities

MIF_HEADER = [
    'Version 300',
    'Charset "Neutral"',
    'Delimiter ","',
    'CoordSys Earth Projection 1, 74 Bounds (-1000, -1000) (1000, 1000)',
]

# 15 significant digits
COORD_FORMAT = '%.15g'


def format_coordinate(lat: float, lon: float) -> str:
    """Format a coordinate as a MIF 'x y' line (longitude first)."""
    return f"{COORD_FORMAT % lon} {COORD_FORMAT % lat}"


class MifMidWriter(BaseRecordWriter):
    """Export records to a MIF/MID file pair."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.mif_path = f"{self.base_path}.mif"
        self.mid_path = f"{self.base_path}.mid"
        self._mif: Optional[TextIO] = None
        self._mid: Optional[TextIO] = None
        self._mid_writer = None

    def get_format_name(self) -> str:
        return 'mif'

    def output_files(self) -> List[str]:
        return [self.mif_path, self.mid_path]

    def open(self) -> None:
        try:
            self._mid = open(self.mid_path, 'w', encoding='utf-8', newline='')
            self._mif = open(self.mif_path, 'w', encoding='utf-8', newline='')
        except OSError as e:
            self.close()
            raise OutputWriteError(
                f"Could not open {e.filename} for writing: {e.strerror}"
            )

        self._mid_writer = csv.writer(self._mid, quoting=csv.QUOTE_ALL,
                                      lineterminator='\n')
        self._write_header()

    def _write_header(self) -> None:
        columns = self.output_columns
        lines = list(MIF_HEADER)
        lines.append(f"Columns {len(columns)}")
        for name, column_type in columns:
            lines.append(f"    {name} {column_type}")
        lines.append('Data')
        self._mif.write('\n'.join(lines) + '\n')

    def geometry_lines(self, record: MifRecord) -> List[str]:
        """Build the MIF geometry block for a record.

        Returns:
            Lines of the block without terminators
        """
        if record.is_region:
            lines = ['Region 1', f"  {record.point_count}"]
        else:
            lines = [f"Pline {record.point_count}"]
        lines.extend(format_coordinate(lat, lon) for lat, lon in record.coordinates)
        lines.append(f"\t{record.style}")
        return lines

    def attribute_row(self, record: MifRecord) -> List[str]:
        """Build the MID attribute row for a record, in column order."""
        row = [unescape_entities(record.values.get(name, ''))
               for name, _ in self.columns]
        if self.write_restrictions:
            row.append(record.restrictions or '')
        return row

    def write_record(self, record: MifRecord) -> None:
        try:
            self._mif.write('\n'.join(self.geometry_lines(record)) + '\n')
            self._mid_writer.writerow(self.attribute_row(record))
        except OSError as e:
            raise OutputWriteError(f"Could not write to {self.base_path}: {e.strerror}")

    def flush(self) -> None:
        for f in (self._mif, self._mid):
            if f is not None:
                f.flush()

    def close(self) -> None:
        for f in (self._mif, self._mid):
            if f is not None:
                f.close()
        self._mif = None
        self._mid = None
