"""Base class for record writers.

Writers receive MifRecord objects one at a time during the emit pass and
flush their files at a fixed record cadence, so output buffering stays
bounded whatever the input size.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

from mif_core.config import FLUSH_INTERVAL
from mif_core.models.features import MifRecord

RESTRICTIONS_COLUMN = ('Restrictions', 'Char(250)')


class BaseRecordWriter(ABC):
    """Abstract base class for record writers."""

    def __init__(self, base_path: str, columns: List[Tuple[str, str]],
                 write_restrictions: bool = True,
                 flush_interval: int = FLUSH_INTERVAL):
        """Initialize writer.

        Args:
            base_path: Output path without extension
            columns: (name, type) pairs in output order
            write_restrictions: Append the Restrictions column
            flush_interval: Flush output every this many records
        """
        self.base_path = base_path
        self.columns = list(columns)
        self.write_restrictions = write_restrictions
        self.flush_interval = flush_interval
        self.records_written = 0

    @property
    def output_columns(self) -> List[Tuple[str, str]]:
        """All output columns including the Restrictions column."""
        if self.write_restrictions:
            return self.columns + [RESTRICTIONS_COLUMN]
        return list(self.columns)

    def write(self, record: MifRecord) -> None:
        """Write one record, flushing at the configured cadence."""
        self.write_record(record)
        self.records_written += 1
        if self.records_written % self.flush_interval == 0:
            self.flush()

    def __enter__(self) -> 'BaseRecordWriter':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @abstractmethod
    def open(self) -> None:
        """Create the output files and write any header.

        Raises:
            OutputWriteError: If an output file cannot be created
        """
        pass

    @abstractmethod
    def write_record(self, record: MifRecord) -> None:
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @abstractmethod
    def get_format_name(self) -> str:
        """Get the format name (e.g., 'mif', 'shapefile')."""
        pass

    @abstractmethod
    def output_files(self) -> List[str]:
        """Paths of the files this writer creates."""
        pass

    def build_metadata(self) -> Dict[str, Any]:
        return {
            'format': self.get_format_name(),
            'files': self.output_files(),
            'columns': len(self.output_columns),
            'records': self.records_written
        }
