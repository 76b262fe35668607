"""Conversion statistics data model."""
from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class ConversionStats:
    """Counts gathered over both passes of a conversion run.

    Every node read is either retained or skipped, and every way read in
    the emit pass either produced at least one record or was skipped for
    exactly one reason.
    """
    # Index pass
    lines_read: int = 0
    nodes_read: int = 0
    nodes_retained: int = 0
    relations_read: int = 0
    relations_indexed: int = 0

    # Emit pass
    ways_read: int = 0
    ways_written: int = 0
    ways_excluded: int = 0
    ways_unmatched: int = 0
    ways_too_short: int = 0
    records_written: int = 0

    # Turn restrictions
    restrictions_found: int = 0
    restrictions_written: int = 0

    # Timing
    index_time: float = 0.0
    emit_time: float = 0.0

    @property
    def nodes_skipped(self) -> int:
        """Nodes outside the bounding box."""
        return self.nodes_read - self.nodes_retained

    @property
    def ways_skipped(self) -> int:
        """Ways that produced no record, for any reason."""
        return self.ways_excluded + self.ways_unmatched + self.ways_too_short

    @property
    def processing_time(self) -> float:
        return self.index_time + self.emit_time

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary representation.

        Returns:
            Dict with all statistics
        """
        return {
            'nodes': {
                'read': self.nodes_read,
                'retained': self.nodes_retained,
                'skipped': self.nodes_skipped
            },
            'ways': {
                'read': self.ways_read,
                'written': self.ways_written,
                'skipped': self.ways_skipped,
                'excluded': self.ways_excluded,
                'unmatched': self.ways_unmatched,
                'too_short': self.ways_too_short
            },
            'records_written': self.records_written,
            'relations': {
                'read': self.relations_read,
                'indexed': self.relations_indexed,
                'restrictions_found': self.restrictions_found,
                'restrictions_written': self.restrictions_written
            },
            'metadata': {
                'lines_read': self.lines_read,
                'index_time': self.index_time,
                'emit_time': self.emit_time,
                'processing_time': self.processing_time
            }
        }
