"""Two-pass OSM to MIF/MID conversion.

The input is read twice. The index pass stores node coordinates, node
usage counts, way node lists and turn restrictions. The emit pass
evaluates each way's tags against the rule table, cuts the way into
segments at junctions, annotates banned right turns and writes one
record per segment.
"""
import time
from pathlib import Path
from typing import Callable, List, Optional, Union

from mif_core.config import ConversionOptions
from mif_core.export import create_writer
from mif_core.export.base import BaseRecordWriter
from mif_core.index.entity_index import EntityIndex
from mif_core.index.index_builder import IndexBuilder
from mif_core.models.features import MifRecord
from mif_core.models.statistics import ConversionStats
from mif_core.network.segmenter import WaySegmenter
from mif_core.network.turn_restrictions import TurnRestrictionResolver
from mif_core.parsing.element_reader import (
    OSMElementHandler, open_osm_file, stream_osm_file
)
from mif_core.rules.rule_parser import load_rule_table
from mif_core.rules.rule_table import RuleTable
from mif_core.rules.way_context import EXCLUDED, WayContext

ProgressCallback = Callable[[str, int], None]
# (stage name, detail): ("index", input path) then ("emit", output paths)
StageCallback = Callable[[str, str], None]


class EmitPassHandler(OSMElementHandler):
    """SAX handler for the second pass: evaluate and write each way."""

    def __init__(self, rule_table: RuleTable, index: EntityIndex,
                 writer: BaseRecordWriter, options: ConversionOptions,
                 stats: ConversionStats,
                 progress: Optional[ProgressCallback] = None,
                 progress_interval: int = 100000):
        super().__init__()
        self.rule_table = rule_table
        self.index = index
        self.writer = writer
        self.options = options
        self.stats = stats
        self.progress = progress
        self.progress_interval = progress_interval

        self.segmenter = WaySegmenter(index)
        self.resolver = TurnRestrictionResolver(index, stats)
        self._way: Optional[WayContext] = None

    def on_way_start(self, attrs) -> None:
        way_id = self.int_attr(attrs, 'id', 'numeric way ID')
        self._way = WayContext(
            self.rule_table, way_id,
            default_style=self.options.default_style,
            default_geometry_type=self.options.default_geometry_type
        )
        self.stats.ways_read += 1
        if self.progress and self.stats.ways_read % self.progress_interval == 0:
            self.progress('ways', self.stats.ways_read)

    def on_tag(self, key: str, value: str) -> None:
        if self._way is not None:
            self._way.apply_tag(key, value)

    def on_way_end(self) -> None:
        way, self._way = self._way, None
        if way is None:
            return

        reason = way.skip_reason
        if reason == EXCLUDED:
            self.stats.ways_excluded += 1
            return
        if reason is not None:
            self.stats.ways_unmatched += 1
            return

        if self.emit_way(way) == 0:
            self.stats.ways_too_short += 1
        else:
            self.stats.ways_written += 1

    def emit_way(self, way: WayContext) -> int:
        """Write one record per segment of a way.

        Returns:
            Number of records written
        """
        written = 0
        for segment in self.segmenter.segments(way.way_id,
                                               break_up=not way.suppress_breakup):
            restrictions = None
            if self.options.process_relations:
                restrictions = self.resolver.annotate(segment)

            self.writer.write(MifRecord(
                way_id=way.way_id,
                geometry_type=way.geometry_type,
                style=way.style,
                coordinates=segment.coordinates,
                values=way.values,
                restrictions=restrictions
            ))
            written += 1

        self.stats.records_written += written
        return written


class OSMConverter:
    """Converts an OSM XML file to MIF/MID (or Shapefile) using a rule table."""

    def __init__(self, rule_table: RuleTable,
                 options: Optional[ConversionOptions] = None,
                 progress: Optional[ProgressCallback] = None):
        """Initialize converter.

        Args:
            rule_table: Rules deciding which ways are written and how
            options: Run settings (defaults if omitted)
            progress: Optional callback receiving (element kind, count)
        """
        self.rule_table = rule_table
        self.options = options or ConversionOptions()
        self.progress = progress
        self.stats = ConversionStats()
        self.index: Optional[EntityIndex] = None
        self.output_files: List[str] = []

    def build_index(self, input_path: Union[str, Path]) -> EntityIndex:
        """Run the index pass over the input.

        Args:
            input_path: Path to OSM XML file

        Returns:
            The populated EntityIndex
        """
        start_time = time.time()
        index = EntityIndex()
        handler = IndexBuilder(
            index,
            bbox=self.rule_table.bbox,
            process_relations=self.options.process_relations,
            stats=self.stats,
            progress=self.progress
        )
        self.stats.lines_read += stream_osm_file(
            input_path, handler, self.options.max_line_length
        )
        self.stats.index_time = time.time() - start_time
        self.index = index
        return index

    def emit(self, input_path: Union[str, Path], writer: BaseRecordWriter) -> None:
        """Run the emit pass, writing records through an open writer."""
        if self.index is None:
            raise RuntimeError("build_index() must run before emit()")

        start_time = time.time()
        handler = EmitPassHandler(
            self.rule_table, self.index, writer, self.options, self.stats,
            progress=self.progress
        )
        self.stats.lines_read += stream_osm_file(
            input_path, handler, self.options.max_line_length
        )
        self.stats.emit_time = time.time() - start_time

    def create_writer(self, output_base: Union[str, Path]) -> BaseRecordWriter:
        return create_writer(
            self.options.output_format,
            str(output_base),
            self.rule_table.column_types,
            write_restrictions=self.options.process_relations,
            flush_interval=self.options.flush_interval
        )

    def convert(self, input_path: Union[str, Path],
                output_base: Union[str, Path],
                on_stage: Optional[StageCallback] = None) -> ConversionStats:
        """Convert an OSM file.

        The input is opened first so a missing file leaves existing output
        alone. Output files are then created before the input is read, so an
        unwritable destination fails fast.

        Args:
            input_path: Path to OSM XML file
            output_base: Output path without extension
            on_stage: Optional callback told when each pass starts

        Returns:
            ConversionStats for the run
        """
        open_osm_file(input_path).close()

        with self.create_writer(output_base) as writer:
            self.output_files = writer.output_files()
            if on_stage:
                on_stage('index', str(input_path))
            self.build_index(input_path)
            if on_stage:
                on_stage('emit', ', '.join(self.output_files))
            self.emit(input_path, writer)
        return self.stats


def convert_file(input_path: Union[str, Path], rules_path: Union[str, Path],
                 output_base: Union[str, Path],
                 options: Optional[ConversionOptions] = None,
                 progress: Optional[ProgressCallback] = None) -> ConversionStats:
    """Load a rule description and convert an OSM file with it.

    Args:
        input_path: Path to OSM XML file
        rules_path: Path to rule description
        output_base: Output path without extension
        options: Run settings
        progress: Optional progress callback

    Returns:
        ConversionStats for the run
    """
    rule_table = load_rule_table(rules_path)
    converter = OSMConverter(rule_table, options, progress)
    return converter.convert(input_path, output_base)
