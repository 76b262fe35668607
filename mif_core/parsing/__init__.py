"""Streaming OSM XML parsing."""

from mif_core.parsing.element_reader import OSMElementHandler, stream_osm_file

__all__ = ['OSMElementHandler', 'stream_osm_file']
