"""Data models for OSM elements, output records and run statistics."""

from mif_core.models.elements import Coordinate, TurnRestriction, WaySegment
from mif_core.models.features import MifRecord
from mif_core.models.statistics import ConversionStats

__all__ = ['Coordinate', 'TurnRestriction', 'WaySegment', 'MifRecord', 'ConversionStats']
