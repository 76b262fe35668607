"""Junction segmentation and turn restriction resolution."""

from mif_core.network.segmenter import WaySegmenter
from mif_core.network.turn_restrictions import TurnRestrictionResolver

__all__ = ['WaySegmenter', 'TurnRestrictionResolver']
