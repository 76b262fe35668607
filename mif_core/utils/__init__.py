"""Utility functions for OSM processing."""

from mif_core.utils.geo_utils import is_right_turn, signed_turn_angle
from mif_core.utils.text_utils import unescape_entities

__all__ = ['is_right_turn', 'signed_turn_angle', 'unescape_entities']
