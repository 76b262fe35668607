"""Geometric utility functions.

All functions work directly on raw latitude/longitude degrees, with
longitude as x and latitude as y. No projection is applied.
"""
import math
from typing import List

from mif_core.models.elements import Coordinate


def line_angle(from_coord: Coordinate, to_coord: Coordinate) -> float:
    """Angle of a directed edge with the horizontal, in radians.

    Args:
        from_coord: (lat, lon) of the edge start
        to_coord: (lat, lon) of the edge end

    Returns:
        atan2 of the edge's (dlat, dlon)
    """
    dx = to_coord[1] - from_coord[1]
    dy = to_coord[0] - from_coord[0]
    return math.atan2(dy, dx)


def normalize_angle(degrees: float) -> float:
    """Normalize an angle to the interval (-180, 180].

    Examples:
        >>> normalize_angle(270.0)
        -90.0
        >>> normalize_angle(-180.0)
        180.0
    """
    degrees = math.fmod(degrees, 360.0)
    if degrees > 180.0:
        degrees -= 360.0
    elif degrees <= -180.0:
        degrees += 360.0
    return degrees


def signed_turn_angle(line1_from: Coordinate, line1_to: Coordinate,
                      line2_from: Coordinate, line2_to: Coordinate) -> float:
    """Signed angle from the first edge's direction to the second's.

    Positive angles turn counter-clockwise (left), negative angles turn
    clockwise (right).

    Args:
        line1_from: (lat, lon) start of the first edge
        line1_to: (lat, lon) end of the first edge
        line2_from: (lat, lon) start of the second edge
        line2_to: (lat, lon) end of the second edge

    Returns:
        Angle in degrees within (-180, 180]
    """
    angle1 = line_angle(line1_from, line1_to)
    angle2 = line_angle(line2_from, line2_to)
    return normalize_angle(math.degrees(angle2 - angle1))


def is_right_turn(line1_from: Coordinate, line1_to: Coordinate,
                  line2_from: Coordinate, line2_to: Coordinate) -> bool:
    """Check if continuing from the first edge into the second turns right.

    Straight on (0) and a full reversal (180) are not right turns.

    Examples:
        >>> north = ((0.0, 0.0), (1.0, 0.0))
        >>> is_right_turn(*north, (1.0, 0.0), (1.0, 1.0))  # then east
        True
        >>> is_right_turn(*north, (1.0, 0.0), (1.0, -1.0))  # then west
        False
    """
    return signed_turn_angle(line1_from, line1_to, line2_from, line2_to) < 0


def get_signed_area(coordinates: List[List[float]]) -> float:
    """Calculate signed area of a ring using shoelace formula.

    Args:
        coordinates: List of [lon, lat] coordinate pairs

    Returns:
        Signed area (positive = CCW, negative = CW)
    """
    if len(coordinates) < 3:
        return 0.0

    area = 0.0
    n = len(coordinates)

    for i in range(n):
        j = (i + 1) % n
        area += coordinates[i][0] * coordinates[j][1]
        area -= coordinates[j][0] * coordinates[i][1]

    return area / 2.0


def ensure_winding_order(coordinates: List[List[float]],
                         desired: str = 'cw') -> List[List[float]]:
    """Ensure ring has the desired winding order.

    Args:
        coordinates: Ring coordinates as [[lon, lat], ...]
        desired: 'ccw' for counter-clockwise or 'cw' for clockwise

    Returns:
        Coordinates with correct winding (reversed if necessary)
    """
    if len(coordinates) < 3:
        return coordinates

    current = 'ccw' if get_signed_area(coordinates) > 0 else 'cw'
    if current != desired:
        return list(reversed(coordinates))
    return coordinates
