"""
Move validation against the geofence.

A move is the straight segment between two positions. It is tested against
every edge of the confinement ring and of each no-fly ring; touching an
edge, including at an endpoint or along a collinear stretch, counts as
crossing it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from shapely.geometry import LineString, Point

from .models import Geofence, LongLat


class CrossingPolicy(Enum):
    """Which boundary crossings make a move invalid."""

    # Reject only a move that crosses the confinement boundary and a no-fly edge together
    ALL = "all"
    # Reject a move that crosses either boundary
    ANY = "any"


@dataclass(frozen=True)
class MoveCheck:
    """Boundary crossings found for a single move."""
    crosses_confinement: bool
    crosses_no_fly_zone: bool

    def is_valid(self, policy: CrossingPolicy = CrossingPolicy.ALL) -> bool:
        if policy is CrossingPolicy.ANY:
            return not (self.crosses_confinement or self.crosses_no_fly_zone)
        return not (self.crosses_confinement and self.crosses_no_fly_zone)


def _segment(start: LongLat, end: LongLat) -> Union[LineString, Point]:
    if start.as_tuple() == end.as_tuple():
        return Point(start.as_tuple())
    return LineString([start.as_tuple(), end.as_tuple()])


def check_move(start: LongLat, end: LongLat, geofence: Geofence) -> MoveCheck:
    """
    Find which boundaries the move from ``start`` to ``end`` crosses.

    Args:
        start: Position before the move
        end: Position after the move
        geofence: Confinement area and no-fly zones

    Returns:
        MoveCheck with one flag per boundary category
    """
    segment = _segment(start, end)
    crosses_confinement = geofence.confinement.ring.intersects(segment)
    crosses_no_fly_zone = any(zone.ring.intersects(segment) for zone in geofence.no_fly_zones)
    return MoveCheck(crosses_confinement, crosses_no_fly_zone)


def as_policy(policy: Union[CrossingPolicy, str]) -> CrossingPolicy:
    """Accept a policy or its configured name ("all" / "any")."""
    if isinstance(policy, CrossingPolicy):
        return policy
    try:
        return CrossingPolicy(str(policy).lower())
    except ValueError:
        msg = f"Unknown crossing policy {policy!r}, expected one of {[p.value for p in CrossingPolicy]}"
        raise ValueError(msg) from None


def is_valid_move(
    start: LongLat,
    end: LongLat,
    geofence: Geofence,
    policy: Union[CrossingPolicy, str] = CrossingPolicy.ALL,
) -> bool:
    """Check whether the move from ``start`` to ``end`` is allowed under ``policy``."""
    return check_move(start, end, geofence).is_valid(as_policy(policy))
