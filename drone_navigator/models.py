"""
Core data models for the drone navigator.

Coordinates are plain (longitude, latitude) degrees on a flat plane; the
operating area is small enough that no geodesic correction is applied.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
from shapely.geometry import LinearRing, Point, Polygon

from .config import DEFAULT_CONFIG, HEADINGS, HOVER_HEADING, NavigatorConfig
from .exceptions import InvalidGeometryError, InvalidHeadingError

Coordinate = Tuple[float, float]


def is_valid_heading(heading: Optional[int]) -> bool:
    """Return True for the 36 compass headings and the hover sentinel."""
    if isinstance(heading, bool):
        return False
    return heading == HOVER_HEADING or heading in HEADINGS


@dataclass(frozen=True)
class LongLat:
    """A point or drone position with the heading of the move that produced it.

    ``heading`` is ``None`` for a position that has not moved yet.
    """
    longitude: float
    latitude: float
    heading: Optional[int] = None

    def __post_init__(self):
        if self.heading is not None and not is_valid_heading(self.heading):
            raise InvalidHeadingError(self.heading)

    def is_confined(self, config: NavigatorConfig = DEFAULT_CONFIG) -> bool:
        """Check the point lies strictly inside the confinement box."""
        box = config.confinement
        return (
            box.south < self.latitude < box.north
            and box.west < self.longitude < box.east
        )

    def distance_to(self, other: LongLat) -> float:
        """Pythagorean distance in degrees to another point."""
        return math.hypot(self.longitude - other.longitude, self.latitude - other.latitude)

    def close_to(self, other: LongLat, config: NavigatorConfig = DEFAULT_CONFIG) -> bool:
        """Check whether the two points are within the distance tolerance."""
        return self.distance_to(other) < config.movement.distance_tolerance

    def next_position(self, heading: int, config: NavigatorConfig = DEFAULT_CONFIG) -> LongLat:
        """
        Position reached after one move at ``heading``.

        Args:
            heading: Multiple of 10 in [0, 350], or HOVER_HEADING to stay put
            config: Supplies the step length

        Returns:
            A new LongLat recording ``heading``

        Raises:
            InvalidHeadingError: If ``heading`` is not a legal heading
        """
        if heading == HOVER_HEADING:
            return replace(self, heading=HOVER_HEADING)
        if not is_valid_heading(heading):
            raise InvalidHeadingError(heading)

        step = config.movement.step_length
        radians = math.radians(heading)
        return LongLat(
            longitude=self.longitude + step * math.cos(radians),
            latitude=self.latitude + step * math.sin(radians),
            heading=int(heading),
        )

    def as_tuple(self) -> Coordinate:
        return (self.longitude, self.latitude)

    def __repr__(self) -> str:
        return f"LongLat({self.longitude:.6f}, {self.latitude:.6f}, heading={self.heading})"


@dataclass(frozen=True)
class GeoPolygon:
    """A closed ring of (longitude, latitude) vertices.

    The last vertex connects back to the first. A repeated closing vertex,
    as found in GeoJSON rings, is dropped.
    """
    vertices: Tuple[Coordinate, ...]
    name: str = ""

    def __post_init__(self):
        vertices = tuple((float(lon), float(lat)) for lon, lat in self.vertices)
        if len(vertices) > 1 and vertices[0] == vertices[-1]:
            vertices = vertices[:-1]
        if len(set(vertices)) < 3:
            raise InvalidGeometryError(
                f"Polygon {self.name!r} needs at least 3 distinct vertices, got {len(set(vertices))}"
            )
        object.__setattr__(self, "vertices", vertices)

    @cached_property
    def ring(self) -> LinearRing:
        """The polygon's edges as a closed shapely ring."""
        return LinearRing(self.vertices)

    @cached_property
    def shape(self) -> Polygon:
        return Polygon(self.vertices)

    def edges(self) -> List[Tuple[Coordinate, Coordinate]]:
        n = len(self.vertices)
        return [(self.vertices[i], self.vertices[(i + 1) % n]) for i in range(n)]

    def __len__(self) -> int:
        return len(self.vertices)


PolygonLike = Union[GeoPolygon, Sequence[Coordinate]]


def _as_polygon(polygon: PolygonLike, name: str = "") -> GeoPolygon:
    if isinstance(polygon, GeoPolygon):
        return polygon
    return GeoPolygon(tuple(polygon), name=name)


@dataclass(frozen=True)
class Geofence:
    """The confinement area plus the no-fly zones a drone must respect.

    Read-only once built; shared by reference between navigation calls.
    """
    confinement: GeoPolygon
    no_fly_zones: Tuple[GeoPolygon, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "no_fly_zones", tuple(self.no_fly_zones))

    @classmethod
    def from_coordinates(
        cls,
        confinement: PolygonLike,
        no_fly_zones: Iterable[PolygonLike] = (),
    ) -> Geofence:
        """
        Build a geofence from raw vertex lists.

        Args:
            confinement: Vertices of the confinement area
            no_fly_zones: Vertex lists (or GeoPolygons) of the no-fly zones

        Raises:
            InvalidGeometryError: If any ring has fewer than 3 vertices
        """
        zones = tuple(
            _as_polygon(zone, name=f"no-fly-{i}") for i, zone in enumerate(no_fly_zones)
        )
        return cls(_as_polygon(confinement, name="confinement"), zones)

    @classmethod
    def from_bounds(
        cls,
        config: NavigatorConfig = DEFAULT_CONFIG,
        no_fly_zones: Iterable[PolygonLike] = (),
    ) -> Geofence:
        """Build a geofence whose confinement area is the configured box."""
        return cls.from_coordinates(config.confinement.corners(), no_fly_zones)

    def contains(self, position: LongLat) -> bool:
        """Check the point is inside the confinement area and outside every no-fly zone."""
        point = Point(position.as_tuple())
        if not self.confinement.shape.covers(point):
            return False
        return not any(zone.shape.intersects(point) for zone in self.no_fly_zones)

    def __repr__(self) -> str:
        return f"Geofence(confinement={len(self.confinement)} vertices, no_fly_zones={len(self.no_fly_zones)})"


@dataclass(frozen=True)
class Move:
    """A single accepted step."""
    start: LongLat
    end: LongLat
    attempts: int = 1

    @property
    def heading(self) -> Optional[int]:
        return self.end.heading

    @property
    def distance(self) -> float:
        return self.start.distance_to(self.end)

    def __repr__(self) -> str:
        return f"Move(heading={self.heading}, attempts={self.attempts})"


@dataclass
class FlightResult:
    """Contains the moves flown from a start position towards one target."""
    start: LongLat
    target: LongLat
    moves: List[Move]
    reached: bool
    strategy_name: str
    computation_time: float = 0.0
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> List[LongLat]:
        """Every visited position, starting with the start position."""
        return [self.start] + [move.end for move in self.moves]

    @property
    def final_position(self) -> LongLat:
        return self.moves[-1].end if self.moves else self.start

    @property
    def total_distance(self) -> float:
        return sum(move.distance for move in self.moves)

    @property
    def total_attempts(self) -> int:
        return sum(move.attempts for move in self.moves)

    def coordinates(self) -> np.ndarray:
        """Visited positions as an (n, 2) array of longitude, latitude."""
        return np.array([position.as_tuple() for position in self.path], dtype=float)

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the flight."""
        return {
            "strategy": self.strategy_name,
            "reached": self.reached,
            "num_moves": len(self.moves),
            "total_distance": self.total_distance,
            "total_attempts": self.total_attempts,
            "remaining_distance": self.final_position.distance_to(self.target),
            "computation_time": self.computation_time,
            "error": self.error,
        }

    def __repr__(self) -> str:
        return (f"FlightResult(strategy={self.strategy_name}, "
                f"moves={len(self.moves)}, "
                f"reached={self.reached})")
