"""
Flight problem definition and utilities.
"""

from typing import Iterable, Optional
import random

from .config import DEFAULT_CONFIG, NavigatorConfig
from .models import Geofence, LongLat, PolygonLike


class FlightProblem:
    """
    A single flight: start position, target and the geofence to respect.
    """

    def __init__(self, start: LongLat, target: LongLat, geofence: Geofence):
        """
        Initialize a flight problem.

        Args:
            start: Position the drone takes off from
            target: Position the drone should reach
            geofence: Confinement area and no-fly zones
        """
        self.start = start
        self.target = target
        self.geofence = geofence

    @staticmethod
    def generate_random_problem(
        config: NavigatorConfig = DEFAULT_CONFIG,
        no_fly_zones: Iterable[PolygonLike] = (),
        seed: Optional[int] = None
    ) -> 'FlightProblem':
        """
        Generate a random flight inside the configured confinement box.

        Args:
            config: Supplies the confinement box
            no_fly_zones: Vertex lists of no-fly zones to add to the geofence
            seed: Random seed for reproducibility

        Returns:
            FlightProblem with random start and target positions
        """
        rng = random.Random(seed)
        box = config.confinement

        def random_point() -> LongLat:
            return LongLat(
                longitude=rng.uniform(box.west, box.east),
                latitude=rng.uniform(box.south, box.north)
            )

        return FlightProblem(
            start=random_point(),
            target=random_point(),
            geofence=Geofence.from_bounds(config, no_fly_zones)
        )

    def straight_line_distance(self) -> float:
        """Distance between start and target, ignoring the geofence."""
        return self.start.distance_to(self.target)

    def __repr__(self) -> str:
        return f"FlightProblem(start={self.start}, target={self.target}, geofence={self.geofence})"
