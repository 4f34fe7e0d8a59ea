"""
Shared fixtures for the navigator tests.
"""

from drone_navigator.config import ConfinementConfig, MovementConfig, NavigatorConfig, SearchConfig
from drone_navigator.models import Geofence

SQUARE = [(0, 0), (0, 10), (10, 10), (10, 0)]


def unit_config(
    size: float = 10.0,
    crossing_policy: str = "all",
    max_moves: int = 1500,
) -> NavigatorConfig:
    """Config with unit steps inside a size x size box at the origin."""
    return NavigatorConfig(
        movement=MovementConfig(step_length=1.0, distance_tolerance=1.0),
        confinement=ConfinementConfig(west=0.0, east=size, south=0.0, north=size),
        search=SearchConfig(crossing_policy=crossing_policy, max_moves=max_moves),
    )


def square_fence(no_fly_zones=()) -> Geofence:
    return Geofence.from_coordinates(SQUARE, no_fly_zones)
