"""
Drone Navigator
Chooses safe discrete-heading moves for a drone flying towards a target
inside a geofenced area with no-fly zones.
"""

from .config import (
    DEFAULT_CONFIG,
    HEADINGS,
    HOVER_HEADING,
    NavigatorConfig,
    configure_logging,
    load_config,
)
from .exceptions import (
    InvalidGeometryError,
    InvalidHeadingError,
    NavigatorError,
    NoValidMoveError,
)
from .models import FlightResult, GeoPolygon, Geofence, LongLat, Move
from .validator import CrossingPolicy, MoveCheck, check_move, is_valid_move
from .problem import FlightProblem
from .strategies import (
    HeadingStrategy,
    AlternatingHeadingSearch,
    DirectHeading,
    candidate_headings,
    estimate_heading,
    move_drone,
    valid_angle,
)
from .analyzer import FlightAnalyzer

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "HEADINGS",
    "HOVER_HEADING",
    "NavigatorConfig",
    "configure_logging",
    "load_config",
    "NavigatorError",
    "InvalidHeadingError",
    "InvalidGeometryError",
    "NoValidMoveError",
    "LongLat",
    "GeoPolygon",
    "Geofence",
    "Move",
    "FlightResult",
    "CrossingPolicy",
    "MoveCheck",
    "check_move",
    "is_valid_move",
    "FlightProblem",
    "HeadingStrategy",
    "AlternatingHeadingSearch",
    "DirectHeading",
    "candidate_headings",
    "estimate_heading",
    "move_drone",
    "valid_angle",
    "FlightAnalyzer",
]
