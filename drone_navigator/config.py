"""
Navigator configuration.

Loads from navigator.yaml if present, with environment variable overrides.
Environment variables use the pattern: DRONE_NAV_<SECTION>_<KEY> (uppercase).

Default values describe the central Edinburgh delivery area: the confinement
box runs from Forrest Hill (west) to KFC (east) and from the Buccleuch St
bus stop (south) to KFC (north).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import structlog
import yaml

# Heading sentinel meaning "no displacement"
HOVER_HEADING = -999

# Every heading a drone may fly, in degrees (0 = east, counter-clockwise)
HEADINGS = tuple(range(0, 360, 10))

# Default movement settings (degrees of longitude/latitude)
STEP_LENGTH = 0.00015
DISTANCE_TOLERANCE = 0.00015

# Confinement box
FORREST_HILL_LONGITUDE = -3.192473
KFC_LONGITUDE = -3.184319
BUCCLEUCH_ST_BUS_STOP_LATITUDE = 55.942617
KFC_LATITUDE = 55.946233

# Moves available on a single battery charge
MAX_MOVES = 1500


@dataclass
class MovementConfig:
    step_length: float = STEP_LENGTH
    distance_tolerance: float = DISTANCE_TOLERANCE


@dataclass
class ConfinementConfig:
    west: float = FORREST_HILL_LONGITUDE
    east: float = KFC_LONGITUDE
    south: float = BUCCLEUCH_ST_BUS_STOP_LATITUDE
    north: float = KFC_LATITUDE

    def corners(self) -> list[tuple[float, float]]:
        """Return the box corners as (longitude, latitude), counter-clockwise from south-west."""
        return [
            (self.west, self.south),
            (self.east, self.south),
            (self.east, self.north),
            (self.west, self.north),
        ]


@dataclass
class SearchConfig:
    crossing_policy: str = "all"  # "all" or "any"
    max_moves: int = MAX_MOVES


@dataclass
class LoggingConfig:
    level: str = "info"
    format: str = "console"  # "console" or "json"


@dataclass
class NavigatorConfig:
    movement: MovementConfig = field(default_factory=MovementConfig)
    confinement: ConfinementConfig = field(default_factory=ConfinementConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = NavigatorConfig()


def _convert(section: object, key: str, value: object) -> object:
    """Coerce a raw config value to the type of the field's default."""
    field_type = type(getattr(section, key))
    if isinstance(value, field_type):
        return value
    try:
        return field_type(value)
    except (TypeError, ValueError):
        msg = f"Config value {key}={value!r} cannot be read as {field_type.__name__}"
        raise ValueError(msg) from None


def _apply_env_overrides(config: NavigatorConfig) -> None:
    """Override config values from environment variables."""
    mapping = {
        "DRONE_NAV_MOVEMENT_STEP_LENGTH": (config.movement, "step_length"),
        "DRONE_NAV_MOVEMENT_DISTANCE_TOLERANCE": (config.movement, "distance_tolerance"),
        "DRONE_NAV_CONFINEMENT_WEST": (config.confinement, "west"),
        "DRONE_NAV_CONFINEMENT_EAST": (config.confinement, "east"),
        "DRONE_NAV_CONFINEMENT_SOUTH": (config.confinement, "south"),
        "DRONE_NAV_CONFINEMENT_NORTH": (config.confinement, "north"),
        "DRONE_NAV_SEARCH_CROSSING_POLICY": (config.search, "crossing_policy"),
        "DRONE_NAV_SEARCH_MAX_MOVES": (config.search, "max_moves"),
        "DRONE_NAV_LOG_LEVEL": (config.logging, "level"),
        "DRONE_NAV_LOG_FORMAT": (config.logging, "format"),
    }
    for env_key, (section, key) in mapping.items():
        val = os.environ.get(env_key)
        if val is not None:
            setattr(section, key, _convert(section, key, val))


def load_config(config_path: Optional[Union[str, Path]] = None) -> NavigatorConfig:
    """Load configuration from YAML file + environment overrides."""
    config = NavigatorConfig()

    if config_path is None:
        config_path = Path("navigator.yaml")
    else:
        config_path = Path(config_path)

    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}

        for section_name in ("movement", "confinement", "search", "logging"):
            section = getattr(config, section_name)
            for k, v in (raw.get(section_name) or {}).items():
                if hasattr(section, k):
                    setattr(section, k, _convert(section, k, v))

    # Environment overrides always win
    _apply_env_overrides(config)
    return config


def configure_logging(config: NavigatorConfig = DEFAULT_CONFIG) -> None:
    """Configure structlog based on the logging config."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.logging.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.logging.level.upper()),
        ),
    )
