"""
Heading strategies for choosing each move of a drone.

Headings follow the mathematical convention: 0 degrees points along
increasing longitude and angles grow counter-clockwise.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Union
import math
import time

import structlog

from .config import DEFAULT_CONFIG, HEADINGS, NavigatorConfig
from .exceptions import NoValidMoveError
from .models import FlightResult, Geofence, LongLat, Move
from .problem import FlightProblem
from .validator import CrossingPolicy, as_policy, is_valid_move

log = structlog.get_logger()


def valid_angle(angle: int) -> int:
    """Wrap an angle into [0, 360)."""
    return angle % 360


def estimate_heading(current: LongLat, target: LongLat) -> int:
    """
    Bearing from ``current`` to ``target`` rounded to the nearest 10 degrees.

    Ties round up; 355 and above wrap to 0.
    """
    lng_difference = target.longitude - current.longitude
    lat_difference = target.latitude - current.latitude

    angle = math.degrees(math.atan2(lat_difference, lng_difference))
    if angle < 0:
        angle += 360

    return valid_angle(int(math.floor(angle / 10 + 0.5)) * 10)


def candidate_headings(initial: int, previous: Optional[int] = None) -> Iterator[int]:
    """
    Headings to try, widening alternately either side of ``initial``.

    The order is initial, +10, -10, +20, -20, ... up to +180. The reversal
    of ``previous`` is never produced: when the sweep lands on it, it moves
    10 degrees further in the same direction instead. Each heading is
    produced at most once, so no more than 36 are produced in total.
    """
    reversal = valid_angle(previous + 180) if previous in HEADINGS else None
    tried = set()

    for offset in range(0, 190, 10):
        signs = (1,) if offset in (0, 180) else (1, -1)
        for sign in signs:
            heading = valid_angle(initial + sign * offset)
            if heading == reversal:
                heading = valid_angle(heading + sign * 10)
            if heading in tried or heading == reversal:
                continue
            tried.add(heading)
            yield heading


class HeadingStrategy(ABC):
    """Base class for heading strategies."""

    def __init__(self, config: NavigatorConfig = DEFAULT_CONFIG):
        """
        Args:
            config: Movement, search and policy settings
        """
        self.config = config

    @abstractmethod
    def choose_move(self, position: LongLat, target: LongLat, geofence: Geofence) -> Move:
        """
        Choose the next move towards ``target``.

        Args:
            position: Current drone position, carrying the previous heading
            target: Position to fly towards
            geofence: Constraints the move must respect

        Returns:
            The accepted Move

        Raises:
            NoValidMoveError: If no allowed heading exists
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return the name of the strategy."""
        pass

    def next_position(self, position: LongLat, target: LongLat, geofence: Geofence) -> LongLat:
        """Position after the next move towards ``target``."""
        return self.choose_move(position, target, geofence).end

    def solve(self, problem: FlightProblem) -> FlightResult:
        """
        Fly from the problem's start towards its target.

        Stops when the target is within the distance tolerance, when the move
        budget is spent, or when no safe heading is left.
        """
        start_time = time.time()
        max_moves = self.config.search.max_moves

        position = problem.start
        moves: List[Move] = []
        error = None

        while not position.close_to(problem.target, self.config) and len(moves) < max_moves:
            try:
                move = self.choose_move(position, problem.target, problem.geofence)
            except NoValidMoveError as e:
                log.warning("flight_blocked", strategy=self.get_name(), moves=len(moves), tried=len(e.tried))
                error = str(e)
                break
            moves.append(move)
            position = move.end

        reached = position.close_to(problem.target, self.config)
        if not reached and error is None:
            log.warning("move_budget_exhausted", strategy=self.get_name(), max_moves=max_moves)

        computation_time = time.time() - start_time
        log.info(
            "flight_finished",
            strategy=self.get_name(),
            moves=len(moves),
            reached=reached,
        )

        return FlightResult(
            start=problem.start,
            target=problem.target,
            moves=moves,
            reached=reached,
            strategy_name=self.get_name(),
            computation_time=computation_time,
            error=error,
            metadata={"max_moves": max_moves}
        )


class AlternatingHeadingSearch(HeadingStrategy):
    """Flies the heading nearest to the target that yields an allowed move."""

    def __init__(
        self,
        config: NavigatorConfig = DEFAULT_CONFIG,
        policy: Optional[Union[CrossingPolicy, str]] = None
    ):
        """
        Args:
            config: Movement, search and policy settings
            policy: Overrides the configured crossing policy
        """
        super().__init__(config)
        self.policy = as_policy(policy if policy is not None else config.search.crossing_policy)

    def get_name(self) -> str:
        name = "Alternating Heading Search"
        if self.policy is CrossingPolicy.ANY:
            name += " (strict)"
        return name

    def choose_move(self, position: LongLat, target: LongLat, geofence: Geofence) -> Move:
        initial = estimate_heading(position, target)
        tried = []

        for heading in candidate_headings(initial, position.heading):
            candidate = position.next_position(heading, self.config)
            tried.append(heading)
            if is_valid_move(position, candidate, geofence, self.policy):
                if len(tried) > 1:
                    log.debug("heading_adjusted", desired=initial, heading=heading, attempts=len(tried))
                return Move(position, candidate, attempts=len(tried))
            log.debug("heading_rejected", heading=heading)

        raise NoValidMoveError(position, target, tried)


class DirectHeading(HeadingStrategy):
    """Always flies the heading nearest to the target, without searching."""

    def __init__(
        self,
        config: NavigatorConfig = DEFAULT_CONFIG,
        policy: Optional[Union[CrossingPolicy, str]] = None
    ):
        super().__init__(config)
        self.policy = as_policy(policy if policy is not None else config.search.crossing_policy)

    def get_name(self) -> str:
        return "Direct Heading"

    def choose_move(self, position: LongLat, target: LongLat, geofence: Geofence) -> Move:
        heading = estimate_heading(position, target)
        candidate = position.next_position(heading, self.config)
        if not is_valid_move(position, candidate, geofence, self.policy):
            raise NoValidMoveError(position, target, [heading])
        return Move(position, candidate)


def move_drone(
    position: LongLat,
    target: LongLat,
    geofence: Geofence,
    config: NavigatorConfig = DEFAULT_CONFIG
) -> LongLat:
    """Position after one alternating-search move from ``position`` towards ``target``."""
    return AlternatingHeadingSearch(config).next_position(position, target, geofence)
