"""
Tests for heading search and flight strategies.
"""

import math
import unittest

from drone_navigator.config import HEADINGS, HOVER_HEADING
from drone_navigator.exceptions import NoValidMoveError
from drone_navigator.models import Geofence, LongLat
from drone_navigator.problem import FlightProblem
from drone_navigator.strategies import (
    AlternatingHeadingSearch,
    DirectHeading,
    candidate_headings,
    estimate_heading,
    move_drone,
    valid_angle,
)
from tests.helpers import SQUARE, square_fence, unit_config

# Wall east of (5, 5); headings up to 60 degrees either side cross it
EAST_WALL = [(5.4, 4), (6.5, 4), (6.5, 6), (5.4, 6)]
# Shares the square's (0, 0) corner, so every move from that corner touches both rings
CORNER_ZONE = [(0, 0), (-1, -2), (-2, -1)]


def towards(origin: LongLat, degrees: float, distance: float = 3.0) -> LongLat:
    radians = math.radians(degrees)
    return LongLat(origin.longitude + distance * math.cos(radians),
                   origin.latitude + distance * math.sin(radians))


class TestHeadingHelpers(unittest.TestCase):
    """Test valid_angle, estimate_heading and candidate_headings."""

    def test_valid_angle(self):
        self.assertEqual(valid_angle(-10), 350)
        self.assertEqual(valid_angle(360), 0)
        self.assertEqual(valid_angle(725), 5)
        self.assertEqual(valid_angle(180), 180)

    def test_valid_angle_idempotent(self):
        for angle in range(-1000, 1000, 7):
            once = valid_angle(angle)
            self.assertTrue(0 <= once < 360)
            self.assertEqual(valid_angle(once), once)

    def test_estimate_heading_cardinal(self):
        origin = LongLat(5, 5)
        self.assertEqual(estimate_heading(origin, LongLat(8, 5)), 0)
        self.assertEqual(estimate_heading(origin, LongLat(5, 8)), 90)
        self.assertEqual(estimate_heading(origin, LongLat(2, 5)), 180)
        self.assertEqual(estimate_heading(origin, LongLat(5, 2)), 270)

    def test_estimate_heading_rounds_to_nearest_ten(self):
        origin = LongLat(5, 5)
        self.assertEqual(estimate_heading(origin, towards(origin, 44)), 40)
        self.assertEqual(estimate_heading(origin, towards(origin, 46)), 50)
        self.assertEqual(estimate_heading(origin, LongLat(6, 6)), 50)
        self.assertEqual(estimate_heading(origin, towards(origin, 214)), 210)

    def test_estimate_heading_wraps_to_zero(self):
        origin = LongLat(5, 5)
        self.assertEqual(estimate_heading(origin, towards(origin, 357)), 0)
        self.assertEqual(estimate_heading(origin, towards(origin, -3)), 0)

    def test_candidates_cover_every_heading_once(self):
        candidates = list(candidate_headings(90))
        self.assertEqual(candidates[:5], [90, 100, 80, 110, 70])
        self.assertEqual(len(candidates), 36)
        self.assertEqual(set(candidates), set(HEADINGS))
        self.assertEqual(candidates[-1], 270)

    def test_candidates_skip_reversal(self):
        candidates = list(candidate_headings(170, previous=0))
        self.assertEqual(candidates[:3], [170, 190, 160])
        self.assertNotIn(180, candidates)
        self.assertEqual(len(candidates), 35)
        self.assertEqual(len(set(candidates)), 35)

    def test_candidates_nudge_initial_reversal(self):
        candidates = list(candidate_headings(90, previous=270))
        self.assertEqual(candidates[0], 100)
        self.assertNotIn(90, candidates)

    def test_candidates_nudge_counter_clockwise(self):
        candidates = list(candidate_headings(0, previous=170))
        self.assertEqual(candidates[:3], [0, 10, 340])
        self.assertNotIn(350, candidates)
        self.assertEqual(len(candidates), 35)
        self.assertEqual(len(set(candidates)), 35)

    def test_hover_previous_has_no_reversal(self):
        self.assertEqual(len(list(candidate_headings(0, previous=HOVER_HEADING))), 36)


class TestAlternatingHeadingSearch(unittest.TestCase):
    """Test AlternatingHeadingSearch strategy."""

    def setUp(self):
        self.config = unit_config()
        self.strategy = AlternatingHeadingSearch(self.config)

    def test_direct_heading_when_clear(self):
        move = self.strategy.choose_move(LongLat(5, 5), LongLat(8, 5), square_fence())
        self.assertEqual(move.heading, 0)
        self.assertEqual(move.attempts, 1)
        self.assertAlmostEqual(move.end.longitude, 6.0)

    def test_never_reverses(self):
        position = LongLat(5, 5, heading=0)
        move = self.strategy.choose_move(position, LongLat(2, 5), square_fence())
        self.assertEqual(move.heading, 190)

    def test_searches_around_blocked_heading(self):
        strategy = AlternatingHeadingSearch(self.config, policy="any")
        move = strategy.choose_move(LongLat(5, 5), LongLat(8, 5), square_fence([EAST_WALL]))
        self.assertEqual(move.heading, 70)
        self.assertEqual(move.attempts, 14)

    def test_exhaustion_raises(self):
        fence = square_fence([CORNER_ZONE])
        with self.assertRaises(NoValidMoveError) as ctx:
            self.strategy.choose_move(LongLat(0, 0), LongLat(5, 5), fence)
        self.assertEqual(len(ctx.exception.tried), 36)
        self.assertEqual(set(ctx.exception.tried), set(HEADINGS))

    def test_exhaustion_without_reversal(self):
        fence = square_fence([CORNER_ZONE])
        with self.assertRaises(NoValidMoveError) as ctx:
            self.strategy.choose_move(LongLat(0, 0, heading=90), LongLat(5, 5), fence)
        self.assertEqual(len(ctx.exception.tried), 35)
        self.assertNotIn(270, ctx.exception.tried)

    def test_move_drone(self):
        position = move_drone(LongLat(5, 5), LongLat(5, 8), square_fence(), self.config)
        self.assertEqual(position.heading, 90)
        self.assertAlmostEqual(position.latitude, 6.0)

    def test_policy_from_config(self):
        strategy = AlternatingHeadingSearch(unit_config(crossing_policy="any"))
        self.assertIn("strict", strategy.get_name())


class TestSolve(unittest.TestCase):
    """Test flying a whole problem."""

    def setUp(self):
        self.config = unit_config(size=100.0)
        self.fence = Geofence.from_bounds(self.config)

    def test_reaches_target_in_open_area(self):
        problem = FlightProblem(LongLat(10, 10), LongLat(60, 40), self.fence)
        result = AlternatingHeadingSearch(self.config).solve(problem)
        self.assertTrue(result.reached)
        self.assertIsNone(result.error)
        self.assertTrue(result.final_position.close_to(problem.target, self.config))
        self.assertLess(len(result.moves), 70)

    def test_no_reversal_during_flight(self):
        config = unit_config(size=100.0, crossing_policy="any")
        fence = Geofence.from_bounds(config, [[(30, 28), (32, 28), (32, 32), (30, 32)]])
        problem = FlightProblem(LongLat(20, 30), LongLat(50, 30), fence)
        result = AlternatingHeadingSearch(config).solve(problem)
        self.assertTrue(result.reached)
        headings = [move.heading for move in result.moves]
        for previous, current in zip(headings, headings[1:]):
            self.assertNotEqual(abs(previous - current), 180)

    def test_already_at_target(self):
        problem = FlightProblem(LongLat(10, 10), LongLat(10.5, 10), self.fence)
        result = AlternatingHeadingSearch(self.config).solve(problem)
        self.assertTrue(result.reached)
        self.assertEqual(result.moves, [])

    def test_move_budget(self):
        config = unit_config(size=100.0, max_moves=3)
        problem = FlightProblem(LongLat(10, 10), LongLat(60, 40), self.fence)
        result = AlternatingHeadingSearch(config).solve(problem)
        self.assertFalse(result.reached)
        self.assertEqual(len(result.moves), 3)
        self.assertIsNone(result.error)

    def test_blocked_flight_records_error(self):
        fence = Geofence.from_coordinates(SQUARE, [CORNER_ZONE])
        problem = FlightProblem(LongLat(0, 0), LongLat(5, 5), fence)
        result = AlternatingHeadingSearch(unit_config()).solve(problem)
        self.assertFalse(result.reached)
        self.assertEqual(result.moves, [])
        self.assertIn("No safe heading", result.error)


class TestDirectHeading(unittest.TestCase):
    """Test DirectHeading strategy."""

    def test_blocked_heading_raises(self):
        config = unit_config()
        strategy = DirectHeading(config, policy="any")
        with self.assertRaises(NoValidMoveError) as ctx:
            strategy.choose_move(LongLat(5, 5), LongLat(8, 5), square_fence([EAST_WALL]))
        self.assertEqual(ctx.exception.tried, [0])

    def test_reaches_target_in_open_area(self):
        config = unit_config(size=100.0)
        problem = FlightProblem(LongLat(10, 10), LongLat(60, 40), Geofence.from_bounds(config))
        result = DirectHeading(config).solve(problem)
        self.assertTrue(result.reached)
        self.assertEqual(result.strategy_name, "Direct Heading")


if __name__ == '__main__':
    unittest.main()
