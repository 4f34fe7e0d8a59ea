"""
Basic example of using the drone navigator.
"""

from drone_navigator import (
    AlternatingHeadingSearch,
    FlightProblem,
    Geofence,
    LongLat,
    configure_logging,
    load_config,
)

# Rough outline of a building between the start and the target
LIBRARY = [
    (-3.18933, 55.94262),
    (-3.18890, 55.94262),
    (-3.18890, 55.94301),
    (-3.18933, 55.94301),
]


def main():
    config = load_config()
    configure_logging(config)

    print("=" * 80)
    print("Drone Navigator - Basic Example")
    print("=" * 80)

    geofence = Geofence.from_bounds(config, [LIBRARY])
    problem = FlightProblem(
        start=LongLat(-3.186874, 55.944494),  # Appleton Tower
        target=LongLat(-3.1912, 55.9432),
        geofence=geofence,
    )
    print(f"\n{problem}")

    strategy = AlternatingHeadingSearch(config)
    first = strategy.choose_move(problem.start, problem.target, geofence)
    print(f"First move: heading {first.heading} after {first.attempts} attempt(s)")

    result = strategy.solve(problem)
    print(f"Strategy: {result.strategy_name}")
    print(f"Reached: {result.reached}")
    print(f"Moves: {len(result.moves)}")
    print(f"Total Distance: {result.total_distance:.6f}")
    print(f"Computation Time: {result.computation_time:.6f}s")

    print("\n" + "=" * 80)
    print("Example completed!")
    print("=" * 80)


if __name__ == "__main__":
    main()
