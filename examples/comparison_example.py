"""
Example comparing heading strategies on random flights.
"""

from drone_navigator import (
    AlternatingHeadingSearch,
    DirectHeading,
    FlightAnalyzer,
    FlightProblem,
    load_config,
)

NO_FLY_ZONE = [
    (-3.18840, 55.94380),
    (-3.18760, 55.94380),
    (-3.18760, 55.94460),
    (-3.18840, 55.94460),
]


def main():
    config = load_config()

    print("=" * 80)
    print("Drone Navigator - Strategy Comparison")
    print("=" * 80)

    problem = FlightProblem.generate_random_problem(config, no_fly_zones=[NO_FLY_ZONE], seed=42)
    print(f"\n{problem}")

    analyzer = FlightAnalyzer()
    strategies = [
        AlternatingHeadingSearch(config),
        AlternatingHeadingSearch(config, policy="any"),
        DirectHeading(config),
        DirectHeading(config, policy="any"),
    ]

    print("\nFlying with different strategies...")
    for strategy in strategies:
        analyzer.add_result(strategy.solve(problem))
        print(f"  - {strategy.get_name()}")

    print()
    analyzer.print_comparison()

    stats = analyzer.get_statistics()
    print(f"\nReached rate: {stats['reached_rate']:.0%}")
    print(f"Moves: min {stats['moves']['min']:.0f}, max {stats['moves']['max']:.0f}, avg {stats['moves']['avg']:.1f}")

    analyzer.export_to_json("flight_comparison.json")
    print("Results exported to flight_comparison.json")

    analyzer.visualize(problem.geofence, save_path="flight_comparison.png")


if __name__ == "__main__":
    main()
