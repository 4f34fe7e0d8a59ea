"""
Analyzer for comparing and visualizing flight results.
"""

from typing import List, Dict, Any, Optional
import json

import numpy as np
from rich.console import Console
from rich.table import Table

from .models import FlightResult, Geofence


class FlightAnalyzer:
    """Analyzes and compares flights flown by different strategies."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the analyzer."""
        self.results: List[FlightResult] = []
        self.console = console or Console()

    def add_result(self, result: FlightResult):
        """Add a result to analyze."""
        self.results.append(result)

    def clear_results(self):
        """Clear all stored results."""
        self.results = []

    def compare_strategies(self) -> Dict[str, Any]:
        """
        Compare all stored results.

        Only flights that reached their target compete for fewest moves and
        shortest distance.

        Returns:
            Dictionary with comparison metrics
        """
        if not self.results:
            return {}

        comparison = {
            "strategies": [result.get_summary() for result in self.results],
            "fewest_moves": None,
            "shortest_distance": None,
            "fastest": None,
        }

        reached = [r for r in self.results if r.reached]
        if reached:
            comparison["fewest_moves"] = min(reached, key=lambda r: len(r.moves)).strategy_name
            comparison["shortest_distance"] = min(reached, key=lambda r: r.total_distance).strategy_name
        comparison["fastest"] = min(self.results, key=lambda r: r.computation_time).strategy_name

        return comparison

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistical summary of all results.

        Returns:
            Dictionary with statistical metrics
        """
        if not self.results:
            return {}

        moves = np.array([len(r.moves) for r in self.results], dtype=float)
        distances = np.array([r.total_distance for r in self.results])
        attempts = np.array([r.total_attempts for r in self.results], dtype=float)
        times = np.array([r.computation_time for r in self.results])

        def describe(values: np.ndarray) -> Dict[str, float]:
            return {
                "min": float(np.min(values)),
                "max": float(np.max(values)),
                "avg": float(np.mean(values)),
            }

        return {
            "num_flights": len(self.results),
            "reached_rate": float(np.mean([r.reached for r in self.results])),
            "moves": describe(moves),
            "distance": describe(distances),
            "attempts": describe(attempts),
            "computation_time": describe(times),
        }

    def print_comparison(self):
        """Print a formatted comparison of all results."""
        if not self.results:
            self.console.print("No results to compare.")
            return

        table = Table(title="Flight Strategy Comparison")
        table.add_column("Strategy", style="bold")
        table.add_column("Reached")
        table.add_column("Moves", justify="right")
        table.add_column("Attempts", justify="right")
        table.add_column("Distance", justify="right")
        table.add_column("Time (s)", justify="right")

        for result in self.results:
            table.add_row(
                result.strategy_name,
                "[green]yes[/green]" if result.reached else "[red]no[/red]",
                str(len(result.moves)),
                str(result.total_attempts),
                f"{result.total_distance:.6f}",
                f"{result.computation_time:.6f}",
            )

        comparison = self.compare_strategies()
        table.add_section()
        table.add_row("[b]Fewest Moves[/b]", comparison["fewest_moves"] or "-")
        table.add_row("[b]Shortest Distance[/b]", comparison["shortest_distance"] or "-")
        table.add_row("[b]Fastest[/b]", comparison["fastest"])

        self.console.print(table)

    def export_to_json(self, filepath: str):
        """
        Export results to JSON file.

        Args:
            filepath: Path to output JSON file
        """
        data = {
            "comparison": self.compare_strategies(),
            "statistics": self.get_statistics(),
            "results": [
                dict(result.get_summary(), path=result.coordinates().tolist())
                for result in self.results
            ]
        }

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    def visualize(self, geofence: Optional[Geofence] = None, save_path: Optional[str] = None):
        """
        Plot every flight path over the geofence.
        Requires matplotlib library.

        Args:
            geofence: Confinement area and no-fly zones to draw underneath
            save_path: Path to save the figure (if None, displays interactively)
        """
        try:
            import matplotlib.pyplot as plt
        except ImportError:
            self.console.print("matplotlib is required for visualization. Install it with: pip install matplotlib")
            return

        if not self.results:
            self.console.print("No results to visualize.")
            return

        fig, ax = plt.subplots(figsize=(8, 8))

        if geofence is not None:
            xs, ys = geofence.confinement.ring.xy
            ax.plot(xs, ys, 'k-', linewidth=1.5, label='Confinement')
            for zone in geofence.no_fly_zones:
                xs, ys = zone.ring.xy
                ax.fill(xs, ys, color='red', alpha=0.3)
                ax.plot(xs, ys, 'r-', linewidth=1)

        for result in self.results:
            coords = result.coordinates()
            ax.plot(coords[:, 0], coords[:, 1], '-', marker='.', markersize=3,
                    alpha=0.8, label=result.strategy_name)
            ax.scatter([result.target.longitude], [result.target.latitude],
                       c='green', marker='*', s=150)

        first = self.results[0]
        ax.scatter([first.start.longitude], [first.start.latitude],
                   c='blue', marker='^', s=100, label='Start')

        ax.set_xlabel("Longitude")
        ax.set_ylabel("Latitude")
        ax.set_aspect('equal', adjustable='datalim')
        ax.legend()
        ax.grid(True, alpha=0.3)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            self.console.print(f"Visualization saved to {save_path}")
        else:
            plt.show()
        plt.close(fig)
