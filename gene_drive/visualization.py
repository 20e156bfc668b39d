"""
Visualization for gene drive runs.

Plots allele-frequency and population-size trajectories from the
per-generation statistics.
"""

import matplotlib.pyplot as plt
from typing import List, Optional, Tuple

from .config_loader import Architecture
from .statistics import GenerationStats


class TrajectoryVisualizer:
    """Multi-panel trajectory plots for one simulation run"""

    def __init__(self, history: List[GenerationStats], architecture: Architecture):
        self.history = history
        self.architecture = architecture
        self.allele_colors = {
            "drive": "red",
            "wild_type": "blue",
            "r1": "green",
            "r2": "black",
        }

    def generations(self) -> List[int]:
        return [stats.generation for stats in self.history]

    def plot_frequencies(self, ax):
        """Plot allele frequencies (or per-locus drive frequencies) over time"""
        gens = self.generations()

        if self.architecture is Architecture.TWO_LOCUS_UNDERDOMINANCE:
            ax.plot(gens, [s.locus1_drive_frequency for s in self.history],
                    color="red", label="Locus 1 drive")
            ax.plot(gens, [s.locus2_drive_frequency for s in self.history],
                    color="orange", label="Locus 2 drive")
        else:
            ax.plot(gens, [s.drive_frequency for s in self.history],
                    color=self.allele_colors["drive"], label="Drive")
            ax.plot(gens, [s.wild_type_frequency for s in self.history],
                    color=self.allele_colors["wild_type"], label="Wild type")

        ax.plot(gens, [s.r1_frequency for s in self.history],
                color=self.allele_colors["r1"], linestyle="--", label="R1")
        ax.plot(gens, [s.r2_frequency for s in self.history],
                color=self.allele_colors["r2"], linestyle=":", label="R2")
        ax.plot(gens, [s.carrier_rate for s in self.history],
                color="purple", alpha=0.5, label="Carrier rate")

        ax.set_ylim(-0.02, 1.02)
        ax.set_ylabel("Frequency")
        ax.set_title(f"Allele Frequencies ({self.architecture.value})")
        ax.legend(loc="best", fontsize=8)
        ax.grid(True, alpha=0.3)

    def plot_population(self, ax):
        """Plot population size and sex composition over time"""
        gens = self.generations()
        ax.plot(gens, [s.population_size for s in self.history], color="black", label="Total")
        ax.plot(gens, [s.females for s in self.history], color="magenta", alpha=0.7, label="Females")
        ax.plot(gens, [s.males for s in self.history], color="teal", alpha=0.7, label="Males")
        ax.set_xlabel("Generation")
        ax.set_ylabel("Individuals")
        ax.set_title("Population Size")
        ax.legend(loc="best", fontsize=8)
        ax.grid(True, alpha=0.3)

    def plot_trajectories(self,
                          figsize: Tuple[int, int] = (10, 8),
                          save_path: Optional[str] = None):
        """
        Create the two-panel trajectory figure

        Args:
            figsize: Figure size (width, height)
            save_path: Optional path to save the figure

        Returns:
            The matplotlib Figure
        """
        fig, (ax_freq, ax_pop) = plt.subplots(2, 1, figsize=figsize, sharex=True)
        self.plot_frequencies(ax_freq)
        self.plot_population(ax_pop)
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches="tight")
            print(f"  Saved visualization: {save_path}")

        return fig
