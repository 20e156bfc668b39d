"""
Orchestration module for the gene drive simulator.

Runs the generation loop as explicit phases over the population:
cull -> drop -> record -> mate-and-conceive (edit-and-gate) -> age -> admit.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional
import numpy as np

from .config_loader import DriveConfig
from .data_models import Individual, Population
from .lifecycle import age_population, cull, drop_drive_carriers, initialize_population
from .reproduction import reproduce
from .statistics import GenerationStats, compute_stats, format_report_line, format_summary


@dataclass
class GenerationReport:
    """
    Bookkeeping for a single generation step.

    Attributes:
        stats: Statistics of the breeding population
        culled: Adults removed at the start of the generation
        dropped: Drive carriers released this generation
        mated_females: Females that found an accepted mate
        conceived: Offspring conceived before the viability gate
        admitted: Viable offspring admitted to the population
    """
    stats: GenerationStats
    culled: int = 0
    dropped: int = 0
    mated_females: int = 0
    conceived: int = 0
    admitted: int = 0

    @property
    def rejected(self) -> int:
        return self.conceived - self.admitted


@dataclass
class SimulationResult:
    population: Population
    history: List[GenerationStats] = field(default_factory=list)
    reports: List[GenerationReport] = field(default_factory=list)


def run_generation(
    population: Population,
    config: DriveConfig,
    rng: np.random.Generator,
    release: bool = False
) -> GenerationReport:
    """
    Advance the population by one generation.

    Args:
        population: Population to advance (modified in place)
        config: Run configuration
        rng: Random number generator
        release: Drop drive carriers after culling

    Returns:
        GenerationReport for this generation
    """
    culled = cull(population, config, rng)

    dropped = 0
    if release:
        dropped = len(drop_drive_carriers(population, config, rng))

    stats = compute_stats(population, config)
    report = GenerationReport(stats=stats, culled=culled, dropped=dropped)

    males = population.males()
    num_adults = len(population)
    newborns: List[Individual] = []

    for mother in population.females():
        result = reproduce(mother, males, num_adults, config, rng)
        if result.father is not None:
            report.mated_females += 1
        report.conceived += result.conceived
        newborns.extend(result.offspring)

    age_population(population)
    population.admit(newborns)
    report.admitted = len(newborns)
    population.generation += 1

    return report


def run_simulation(
    config: DriveConfig,
    rng: Optional[np.random.Generator] = None,
    population: Optional[Population] = None,
    on_generation: Optional[Callable[[GenerationReport], None]] = None
) -> SimulationResult:
    """
    Run the full simulation for `config.generations` generations.

    Args:
        config: Run configuration
        rng: Random number generator (seeded from config.random_seed if None)
        population: Starting population (wild-type bootstrap if None)
        on_generation: Called with each GenerationReport

    Returns:
        SimulationResult with the final population and per-generation history
    """
    if rng is None:
        rng = np.random.default_rng(config.random_seed)
    if population is None:
        population = initialize_population(config, rng)

    result = SimulationResult(population=population)

    for _ in range(config.generations):
        release = config.drop_size > 0 and population.generation == config.drop_generation
        report = run_generation(population, config, rng, release=release)

        result.history.append(report.stats)
        result.reports.append(report)
        if on_generation is not None:
            on_generation(report)

        if len(population) == 0:
            break

    return result


def print_generation(report: GenerationReport, config: DriveConfig) -> None:
    """Print the summary and machine lines for a generation."""
    print(format_summary(report.stats))
    print(format_report_line(report.stats, config.architecture))
