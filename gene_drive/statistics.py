"""
Per-generation statistics and reporting.

Counts allele classes per genome copy, formats the human-readable and
machine-parseable report lines, and reads/writes the statistics CSV.
"""

import csv
from collections import Counter
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import List, Union

from .config_loader import Architecture, DriveConfig
from .data_models import Allele, Population
from .genotype import classify_block, drive_copies, has_y_drive, is_drive_block

REPORT_PREFIX = "OUT:"


@dataclass
class GenerationStats:
    """
    Counters for one generation of the breeding population.

    Frequencies are per genome copy. Under X-linkage the Y copy of a male
    is not counted.
    """
    generation: int
    population_size: int
    females: int
    males: int
    carrier_rate: float
    drive_frequency: float
    wild_type_frequency: float
    r1_frequency: float
    r2_frequency: float
    locus1_drive: int = 0
    locus1_wild_type: int = 0
    locus2_drive: int = 0
    locus2_wild_type: int = 0
    locus1_drive_frequency: float = 0.0
    locus2_drive_frequency: float = 0.0
    y_drive_male_rate: float = 0.0
    male_fraction: float = 0.0


def _safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def compute_stats(population: Population, config: DriveConfig) -> GenerationStats:
    """
    Compute the per-generation counters.

    Args:
        population: Breeding population (after culling and drop)
        config: Run configuration

    Returns:
        GenerationStats for population.generation
    """
    counts = Counter()
    locus_counts = Counter()
    carriers = 0
    y_drive_males = 0
    num_males = 0

    for ind in population:
        if ind.is_male:
            num_males += 1
            if has_y_drive(ind):
                y_drive_males += 1
        if drive_copies(ind, config) > 0:
            carriers += 1

        genomes = ind.genomes
        if config.x_linked and ind.is_male:
            genomes = (ind.maternal,)

        for genome in genomes:
            counts[classify_block(genome.target)] += 1
            if config.is_two_locus:
                for locus, block in (("locus1", genome.target), ("locus2", genome.drive_arm)):
                    if is_drive_block(block):
                        locus_counts[f"{locus}_drive"] += 1
                    elif classify_block(block) is Allele.WILD_TYPE:
                        locus_counts[f"{locus}_wild_type"] += 1

    size = len(population)
    total_copies = sum(counts.values())

    if config.is_y_suppression:
        drive_frequency = _safe_ratio(y_drive_males, size)
    else:
        drive_frequency = _safe_ratio(counts[Allele.DRIVE], total_copies)

    return GenerationStats(
        generation=population.generation,
        population_size=size,
        females=size - num_males,
        males=num_males,
        carrier_rate=_safe_ratio(carriers, size),
        drive_frequency=drive_frequency,
        wild_type_frequency=_safe_ratio(counts[Allele.WILD_TYPE], total_copies),
        r1_frequency=_safe_ratio(counts[Allele.R1], total_copies),
        r2_frequency=_safe_ratio(counts[Allele.R2], total_copies),
        locus1_drive=locus_counts["locus1_drive"],
        locus1_wild_type=locus_counts["locus1_wild_type"],
        locus2_drive=locus_counts["locus2_drive"],
        locus2_wild_type=locus_counts["locus2_wild_type"],
        locus1_drive_frequency=_safe_ratio(locus_counts["locus1_drive"], 2 * size),
        locus2_drive_frequency=_safe_ratio(locus_counts["locus2_drive"], 2 * size),
        y_drive_male_rate=_safe_ratio(y_drive_males, num_males),
        male_fraction=_safe_ratio(num_males, size),
    )


def report_fields(stats: GenerationStats, architecture: Architecture) -> List[float]:
    """Positional fields of the machine line for the given architecture."""
    if architecture is Architecture.TWO_LOCUS_UNDERDOMINANCE:
        return [stats.carrier_rate, stats.generation, stats.locus1_drive_frequency,
                stats.locus2_drive_frequency, stats.r2_frequency]
    if architecture is Architecture.Y_SUPPRESSION:
        return [stats.y_drive_male_rate, stats.generation, stats.drive_frequency,
                stats.r2_frequency, stats.male_fraction]
    return [stats.carrier_rate, stats.generation, stats.drive_frequency,
            stats.r2_frequency, stats.r1_frequency]


def format_report_line(stats: GenerationStats, architecture: Architecture) -> str:
    """Machine-parseable line: fixed prefix, then whitespace-separated numbers."""
    values = []
    for value in report_fields(stats, architecture):
        if isinstance(value, int):
            values.append(str(value))
        else:
            values.append(f"{value:.6g}")
    return " ".join([REPORT_PREFIX] + values)


def parse_report_line(line: str) -> List[float]:
    """
    Parse a machine line back into its positional numeric fields.

    Raises:
        ValueError: If the line does not start with the report prefix
    """
    parts = line.split()
    if not parts or parts[0] != REPORT_PREFIX:
        raise ValueError(f"Not a report line: {line!r}")
    return [float(part) for part in parts[1:]]


def format_summary(stats: GenerationStats) -> str:
    return (
        f"Gen {stats.generation:4d} | N={stats.population_size} "
        f"(F={stats.females}, M={stats.males}) | "
        f"carriers={stats.carrier_rate:.3f} drive={stats.drive_frequency:.3f} "
        f"wt={stats.wild_type_frequency:.3f} r1={stats.r1_frequency:.3f} "
        f"r2={stats.r2_frequency:.3f}"
    )


def save_stats_csv(
    stats_list: List[GenerationStats],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save per-generation statistics to CSV file.

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Statistics file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        fieldnames = [stat_field.name for stat_field in fields(GenerationStats)]
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for stats in stats_list:
            writer.writerow(asdict(stats))

    return output_path


def load_stats_csv(csv_path: Union[str, Path]) -> List[GenerationStats]:
    """
    Load statistics written by save_stats_csv.

    Raises:
        FileNotFoundError: If CSV file doesn't exist
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    types = {stat_field.name: stat_field.type for stat_field in fields(GenerationStats)}
    stats_list = []
    with open(csv_path, 'r') as f:
        reader = csv.DictReader(f)
        for row in reader:
            values = {}
            for name, raw in row.items():
                values[name] = int(raw) if types[name] in (int, "int") else float(raw)
            stats_list.append(GenerationStats(**values))
    return stats_list
