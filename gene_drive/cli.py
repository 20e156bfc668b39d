"""
CLI module for the gene drive simulator.

Handles run configuration loading, validation, simulation and output.
"""

from pathlib import Path
from typing import Optional

import numpy as np

from .config_loader import build_drive_config, get_output_config, load_config


def run_from_config(config_path: str, seed: Optional[int] = None) -> None:
    """
    Load run configuration and execute the simulation.

    This is the main entry point called by drive_cli.py.

    Args:
        config_path: Path to run configuration YAML file
        seed: Overrides run.random_seed when given

    Raises:
        ConfigurationError: If config is missing or invalid
        FileExistsError: If an output file exists and overwrite is off
    """
    from .orchestration import print_generation, run_simulation
    from .statistics import save_stats_csv

    print(f"Loading configuration from: {config_path}")
    raw_config = load_config(config_path)

    print("Validating configuration...")
    config = build_drive_config(raw_config)
    output_config = get_output_config(raw_config)
    overwrite = output_config.get('overwrite', False)

    if seed is None:
        seed = config.random_seed
    if seed is None:
        seed = int(np.random.SeedSequence().entropy % 2**31)
    print(f"Architecture: {config.architecture.value}")
    print(f"Random seed: {seed}\n")
    rng = np.random.default_rng(seed)

    result = run_simulation(
        config,
        rng=rng,
        on_generation=lambda report: print_generation(report, config),
    )

    final = result.history[-1] if result.history else None

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Generations run: {len(result.history)}")
    print(f"Final population: {len(result.population)}")
    if final is not None:
        print(f"Final drive frequency: {final.drive_frequency:.4f}")
        print(f"Final carrier rate: {final.carrier_rate:.4f}")

    stats_csv = output_config.get('stats_csv')
    if stats_csv:
        path = save_stats_csv(result.history, stats_csv, overwrite=overwrite)
        print(f"Statistics: {path}")

    plot_path = output_config.get('plot')
    if plot_path:
        from .visualization import TrajectoryVisualizer
        Path(plot_path).parent.mkdir(parents=True, exist_ok=True)
        if Path(plot_path).exists() and not overwrite:
            raise FileExistsError(
                f"Plot already exists: {plot_path}\n"
                f"Set 'run.output.overwrite: true' in config to overwrite"
            )
        TrajectoryVisualizer(result.history, config.architecture).plot_trajectories(
            save_path=plot_path
        )

    print("\nRun completed successfully!")
