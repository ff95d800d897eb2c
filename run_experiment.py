#!/usr/bin/env python3
"""Entry point for running nonparametric WSBM experiments.

Chains all pipeline stages into a single executable command:
network simulation -> validation and transform -> Gibbs sampling ->
evaluation against the planted partition.

Usage:
    python run_experiment.py
    python run_experiment.py --config config.json
    python run_experiment.py --config config.json --dry-run
    python run_experiment.py --config config.json --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import numpy as np

from src.config import (
    DEFAULT_CONFIG,
    ExperimentConfig,
    config_from_json,
    full_config_hash,
    simulation_config_hash,
)

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(config: ExperimentConfig) -> dict[str, float]:
    """Execute the full experiment pipeline.

    Args:
        config: Experiment configuration.

    Returns:
        Clustering agreement of the final assignment with the planted
        partition, plus the number of occupied communities.
    """
    # Lazy imports to keep --dry-run fast
    from src.evaluation import clustering_summary
    from src.reproducibility import make_rng
    from src.sampler import auto_wsbm
    from src.weights import simulate_from_config, validate_weight_matrix

    pipeline_start = time.monotonic()
    log.info("Seed: %d", config.seed)

    # ── Stage 1: Seed ──────────────────────────────────────────────
    with stage_timer("Reproducibility Seeding"):
        rng = make_rng(config.seed)

    # ── Stage 2: Network Simulation ────────────────────────────────
    with stage_timer("Network Simulation"):
        network = simulate_from_config(config.simulation, rng)
        log.info(
            "Network: n=%d, K=%d, mean |w|=%.3f",
            network.n, network.K, float(np.abs(network.weights).mean()),
        )

    # ── Stage 3: Validation ────────────────────────────────────────
    with stage_timer("Weight Validation"):
        weights = validate_weight_matrix(network.weights)

    # ── Stage 4: Gibbs Sampling ────────────────────────────────────
    with stage_timer("Gibbs Sampling"):
        result = auto_wsbm(
            weights,
            config.k_max,
            config.eta0,
            config.store,
            sampler=config.sampler,
            prior=config.prior,
            rng=rng,
        )

    # ── Stage 5: Evaluation ────────────────────────────────────────
    with stage_timer("Evaluation"):
        metrics = clustering_summary(network.z_true, result.z)
        metrics["n_occupied"] = float(result.n_occupied)
        if config.store:
            kept = result.log_posterior[result.burn_in:]
            metrics["mean_log_posterior"] = float(kept.mean())
        for name, value in metrics.items():
            log.info("%s = %.4f", name, value)

    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Pipeline complete in {total_elapsed:.1f}s")
    print(f"  Communities: {result.n_occupied} occupied (true K={network.K})")
    print(f"  ARI:         {metrics['ari']:.4f}")
    print(f"  NMI:         {metrics['nmi']:.4f}")
    print(f"  NVI:         {metrics['nvi']:.4f}")
    print(f"{'=' * 60}")

    return metrics


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run a nonparametric WSBM experiment on a simulated network"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to experiment config JSON file (defaults if omitted)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show pipeline plan without running the experiment",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load config
    if args.config is None:
        config = DEFAULT_CONFIG
    else:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        try:
            config = config_from_json(config_path.read_text())
        except Exception:
            log.exception("Invalid config %s", config_path)
            sys.exit(1)

    sim = config.simulation
    print(f"Config hash:     {full_config_hash(config)}")
    print(f"Simulation hash: {simulation_config_hash(config)}")
    print()
    print(f"Simulation: n={sim.n}, K={sim.K}, mu_in={sim.mu_in}, "
          f"mu_out={sim.mu_out}, var={sim.var}")
    print(f"Sampler:    k_max={config.k_max}, eta0={config.eta0}, "
          f"iterations={config.sampler.n_iter}, burn-in={config.sampler.burn_in}, "
          f"store={config.store}")
    print(f"Prior:      SS0={config.prior.ss0}, nu0={config.prior.nu0}, "
          f"mu0={config.prior.mu0}, n0={config.prior.n0}")
    print(f"Seed:       {config.seed}")

    if args.dry_run:
        print("\nPipeline plan:")
        print(f"  1. Seed generator: {config.seed}")
        print(f"  2. Simulate WSBM network: n={sim.n}, K={sim.K}")
        print("  3. Validate weights and apply the Fisher transform")
        print(f"  4. Gibbs sampling: {config.sampler.n_iter} iterations, "
              f"k_max={config.k_max}")
        print("  5. Evaluation: MI, NMI, NVI, ARI against the planted partition")
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(config)
    except Exception:
        log.exception("Pipeline failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
