"""Default configuration: single source of truth for default experiment parameters."""

from src.config.experiment import ExperimentConfig

# All-default values: 1000 iterations with 50% burn-in, SS0=0.1, nu0=10,
# mu0=0, n0=1, k_max=10, eta0=1, seed=42.
DEFAULT_CONFIG = ExperimentConfig()
