"""Weight preprocessing: Fisher transform, validation, simulation, and count data."""

from src.weights.correlation import centred_log_ratio, count_to_correlation
from src.weights.simulation import (
    build_block_means,
    default_block_sizes,
    simulate_from_config,
    simulate_wsbm,
)
from src.weights.transform import fisher_transform, inverse_fisher_transform
from src.weights.types import CorrelationMatrices, SimulatedNetwork
from src.weights.validation import (
    WeightMatrixError,
    validate_weight_matrix,
    weight_matrix_errors,
)

__all__ = [
    "CorrelationMatrices",
    "SimulatedNetwork",
    "WeightMatrixError",
    "build_block_means",
    "centred_log_ratio",
    "count_to_correlation",
    "default_block_sizes",
    "fisher_transform",
    "inverse_fisher_transform",
    "simulate_from_config",
    "simulate_wsbm",
    "validate_weight_matrix",
    "weight_matrix_errors",
]
