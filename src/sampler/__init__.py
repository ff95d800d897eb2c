"""Gibbs sampling engine for the nonparametric WSBM."""

from src.sampler.assignment import (
    draw_label,
    label_log_scores,
    resample_assignments,
    symmetric_block_matrix,
)
from src.sampler.block_params import block_log_posterior, draw_block_parameters
from src.sampler.gibbs import auto_wsbm, build_initial_state, gibbs_step
from src.sampler.statistics import compute_pair_statistics, occupancy_counts
from src.sampler.stick_breaking import draw_stick_breaking_weights
from src.sampler.types import PairStatistics, SamplerResult, SamplerState

__all__ = [
    "PairStatistics",
    "SamplerResult",
    "SamplerState",
    "auto_wsbm",
    "block_log_posterior",
    "build_initial_state",
    "compute_pair_statistics",
    "draw_block_parameters",
    "draw_label",
    "draw_stick_breaking_weights",
    "gibbs_step",
    "label_log_scores",
    "occupancy_counts",
    "resample_assignments",
    "symmetric_block_matrix",
]
