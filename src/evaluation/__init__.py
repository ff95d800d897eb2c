"""Evaluation of inferred partitions against known community labels."""

from src.evaluation.clustering import (
    adjusted_rand_index,
    clustering_summary,
    mutual_information,
    normalized_mutual_information,
    normalized_variation_of_information,
)

__all__ = [
    "adjusted_rand_index",
    "clustering_summary",
    "mutual_information",
    "normalized_mutual_information",
    "normalized_variation_of_information",
]
