"""Experiment configuration system with frozen, hashable, serializable dataclasses."""

from src.config.experiment import (
    ExperimentConfig,
    PriorConfig,
    SamplerConfig,
    SimulationConfig,
)
from src.config.defaults import DEFAULT_CONFIG
from src.config.hashing import config_hash, simulation_config_hash, full_config_hash
from src.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "ExperimentConfig",
    "PriorConfig",
    "SamplerConfig",
    "SimulationConfig",
    "DEFAULT_CONFIG",
    "config_hash",
    "simulation_config_hash",
    "full_config_hash",
    "config_to_json",
    "config_from_json",
    "config_to_dict",
    "config_from_dict",
]
