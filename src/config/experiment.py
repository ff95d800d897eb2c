"""Experiment configuration dataclasses: all frozen and slotted for immutability."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PriorConfig:
    """Normal-inverse-gamma prior on each block pair's mean and variance."""

    ss0: float = 0.1  # prior scale of the variance
    nu0: float = 10.0  # prior degrees of freedom
    mu0: float = 0.0  # prior mean
    n0: float = 1.0  # prior pseudo-count

    def __post_init__(self) -> None:
        if self.ss0 <= 0:
            raise ValueError(f"ss0 must be > 0, got {self.ss0}")
        if self.nu0 <= 0:
            raise ValueError(f"nu0 must be > 0, got {self.nu0}")
        if self.n0 <= 0:
            raise ValueError(f"n0 must be > 0, got {self.n0}")


@dataclass(frozen=True, slots=True)
class SamplerConfig:
    """Gibbs sampler run length and progress reporting."""

    n_iter: int = 1000
    burn_fraction: float = 0.5  # leading share of iterations not snapshotted
    progress_step: int = 10  # percent between progress messages

    def __post_init__(self) -> None:
        if self.n_iter < 1:
            raise ValueError(f"n_iter must be >= 1, got {self.n_iter}")
        if not 0.0 <= self.burn_fraction < 1.0:
            raise ValueError(
                f"burn_fraction must be in [0, 1), got {self.burn_fraction}"
            )
        if self.progress_step < 1:
            raise ValueError(
                f"progress_step must be >= 1, got {self.progress_step}"
            )

    @property
    def burn_in(self) -> int:
        return int(self.burn_fraction * self.n_iter)


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Synthetic WSBM network parameters (correlation scale)."""

    n: int = 60  # number of nodes
    K: int = 3  # number of true communities
    mu_in: float = 0.6  # within-community mean weight
    mu_out: float = 0.0  # between-community mean weight
    var: float = 0.1  # variance of transformed weights, every block pair


@dataclass(frozen=True, slots=True)
class ExperimentConfig:
    """Top-level experiment configuration composing all sub-configs.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations early.
    """

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    sampler: SamplerConfig = field(default_factory=SamplerConfig)
    prior: PriorConfig = field(default_factory=PriorConfig)
    k_max: int = 10  # truncation level of the stick-breaking prior
    eta0: float = 1.0  # stick-breaking concentration
    store: bool = True  # retain traces and log-posterior series
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.k_max < 1:
            raise ValueError(f"k_max must be >= 1, got {self.k_max}")
        if self.eta0 <= 0:
            raise ValueError(f"eta0 must be > 0, got {self.eta0}")
        if self.simulation.K < 1:
            raise ValueError(
                f"simulation.K must be >= 1, got {self.simulation.K}"
            )
        if self.simulation.n < self.simulation.K:
            raise ValueError(
                f"simulation.n ({self.simulation.n}) must be "
                f">= simulation.K ({self.simulation.K})"
            )
        for name in ("mu_in", "mu_out"):
            value = getattr(self.simulation, name)
            if not -1.0 < value < 1.0:
                raise ValueError(
                    f"simulation.{name} must lie in (-1, 1), got {value}"
                )
        if self.simulation.var <= 0:
            raise ValueError(
                f"simulation.var must be > 0, got {self.simulation.var}"
            )
