"""
Pipeline configuration.
"""

import os
from typing import Any

RUNNERS = ("threads", "sequential")


class PipelineOptions:
    """
    Execution settings shared by every collection of a pipeline.

    Attributes:
        n_workers: Number of workers partitions are spread over
        n_partitions: Default partition count for in-memory and DataFrame sources
        batch_size: Records per batch when reading a partition
        seed: Seed for partition assignment
        runner: "threads" (thread pool, one thread per worker) or "sequential"
        verify_coders: Round-trip every record through its stage's coder, so
            unencodable records fail at the stage that produced them
    """

    n_workers: int
    n_partitions: int
    batch_size: int
    seed: int
    runner: str
    verify_coders: bool

    def __init__(
        self,
        n_workers: int = 4,
        n_partitions: int = 4,
        batch_size: int = 1024,
        seed: int = 42,
        runner: str = "threads",
        verify_coders: bool = False,
    ):
        if n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {n_workers}")
        if n_partitions < 1:
            raise ValueError(f"n_partitions must be >= 1, got {n_partitions}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if runner not in RUNNERS:
            raise ValueError(f"Unsupported runner: {runner} (expected one of {RUNNERS})")

        self.n_workers = n_workers
        self.n_partitions = n_partitions
        self.batch_size = batch_size
        self.seed = seed
        self.runner = runner
        self.verify_coders = verify_coders

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "PipelineOptions":
        """
        Build options from a plain dict, e.g. one loaded from a job config.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        unknown = set(config) - set(cls.__annotations__)
        if unknown:
            raise ValueError(f"Unknown pipeline options: {sorted(unknown)}")
        return cls(**config)

    @classmethod
    def from_env(cls, prefix: str = "PCATS_") -> "PipelineOptions":
        """
        Build options from environment variables such as ``PCATS_N_WORKERS``.

        Unset variables keep their defaults.
        """
        config: dict[str, Any] = {}
        for name, type_ in cls.__annotations__.items():
            raw = os.environ.get(f"{prefix}{name.upper()}")
            if raw is None:
                continue
            if type_ is bool:
                config[name] = raw.strip().lower() in ("1", "true", "yes", "on")
            elif type_ is int:
                try:
                    config[name] = int(raw)
                except ValueError as e:
                    raise ValueError(
                        f"{prefix}{name.upper()} must be an integer, got {raw!r}"
                    ) from e
            else:
                config[name] = raw
        return cls(**config)

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.__annotations__}

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"PipelineOptions({fields})"
