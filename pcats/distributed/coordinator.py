"""
Partition assignment for distributed execution.
"""

import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pcats.distributed.data_source import DataSource


class PartitionAssignment:
    """Partitions handed to one worker, in the order it should read them."""

    def __init__(self, worker_id: str, partition_indices: list[int]):
        self.worker_id = worker_id
        self.partition_indices = partition_indices

    def __repr__(self) -> str:
        return f"PartitionAssignment({self.worker_id!r}, {self.partition_indices})"


class Coordinator:
    """
    Spreads the partitions of a data source over a fixed number of workers.

    Every partition goes to exactly one worker. Workers get at most one
    partition more than each other; with more workers than partitions the
    surplus workers get an empty assignment.
    """

    def __init__(self, data_source: "DataSource", n_workers: int):
        if n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {n_workers}")
        self.data_source = data_source
        self.n_workers = n_workers
        self.total_partitions = data_source.get_partition_count()

    def assign_partitions(self, seed: int = 42) -> dict[str, PartitionAssignment]:
        """
        Shuffle partitions with ``seed`` and deal them out round-robin.

        Returns:
            Dictionary mapping worker_id -> PartitionAssignment
        """
        order = list(range(self.total_partitions))
        random.Random(seed).shuffle(order)

        return {
            f"worker_{w}": PartitionAssignment(
                worker_id=f"worker_{w}",
                partition_indices=order[w :: self.n_workers],
            )
            for w in range(self.n_workers)
        }
