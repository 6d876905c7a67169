"""
Unit tests for Coordinator partition assignment logic.

Tests focus on partition assignment, edge cases, and determinism.
"""

import pytest

from pcats.distributed.coordinator import Coordinator, PartitionAssignment
from pcats.distributed.data_source import DataSource


class MockDataSource(DataSource):
    """Mock DataSource for testing."""

    def __init__(self, partition_count: int):
        self._partition_count = partition_count

    def get_partition_count(self) -> int:
        return self._partition_count

    def create_reader(self, partition_index: int, batch_size: int):
        # Not used in coordinator tests
        raise NotImplementedError


def assigned(assignments):
    return [i for a in assignments.values() for i in a.partition_indices]


class TestCoordinator:
    """Test cases for Coordinator partition assignment."""

    def test_coordinator_initialization(self):
        data_source = MockDataSource(partition_count=10)
        coordinator = Coordinator(data_source, n_workers=3)

        assert coordinator.data_source == data_source
        assert coordinator.n_workers == 3
        assert coordinator.total_partitions == 10

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            Coordinator(MockDataSource(partition_count=3), n_workers=0)

    def test_every_partition_assigned_once(self):
        coordinator = Coordinator(MockDataSource(partition_count=10), n_workers=3)
        assignments = coordinator.assign_partitions(seed=42)

        assert len(assignments) == 3
        partitions = assigned(assignments)
        assert sorted(partitions) == list(range(10))

        for worker_id, assignment in assignments.items():
            assert isinstance(assignment, PartitionAssignment)
            assert assignment.worker_id == worker_id

    def test_balanced_sizes(self):
        coordinator = Coordinator(MockDataSource(partition_count=10), n_workers=3)
        assignments = coordinator.assign_partitions(seed=42)

        sizes = sorted(len(a.partition_indices) for a in assignments.values())
        assert sizes == [3, 3, 4]

    def test_more_workers_than_partitions(self):
        coordinator = Coordinator(MockDataSource(partition_count=2), n_workers=5)
        assignments = coordinator.assign_partitions(seed=42)

        assert len(assignments) == 5
        assert sorted(assigned(assignments)) == [0, 1]
        empty = [a for a in assignments.values() if not a.partition_indices]
        assert len(empty) == 3

    def test_no_partitions(self):
        coordinator = Coordinator(MockDataSource(partition_count=0), n_workers=2)
        assignments = coordinator.assign_partitions(seed=42)
        assert assigned(assignments) == []

    def test_deterministic_for_seed(self):
        coordinator = Coordinator(MockDataSource(partition_count=20), n_workers=4)

        first = coordinator.assign_partitions(seed=7)
        second = coordinator.assign_partitions(seed=7)

        for worker_id in first:
            assert first[worker_id].partition_indices == second[worker_id].partition_indices

    def test_seed_changes_assignment(self):
        coordinator = Coordinator(MockDataSource(partition_count=20), n_workers=4)

        first = coordinator.assign_partitions(seed=1)
        second = coordinator.assign_partitions(seed=2)

        assert assigned(first) != assigned(second)
