"""
Data sources for partitioned collections.

A partition is the unit of parallelism: workers are handed partition
indices, and each partition is read independently as a stream of record
batches. Records are arbitrary Python values; sources backed by tabular
data (Polars DataFrames, Parquet files) expose either one column's values
or whole rows as dicts.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import polars as pl


def split_evenly(n_items: int, n_partitions: int) -> list[tuple[int, int]]:
    """
    Split ``range(n_items)`` into ``n_partitions`` contiguous (offset, length)
    slices whose lengths differ by at most one. Earlier slices are longer.
    """
    if n_partitions < 1:
        raise ValueError(f"n_partitions must be >= 1, got {n_partitions}")
    base, remainder = divmod(n_items, n_partitions)
    slices = []
    offset = 0
    for idx in range(n_partitions):
        length = base + (1 if idx < remainder else 0)
        slices.append((offset, length))
        offset += length
    return slices


class DataSource(ABC):
    """
    Abstract interface for reading partitioned records.

    Implementations must be safe to read from several threads at once, as
    long as each thread reads a different partition.
    """

    @abstractmethod
    def get_partition_count(self) -> int:
        """Return the total number of partitions."""
        pass

    @abstractmethod
    def create_reader(self, partition_index: int, batch_size: int) -> Iterator[list[Any]]:
        """
        Create a reader for one partition.

        Args:
            partition_index: Index of the partition (0 to get_partition_count()-1)
            batch_size: Maximum number of records per yielded batch

        Returns:
            Iterator of record batches

        Raises:
            IndexError: If partition_index is out of range
        """
        pass

    def _check_index(self, partition_index: int) -> None:
        count = self.get_partition_count()
        if not 0 <= partition_index < count:
            raise IndexError(
                f"Partition index {partition_index} out of range (0 to {count - 1})"
            )


class InMemoryDataSource(DataSource):
    """Records held in a Python sequence, split into contiguous partitions."""

    def __init__(self, items: Sequence[Any], n_partitions: int = 1):
        self.items = list(items)
        self._slices = split_evenly(len(self.items), n_partitions)

    def get_partition_count(self) -> int:
        return len(self._slices)

    def create_reader(self, partition_index: int, batch_size: int) -> Iterator[list[Any]]:
        self._check_index(partition_index)
        offset, length = self._slices[partition_index]
        for start in range(offset, offset + length, batch_size):
            yield self.items[start : min(start + batch_size, offset + length)]


def _frame_records(df: pl.DataFrame, column: str | None) -> list[Any]:
    if column is None:
        return list(df.iter_rows(named=True))
    return df[column].to_list()


class PolarsDataSource(DataSource):
    """
    Records taken from a Polars DataFrame.

    List-typed columns come back as Python lists, which makes them directly
    usable as ``list`` effect containers.
    """

    def __init__(self, df: pl.DataFrame, column: str | None = None, n_partitions: int = 1):
        """
        Args:
            df: Source DataFrame
            column: Column whose values are the records; rows as dicts if None
            n_partitions: Number of contiguous row slices
        """
        if column is not None and column not in df.columns:
            raise ValueError(f"Column {column!r} not in DataFrame columns {df.columns}")
        self.df = df
        self.column = column
        self._slices = split_evenly(len(df), n_partitions)

    def get_partition_count(self) -> int:
        return len(self._slices)

    def create_reader(self, partition_index: int, batch_size: int) -> Iterator[list[Any]]:
        self._check_index(partition_index)
        offset, length = self._slices[partition_index]
        part = self.df.slice(offset, length)
        for batch in part.iter_slices(n_rows=batch_size):
            yield _frame_records(batch, self.column)


class ParquetDataSource(DataSource):
    """
    Records read from Parquet files, one file per partition.

    Files are opened lazily by the worker that reads them.
    """

    def __init__(self, paths: str | Path | Sequence[str | Path], column: str | None = None):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self.paths = [Path(p) for p in paths]
        self.column = column

    def get_partition_count(self) -> int:
        return len(self.paths)

    def create_reader(self, partition_index: int, batch_size: int) -> Iterator[list[Any]]:
        self._check_index(partition_index)
        columns = [self.column] if self.column is not None else None
        df = pl.read_parquet(self.paths[partition_index], columns=columns)
        for batch in df.iter_slices(n_rows=batch_size):
            yield _frame_records(batch, self.column)
