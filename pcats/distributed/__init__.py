"""
Partitioned collection runtime.

Data sources split records into partitions, a coordinator spreads
partitions over workers, workers run each collection's stage chain, and
the runner gathers the results back through the collection's coder.
"""

from pcats.distributed.coders import Coder, CoderError, JsonCoder, PickleCoder
from pcats.distributed.coordinator import Coordinator, PartitionAssignment
from pcats.distributed.data_source import (
    DataSource,
    InMemoryDataSource,
    ParquetDataSource,
    PolarsDataSource,
)
from pcats.distributed.options import PipelineOptions
from pcats.distributed.pcollection import PCollection, Pipeline
from pcats.distributed.runner import Runner
from pcats.distributed.worker import Stage

__all__ = [
    "DataSource",
    "InMemoryDataSource",
    "PolarsDataSource",
    "ParquetDataSource",
    "Coder",
    "PickleCoder",
    "JsonCoder",
    "CoderError",
    "Coordinator",
    "PartitionAssignment",
    "PipelineOptions",
    "Stage",
    "Runner",
    "Pipeline",
    "PCollection",
]
