"""
Pipeline and PCollection: a lazy, partitioned, immutable collection of
records.

Transforms (``map``, ``flat_map``, ``filter``, ``transform``) return new
collections and run nothing. Actions (``collect``, ``count``,
``to_polars``) execute the stage chain with the pipeline's runner.

Examples:
    >>> p = Pipeline(PipelineOptions(n_workers=2))
    >>> coll = p.parallelize([[1, 2, 3], [4]])
    >>> coll.map(len).collect()
    [3, 1]
    >>> coll.fx.map_f(lambda x: x * 10).collect()
    [[10, 20, 30], [40]]
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

import polars as pl

from pcats.distributed.coders import DEFAULT_CODER, Coder
from pcats.distributed.data_source import (
    DataSource,
    InMemoryDataSource,
    ParquetDataSource,
    PolarsDataSource,
)
from pcats.distributed.options import PipelineOptions
from pcats.distributed.runner import Runner
from pcats.distributed.worker import Stage

if TYPE_CHECKING:
    from pcats.syntax import EffectOps, NestedEffectOps


class Pipeline:
    """Entry point: owns the options and the runner, and creates collections."""

    def __init__(self, options: PipelineOptions | None = None):
        self.options = options or PipelineOptions()
        self.runner = Runner(self.options)

    def from_source(
        self,
        source: DataSource,
        coder: Coder | None = None,
        name: str | None = None,
    ) -> "PCollection":
        return PCollection(
            pipeline=self,
            source=source,
            stages=(),
            coder=coder or DEFAULT_CODER,
            name=name or type(source).__name__,
        )

    def parallelize(
        self,
        items: Sequence[Any],
        n_partitions: int | None = None,
        coder: Coder | None = None,
    ) -> "PCollection":
        """Distribute an in-memory sequence of records over partitions."""
        source = InMemoryDataSource(
            items, self.options.n_partitions if n_partitions is None else n_partitions
        )
        return self.from_source(source, coder=coder, name="parallelize")

    def read_polars(
        self,
        df: pl.DataFrame,
        column: str | None = None,
        n_partitions: int | None = None,
    ) -> "PCollection":
        source = PolarsDataSource(
            df,
            column=column,
            n_partitions=self.options.n_partitions if n_partitions is None else n_partitions,
        )
        return self.from_source(source, name="read_polars")

    def read_parquet(
        self, paths: str | Path | Sequence[str | Path], column: str | None = None
    ) -> "PCollection":
        return self.from_source(ParquetDataSource(paths, column=column), name="read_parquet")


class PCollection:
    """
    Immutable description of a partitioned collection: a data source plus
    the chain of record-level stages applied to it.
    """

    def __init__(
        self,
        pipeline: Pipeline,
        source: DataSource,
        stages: tuple[Stage, ...],
        coder: Coder,
        name: str,
    ):
        self.pipeline = pipeline
        self.source = source
        self.stages = stages
        self.coder = coder
        self.name = name

    def _with_stage(self, stage: Stage) -> "PCollection":
        return PCollection(
            pipeline=self.pipeline,
            source=self.source,
            stages=self.stages + (stage,),
            coder=stage.coder,
            name=f"{self.name}/{stage.name}",
        )

    # --------- transforms (lazy) ----------
    def map(
        self,
        f: Callable[[Any], Any],
        coder: Coder | None = None,
        name: str | None = None,
    ) -> "PCollection":
        """One output record per input record."""
        return self._with_stage(Stage("map", f, coder or self.coder, name))

    def flat_map(
        self,
        f: Callable[[Any], Any],
        coder: Coder | None = None,
        name: str | None = None,
    ) -> "PCollection":
        """Zero or more output records per input record; ``f`` returns an iterable."""
        return self._with_stage(Stage("flat_map", f, coder or self.coder, name))

    def filter(self, p: Callable[[Any], bool], name: str | None = None) -> "PCollection":
        return self._with_stage(Stage("filter", p, self.coder, name))

    def transform(
        self, fn: Callable[["PCollection"], "PCollection"], name: str | None = None
    ) -> "PCollection":
        """Apply a composite transform built from other transforms."""
        out = fn(self)
        return out.with_name(name) if name else out

    def with_name(self, name: str) -> "PCollection":
        return PCollection(self.pipeline, self.source, self.stages, self.coder, name)

    # --------- effect syntax ----------
    @property
    def fx(self) -> "EffectOps":
        """Operations on records that are effect containers ``F[A]``."""
        from pcats.syntax import EffectOps

        return EffectOps(self)

    @property
    def nested(self) -> "NestedEffectOps":
        """Operations on records that are nested containers ``F[G[A]]``."""
        from pcats.syntax import NestedEffectOps

        return NestedEffectOps(self)

    # --------- actions (execute) ----------
    def collect_partitions(self) -> list[list[Any]]:
        return self.pipeline.runner.run(self)

    def collect(self) -> list[Any]:
        return [record for part in self.collect_partitions() for record in part]

    def collect_with_metrics(self) -> tuple[list[Any], list[dict[str, Any]]]:
        """Collect records together with the per-worker metrics of this run."""
        partitions, metrics = self.pipeline.runner.execute(self)
        return [record for part in partitions for record in part], metrics

    def count(self) -> int:
        return sum(len(part) for part in self.collect_partitions())

    def to_polars(self, column: str = "value", dtype: Any = None) -> pl.DataFrame:
        """Collect records into a single-column DataFrame."""
        return pl.Series(column, self.collect(), dtype=dtype).to_frame()

    def __repr__(self) -> str:
        return f"PCollection(name={self.name!r}, stages={len(self.stages)})"
