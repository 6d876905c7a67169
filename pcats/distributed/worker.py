"""
Worker-side execution of a collection's stage chain.

A worker reads its assigned partitions, pushes every record through the
chain of stages (map / flat_map / filter) and encodes the surviving
records with the collection's coder. Nothing is retried or swallowed: an
exception raised by a stage function ends the worker and propagates.
"""

from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from pcats.distributed.coders import Coder
    from pcats.distributed.data_source import DataSource
    from pcats.distributed.options import PipelineOptions

STAGE_KINDS = ("map", "flat_map", "filter")


class Stage:
    """One record-level step of a collection."""

    def __init__(
        self,
        kind: str,
        fn: Callable[[Any], Any],
        coder: "Coder",
        name: str | None = None,
    ):
        if kind not in STAGE_KINDS:
            raise ValueError(f"Unknown stage kind: {kind}")
        self.kind = kind
        self.fn = fn
        self.coder = coder
        self.name = name or kind

    def __repr__(self) -> str:
        return f"Stage({self.name!r}, kind={self.kind!r})"


def apply_stages(
    records: Iterable[Any], stages: list[Stage], verify_coders: bool = False
) -> Iterator[Any]:
    """
    Lazily apply ``stages`` to ``records`` in order.

    With ``verify_coders`` every record a stage emits is round-tripped
    through that stage's coder, so an unencodable record fails where it is
    produced instead of at the end of the chain.
    """
    it: Iterator[Any] = iter(records)
    for stage in stages:
        fn = stage.fn
        if stage.kind == "map":
            it = (fn(x) for x in it)
        elif stage.kind == "flat_map":
            it = (y for x in it for y in fn(x))
        else:
            it = (x for x in it if fn(x))

        if verify_coders:
            it = map(stage.coder.round_trip, it)
    return it


def process_partition(
    data_source: "DataSource",
    partition_index: int,
    stages: list[Stage],
    coder: "Coder",
    batch_size: int = 1024,
    verify_coders: bool = False,
) -> tuple[list[bytes], int]:
    """
    Run one partition through the stage chain.

    Returns:
        Encoded output records and the number of input records read
    """
    records_in = 0

    def counted() -> Iterator[Any]:
        nonlocal records_in
        for batch in data_source.create_reader(partition_index, batch_size):
            records_in += len(batch)
            yield from batch

    outputs = [
        coder.encode(record)
        for record in apply_stages(counted(), stages, verify_coders)
    ]
    logger.debug(
        f"Partition {partition_index}: {records_in} records in, {len(outputs)} out"
    )
    return outputs, records_in


def run_worker(
    worker_id: str,
    partition_indices: list[int],
    data_source: "DataSource",
    stages: list[Stage],
    coder: "Coder",
    options: "PipelineOptions",
) -> dict[str, Any]:
    """
    Process every partition assigned to one worker.

    Returns:
        Dictionary with encoded outputs keyed by partition index, plus metrics
    """
    outputs: dict[int, list[bytes]] = {}
    total_in = 0
    total_out = 0

    for partition_index in partition_indices:
        encoded, records_in = process_partition(
            data_source,
            partition_index,
            stages,
            coder,
            batch_size=options.batch_size,
            verify_coders=options.verify_coders,
        )
        outputs[partition_index] = encoded
        total_in += records_in
        total_out += len(encoded)

    return {
        "worker_id": worker_id,
        "outputs": outputs,
        "partitions": len(partition_indices),
        "records_in": total_in,
        "records_out": total_out,
        "status": "completed",
    }
