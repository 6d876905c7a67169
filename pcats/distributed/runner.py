"""
Local runner: executes a collection's stage chain across workers.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Any

from loguru import logger

from pcats.distributed.coordinator import Coordinator
from pcats.distributed.worker import run_worker

if TYPE_CHECKING:
    from pcats.distributed.options import PipelineOptions
    from pcats.distributed.pcollection import PCollection


class Runner:
    """
    Executes collections with either a thread pool or a plain loop.

    Partitions are assigned by a ``Coordinator``, each worker runs its
    partitions via ``run_worker``, and the encoded outputs are decoded here
    with the collection's coder. Results come back grouped by partition in
    partition-index order, independent of which worker finished first.
    """

    def __init__(self, options: "PipelineOptions"):
        self.options = options
        # metrics of the most recent run only; use execute() to get them per call
        self.last_metrics: list[dict[str, Any]] = []

    def run(self, coll: "PCollection") -> list[list[Any]]:
        partitions, self.last_metrics = self.execute(coll)
        return partitions

    def execute(
        self, coll: "PCollection"
    ) -> tuple[list[list[Any]], list[dict[str, Any]]]:
        """
        Run ``coll`` and return its decoded partitions with per-worker metrics.

        Returns:
            Tuple of (records per partition in partition-index order, one
            metrics dict per worker that had partitions)
        """
        source = coll.source
        coordinator = Coordinator(source, self.options.n_workers)
        assignments = coordinator.assign_partitions(seed=self.options.seed)

        logger.info(
            f"Running {coll.name}: {coordinator.total_partitions} partitions, "
            f"{len(coll.stages)} stages, {self.options.n_workers} workers "
            f"({self.options.runner})"
        )

        jobs = [
            (a.worker_id, a.partition_indices)
            for a in assignments.values()
            if a.partition_indices
        ]

        results: list[dict[str, Any]] = []
        if self.options.runner == "sequential" or len(jobs) <= 1:
            for worker_id, partitions in jobs:
                results.append(self._run_one(coll, worker_id, partitions))
        else:
            with ThreadPoolExecutor(max_workers=len(jobs)) as executor:
                futures = {
                    executor.submit(
                        self._run_one, coll, worker_id, partitions
                    ): worker_id
                    for worker_id, partitions in jobs
                }
                for future in as_completed(futures):
                    results.append(future.result())

        by_partition: dict[int, list[bytes]] = {}
        for result in results:
            by_partition.update(result["outputs"])

        metrics = [
            {k: v for k, v in result.items() if k != "outputs"} for result in results
        ]

        coder = coll.coder
        partitions = [
            [coder.decode(data) for data in by_partition.get(idx, [])]
            for idx in range(coordinator.total_partitions)
        ]
        return partitions, metrics

    def _run_one(
        self, coll: "PCollection", worker_id: str, partitions: list[int]
    ) -> dict[str, Any]:
        try:
            return run_worker(
                worker_id,
                partitions,
                coll.source,
                coll.stages,
                coll.coder,
                self.options,
            )
        except Exception as e:
            logger.error(f"[{worker_id}] {coll.name} failed: {type(e).__name__}: {e}")
            raise
