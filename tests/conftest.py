import polars as pl
import pytest

from pcats.data import Nothing, Some
from pcats.distributed import Pipeline, PipelineOptions


@pytest.fixture(params=["sequential", "threads"])
def pipeline(request):
    """Pipeline with small partitions, run both sequentially and on threads."""
    options = PipelineOptions(
        n_workers=3,
        n_partitions=4,
        batch_size=2,
        runner=request.param,
        verify_coders=True,
    )
    return Pipeline(options)


@pytest.fixture
def sequential_pipeline():
    """Single-worker pipeline for tests that only care about results."""
    return Pipeline(PipelineOptions(n_workers=1, n_partitions=2, runner="sequential"))


@pytest.fixture
def list_records():
    """Records of type list[int], including an empty list."""
    return [[1, 2, 3], [4, 5, 6], [], [7], [2, 3, 4]]


@pytest.fixture
def option_records():
    """Records of type Option[int]."""
    return [Some(1), Some(2), Nothing(), Some(10)]


@pytest.fixture
def nested_records():
    """Records of type list[Option[int]]."""
    return [
        [Some(1), Some(2), Nothing()],
        [Some(1), Some(2), Some(3)],
        [],
        [Some(5)],
    ]


@pytest.fixture
def values_frame():
    """DataFrame with a list column usable as list records."""
    return pl.DataFrame(
        {
            "id": [0, 1, 2, 3],
            "values": [[1, 2], [3], [], [4, 5, 6]],
        }
    )
