"""
Unit tests for record coders.
"""

import pytest

from pcats.data import Left, Nothing, Right, Some
from pcats.distributed.coders import CoderError, JsonCoder, PickleCoder


class TestPickleCoder:
    """Test cases for PickleCoder."""

    @pytest.mark.parametrize(
        "value",
        [
            [Some(1), Nothing()],
            {"a": Right([1, 2]), "b": Left("e")},
            (1, "x"),
            frozenset({1, 2}),
        ],
    )
    def test_round_trip(self, value):
        coder = PickleCoder()
        assert isinstance(coder.encode(value), bytes)
        assert coder.round_trip(value) == value

    def test_unencodable_value(self):
        coder = PickleCoder()
        with pytest.raises(CoderError, match="cannot encode value of type function"):
            coder.encode(lambda x: x)

    def test_corrupt_bytes(self):
        with pytest.raises(CoderError):
            PickleCoder().decode(b"not a pickle")


class TestJsonCoder:
    """Test cases for JsonCoder."""

    def test_round_trip(self):
        coder = JsonCoder()
        value = {"values": [1, 2, 3], "name": "x", "missing": None}
        assert coder.round_trip(value) == value

    def test_tuples_decode_as_lists(self):
        assert JsonCoder().round_trip((1, 2)) == [1, 2]

    def test_unencodable_value(self):
        with pytest.raises(CoderError, match="JsonCoder"):
            JsonCoder().encode(Some(1))

    def test_invalid_json(self):
        with pytest.raises(CoderError):
            JsonCoder().decode(b"{not json")

    def test_coder_error_is_value_error(self):
        with pytest.raises(ValueError):
            JsonCoder().encode({1, 2})
