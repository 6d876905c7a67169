"""
Coders turn records into bytes at the boundary between workers and the
runner. Every collection carries the coder for its record type.
"""

import json
import pickle
from abc import ABC, abstractmethod
from typing import Any


class CoderError(ValueError):
    """A record could not be encoded or decoded."""


class Coder(ABC):
    """Encode/decode records of one type."""

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        raise NotImplementedError

    def round_trip(self, value: Any) -> Any:
        return self.decode(self.encode(value))


class PickleCoder(Coder):
    """Default coder; handles any picklable record, including the bundled containers."""

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        self.protocol = protocol

    def encode(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise CoderError(
                f"PickleCoder cannot encode value of type {type(value).__name__}: {e}"
            ) from e

    def decode(self, data: bytes) -> Any:
        try:
            return pickle.loads(data)
        except (pickle.UnpicklingError, EOFError, ValueError, ImportError) as e:
            raise CoderError(f"PickleCoder cannot decode {len(data)} bytes: {e}") from e

    def __repr__(self) -> str:
        return f"PickleCoder(protocol={self.protocol})"


class JsonCoder(Coder):
    """
    JSON coder for records made of dicts, lists, strings, numbers and None.

    Tuples decode as lists.
    """

    def encode(self, value: Any) -> bytes:
        try:
            return json.dumps(value, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CoderError(
                f"JsonCoder cannot encode value of type {type(value).__name__}: {e}"
            ) from e

    def decode(self, data: bytes) -> Any:
        try:
            return json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CoderError(f"JsonCoder cannot decode {len(data)} bytes: {e}") from e

    def __repr__(self) -> str:
        return "JsonCoder()"


DEFAULT_CODER = PickleCoder()
