"""
Oracle interface for approximate rectangle matching.

An oracle holds a collection of encoded rectangles and answers which of
them match a query key at a given precision. It is ground truth for the
bucket-key shortcut in span.py: ListOracle never truncates the composite
key, it compares the top bits of every decoded field instead.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from .span import SpanConfig
from .zorder import DEFAULT_LAYOUT, KeyLayout, check_key, decode_field


class Oracle(ABC):
    """
    Abstract base class for match oracles.

    Rectangles are identified by the integer id returned from add().
    """

    def __init__(self, layout: KeyLayout = DEFAULT_LAYOUT):
        self.layout = layout

    def _check_key(self, key: int) -> None:
        check_key(key, self.layout)

    def _span_config(self, precision_bits: int) -> SpanConfig:
        return SpanConfig(precision_bits, self.layout)

    @abstractmethod
    def add(self, key: int) -> int:
        """
        Store an encoded rectangle.

        Args:
            key: Interleaved rectangle key

        Returns:
            Id assigned to the stored rectangle
        """
        pass

    def add_batch(self, keys: Iterable[int]) -> List[int]:
        """
        Store several encoded rectangles.

        Default implementation calls add() for each key.
        Subclasses may override for better performance.
        """
        return [self.add(key) for key in keys]

    @abstractmethod
    def matches(self, key: int, precision_bits: int) -> List[int]:
        """
        Find stored rectangles in the same bucket as key.

        Args:
            key: Query key
            precision_bits: Most significant bits compared per dimension

        Returns:
            Sorted list of matching ids
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored rectangles."""
        pass


class ListOracle(Oracle):
    """
    In-memory oracle comparing decoded field prefixes.

    Each stored key is decoded into its D fields, and a query matches when
    every field agrees on its top precision_bits bits.
    """

    def __init__(self, layout: KeyLayout = DEFAULT_LAYOUT):
        super().__init__(layout)
        self._keys: Dict[int, int] = {}

    def _fields(self, key: int) -> List[int]:
        return [decode_field(key, d, self.layout) for d in range(self.layout.dimensions)]

    def add(self, key: int) -> int:
        self._check_key(key)
        rect_id = len(self._keys)
        self._keys[rect_id] = key
        return rect_id

    def matches(self, key: int, precision_bits: int) -> List[int]:
        self._check_key(key)
        config = self._span_config(precision_bits)

        shift = self.layout.field_bits - config.precision_bits
        query = [v >> shift for v in self._fields(key)]

        result = []
        for rect_id, stored in self._keys.items():
            if [v >> shift for v in self._fields(stored)] == query:
                result.append(rect_id)
        return sorted(result)

    def count(self) -> int:
        return len(self._keys)
