"""
DuckDB-based oracle for approximate rectangle matching.

This module stores encoded rectangles in an in-memory DuckDB table and
answers match queries with a single masked comparison over the keys.
"""

from typing import Iterable, List, Optional

import duckdb

from .oracle import Oracle
from .span import SpanConfig
from .zorder import DEFAULT_LAYOUT, KeyLayout


class DuckDBOracle(Oracle):
    """
    Oracle implementation using an in-memory DuckDB table.

    Keys are stored as UBIGINT, so layouts wider than 64 bits are rejected.
    A query at precision p matches rows where (key & mask) equals the query's
    bucket key, with mask keeping the top p bits of every field.
    """

    def __init__(self, layout: KeyLayout = DEFAULT_LAYOUT):
        """
        Initialize the DuckDB oracle.

        Args:
            layout: Key layout of the stored rectangles (at most 64 bits)
        """
        self._con: Optional[duckdb.DuckDBPyConnection] = None

        if layout.total_bits > 64:
            raise ValueError(
                f"DuckDBOracle stores UBIGINT keys, layout has {layout.total_bits} bits"
            )
        super().__init__(layout)
        self._next_id = 0

        self._con = duckdb.connect(":memory:")
        self._con.execute("""
            CREATE TABLE rects (
                id INTEGER PRIMARY KEY,
                key UBIGINT NOT NULL
            )
        """)

    def _connection(self) -> duckdb.DuckDBPyConnection:
        if self._con is None:
            raise ValueError("DuckDBOracle is closed")
        return self._con

    def _bucket_mask(self, config: SpanConfig) -> int:
        """Mask keeping the key bits that survive truncation."""
        n = config.truncated_bit_count
        return self.layout.key_max & ~((1 << n) - 1)

    def add(self, key: int) -> int:
        return self.add_batch([key])[0]

    def add_batch(self, keys: Iterable[int]) -> List[int]:
        """
        Store several rectangles in a single insert.

        Args:
            keys: Interleaved rectangle keys

        Returns:
            Ids in the same order as the input keys
        """
        rows = []
        for key in keys:
            self._check_key(key)
            rows.append((self._next_id + len(rows), key))

        if rows:
            self._connection().executemany(
                "INSERT INTO rects VALUES (?, CAST(? AS UBIGINT))", rows
            )
            self._next_id += len(rows)

        return [rect_id for rect_id, _ in rows]

    def matches(self, key: int, precision_bits: int) -> List[int]:
        self._check_key(key)
        mask = self._bucket_mask(self._span_config(precision_bits))
        result = self._connection().execute("""
            SELECT id
            FROM rects
            WHERE (key & CAST(? AS UBIGINT)) = CAST(? AS UBIGINT)
            ORDER BY id
        """, [mask, key & mask]).fetchall()

        return [row[0] for row in result]

    def count(self) -> int:
        (n,) = self._connection().execute("SELECT COUNT(*) FROM rects").fetchone()
        return n

    def close(self) -> None:
        """Close the database connection."""
        if self._con is not None:
            self._con.close()
            self._con = None

    def __del__(self):
        """Cleanup on garbage collection."""
        self.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
