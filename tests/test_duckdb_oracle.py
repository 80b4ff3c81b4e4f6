"""Tests for DuckDB oracle."""

import random

import pytest
from zorder_rect.duckdb_oracle import DuckDBOracle
from zorder_rect.oracle import ListOracle
from zorder_rect.rect import RectKey
from zorder_rect.span import SpanConfig
from zorder_rect.zorder import KeyLayout


@pytest.fixture
def oracle():
    """Create oracle fixture for tests."""
    oracle = DuckDBOracle()
    yield oracle
    oracle.close()


def _random_keys(seed: int, count: int):
    rng = random.Random(seed)
    return [
        RectKey.from_fields(*(rng.randint(0, 0xFFFF) for _ in range(4))).value
        for _ in range(count)
    ]


class TestDuckDBOracle:
    """Tests for DuckDBOracle class."""

    def test_add_and_count(self, oracle):
        """Test rectangles are stored with sequential ids."""
        assert oracle.count() == 0
        assert oracle.add(5) == 0
        assert oracle.add_batch([6, 7]) == [1, 2]
        assert oracle.add_batch([]) == []
        assert oracle.count() == 3

    def test_exact_match(self, oracle):
        """Test full precision finds only identical keys."""
        a = RectKey.from_fields(100, 200, 300, 400)
        b = a.with_x0(101)
        oracle.add_batch([a.value, b.value, a.value])
        assert oracle.matches(a.value, 16) == [0, 2]

    def test_high_bit_keys(self, oracle):
        """Test keys above 2^63 are stored and matched."""
        top = RectKey.from_fields(0xFFFF, 0xFFFF, 0xFFFF, 0xFFFF)
        near = RectKey.from_fields(0xF000, 0xF123, 0xFFFF, 0xF00F)
        low = RectKey.from_fields(0x7FFF, 0xFFFF, 0xFFFF, 0xFFFF)
        oracle.add_batch([top.value, near.value, low.value])

        assert oracle.matches(top.value, 16) == [0]
        assert oracle.matches(top.value, 4) == [0, 1]
        assert oracle.matches(top.value, 1) == [0, 1]
        assert oracle.matches(top.value, 0) == [0, 1, 2]

    def test_agrees_with_list_oracle(self, oracle):
        """Test SQL masking and per-field prefixes give the same matches."""
        keys = _random_keys(21, 60)
        keys += [k ^ 0x3 for k in keys[:20]] + [k ^ 0xFFFFFF for k in keys[20:30]]

        reference = ListOracle()
        reference.add_batch(keys)
        oracle.add_batch(keys)

        for query in keys[:10] + _random_keys(22, 5):
            for p in range(17):
                assert oracle.matches(query, p) == reference.matches(query, p)

    def test_small_layout(self):
        """Test a 16-bit layout."""
        layout = KeyLayout(total_bits=16)
        with DuckDBOracle(layout) as oracle:
            a = RectKey.from_fields(0b1000, 0b0100, 0b0010, 0b0001, layout)
            b = RectKey.from_fields(0b1011, 0b0111, 0b0011, 0b0000, layout)
            oracle.add_batch([a.value, b.value])
            assert oracle.matches(a.value, 2) == [0, 1]
            assert oracle.matches(a.value, 3) == [0]

    def test_rejects_wide_layout(self):
        """Test layouts wider than UBIGINT are rejected."""
        with pytest.raises(ValueError):
            DuckDBOracle(KeyLayout(total_bits=128))

    def test_invalid_input(self, oracle):
        """Test out-of-range keys and precision are rejected."""
        with pytest.raises(ValueError):
            oracle.add(1 << 64)
        with pytest.raises(ValueError):
            oracle.matches(0, 17)

    def test_precision_error_matches_span_config(self, oracle):
        """Test the precision error is the one SpanConfig raises."""
        with pytest.raises(ValueError) as expected:
            SpanConfig(-1)
        with pytest.raises(ValueError) as actual:
            oracle.matches(0, -1)
        assert str(actual.value) == str(expected.value)

    def test_closed(self):
        """Test a closed oracle refuses queries."""
        oracle = DuckDBOracle()
        oracle.close()
        oracle.close()
        with pytest.raises(ValueError):
            oracle.count()

    def test_context_manager(self):
        """Test the context manager closes the connection."""
        with DuckDBOracle() as oracle:
            oracle.add(1)
            assert oracle.count() == 1
        with pytest.raises(ValueError):
            oracle.matches(1, 16)
