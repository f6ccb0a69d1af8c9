"""Unit tests for sort and paging value types."""

import pytest

from src.catalog.core.paging import MAX_ROW_NUMBER, Direction, Order, PageRequest, Sort


class TestSort:
    def test_by_builds_orders(self):
        sort = Sort.by("nombre", "precio", direction=Direction.DESC)

        assert list(sort) == [
            Order("nombre", Direction.DESC),
            Order("precio", Direction.DESC),
        ]

    def test_default_direction_is_ascending(self):
        assert [o.direction for o in Sort.by("nombre")] == [Direction.ASC]


class TestPageRequest:
    def test_offset(self):
        assert PageRequest(3, 20).offset == 60
        assert PageRequest(0, 5).offset == 0

    def test_negative_page_rejected(self):
        with pytest.raises(ValueError, match="no puede ser negativo"):
            PageRequest(-1, 10)

    @pytest.mark.parametrize("size", [0, -5])
    def test_non_positive_size_rejected(self, size):
        with pytest.raises(ValueError, match="mayor que cero"):
            PageRequest(0, size)

    def test_offset_beyond_sql_integer_range_rejected(self):
        with pytest.raises(ValueError, match="índice de página está fuera de rango"):
            PageRequest(10**18, 100)

    def test_size_beyond_sql_integer_range_rejected(self):
        with pytest.raises(ValueError, match="tamaño de página está fuera de rango"):
            PageRequest(0, MAX_ROW_NUMBER + 1)

    def test_largest_offset_accepted(self):
        assert PageRequest(MAX_ROW_NUMBER, 1).offset == MAX_ROW_NUMBER

    def test_default_sort_is_empty(self):
        assert list(PageRequest(0, 1).sort) == []
