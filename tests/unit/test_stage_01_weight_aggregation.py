"""Тесты для STAGE 1: Суммирование веса.

Coverage:
- Сумма unit_weight * count по предметам с count > 0
- EmptySelectionError при пустом выборе
- Инвариантность к перестановке и к разбиению количества
- Отсутствие обрезки точности
"""

import itertools

import pytest

from src.core.domain import SelectedItem
from src.core.errors import EmptySelectionError
from src.resolution.stages import WeightAggregator, aggregate


def _item(item_id: str, unit_weight: float, count: int) -> SelectedItem:
    return SelectedItem(item_id=item_id, name=item_id.title(), unit_weight=unit_weight, count=count)


class TestWeightAggregator:
    """Тесты STAGE 1."""

    def test_scenario_total(self):
        """[{0.5 × 2}, {1.2 × 1}] → 2.2 кг."""
        result = WeightAggregator().evaluate([_item("jeans", 0.5, 2), _item("jacket", 1.2, 1)])

        assert result.total_weight == pytest.approx(2.2)
        assert result.distinct_items == 2
        assert result.total_pieces == 3

    def test_zero_count_ignored(self):
        items = [_item("jeans", 0.5, 2), _item("piano", 200.0, 0)]
        assert aggregate(items) == pytest.approx(1.0)

    def test_empty_list(self):
        with pytest.raises(EmptySelectionError, match="at least one item"):
            aggregate([])

    def test_all_zero_counts(self):
        """Только нулевые количества — расчёт блокируется, а не возвращает 0."""
        with pytest.raises(EmptySelectionError):
            aggregate([_item("jeans", 0.5, 0), _item("jacket", 1.2, 0)])

    def test_weightless_items_sum_to_zero(self):
        assert aggregate([_item("ticket", 0.0, 1)]) == 0.0

    def test_order_invariance(self):
        """Все перестановки дают идентичную сумму."""
        items = [_item("a", 0.1, 3), _item("b", 0.2, 1), _item("c", 0.7, 2), _item("d", 1.3, 1)]
        totals = {aggregate(list(p)) for p in itertools.permutations(items)}
        assert len(totals) == 1

    def test_split_invariance(self):
        """Разбиение count одного предмета на две записи не меняет сумму."""
        whole = [_item("a", 0.1, 3), _item("b", 0.3, 4)]
        split = [_item("a", 0.1, 1), _item("b", 0.3, 4), _item("a", 0.1, 2)]
        assert aggregate(whole) == aggregate(split)

    def test_split_counts_merged(self):
        result = WeightAggregator().evaluate([_item("a", 0.1, 1), _item("a", 0.1, 2)])
        assert result.distinct_items == 1
        assert result.total_pieces == 3

    def test_precision_not_truncated(self):
        assert aggregate([_item("a", 0.123456, 1)]) == 0.123456

    def test_details(self):
        result = WeightAggregator().evaluate([_item("jeans", 0.5, 2)])
        assert "2 pieces of 1 items" in result.details
