"""STAGE 1: Суммирование веса выбранных предметов

Суммирует unit_weight * count по предметам с count > 0.

Инварианты:
- Результат не зависит от порядка предметов (math.fsum по
  отсортированным слагаемым)
- Разбиение количества одного предмета на несколько записей с тем же
  item_id не меняет сумму (количества сначала складываются по item_id)
- Точность не обрезается; округление только при отображении
"""

import math
from dataclasses import dataclass
from typing import Iterable

from src.core.domain.items import SelectedItem
from src.core.errors import EmptySelectionError


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class WeightAggregation:
    """Результат STAGE 1."""

    total_weight: float  # Суммарный вес (кг)
    distinct_items: int  # Уникальных предметов с count > 0
    total_pieces: int  # Сумма count

    details: str


# =============================================================================
# STAGE 1
# =============================================================================


class WeightAggregator:
    """STAGE 1: Суммирование веса (stateless)."""

    def evaluate(self, items: Iterable[SelectedItem]) -> WeightAggregation:
        """
        Суммарный вес выбранных предметов.

        Args:
            items: Выбранные предметы (count == 0 игнорируются)

        Returns:
            WeightAggregation

        Raises:
            EmptySelectionError: Если ни у одного предмета нет count > 0
        """
        counts: dict[tuple[str, float], int] = {}
        for item in items:
            if item.count <= 0:
                continue
            key = (item.item_id, item.unit_weight)
            counts[key] = counts.get(key, 0) + item.count

        if not counts:
            raise EmptySelectionError()

        terms = sorted(unit_weight * count for (_, unit_weight), count in counts.items())
        total_weight = math.fsum(terms)
        distinct_items = len({item_id for item_id, _ in counts})
        total_pieces = sum(counts.values())

        return WeightAggregation(
            total_weight=total_weight,
            distinct_items=distinct_items,
            total_pieces=total_pieces,
            details=f"{total_pieces} pieces of {distinct_items} items, total={total_weight:.3f}kg",
        )


def aggregate(items: Iterable[SelectedItem]) -> float:
    """
    Суммарный вес выбранных предметов (кг).

    Raises:
        EmptySelectionError: Если ни у одного предмета нет count > 0
    """
    return WeightAggregator().evaluate(items).total_weight
