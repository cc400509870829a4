"""
Violations — частота и последние нарушения нормы

Лимиты и тарифы берутся из текущих справочных данных, а не из журнала:
журнал хранит только факт нарушения и систему учёта на момент расчёта.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from src.analytics.statistics import DEFAULT_CONFIG, newest_first
from src.core.domain.flight import AccountingSystem, ClassType, FlightType
from src.core.domain.history import HistoryRecord
from src.core.domain.reference import Airline
from src.core.math.numerical_safeguards import ceil_with_tolerance, exceeds
from src.reference.store import ReferenceStore
from src.utils.logging_utils import get_logger

logger = get_logger(__name__)


# =============================================================================
# FREQUENCY RANKING
# =============================================================================


@dataclass(frozen=True)
class ViolationGroup:
    """Нарушения одной комбинации (авиакомпания, класс, тип рейса)."""

    airline_id: str
    class_type: ClassType
    flight_type: FlightType
    count: int
    system: AccountingSystem  # из самого свежего нарушения группы
    latest_total_weight: float
    weight_limit: Optional[float]  # текущий лимит; None если не продаётся


def _find_airline(reference_store: ReferenceStore, airline_id: str) -> Optional[Airline]:
    airline = reference_store.find_airline(airline_id)
    if airline is None:
        logger.warning("Airline %r from history no longer in reference data", airline_id)
    return airline


def violation_frequency_ranking(
    records: Iterable[HistoryRecord],
    reference_store: ReferenceStore,
    limit: Optional[int] = None,
) -> list[ViolationGroup]:
    """
    Группировка нарушений по (airline, class, flight type).

    Args:
        records: Записи журнала (любой порядок, любые пользователи)
        reference_store: Текущие справочные данные
        limit: Максимум групп (None — все)

    Returns:
        Группы по убыванию количества нарушений; при равенстве по ключу
    """
    groups: dict[tuple[str, ClassType, FlightType], list[HistoryRecord]] = defaultdict(list)
    for record in records:
        if record.limit_passed:
            groups[(record.airline, record.class_type, record.flight_type)].append(record)

    ranking = []
    for (airline_id, class_type, flight_type), violations in groups.items():
        latest = newest_first(violations)[0]
        airline = _find_airline(reference_store, airline_id)
        weight_limit = airline.limit_for(class_type, flight_type) if airline else None

        ranking.append(
            ViolationGroup(
                airline_id=airline_id,
                class_type=class_type,
                flight_type=flight_type,
                count=len(violations),
                system=latest.system,
                latest_total_weight=latest.total_weight,
                weight_limit=weight_limit,
            )
        )

    ranking.sort(
        key=lambda g: (-g.count, g.airline_id, g.class_type.value, g.flight_type.value)
    )
    if limit is not None:
        ranking = ranking[:limit]
    return ranking


# =============================================================================
# RECENT VIOLATIONS
# =============================================================================


@dataclass(frozen=True)
class RecentViolation:
    """
    Нарушение из журнала с пересчитанным по текущим тарифам сбором.

    weight_limit / unit_fee / total_fee равны None, если комбинация или
    тариф больше не заданы у авиакомпании.
    """

    calculated_at: datetime
    airline_id: str
    airline_name: str
    class_type: ClassType
    flight_type: FlightType
    system: AccountingSystem
    total_weight: float
    weight_limit: Optional[float]
    excess_weight: Optional[float]
    unit_fee: Optional[float]
    currency: str
    total_fee: Optional[float]


def _requote(record: HistoryRecord, airline: Airline) -> RecentViolation:
    weight_limit = airline.limit_for(record.class_type, record.flight_type)

    if record.system == AccountingSystem.PIECE:
        unit_fee = airline.piece_fee_for(record.class_type)
        currency = airline.international_currency
    else:
        unit_fee = airline.weight_fee_for(record.class_type, record.flight_type)
        currency = airline.currency_for(record.flight_type)

    excess_weight = None
    total_fee = None
    if weight_limit is not None:
        excess_weight = max(record.total_weight - weight_limit, 0.0)
        if unit_fee is not None:
            if not exceeds(record.total_weight, weight_limit):
                # текущая норма выше веса из журнала
                total_fee = 0.0
            elif record.system == AccountingSystem.PIECE:
                total_fee = unit_fee
            else:
                total_fee = ceil_with_tolerance(excess_weight) * unit_fee

    return RecentViolation(
        calculated_at=record.calculated_at,
        airline_id=airline.id,
        airline_name=airline.name,
        class_type=record.class_type,
        flight_type=record.flight_type,
        system=record.system,
        total_weight=record.total_weight,
        weight_limit=weight_limit,
        excess_weight=excess_weight,
        unit_fee=unit_fee,
        currency=currency,
        total_fee=total_fee,
    )


def recent_violations(
    records: Iterable[HistoryRecord],
    reference_store: ReferenceStore,
    limit: int = DEFAULT_CONFIG.recent_violations_limit,
) -> list[RecentViolation]:
    """
    Последние нарушения пользователя (сначала новые).

    Записи авиакомпаний, которых больше нет в справочнике, пропускаются.
    """
    result = []
    for record in newest_first(records):
        if not record.limit_passed:
            continue
        airline = _find_airline(reference_store, record.airline)
        if airline is None:
            continue
        result.append(_requote(record, airline))
        if len(result) >= limit:
            break
    return result
