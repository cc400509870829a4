"""STAGE 3: Норма багажа и доступность комбинации

Ищет airline.limits[(class_type, flight_type)].

Отсутствующий ключ или лимит 0 → комбинация не продаётся (NOT_OFFERED).
Это штатное состояние с конкретным сообщением для пользователя, а не сбой.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.flight import ClassType, FlightType
from src.core.domain.reference import Airline
from src.resolution import messages


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class LimitResolution:
    """Результат STAGE 3."""

    offered: bool
    weight_limit: Optional[float]  # None если не продаётся

    airline_id: str
    class_type: ClassType
    flight_type: FlightType

    # Сообщение для пользователя (пустое если продаётся)
    message: str


# =============================================================================
# STAGE 3
# =============================================================================


class LimitResolver:
    """STAGE 3: Норма багажа (stateless)."""

    def evaluate(
        self, airline: Airline, class_type: ClassType, flight_type: FlightType
    ) -> LimitResolution:
        """
        Args:
            airline: Авиакомпания
            class_type: Класс обслуживания
            flight_type: Тип рейса

        Returns:
            LimitResolution (offered=False с сообщением, если комбинации нет)
        """
        weight_limit = airline.limit_for(class_type, flight_type)

        if weight_limit is None:
            return LimitResolution(
                offered=False,
                weight_limit=None,
                airline_id=airline.id,
                class_type=class_type,
                flight_type=flight_type,
                message=messages.not_offered(airline.name, class_type, flight_type),
            )

        return LimitResolution(
            offered=True,
            weight_limit=weight_limit,
            airline_id=airline.id,
            class_type=class_type,
            flight_type=flight_type,
            message="",
        )


def resolve_limit(
    airline: Airline, class_type: ClassType, flight_type: FlightType
) -> LimitResolution:
    """Норма багажа для (класс, тип рейса) или NOT_OFFERED."""
    return LimitResolver().evaluate(airline, class_type, flight_type)
