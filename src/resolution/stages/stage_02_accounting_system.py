"""STAGE 2: Определение системы учёта (weight / piece)

Правило: если страна вылета ИЛИ страна прилёта использует piece-систему,
весь маршрут считается по piece-системе; иначе weight.

Стадия не знает о типе рейса и не предполагает взаимоисключения
domestic и piece (его обеспечивает UI); тарифы piece-системы всегда берутся
из международной таблицы на стадии 4.
"""

from dataclasses import dataclass

from src.core.domain.flight import AccountingSystem
from src.core.domain.reference import Country
from src.resolution import messages


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class SystemResolution:
    """Результат STAGE 2."""

    system: AccountingSystem
    origin_uses_piece: bool
    destination_uses_piece: bool

    # Уведомление для UI (пустое для weight-системы)
    notice: str


# =============================================================================
# STAGE 2
# =============================================================================


class AccountingSystemResolver:
    """STAGE 2: Система учёта по паре стран (stateless)."""

    def evaluate(self, origin: Country, destination: Country) -> SystemResolution:
        """
        Args:
            origin: Страна вылета
            destination: Страна прилёта (может совпадать с origin)

        Returns:
            SystemResolution
        """
        origin_uses_piece = origin.uses_piece_system
        destination_uses_piece = destination.uses_piece_system

        if origin_uses_piece or destination_uses_piece:
            system = AccountingSystem.PIECE
        else:
            system = AccountingSystem.WEIGHT

        return SystemResolution(
            system=system,
            origin_uses_piece=origin_uses_piece,
            destination_uses_piece=destination_uses_piece,
            notice=messages.piece_system_notice(
                self._piece_country_names(origin, destination)
            ),
        )

    def _piece_country_names(self, origin: Country, destination: Country) -> list[str]:
        names = []
        if origin.uses_piece_system:
            names.append(origin.name)
        # Одна и та же страна упоминается один раз
        if destination.uses_piece_system and destination.id != origin.id:
            names.append(destination.name)
        return names


def resolve_system(origin: Country, destination: Country) -> SystemResolution:
    """Система учёта для маршрута origin → destination."""
    return AccountingSystemResolver().evaluate(origin, destination)
