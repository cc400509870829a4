"""
Items — предметы каталога и выбранные пользователем предметы
"""

from pydantic import BaseModel, Field


class CatalogItem(BaseModel):
    """
    Предмет каталога (сопровождается администратором).

    Immutable модель (frozen=True).
    """

    id: str = Field(..., min_length=1, description="Идентификатор предмета")
    name: str = Field(..., min_length=1, description="Название")
    weight: float = Field(..., ge=0, allow_inf_nan=False, description="Вес единицы (кг)")
    category: str = Field(..., min_length=1, description="Категория каталога")

    model_config = {"frozen": True}

    def select(self, count: int) -> "SelectedItem":
        """Выбранный предмет с заданным количеством."""
        return SelectedItem(item_id=self.id, name=self.name, unit_weight=self.weight, count=count)


class SelectedItem(BaseModel):
    """
    Предмет, добавленный в текущий расчёт.

    Предметы с count == 0 не участвуют в суммарном весе.
    """

    item_id: str = Field(..., min_length=1, description="Идентификатор предмета каталога")
    name: str = Field(..., min_length=1, description="Название")
    unit_weight: float = Field(..., ge=0, allow_inf_nan=False, description="Вес единицы (кг)")
    count: int = Field(..., ge=0, description="Количество")

    model_config = {"frozen": True}

    def total_weight(self) -> float:
        """Вес всех единиц предмета (кг)."""
        return self.unit_weight * self.count
