"""Catalog Store: read-only dish listing."""

from typing import List

from tiffin.core.errors import DishNotFound
from tiffin.models import Dish
from tiffin.store import DataStore


class CatalogService:

    def __init__(self, store: DataStore):
        self.store = store

    def list_available_dishes(self) -> List[Dish]:
        """Available dishes in insertion order."""
        return [d for d in self.store.dishes.list() if d.is_available]

    def get_dish(self, dish_id: int) -> Dish:
        dish = self.store.dishes.get(dish_id)
        if dish is None:
            raise DishNotFound()
        return dish
