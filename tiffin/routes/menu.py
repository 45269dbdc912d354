"""
Menu Endpoints

    GET /api/menu/dishes
    GET /api/menu/dishes/{dish_id}
"""

from typing import List

from fastapi import APIRouter, Depends

from tiffin.core.config import get_logger
from tiffin.dependencies import get_catalog_service
from tiffin.schemas import DishOut
from tiffin.services.catalog import CatalogService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/menu", tags=["Menu"])


@router.get("/dishes", response_model=List[DishOut])
async def list_dishes(catalog: CatalogService = Depends(get_catalog_service)) -> List[DishOut]:
    """Available dishes only."""
    dishes = catalog.list_available_dishes()
    logger.info(f"🍽️ Returning {len(dishes)} dishes")
    return [DishOut.from_dish(d) for d in dishes]


@router.get("/dishes/{dish_id}", response_model=DishOut)
async def get_dish(dish_id: int, catalog: CatalogService = Depends(get_catalog_service)) -> DishOut:
    return DishOut.from_dish(catalog.get_dish(dish_id))
