"""Menu item and category endpoints."""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from restaurant_hub.core.errors import ApiError
from restaurant_hub.core.security import get_current_user
from restaurant_hub.db.session import get_db
from restaurant_hub.models import User
from restaurant_hub.schemas.common import Envelope, PaginatedEnvelope
from restaurant_hub.schemas.menu import (
    MenuCategoryCreate,
    MenuCategoryRead,
    MenuCategoryUpdate,
    MenuItemCreate,
    MenuItemDetail,
    MenuItemListing,
    MenuItemRead,
    MenuItemUpdate,
)
from restaurant_hub.services import menu_service
from restaurant_hub.services.pagination import paginate
from restaurant_hub.services.security_guards import ensure_restaurant_access

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/items", response_model=PaginatedEnvelope[MenuItemListing])
def list_menu_items(
    restaurant_id: int | None = None,
    category_id: int | None = None,
    search: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    is_vegetarian: bool = False,
    is_vegan: bool = False,
    is_gluten_free: bool = False,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
) -> PaginatedEnvelope[MenuItemListing]:
    query = menu_service.menu_items_query(
        db,
        restaurant_id=restaurant_id,
        category_id=category_id,
        search=search,
        min_price=min_price,
        max_price=max_price,
        is_vegetarian=is_vegetarian,
        is_vegan=is_vegan,
        is_gluten_free=is_gluten_free,
    )
    rows, pagination = paginate(query, page, limit)
    return PaginatedEnvelope[MenuItemListing](
        data=[MenuItemListing.model_validate(item) for item in rows],
        message="Menu items retrieved successfully",
        pagination=pagination,
    )


@router.get("/items/{item_id}", response_model=Envelope[MenuItemDetail])
def get_menu_item(item_id: int, db: Session = Depends(get_db)) -> Envelope[MenuItemDetail]:
    item = menu_service.get_available_menu_item(db, item_id)
    if item is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Menu item not found")
    return Envelope[MenuItemDetail](data=MenuItemDetail.model_validate(item), message="Menu item retrieved successfully")


@router.post("/items", response_model=Envelope[MenuItemRead], status_code=status.HTTP_201_CREATED)
def create_menu_item(
    payload: MenuItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[MenuItemRead]:
    ensure_restaurant_access(db, current_user, payload.restaurant_id)
    category = menu_service.get_category(db, payload.category_id)
    if not menu_service.category_belongs_to(category, payload.restaurant_id):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Category does not belong to this restaurant")

    item = menu_service.create_menu_item(db, payload.model_dump())
    logger.info("[MENU] Created menu_item_id=%s restaurant_id=%s", item.id, item.restaurant_id)
    return Envelope[MenuItemRead](data=MenuItemRead.model_validate(item), message="Menu item created successfully")


@router.put("/items/{item_id}", response_model=Envelope[MenuItemRead])
def update_menu_item(
    item_id: int,
    payload: MenuItemUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[MenuItemRead]:
    item = menu_service.get_menu_item(db, item_id)
    if item is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Menu item not found")
    ensure_restaurant_access(db, current_user, item.restaurant_id)

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("category_id") is not None:
        category = menu_service.get_category(db, changes["category_id"])
        if not menu_service.category_belongs_to(category, item.restaurant_id):
            raise ApiError(status.HTTP_400_BAD_REQUEST, "Category does not belong to this restaurant")

    item = menu_service.update_menu_item(db, item, changes)
    return Envelope[MenuItemRead](data=MenuItemRead.model_validate(item), message="Menu item updated successfully")


@router.delete("/items/{item_id}", response_model=Envelope[MenuItemRead])
def delete_menu_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[MenuItemRead]:
    item = menu_service.get_menu_item(db, item_id)
    if item is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Menu item not found")
    ensure_restaurant_access(db, current_user, item.restaurant_id)
    item = menu_service.withdraw_menu_item(db, item)
    logger.info("[MENU] Withdrew menu_item_id=%s", item.id)
    return Envelope[MenuItemRead](data=MenuItemRead.model_validate(item), message="Menu item deleted successfully")


@router.get("/categories", response_model=Envelope[list[MenuCategoryRead]])
def list_categories(
    restaurant_id: int | None = None,
    db: Session = Depends(get_db),
) -> Envelope[list[MenuCategoryRead]]:
    categories = menu_service.list_active_categories(db, restaurant_id)
    return Envelope[list[MenuCategoryRead]](
        data=[MenuCategoryRead.model_validate(category) for category in categories],
        message="Categories retrieved successfully",
    )


@router.post("/categories", response_model=Envelope[MenuCategoryRead], status_code=status.HTTP_201_CREATED)
def create_category(
    payload: MenuCategoryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[MenuCategoryRead]:
    ensure_restaurant_access(db, current_user, payload.restaurant_id)
    category = menu_service.create_category(db, payload.model_dump())
    return Envelope[MenuCategoryRead](data=MenuCategoryRead.model_validate(category), message="Category created successfully")


@router.put("/categories/{category_id}", response_model=Envelope[MenuCategoryRead])
def update_category(
    category_id: int,
    payload: MenuCategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[MenuCategoryRead]:
    category = menu_service.get_category(db, category_id)
    if category is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Category not found")
    ensure_restaurant_access(db, current_user, category.restaurant_id)
    category = menu_service.update_category(db, category, payload.model_dump(exclude_unset=True))
    return Envelope[MenuCategoryRead](data=MenuCategoryRead.model_validate(category), message="Category updated successfully")
