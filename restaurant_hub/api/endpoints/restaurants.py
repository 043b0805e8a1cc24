"""Restaurant and review endpoints."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from restaurant_hub.core.errors import ApiError
from restaurant_hub.core.security import get_current_user
from restaurant_hub.db.session import get_db
from restaurant_hub.models import Order, Restaurant, User
from restaurant_hub.schemas.common import Envelope, PaginatedEnvelope
from restaurant_hub.schemas.menu import MenuItemSummary
from restaurant_hub.schemas.restaurant import (
    CategoryWithItems,
    RestaurantCreate,
    RestaurantDetail,
    RestaurantImageRead,
    RestaurantListing,
    RestaurantRead,
    RestaurantReview,
    RestaurantUpdate,
    ReviewCreate,
    ReviewRead,
)
from restaurant_hub.services import restaurant_service
from restaurant_hub.services.pagination import paginate
from restaurant_hub.services.security_guards import ADMIN_ROLE, OWNER_ROLE, ensure_restaurant_access, require_role

router: APIRouter = APIRouter()


def _serialize_detail(restaurant: Restaurant) -> RestaurantDetail:
    categories = [
        CategoryWithItems(
            id=category.id,
            name=category.name,
            description=category.description,
            display_order=category.display_order,
            menu_items=[MenuItemSummary.model_validate(item) for item in category.menu_items if item.is_available],
        )
        for category in restaurant.menu_categories
        if category.is_active
    ]
    return RestaurantDetail(
        **RestaurantRead.model_validate(restaurant).model_dump(),
        menu_categories=categories,
        restaurant_images=[RestaurantImageRead.model_validate(image) for image in restaurant.restaurant_images],
    )


@router.get("", response_model=Envelope[list[RestaurantListing]])
def list_restaurants(
    cuisine_type: str | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> Envelope[list[RestaurantListing]]:
    rows = restaurant_service.list_restaurant_details(db, cuisine_type=cuisine_type, search=search)
    data = [
        RestaurantListing(
            **RestaurantRead.model_validate(restaurant).model_dump(),
            average_rating=average,
            review_count=count,
        )
        for restaurant, average, count in rows
    ]
    return Envelope[list[RestaurantListing]](data=data, message="Restaurants retrieved successfully")


@router.get("/{restaurant_id}", response_model=Envelope[RestaurantDetail])
def get_restaurant(restaurant_id: int, db: Session = Depends(get_db)) -> Envelope[RestaurantDetail]:
    restaurant = restaurant_service.get_active_restaurant(db, restaurant_id)
    if restaurant is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Restaurant not found")
    return Envelope[RestaurantDetail](data=_serialize_detail(restaurant), message="Restaurant retrieved successfully")


@router.post("", response_model=Envelope[RestaurantRead], status_code=status.HTTP_201_CREATED)
def create_restaurant(
    payload: RestaurantCreate,
    current_user: User = Depends(require_role(OWNER_ROLE, ADMIN_ROLE)),
    db: Session = Depends(get_db),
) -> Envelope[RestaurantRead]:
    restaurant = restaurant_service.create_restaurant(db, current_user.id, payload.model_dump())
    return Envelope[RestaurantRead](data=RestaurantRead.model_validate(restaurant), message="Restaurant created successfully")


@router.put("/{restaurant_id}", response_model=Envelope[RestaurantRead])
def update_restaurant(
    restaurant_id: int,
    payload: RestaurantUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[RestaurantRead]:
    restaurant = ensure_restaurant_access(db, current_user, restaurant_id)
    restaurant = restaurant_service.update_restaurant(db, restaurant, payload.model_dump(exclude_unset=True))
    return Envelope[RestaurantRead](data=RestaurantRead.model_validate(restaurant), message="Restaurant updated successfully")


@router.delete("/{restaurant_id}", response_model=Envelope[RestaurantRead])
def delete_restaurant(
    restaurant_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[RestaurantRead]:
    restaurant = ensure_restaurant_access(db, current_user, restaurant_id)
    restaurant = restaurant_service.deactivate_restaurant(db, restaurant)
    return Envelope[RestaurantRead](data=RestaurantRead.model_validate(restaurant), message="Restaurant deleted successfully")


@router.get("/{restaurant_id}/reviews", response_model=PaginatedEnvelope[RestaurantReview])
def list_reviews(
    restaurant_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
) -> PaginatedEnvelope[RestaurantReview]:
    rows, pagination = paginate(restaurant_service.restaurant_reviews_query(db, restaurant_id), page, limit)
    return PaginatedEnvelope[RestaurantReview](
        data=[RestaurantReview.model_validate(review) for review in rows],
        message="Reviews retrieved successfully",
        pagination=pagination,
    )


@router.post("/{restaurant_id}/reviews", response_model=Envelope[ReviewRead], status_code=status.HTTP_201_CREATED)
def add_review(
    restaurant_id: int,
    payload: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Envelope[ReviewRead]:
    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None or not restaurant.is_active:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Restaurant not found")
    if payload.order_id is not None:
        order = db.get(Order, payload.order_id)
        if order is None or order.user_id != current_user.id or order.restaurant_id != restaurant_id:
            raise ApiError(status.HTTP_400_BAD_REQUEST, "Order does not belong to this customer and restaurant")

    review = restaurant_service.add_review(
        db,
        user_id=current_user.id,
        restaurant_id=restaurant_id,
        rating=payload.rating,
        comment=payload.comment,
        order_id=payload.order_id,
    )
    return Envelope[ReviewRead](data=ReviewRead.model_validate(review), message="Review added successfully")
