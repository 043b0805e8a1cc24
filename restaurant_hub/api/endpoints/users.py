"""User administration, address book and per-user history endpoints."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from restaurant_hub.core.errors import ApiError
from restaurant_hub.db.session import get_db
from restaurant_hub.models import User
from restaurant_hub.schemas.common import Envelope, MessageResponse, PaginatedEnvelope
from restaurant_hub.schemas.order import OrderWithItems
from restaurant_hub.schemas.restaurant import UserReview
from restaurant_hub.schemas.user import AddressCreate, AddressRead, AddressUpdate, UserAdminUpdate, UserRead, UserStatusUpdate
from restaurant_hub.services import order_service, restaurant_service, user_service
from restaurant_hub.services.pagination import paginate
from restaurant_hub.services.security_guards import ADMIN_ROLE, require_role, require_self_or_admin

router: APIRouter = APIRouter()


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = user_service.get_user_by_id(db, user_id)
    if user is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found")
    return user


@router.get("", response_model=PaginatedEnvelope[UserRead])
def list_users(
    role: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    _: User = Depends(require_role(ADMIN_ROLE)),
    db: Session = Depends(get_db),
) -> PaginatedEnvelope[UserRead]:
    rows, pagination = paginate(user_service.list_users_query(db, role=role, search=search), page, limit)
    return PaginatedEnvelope[UserRead](
        data=[UserRead.model_validate(user) for user in rows],
        message="Users retrieved successfully",
        pagination=pagination,
    )


@router.get("/{user_id}", response_model=Envelope[UserRead])
def get_user(
    user_id: int,
    _: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
) -> Envelope[UserRead]:
    user = _get_user_or_404(db, user_id)
    return Envelope[UserRead](data=UserRead.model_validate(user), message="User retrieved successfully")


@router.put("/{user_id}", response_model=Envelope[UserRead])
def update_user(
    user_id: int,
    payload: UserAdminUpdate,
    _: User = Depends(require_role(ADMIN_ROLE)),
    db: Session = Depends(get_db),
) -> Envelope[UserRead]:
    user = _get_user_or_404(db, user_id)
    changes = payload.model_dump(exclude_none=True)
    if "email" in changes:
        if not user_service.is_valid_email(changes["email"]):
            raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid email format")
        existing = user_service.get_user_by_email(db, changes["email"])
        if existing is not None and existing.id != user.id:
            raise ApiError(status.HTTP_409_CONFLICT, "User with this email already exists")
    try:
        user = user_service.update_user(db, user, changes)
    except ValueError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid role") from exc
    return Envelope[UserRead](data=UserRead.model_validate(user), message="User updated successfully")


@router.patch("/{user_id}/status", response_model=Envelope[UserRead])
def update_user_status(
    user_id: int,
    payload: UserStatusUpdate,
    _: User = Depends(require_role(ADMIN_ROLE)),
    db: Session = Depends(get_db),
) -> Envelope[UserRead]:
    user = _get_user_or_404(db, user_id)
    user = user_service.set_user_active(db, user, payload.is_active)
    verb = "activated" if payload.is_active else "deactivated"
    return Envelope[UserRead](data=UserRead.model_validate(user), message=f"User {verb} successfully")


@router.get("/{user_id}/addresses", response_model=Envelope[list[AddressRead]])
def list_addresses(
    user_id: int,
    _: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
) -> Envelope[list[AddressRead]]:
    addresses = user_service.list_addresses(db, user_id)
    return Envelope[list[AddressRead]](
        data=[AddressRead.model_validate(address) for address in addresses],
        message="Addresses retrieved successfully",
    )


@router.post("/{user_id}/addresses", response_model=Envelope[AddressRead], status_code=status.HTTP_201_CREATED)
def add_address(
    user_id: int,
    payload: AddressCreate,
    _: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
) -> Envelope[AddressRead]:
    _get_user_or_404(db, user_id)
    address = user_service.add_address(db, user_id, payload.model_dump())
    return Envelope[AddressRead](data=AddressRead.model_validate(address), message="Address added successfully")


@router.put("/{user_id}/addresses/{address_id}", response_model=Envelope[AddressRead])
def update_address(
    user_id: int,
    address_id: int,
    payload: AddressUpdate,
    _: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
) -> Envelope[AddressRead]:
    address = user_service.get_address(db, user_id, address_id)
    if address is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Address not found")
    address = user_service.update_address(db, address, payload.model_dump(exclude_unset=True))
    return Envelope[AddressRead](data=AddressRead.model_validate(address), message="Address updated successfully")


@router.delete("/{user_id}/addresses/{address_id}", response_model=MessageResponse)
def delete_address(
    user_id: int,
    address_id: int,
    _: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    address = user_service.get_address(db, user_id, address_id)
    if address is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Address not found")
    user_service.delete_address(db, address)
    return MessageResponse(message="Address deleted successfully")


@router.get("/{user_id}/orders", response_model=PaginatedEnvelope[OrderWithItems])
def list_user_orders(
    user_id: int,
    order_status: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    _: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
) -> PaginatedEnvelope[OrderWithItems]:
    rows, pagination = paginate(order_service.orders_query(db, user_id=user_id, status=order_status), page, limit)
    return PaginatedEnvelope[OrderWithItems](
        data=[OrderWithItems.model_validate(order) for order in rows],
        message="User orders retrieved successfully",
        pagination=pagination,
    )


@router.get("/{user_id}/reviews", response_model=PaginatedEnvelope[UserReview])
def list_user_reviews(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    _: User = Depends(require_self_or_admin),
    db: Session = Depends(get_db),
) -> PaginatedEnvelope[UserReview]:
    rows, pagination = paginate(restaurant_service.user_reviews_query(db, user_id), page, limit)
    return PaginatedEnvelope[UserReview](
        data=[UserReview.model_validate(review) for review in rows],
        message="User reviews retrieved successfully",
        pagination=pagination,
    )
