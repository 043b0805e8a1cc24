"""API router composition."""

from fastapi import APIRouter

from restaurant_hub.api.endpoints import auth, menu, orders, restaurants, users

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(restaurants.router, prefix="/restaurants", tags=["restaurants"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
