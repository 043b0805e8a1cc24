"""Application models package."""

from restaurant_hub.models.cart import CartItem
from restaurant_hub.models.menu import MenuCategory, MenuItem
from restaurant_hub.models.order import Order, OrderItem
from restaurant_hub.models.restaurant import Restaurant, RestaurantImage
from restaurant_hub.models.review import Review
from restaurant_hub.models.user import User, UserAddress

__all__ = [
    "User", "UserAddress", "Restaurant", "RestaurantImage", "MenuCategory", "MenuItem",
    "Order", "OrderItem", "CartItem", "Review",
]
