"""Streamlit customer ordering page with a persistent cart."""

import streamlit as st

from restaurant_hub.services.menu_service import menu_items_query
from restaurant_hub.services.restaurant_service import list_restaurant_details
from streamlit_app.cart_store import EmptyCartError
from streamlit_app.common import format_money, get_session, load_cart

st.set_page_config(page_title="Restaurant Hub", layout="centered")
st.title("Restaurant Hub")

cart = load_cart()

with get_session() as db:
    restaurants = list_restaurant_details(db)
    if not restaurants:
        st.warning("No restaurants are open for orders yet.")
        st.stop()

    restaurant_map = {restaurant.name: restaurant for restaurant, _, _ in restaurants}
    selected_name = st.selectbox("Choose restaurant", list(restaurant_map.keys()))
    restaurant = restaurant_map[selected_name]
    st.caption(f"{restaurant.cuisine_type} · {restaurant.address or ''}")

    st.subheader("Menu")
    for item in menu_items_query(db, restaurant_id=restaurant.id).all():
        name_col, price_col, add_col = st.columns([4, 2, 1])
        name_col.markdown(f"**{item.name}**  \n{item.description or ''}")
        price_col.write(format_money(item.price))
        if add_col.button("Add", key=f"add_{item.id}"):
            st.toast(
                cart.add_item(
                    item.name,
                    float(item.price),
                    restaurant.name,
                    image=item.image_url,
                    menu_item_id=item.id,
                    restaurant_id=restaurant.id,
                )
            )

st.sidebar.header(f"Cart ({cart.item_count})")
for index, entry in enumerate(cart.items):
    st.sidebar.write(f"{entry.name} · {entry.restaurant}")
    st.sidebar.write(f"{entry.quantity} x {format_money(entry.price)} = {format_money(entry.line_total)}")
    minus_col, plus_col, remove_col = st.sidebar.columns(3)
    if minus_col.button("−", key=f"minus_{index}"):
        cart.update_quantity(index, -1)
        st.rerun()
    if plus_col.button("+", key=f"plus_{index}"):
        cart.update_quantity(index, 1)
        st.rerun()
    if remove_col.button("Remove", key=f"remove_{index}"):
        cart.remove_item(index)
        st.rerun()
st.sidebar.subheader(f"Total: {format_money(cart.total)}")

if st.sidebar.button("Place order"):
    try:
        summary = cart.order_summary()
    except EmptyCartError as exc:
        st.sidebar.warning(str(exc))
    else:
        st.session_state["order_summary"] = summary

summary = st.session_state.get("order_summary")
if summary is not None:
    st.subheader("Confirm your order")
    st.write("Restaurants: " + ", ".join(summary.restaurants))
    for line in summary.lines:
        st.write(line)
    st.write(f"Total: {summary.total}")
    if st.button("Confirm order"):
        try:
            st.success(cart.confirm_order())
        except EmptyCartError as exc:
            st.warning(str(exc))
        st.session_state.pop("order_summary", None)
