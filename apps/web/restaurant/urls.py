"""
URL routing for order API endpoints.

Endpoints are public JSON; authentication happens upstream.
"""

from django.urls import path

from apps.web.restaurant import views

app_name = "restaurant"

urlpatterns = [
    # Order CRUD
    path("orders", views.order_list, name="order_list"),
    path("order", views.order_create, name="order_create"),
    path("order/<int:order_id>", views.order_detail, name="order_detail"),
    path(
        "order/user/<int:user_id>",
        views.order_create_for_user,
        name="order_create_for_user",
    ),
    # Kitchen
    path("orders/cook", views.kitchen_orders, name="kitchen_orders"),
    path(
        "order/markAsMaked/<int:order_id>",
        views.mark_as_made,
        name="order_mark_as_made",
    ),
    # Customer
    path("orders/user/<int:user_id>", views.user_orders, name="user_orders"),
    path(
        "order/finish/<int:order_id>/<int:slot_id>",
        views.finish_order,
        name="order_finish",
    ),
]
