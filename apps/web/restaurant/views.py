"""
Order API views - JSON endpoints for customers and the kitchen.

These endpoints are used by the ordering frontends:
- Customers create orders and confirm them into a pickup slot
- The kitchen lists confirmed orders and marks them as made
"""

import json
from collections.abc import Iterable
from typing import Any

from django.http import HttpRequest, HttpResponse, HttpResponseNotFound, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import (
    require_GET,
    require_http_methods,
    require_POST,
)

from pydantic import ValidationError as PydanticValidationError

from apps.web.restaurant import services
from apps.web.restaurant.exceptions import (
    ErrorKind,
    OrderNotFound,
    OrderWorkflowError,
    UserNotFound,
)
from apps.web.restaurant.models import Order
from apps.web.restaurant.serializers import (
    ErrorResponse,
    OrderSchema,
    OrderUpdatedResponse,
    OrderUpdateRequest,
    ValidationErrorDetail,
    ValidationErrorResponse,
)


def _json_response(data: Any, status: int = 200) -> JsonResponse:
    """Create a JSON response; lists are allowed at the top level."""
    return JsonResponse(data, status=status, safe=False)


def _serialize_order(order: Order) -> dict[str, Any]:
    """Serialize an Order model to its public projection."""
    return OrderSchema.model_validate(order).model_dump(mode="json")


def _serialize_orders(orders: Iterable[Order]) -> list[dict[str, Any]]:
    return [_serialize_order(order) for order in orders]


def _error_response(error: OrderWorkflowError) -> JsonResponse:
    """Map a rejected operation to a 400 with a structured error kind."""
    response = ErrorResponse(error=error.kind, message=error.message)
    return _json_response(response.model_dump(mode="json"), status=400)


def _not_found() -> HttpResponse:
    """404 with an empty body."""
    return HttpResponseNotFound()


@require_GET
def order_list(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/v1/orders

    Returns every order projected to {id, maked, slot}, in insertion order.
    """
    return _json_response(_serialize_orders(services.list_orders()))


@csrf_exempt
@require_POST
def order_create(_request: HttpRequest) -> JsonResponse:
    """
    POST /api/v1/order

    Creates an empty standalone order (no user, no slot).
    """
    order = services.create_order()
    return _json_response(_serialize_order(order))


@csrf_exempt
@require_POST
def order_create_for_user(_request: HttpRequest, user_id: int) -> HttpResponse:
    """
    POST /api/v1/order/user/{user_id}

    Creates an empty order owned by the user.

    Response: order projection (200) or empty 404 if the user does not exist
    """
    try:
        order = services.create_order_for_user(user_id)
    except UserNotFound:
        return _not_found()
    return _json_response(_serialize_order(order))


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
def order_detail(request: HttpRequest, order_id: int) -> HttpResponse:
    """
    GET | PUT | DELETE /api/v1/order/{order_id}
    """
    if request.method == "PUT":
        return _update_order(request, order_id)
    if request.method == "DELETE":
        return _delete_order(order_id)
    return _get_order(order_id)


def _get_order(order_id: int) -> HttpResponse:
    """
    Response: order projection (200) or empty 404
    """
    try:
        order = services.get_order(order_id)
    except OrderNotFound:
        return _not_found()
    return _json_response(_serialize_order(order))


def _update_order(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    Request body: OrderUpdateRequest schema
    Response: OrderUpdatedResponse (200) or ErrorResponse /
    ValidationErrorResponse (400)

    A missing order is reported before any problem with the body.
    """
    try:
        services.get_order(order_id)
    except OrderWorkflowError as e:
        return _error_response(e)

    try:
        body = json.loads(request.body or b"{}")
        update_request = OrderUpdateRequest.model_validate(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        response = ErrorResponse(
            error=ErrorKind.INVALID_JSON,
            message="Request body is not valid UTF-8 JSON",
        )
        return _json_response(response.model_dump(mode="json"), status=400)
    except PydanticValidationError as e:
        errors = [
            ValidationErrorDetail(
                field=".".join(str(loc) for loc in err["loc"]),
                message=err["msg"],
            )
            for err in e.errors()
        ]
        response = ValidationErrorResponse(error="validation_error", details=errors)
        return _json_response(response.model_dump(), status=400)

    try:
        order = services.update_order(
            order_id,
            maked=update_request.maked,
            user_id=update_request.user_id,
        )
    except OrderWorkflowError as e:
        return _error_response(e)

    response = OrderUpdatedResponse(order=OrderSchema.model_validate(order))
    return _json_response(response.model_dump(mode="json"))


def _delete_order(order_id: int) -> HttpResponse:
    """
    Response: empty 204 or ErrorResponse (400)
    """
    try:
        services.delete_order(order_id)
    except OrderWorkflowError as e:
        return _error_response(e)
    return HttpResponse(status=204)


@require_GET
def kitchen_orders(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/v1/orders/cook

    Returns confirmed orders (slot assigned), made or not.
    """
    return _json_response(_serialize_orders(services.list_kitchen_orders()))


@require_GET
def user_orders(_request: HttpRequest, user_id: int) -> HttpResponse:
    """
    GET /api/v1/orders/user/{user_id}

    Returns the user's orders, most recently created first.

    Response: list of order projections (200) or empty 404
    """
    try:
        orders = services.list_user_orders(user_id)
    except UserNotFound:
        return _not_found()
    return _json_response(_serialize_orders(orders))


@csrf_exempt
@require_http_methods(["PUT"])
def mark_as_made(_request: HttpRequest, order_id: int) -> JsonResponse:
    """
    PUT /api/v1/order/markAsMaked/{order_id}

    Marks the order as made by the kitchen.

    Response: order projection (200) or ErrorResponse (400)
    """
    try:
        order = services.mark_order_as_made(order_id)
    except OrderWorkflowError as e:
        return _error_response(e)
    return _json_response(_serialize_order(order))


@csrf_exempt
@require_http_methods(["PUT"])
def finish_order(_request: HttpRequest, order_id: int, slot_id: int) -> JsonResponse:
    """
    PUT /api/v1/order/finish/{order_id}/{slot_id}

    Confirms the order into a pickup slot. Only succeeds once per order.

    Response: order projection (202) or ErrorResponse (400) with one of
    order_not_found, already_confirmed, slot_not_found, slot_full
    """
    try:
        order = services.confirm_order(order_id, slot_id)
    except OrderWorkflowError as e:
        return _error_response(e)
    return _json_response(_serialize_order(order), status=202)
