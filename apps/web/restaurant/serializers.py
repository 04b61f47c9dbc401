"""
Pydantic schemas for order API requests and responses.

These schemas define the public API contract for order data.
"""

from datetime import time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from apps.web.restaurant.exceptions import ErrorKind

# =============================================================================
# Projections
# =============================================================================


class SlotSchema(BaseModel):
    """A pickup slot with its current occupancy."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    start_time: time
    limit_slot: int
    actual: int


class OrderSchema(BaseModel):
    """
    Reduced order view returned to callers.

    Deliberately omits the owner and any menu or price detail.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    maked: bool
    slot: SlotSchema | None = None


# =============================================================================
# Requests
# =============================================================================


class OrderUpdateRequest(BaseModel):
    """Request body for PUT /api/v1/order/{id}."""

    model_config = ConfigDict(extra="ignore")

    maked: bool = False
    user_id: int | None = Field(default=None, ge=1)


# =============================================================================
# Responses
# =============================================================================


class OrderUpdatedResponse(BaseModel):
    """Response for PUT /api/v1/order/{id}."""

    status: Literal["updated"] = "updated"
    order: OrderSchema


class ErrorResponse(BaseModel):
    """Response for rejected order operations."""

    error: ErrorKind
    message: str


class ValidationErrorDetail(BaseModel):
    """A single validation error."""

    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Response for validation errors."""

    error: Literal["validation_error"]
    details: list[ValidationErrorDetail]
