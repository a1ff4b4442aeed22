"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the Protean commands they
are translated into.
"""

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    full_name: str
    email: str
    phone: str | None = None
    password_hash: str


class AddAddressRequest(BaseModel):
    house_no: str | None = None
    street: str
    city: str
    state: str | None = None
    pincode: str
    country: str | None = None
    address_type: str | None = None


# ---------------------------------------------------------------------------
# Catalogue & inventory
# ---------------------------------------------------------------------------
class CreateCategoryRequest(BaseModel):
    name: str
    description: str | None = None


class CreateProductRequest(BaseModel):
    category_id: str
    name: str
    brand: str | None = None
    price: float = Field(ge=0)
    description: str | None = None
    initial_stock: int = Field(ge=0, default=0)


class UpdatePriceRequest(BaseModel):
    price: float = Field(ge=0)


class AddImageRequest(BaseModel):
    image_url: str
    is_primary: bool = False


class StockQuantityRequest(BaseModel):
    quantity: int = Field(ge=1)


class InventoryResponse(BaseModel):
    product_id: str
    stock: int
    reserved: int


# ---------------------------------------------------------------------------
# Carts & orders
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    user_id: str


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    new_quantity: int = Field(ge=1)


class CheckoutRequest(BaseModel):
    user_id: str
    shipping_amount: float = Field(ge=0, default=0.0)
    address_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "5b7c7e8e-1f0e-4a53-9d0b-1a6b8f1e2c3d",
                    "shipping_amount": 0.0,
                    "address_id": None,
                }
            ]
        }
    }


class CartItemView(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    unit_price: float


class CartResponse(BaseModel):
    cart_id: str
    user_id: str
    items: list[CartItemView]
    total: float


class OrderItemView(BaseModel):
    order_item_id: str
    product_id: str
    quantity: int
    unit_price: float
    total_price: float


class OrderResponse(BaseModel):
    order_id: str
    user_id: str | None
    status: str
    total_amount: float
    shipping_amount: float
    items: list[OrderItemView]


class ChangeOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Payments & shipments
# ---------------------------------------------------------------------------
class InitiatePaymentRequest(BaseModel):
    order_id: str
    payment_method: str
    amount: float | None = Field(ge=0, default=None)


class PaymentOutcomeRequest(BaseModel):
    gateway_response: dict[str, Any] | None = None
    reason: str | None = None


class CreateShipmentRequest(BaseModel):
    order_id: str
    carrier: str | None = None


class MarkShippedRequest(BaseModel):
    tracking_number: str
    carrier: str | None = None


# ---------------------------------------------------------------------------
# Reviews & activity
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    product_id: str
    user_id: str
    rating: int = Field(ge=1, le=5)
    title: str | None = None
    body: str | None = None


class RecordViewRequest(BaseModel):
    product_id: str
    user_id: str | None = None
    session_id: str | None = None


class RecordSearchRequest(BaseModel):
    query_text: str
    result_count: int | None = Field(ge=0, default=None)
    user_id: str | None = None


# ---------------------------------------------------------------------------
# Shared responses
# ---------------------------------------------------------------------------
class IdResponse(BaseModel):
    id: str


class OrderIdResponse(BaseModel):
    order_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
