"""FastAPI routes for the storefront: users, catalogue, inventory, carts,
orders, payments, shipments, reviews and activity logs."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.activity.recording import RecordProductView, RecordSearch
from storefront.api.schemas import (
    AddAddressRequest,
    AddImageRequest,
    AddToCartRequest,
    CartItemView,
    CartResponse,
    ChangeOrderStatusRequest,
    CheckoutRequest,
    CreateCartRequest,
    CreateCategoryRequest,
    CreateProductRequest,
    CreateShipmentRequest,
    IdResponse,
    InitiatePaymentRequest,
    InventoryResponse,
    MarkShippedRequest,
    OrderIdResponse,
    OrderItemView,
    OrderResponse,
    PaymentOutcomeRequest,
    RecordSearchRequest,
    RecordViewRequest,
    RegisterUserRequest,
    StatusResponse,
    StockQuantityRequest,
    SubmitReviewRequest,
    UpdateCartQuantityRequest,
    UpdatePriceRequest,
)
from storefront.catalogue.management import (
    AddProductImage,
    CreateCategory,
    CreateProduct,
    UpdateProductPrice,
)
from storefront.catalogue.removal import RemoveProduct
from storefront.identity.addresses import AddAddress, RemoveAddress
from storefront.identity.registration import RegisterUser
from storefront.identity.removal import DeleteUser
from storefront.inventory.record import InventoryRecord
from storefront.inventory.stock import ReceiveStock, ReleaseReservedStock, ReserveStock
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.ordering.cart.management import CreateCart
from storefront.ordering.checkout.service import checkout
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import ChangeOrderStatus
from storefront.payments.recording import (
    InitiatePayment,
    RecordPaymentFailure,
    RecordPaymentSuccess,
    RefundPayment,
)
from storefront.reviews.submission import SubmitReview
from storefront.shipping.tracking import CreateShipment, MarkDelivered, MarkShipped
from storefront.utils.queries import get_or_raise


def _dump(payload):
    return json.dumps(payload) if payload is not None else None


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("", status_code=201, response_model=IdResponse)
async def register_user(body: RegisterUserRequest) -> IdResponse:
    command = RegisterUser(
        full_name=body.full_name,
        email=body.email,
        phone=body.phone,
        password_hash=body.password_hash,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@user_router.post("/{user_id}/addresses", status_code=201, response_model=IdResponse)
async def add_address(user_id: str, body: AddAddressRequest) -> IdResponse:
    command = AddAddress(user_id=user_id, **body.model_dump(exclude_none=True))
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@user_router.delete("/{user_id}/addresses/{address_id}", response_model=StatusResponse)
async def remove_address(user_id: str, address_id: str) -> StatusResponse:
    command = RemoveAddress(user_id=user_id, address_id=address_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@user_router.delete("/{user_id}", response_model=StatusResponse)
async def delete_user(user_id: str) -> StatusResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Catalogue Routers
# ---------------------------------------------------------------------------
category_router = APIRouter(prefix="/categories", tags=["categories"])
product_router = APIRouter(prefix="/products", tags=["products"])


@category_router.post("", status_code=201, response_model=IdResponse)
async def create_category(body: CreateCategoryRequest) -> IdResponse:
    command = CreateCategory(name=body.name, description=body.description)
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@product_router.post("", status_code=201, response_model=IdResponse)
async def create_product(body: CreateProductRequest) -> IdResponse:
    command = CreateProduct(
        category_id=body.category_id,
        name=body.name,
        brand=body.brand,
        price=body.price,
        description=body.description,
        initial_stock=body.initial_stock,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def update_product_price(product_id: str, body: UpdatePriceRequest) -> StatusResponse:
    command = UpdateProductPrice(product_id=product_id, price=body.price)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/images", status_code=201, response_model=IdResponse)
async def add_product_image(product_id: str, body: AddImageRequest) -> IdResponse:
    command = AddProductImage(
        product_id=product_id,
        image_url=body.image_url,
        is_primary=body.is_primary,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Inventory Router
# ---------------------------------------------------------------------------
inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


@inventory_router.get("/{product_id}", response_model=InventoryResponse)
async def get_inventory(product_id: str) -> InventoryResponse:
    record = get_or_raise(InventoryRecord, product_id, label="product_id")
    return InventoryResponse(product_id=str(record.product_id), stock=record.stock, reserved=record.reserved)


@inventory_router.post("/{product_id}/receive", response_model=StatusResponse)
async def receive_stock(product_id: str, body: StockQuantityRequest) -> StatusResponse:
    current_domain.process(ReceiveStock(product_id=product_id, quantity=body.quantity), asynchronous=False)
    return StatusResponse()


@inventory_router.post("/{product_id}/reserve", response_model=StatusResponse)
async def reserve_stock(product_id: str, body: StockQuantityRequest) -> StatusResponse:
    current_domain.process(ReserveStock(product_id=product_id, quantity=body.quantity), asynchronous=False)
    return StatusResponse()


@inventory_router.post("/{product_id}/release", response_model=StatusResponse)
async def release_reserved_stock(product_id: str, body: StockQuantityRequest) -> StatusResponse:
    command = ReleaseReservedStock(product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=IdResponse)
async def create_cart(body: CreateCartRequest) -> IdResponse:
    result = current_domain.process(CreateCart(user_id=body.user_id), asynchronous=False)
    return IdResponse(id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    cart = get_or_raise(ShoppingCart, cart_id, label="cart_id")
    return CartResponse(
        cart_id=str(cart.id),
        user_id=str(cart.user_id),
        items=[
            CartItemView(
                item_id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in cart.items
        ],
        total=cart.total,
    )


@cart_router.post("/{cart_id}/items", status_code=201, response_model=IdResponse)
async def add_cart_item(cart_id: str, body: AddToCartRequest) -> IdResponse:
    command = AddToCart(cart_id=cart_id, product_id=body.product_id, quantity=body.quantity)
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@cart_router.put("/{cart_id}/items/{item_id}", response_model=StatusResponse)
async def update_cart_item_quantity(cart_id: str, item_id: str, body: UpdateCartQuantityRequest) -> StatusResponse:
    command = UpdateCartQuantity(cart_id=cart_id, item_id=item_id, new_quantity=body.new_quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(cart_id: str, item_id: str) -> StatusResponse:
    current_domain.process(RemoveFromCart(cart_id=cart_id, item_id=item_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout_cart(cart_id: str, body: CheckoutRequest) -> OrderIdResponse:
    """Convert the cart into a Pending order, emptying the cart."""
    order_id = checkout(
        cart_id,
        body.user_id,
        shipping_amount=body.shipping_amount,
        address_id=body.address_id,
    )
    return OrderIdResponse(order_id=order_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    order = get_or_raise(Order, order_id, label="order_id")
    return OrderResponse(
        order_id=str(order.id),
        user_id=str(order.user_id) if order.user_id else None,
        status=order.status,
        total_amount=order.total_amount,
        shipping_amount=order.shipping_amount or 0.0,
        items=[
            OrderItemView(
                order_item_id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
            )
            for item in order.items
        ],
    )


@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def change_order_status(order_id: str, body: ChangeOrderStatusRequest) -> StatusResponse:
    current_domain.process(ChangeOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("", status_code=201, response_model=IdResponse)
async def initiate_payment(body: InitiatePaymentRequest) -> IdResponse:
    command = InitiatePayment(
        order_id=body.order_id,
        payment_method=body.payment_method,
        amount=body.amount,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@payment_router.put("/{payment_id}/success", response_model=StatusResponse)
async def record_payment_success(payment_id: str, body: PaymentOutcomeRequest) -> StatusResponse:
    command = RecordPaymentSuccess(payment_id=payment_id, gateway_response=_dump(body.gateway_response))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@payment_router.put("/{payment_id}/failure", response_model=StatusResponse)
async def record_payment_failure(payment_id: str, body: PaymentOutcomeRequest) -> StatusResponse:
    command = RecordPaymentFailure(
        payment_id=payment_id,
        reason=body.reason,
        gateway_response=_dump(body.gateway_response),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@payment_router.put("/{payment_id}/refund", response_model=StatusResponse)
async def refund_payment(payment_id: str) -> StatusResponse:
    current_domain.process(RefundPayment(payment_id=payment_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Shipment Router
# ---------------------------------------------------------------------------
shipment_router = APIRouter(prefix="/shipments", tags=["shipments"])


@shipment_router.post("", status_code=201, response_model=IdResponse)
async def create_shipment(body: CreateShipmentRequest) -> IdResponse:
    command = CreateShipment(order_id=body.order_id, carrier=body.carrier)
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@shipment_router.put("/{shipment_id}/ship", response_model=StatusResponse)
async def mark_shipped(shipment_id: str, body: MarkShippedRequest) -> StatusResponse:
    command = MarkShipped(
        shipment_id=shipment_id,
        tracking_number=body.tracking_number,
        carrier=body.carrier,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@shipment_router.put("/{shipment_id}/deliver", response_model=StatusResponse)
async def mark_delivered(shipment_id: str) -> StatusResponse:
    current_domain.process(MarkDelivered(shipment_id=shipment_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Review & Activity Routers
# ---------------------------------------------------------------------------
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
activity_router = APIRouter(prefix="/activity", tags=["activity"])


@review_router.post("", status_code=201, response_model=IdResponse)
async def submit_review(body: SubmitReviewRequest) -> IdResponse:
    command = SubmitReview(
        product_id=body.product_id,
        user_id=body.user_id,
        rating=body.rating,
        title=body.title,
        body=body.body,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@activity_router.post("/views", status_code=201, response_model=IdResponse)
async def record_product_view(body: RecordViewRequest) -> IdResponse:
    command = RecordProductView(
        product_id=body.product_id,
        user_id=body.user_id,
        session_id=body.session_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@activity_router.post("/searches", status_code=201, response_model=IdResponse)
async def record_search(body: RecordSearchRequest) -> IdResponse:
    command = RecordSearch(
        query_text=body.query_text,
        result_count=body.result_count,
        user_id=body.user_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


routers = [
    user_router,
    category_router,
    product_router,
    inventory_router,
    cart_router,
    order_router,
    payment_router,
    shipment_router,
    review_router,
    activity_router,
]
