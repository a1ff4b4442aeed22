"""Sample data set: a small storefront with order history and activity.

Orders are placed through checkout, so inventory reflects them exactly as a
live storefront would. Statuses, payments and shipments are then recorded the
way external processes would record them.
"""

import structlog
from protean.utils.globals import current_domain

from storefront.activity.recording import RecordProductView, RecordSearch
from storefront.catalogue.management import AddProductImage, CreateCategory, CreateProduct
from storefront.identity.addresses import AddAddress
from storefront.identity.registration import RegisterUser
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.cart.management import CreateCart
from storefront.ordering.checkout.service import checkout
from storefront.ordering.order.status import ChangeOrderStatus
from storefront.payments.recording import InitiatePayment, RecordPaymentSuccess
from storefront.reviews.submission import SubmitReview
from storefront.shipping.tracking import CreateShipment, MarkDelivered, MarkShipped

logger = structlog.get_logger(__name__)

USERS = [
    ("Rahul Sharma", "rahul@gmail.com", "9876543210"),
    ("Anjali Gupta", "anjali@gmail.com", "9876501234"),
    ("Vikram Singh", "vikram@gmail.com", "9812345678"),
]

ADDRESSES = [
    ("101", "MG Road", "Bengaluru", "Karnataka", "560001", "Home"),
    ("22B", "Park Street", "Kolkata", "West Bengal", "700016", "Office"),
    ("78", "Marine Drive", "Mumbai", "Maharashtra", "400001", "Home"),
]

CATEGORIES = [
    ("Mobiles", "Smartphones and accessories"),
    ("Laptops", "Computers and laptops"),
    ("Fashion", "Clothes and accessories"),
]

# (category index, name, brand, price, description, stock, image)
PRODUCTS = [
    (0, "iPhone 14", "Apple", 79999.00, "Latest Apple iPhone", 50, "https://example.com/iphone14.jpg"),
    (0, "Samsung Galaxy S23", "Samsung", 69999.00, "Flagship Samsung phone", 40, "https://example.com/galaxy_s23.jpg"),
    (1, "MacBook Air M1", "Apple", 89999.00, "Apple laptop", 20, "https://example.com/macbook_air.jpg"),
    (2, "Men T-Shirt", "HRX", 999.00, "Cotton T-shirt", 200, "https://example.com/tshirt.jpg"),
]

# (user index, [(product index, quantity)], status, payment, shipment)
ORDERS = [
    (0, [(0, 1)], "Delivered", ("Card", True), ("BlueDart", "BD123", True)),
    (0, [(0, 1), (1, 1)], "Delivered", ("Card", True), ("FedEx", "FD456", True)),
    (1, [(3, 1)], "Delivered", ("COD", True), None),
    (2, [(2, 1)], "Shipped", ("UPI", False), ("DHL", "DH789", False)),
]

# Carts left open after the order history: (user index, [(product index, quantity)])
OPEN_CARTS = [
    (0, [(0, 1), (1, 1)]),
    (1, [(3, 2)]),
]

# (product index, user index, rating, title, body)
REVIEWS = [
    (0, 0, 5, "Excellent", "Excellent phone!"),
    (1, 1, 4, "Good", "Very good"),
    (2, 2, 5, "Fast Laptop", "Super fast laptop"),
    (3, 0, 3, "Okay", "Average quality"),
]

# (product index, user index, session)
VIEWS = [
    (0, 0, "sess1"),
    (0, 1, "sess2"),
    (0, 2, "sess3"),
    (1, 0, "sess1"),
    (2, 1, "sess2"),
]

# (user index, query, result count)
SEARCHES = [
    (0, "iPhone", 10),
    (0, "Apple", 8),
    (1, "Samsung S23", 5),
    (2, "Laptop", 12),
    (2, "MacBook", 4),
    (0, "iPhone", 10),
]


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _fill_cart(user_id, product_ids, lines):
    cart_id = _process(CreateCart(user_id=user_id))
    for product_index, quantity in lines:
        _process(AddToCart(cart_id=cart_id, product_id=product_ids[product_index], quantity=quantity))
    return cart_id


def seed_sample_data():
    """Load the sample data set into the active domain and return the created ids."""
    user_ids = [
        _process(RegisterUser(full_name=name, email=email, phone=phone, password_hash="pass123"))
        for name, email, phone in USERS
    ]
    address_ids = [
        _process(
            AddAddress(
                user_id=user_id,
                house_no=house_no,
                street=street,
                city=city,
                state=state,
                pincode=pincode,
                address_type=address_type,
            )
        )
        for user_id, (house_no, street, city, state, pincode, address_type) in zip(user_ids, ADDRESSES, strict=True)
    ]
    category_ids = [_process(CreateCategory(name=name, description=desc)) for name, desc in CATEGORIES]

    product_ids = []
    for category_index, name, brand, price, description, stock, image_url in PRODUCTS:
        product_id = _process(
            CreateProduct(
                category_id=category_ids[category_index],
                name=name,
                brand=brand,
                price=price,
                description=description,
                initial_stock=stock,
            )
        )
        _process(AddProductImage(product_id=product_id, image_url=image_url, is_primary=True))
        product_ids.append(product_id)

    order_ids = []
    for user_index, lines, status, payment, shipment in ORDERS:
        user_id = user_ids[user_index]
        cart_id = _fill_cart(user_id, product_ids, lines)
        order_id = checkout(cart_id, user_id, address_id=address_ids[user_index])
        _process(ChangeOrderStatus(order_id=order_id, status=status))

        method, succeeded = payment
        payment_id = _process(InitiatePayment(order_id=order_id, payment_method=method))
        if succeeded:
            _process(RecordPaymentSuccess(payment_id=payment_id))

        if shipment is not None:
            carrier, tracking_number, delivered = shipment
            shipment_id = _process(CreateShipment(order_id=order_id, carrier=carrier))
            _process(MarkShipped(shipment_id=shipment_id, tracking_number=tracking_number))
            if delivered:
                _process(MarkDelivered(shipment_id=shipment_id))

        order_ids.append(order_id)

    cart_ids = [_fill_cart(user_ids[user_index], product_ids, lines) for user_index, lines in OPEN_CARTS]

    for product_index, user_index, rating, title, body in REVIEWS:
        _process(
            SubmitReview(
                product_id=product_ids[product_index],
                user_id=user_ids[user_index],
                rating=rating,
                title=title,
                body=body,
            )
        )

    for product_index, user_index, session_id in VIEWS:
        _process(
            RecordProductView(
                product_id=product_ids[product_index],
                user_id=user_ids[user_index],
                session_id=session_id,
            )
        )

    for user_index, query_text, result_count in SEARCHES:
        _process(RecordSearch(user_id=user_ids[user_index], query_text=query_text, result_count=result_count))

    logger.info(
        "Seeded sample data",
        users=len(user_ids),
        products=len(product_ids),
        orders=len(order_ids),
    )
    return {
        "users": user_ids,
        "addresses": address_ids,
        "categories": category_ids,
        "products": product_ids,
        "orders": order_ids,
        "carts": cart_ids,
    }
