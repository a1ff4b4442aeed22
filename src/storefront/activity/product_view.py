"""ProductView: append-only log of product page views."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.aggregate
class ProductView:
    product_id = Identifier(required=True)
    user_id = Identifier()  # Anonymous views carry only a session
    session_id = String(max_length=255)
    viewed_at = DateTime()

    @classmethod
    def record(cls, product_id, user_id=None, session_id=None, viewed_at=None):
        return cls(
            product_id=str(product_id),
            user_id=str(user_id) if user_id else None,
            session_id=session_id,
            viewed_at=viewed_at or datetime.now(UTC),
        )
