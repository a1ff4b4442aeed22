"""Review aggregate: a user's 1 to 5 star rating of a product."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.reviews.events import ReviewSubmitted


@storefront.aggregate
class Review:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    title = String(max_length=255)
    body = Text()
    created_at = DateTime()

    @classmethod
    def submit(cls, product_id, user_id, rating, title=None, body=None):
        now = datetime.now(UTC)
        review = cls(
            product_id=str(product_id),
            user_id=str(user_id),
            rating=rating,
            title=title,
            body=body,
            created_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                user_id=str(user_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return review
