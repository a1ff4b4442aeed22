"""SubmitReview: rate a product."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.identity.user import User
from storefront.reviews.review import Review
from storefront.utils.queries import get_or_raise


@storefront.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    title = String(max_length=255)
    body = Text()


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        get_or_raise(Product, command.product_id, "product")
        get_or_raise(User, command.user_id, "user")

        review = Review.submit(
            product_id=command.product_id,
            user_id=command.user_id,
            rating=command.rating,
            title=command.title,
            body=command.body,
        )
        current_domain.repository_for(Review).add(review)
        return str(review.id)
