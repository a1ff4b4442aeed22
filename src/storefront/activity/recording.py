"""Activity recording: commands and handlers for view and search logs.

Both logs are append-only and need no coordination with anything else.
A user reference, when given, must point at an existing user.
"""

from protean import handle
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.activity.product_view import ProductView
from storefront.activity.search_log import SearchLog
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.identity.user import User
from storefront.utils.queries import get_or_raise


@storefront.command(part_of="ProductView")
class RecordProductView:
    product_id = Identifier(required=True)
    user_id = Identifier()
    session_id = String(max_length=255)
    viewed_at = DateTime()


@storefront.command(part_of="SearchLog")
class RecordSearch:
    query_text = String(required=True, max_length=500)
    result_count = Integer(min_value=0)
    user_id = Identifier()
    searched_at = DateTime()


@storefront.command_handler(part_of=ProductView)
class RecordProductViewHandler:
    @handle(RecordProductView)
    def record_product_view(self, command):
        get_or_raise(Product, command.product_id, "product")
        if command.user_id:
            get_or_raise(User, command.user_id, "user")

        view = ProductView.record(
            product_id=command.product_id,
            user_id=command.user_id,
            session_id=command.session_id,
            viewed_at=command.viewed_at,
        )
        current_domain.repository_for(ProductView).add(view)
        return str(view.id)


@storefront.command_handler(part_of=SearchLog)
class RecordSearchHandler:
    @handle(RecordSearch)
    def record_search(self, command):
        if command.user_id:
            get_or_raise(User, command.user_id, "user")

        log = SearchLog.record(
            query_text=command.query_text.strip(),
            result_count=command.result_count,
            user_id=command.user_id,
            searched_at=command.searched_at,
        )
        current_domain.repository_for(SearchLog).add(log)
        return str(log.id)
