"""SearchLog: append-only log of catalogue searches."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.aggregate
class SearchLog:
    user_id = Identifier()
    query_text = String(max_length=500)
    result_count = Integer(min_value=0)
    searched_at = DateTime()

    @classmethod
    def record(cls, query_text, result_count=None, user_id=None, searched_at=None):
        return cls(
            user_id=str(user_id) if user_id else None,
            query_text=query_text,
            result_count=result_count,
            searched_at=searched_at or datetime.now(UTC),
        )
