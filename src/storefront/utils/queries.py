"""Repository helpers shared by command handlers and reports."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import NotFoundError

_PAGE_SIZE = 500


def get_or_raise(record_cls, identifier, label=None):
    """Load a record by identity, translating a miss into ``NotFoundError``."""
    label = label or record_cls.__name__
    try:
        return current_domain.repository_for(record_cls).get(str(identifier))
    except ObjectNotFoundError:
        raise NotFoundError({label: [f"{label} {identifier} does not exist"]}) from None


def exists(record_cls, identifier):
    try:
        current_domain.repository_for(record_cls).get(str(identifier))
    except ObjectNotFoundError:
        return False
    return True


def fetch_all(record_cls, **filters):
    """Return every stored record of ``record_cls`` matching ``filters``.

    Pages through the DAO so results are not truncated by the query limit.
    """
    dao = current_domain.repository_for(record_cls)._dao
    records = []
    offset = 0
    while True:
        query = dao.query.filter(**filters) if filters else dao.query
        page = query.offset(offset).limit(_PAGE_SIZE).all()
        records.extend(page.items)
        offset += len(page.items)
        if len(page.items) < _PAGE_SIZE:
            return records
