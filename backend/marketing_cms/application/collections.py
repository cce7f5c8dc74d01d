from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from marketing_cms.utils.pagination import PageMeta, PageRequest, page_meta
from marketing_cms.utils.transaction import transactional


class CollectionGateway:
    """
    Parameterized persistence for one content collection.

    The session is passed in by the caller (normally ``db.session``) so the
    gateway holds no global state and can be exercised against any database.
    It builds queries only: filters, ordering, counting, slicing and writes.
    """

    def __init__(self, model: Type[Any], session, *, order_by: Iterable[Any] = ()):
        self.model = model
        self.session = session
        self.order_by = tuple(order_by)

    # ------------------------
    # Reads
    # ------------------------

    def query(self, **filters):
        query = self.session.query(self.model)
        filters = {key: value for key, value in filters.items() if value is not None}
        if filters:
            query = query.filter_by(**filters)
        return query

    def count(self, **filters) -> int:
        return self.query(**filters).order_by(None).count()

    def all(self, **filters) -> List[Any]:
        return self.query(**filters).order_by(*self.order_by).all()

    def page(self, page_request: PageRequest, **filters) -> Tuple[List[Any], PageMeta]:
        """
        Run the count query and the page query for one offset page.
        """
        total = self.count(**filters)

        items = (
            self.query(**filters)
            .order_by(*self.order_by)
            .limit(page_request.limit)
            .offset(page_request.offset)
            .all()
        )

        return items, page_meta(page_request.page, page_request.limit, total)

    def get(self, item_id: int) -> Optional[Any]:
        return self.session.get(self.model, item_id)

    def find_one(self, **filters) -> Optional[Any]:
        return self.query(**filters).first()

    # ------------------------
    # Writes
    # ------------------------

    def create(self, fields: Dict[str, Any]) -> Any:
        item = self.model()
        for key, value in fields.items():
            setattr(item, key, value)

        with transactional(self.session):
            self.session.add(item)

        return item

    def update(self, item: Any, fields: Dict[str, Any]) -> Any:
        """
        Partial update: only keys present in ``fields`` are replaced.
        """
        with transactional(self.session):
            for key, value in fields.items():
                setattr(item, key, value)

        return item

    def delete(self, item_id: int) -> bool:
        """
        Hard delete by id. Returns False when no row matched.
        """
        with transactional(self.session):
            deleted = (
                self.session.query(self.model)
                .filter(self.model.id == item_id)
                .delete(synchronize_session=False)
            )

        return deleted > 0
