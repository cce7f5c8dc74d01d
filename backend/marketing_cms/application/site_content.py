from typing import Any, Dict

from marketing_cms.errors import ValidationError
from marketing_cms.models.site_content import SiteContent
from marketing_cms.utils.transaction import transactional


def load_documents(session) -> Dict[str, Any]:
    """Every page document keyed by page name."""
    rows = session.query(SiteContent).order_by(SiteContent.page).all()
    return {row.page: row.content for row in rows}


def replace_documents(session, documents: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace the whole document set in one transaction.

    Pages missing from ``documents`` are removed; the rest are upserted.
    """
    if not isinstance(documents, dict):
        raise ValidationError("Invalid content format")

    with transactional(session):
        existing = {row.page: row for row in session.query(SiteContent).all()}

        for page, row in existing.items():
            if page not in documents:
                session.delete(row)

        for page, content in documents.items():
            row = existing.get(page)
            if row is None:
                session.add(SiteContent(page=page, content=content))
            else:
                row.content = content

    return load_documents(session)


def upsert_document(session, page: str, content: Any) -> Any:
    if content is None:
        raise ValidationError("Invalid content format")

    with transactional(session):
        row = session.query(SiteContent).filter_by(page=page).first()
        if row is None:
            row = SiteContent(page=page, content=content)
            session.add(row)
        else:
            row.content = content

    return row.content
