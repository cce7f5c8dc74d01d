from marketing_cms.extensions import db
from .base import BaseModel


class SiteContent(BaseModel):
    __tablename__ = "site_content"

    page = db.Column(db.String(100), unique=True, nullable=False, index=True)
    content = db.Column(db.JSON, nullable=False, default=dict)
