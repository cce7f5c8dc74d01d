from marketing_cms.extensions import db
from .base import BaseModel


class PolicyPage(BaseModel):
    __tablename__ = "policy_pages"

    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)

    title_en = db.Column(db.String(300), nullable=False)
    title_ar = db.Column(db.String(300), nullable=True)
    title_es = db.Column(db.String(300), nullable=True)
    title_pt = db.Column(db.String(300), nullable=True)

    content_en = db.Column(db.Text, nullable=False)
    content_ar = db.Column(db.Text, nullable=True)
    content_es = db.Column(db.Text, nullable=True)
    content_pt = db.Column(db.Text, nullable=True)

    meta_description = db.Column(db.String(500), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="published")
