from marketing_cms.extensions import db
from .base import BaseModel


class Integration(BaseModel):
    __tablename__ = "integrations"

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=False)
    logo_url = db.Column(db.String(512), nullable=True)
    website_url = db.Column(db.String(512), nullable=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default="active")  # active | inactive

    __table_args__ = (
        db.Index("idx_integrations_status_category_order", "status", "category", "display_order"),
    )
