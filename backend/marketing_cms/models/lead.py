from marketing_cms.extensions import db
from .base import BaseModel


class Lead(BaseModel):
    __tablename__ = "leads"

    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(254), nullable=False)
    company = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    restaurant_type = db.Column(db.String(100), nullable=True)
    message = db.Column(db.Text, nullable=True)
    form_type = db.Column(db.String(50), nullable=False, default="contact")
    source_page = db.Column(db.String(500), nullable=True)

    __table_args__ = (
        db.Index("idx_leads_form_type_created_at", "form_type", "created_at"),
    )
