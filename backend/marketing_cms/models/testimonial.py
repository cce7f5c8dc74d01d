from marketing_cms.extensions import db
from .base import BaseModel


class Testimonial(BaseModel):
    __tablename__ = "testimonials"

    name = db.Column(db.String(200), nullable=False)
    company = db.Column(db.String(200), nullable=False)
    company_logo = db.Column(db.String(512), nullable=True)

    # Base language (English) values live in the bare columns
    headline = db.Column(db.String(300), nullable=True)
    headline_ar = db.Column(db.String(300), nullable=True)
    headline_es = db.Column(db.String(300), nullable=True)
    headline_pt = db.Column(db.String(300), nullable=True)

    content = db.Column(db.Text, nullable=False)
    content_ar = db.Column(db.Text, nullable=True)
    content_es = db.Column(db.Text, nullable=True)
    content_pt = db.Column(db.Text, nullable=True)

    image = db.Column(db.String(512), nullable=True)
    rating = db.Column(db.Integer, nullable=False, default=5)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
