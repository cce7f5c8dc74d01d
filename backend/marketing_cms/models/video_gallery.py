from marketing_cms.extensions import db
from .base import BaseModel


class VideoGallery(BaseModel):
    __tablename__ = "video_galleries"

    title_en = db.Column(db.String(300), nullable=False)
    title_ar = db.Column(db.String(300), nullable=True)
    title_es = db.Column(db.String(300), nullable=True)
    title_pt = db.Column(db.String(300), nullable=True)

    description_en = db.Column(db.Text, nullable=True)
    description_ar = db.Column(db.Text, nullable=True)
    description_es = db.Column(db.Text, nullable=True)
    description_pt = db.Column(db.Text, nullable=True)

    video_url = db.Column(db.String(512), nullable=False)
    thumbnail_url = db.Column(db.String(512), nullable=True)
    logo_url = db.Column(db.String(512), nullable=True)
    duration = db.Column(db.Integer, nullable=True)  # seconds
    display_order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    __table_args__ = (
        db.Index("idx_video_galleries_active_order", "is_active", "display_order"),
    )
