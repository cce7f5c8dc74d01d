from marketing_cms.extensions import db
from .base import BaseModel


class BlogPost(BaseModel):
    __tablename__ = "blog_posts"

    title_en = db.Column(db.String(300), nullable=False)
    title_ar = db.Column(db.String(300), nullable=True)
    title_es = db.Column(db.String(300), nullable=True)
    title_pt = db.Column(db.String(300), nullable=True)

    content_en = db.Column(db.Text, nullable=False)
    content_ar = db.Column(db.Text, nullable=True)
    content_es = db.Column(db.Text, nullable=True)
    content_pt = db.Column(db.Text, nullable=True)

    slug = db.Column(db.String(350), unique=True, nullable=False, index=True)
    featured_image = db.Column(db.String(512), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="draft")  # draft | published
    language = db.Column(db.String(5), nullable=False, default="en")

    __table_args__ = (
        db.Index("idx_blog_posts_status_created_at", "status", "created_at"),
    )
