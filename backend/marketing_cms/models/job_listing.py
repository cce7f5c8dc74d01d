from marketing_cms.extensions import db
from .base import BaseModel

JOB_LISTING_STATUSES = ("active", "inactive")


class JobListing(BaseModel):
    __tablename__ = "job_listings"

    title = db.Column(db.String(200), nullable=False)
    department = db.Column(db.String(100), nullable=False)
    location = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(50), nullable=False, default="Full-time")
    description = db.Column(db.Text, nullable=True)
    requirements = db.Column(db.Text, nullable=True)
    application_link = db.Column(db.String(512), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="active")

    __table_args__ = (
        db.Index("idx_job_listings_status_created_at", "status", "created_at"),
    )
