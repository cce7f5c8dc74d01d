from marketing_cms.extensions import db
from .base import BaseModel

JOB_APPLICATION_STATUSES = ("new", "reviewed", "contacted", "rejected", "hired")


class JobApplication(BaseModel):
    __tablename__ = "job_applications"

    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(254), nullable=False)
    phone = db.Column(db.String(30), nullable=True)
    address = db.Column(db.String(200), nullable=True)
    city = db.Column(db.String(100), nullable=True)
    country = db.Column(db.String(100), nullable=True)
    linkedin = db.Column(db.String(500), nullable=True)
    expertise = db.Column(db.String(200), nullable=True)
    cv_path = db.Column(db.String(512), nullable=True)
    message = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default="new")

    __table_args__ = (
        db.Index("idx_job_applications_status_created_at", "status", "created_at"),
    )
