from marketing_cms.extensions import db
from .base import BaseModel

INTEGRATION_REQUEST_STATUSES = ("pending", "contacted", "completed", "rejected")


class IntegrationRequest(BaseModel):
    __tablename__ = "integration_requests"

    email = db.Column(db.String(254), nullable=False)
    company_name = db.Column(db.String(255), nullable=True)
    message = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default="pending", index=True)
