from marketing_cms.extensions import db
from .base import BaseModel


class TeamMember(BaseModel):
    __tablename__ = "team_members"

    name_en = db.Column(db.String(200), nullable=False)
    name_ar = db.Column(db.String(200), nullable=True)
    name_es = db.Column(db.String(200), nullable=True)
    name_pt = db.Column(db.String(200), nullable=True)

    title_en = db.Column(db.String(200), nullable=False)
    title_ar = db.Column(db.String(200), nullable=True)
    title_es = db.Column(db.String(200), nullable=True)
    title_pt = db.Column(db.String(200), nullable=True)

    bio_en = db.Column(db.Text, nullable=True)
    bio_ar = db.Column(db.Text, nullable=True)
    bio_es = db.Column(db.Text, nullable=True)
    bio_pt = db.Column(db.Text, nullable=True)

    department = db.Column(db.String(100), nullable=False, index=True)
    email = db.Column(db.String(200), nullable=True)
    linkedin = db.Column(db.String(512), nullable=True)
    image = db.Column(db.String(512), nullable=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default="active")
