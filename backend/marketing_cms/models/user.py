from werkzeug.security import generate_password_hash, check_password_hash
from marketing_cms.extensions import db
from .base import BaseModel

MIN_PASSWORD_LENGTH = 8


class User(BaseModel):
    __tablename__ = 'users'

    username = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)

    role = db.Column(db.String(50), nullable=False, default='admin')

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
