from datetime import datetime, timezone
from marketing_cms.extensions import db


def utc_now():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utc_now, nullable=False, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    def __init__(self, **kwargs):
        """
        Dummy __init__ to satisfy static type checkers (Pylance, MyPy).
        SQLAlchemy ORM will populate fields dynamically.
        """
        super().__init__(**kwargs)

    def to_dict(self):
        """Column values keyed by column name, datetimes as ISO strings."""
        data = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            data[column.name] = value
        return data
