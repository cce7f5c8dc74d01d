import pytest
from flask_jwt_extended import create_access_token

from marketing_cms import create_app
from marketing_cms.extensions import db
from marketing_cms.models import User


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_row(app):
    """Insert one row and return its id."""
    def _make(model, **fields):
        with app.app_context():
            row = model(**fields)
            db.session.add(row)
            db.session.commit()
            return row.id
    return _make


@pytest.fixture
def make_user(app):
    def _make(username="admin", password="correct-horse", role="admin"):
        with app.app_context():
            user = User(username=username, role=role)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


@pytest.fixture
def auth_headers(app):
    """Bearer headers for an arbitrary identity and role."""
    def _headers(user_id, role="admin", **kwargs):
        with app.app_context():
            token = create_access_token(
                identity=str(user_id),
                additional_claims={"username": "admin", "role": role},
                **kwargs,
            )
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def admin_headers(auth_headers, make_user):
    return auth_headers(make_user())
