from __future__ import annotations
import pytest

from app import create_app
from extensions import db

@pytest.fixture()
def app_ctx():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture()
def client(app_ctx):
    with app_ctx.test_client() as c:
        yield c
