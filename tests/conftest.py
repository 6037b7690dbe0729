import pytest

import config
from app import create_app
from models import db
from seed import seed_database


@pytest.fixture()
def app():
    """App bound to a fresh in-memory SQLite catalog, with an app context pushed."""
    app = create_app(config.TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def seeded(app):
    seed_database()
    return app


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()
