from datetime import datetime, timedelta, UTC

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from tasktracker.config import Settings
from tasktracker.main import create_app
from tasktracker.models.task import Task

SECRET = "test-secret"


def make_token(sub="alice", secret=SECRET, expires_in=timedelta(minutes=30), **claims):
    data = dict(claims)
    if sub is not None:
        data["sub"] = sub
    if expires_in is not None:
        # JWT spec uses Unix timestamp
        data["exp"] = int((datetime.now(UTC) + expires_in).timestamp())
    return jwt.encode(data, secret, algorithm="HS256")


def bearer(sub="alice", **kwargs):
    return {"Authorization": f"Bearer {make_token(sub, **kwargs)}"}


@pytest.fixture
def settings(tmp_path):
    return Settings(secret_key=SECRET, database_url=f"sqlite:///{tmp_path / 'tasks.db'}")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # entering the client runs the lifespan: schema created, pool disposed on exit
    with TestClient(app) as c:
        yield c


@pytest.fixture
def database(app, client):
    return app.state.context.database


@pytest.fixture
def count_tasks(database):
    def _count():
        with database.session() as db:
            return db.query(Task).count()

    return _count
