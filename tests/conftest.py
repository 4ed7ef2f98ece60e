import os
from collections.abc import Iterator

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import crossword_api.models.db  # noqa: E402,F401
from crossword_api.app import app  # noqa: E402
from crossword_api.database import Base, get_db  # noqa: E402
from crossword_api.models.db.puzzle import Puzzle  # noqa: E402
from crossword_api.models.db.user import User  # noqa: E402
from crossword_api.services import puzzle_service, user_service  # noqa: E402
from crossword_api.services.auth_service import create_access_token  # noqa: E402


@pytest.fixture()
def db_session() -> Iterator[Session]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def make_user(db_session: Session):
    counter = {"n": 0}

    def _make(username: str | None = None) -> User:
        counter["n"] += 1
        name = username or f"player{counter['n']}"
        return user_service.create_user(db_session, f"{name}@example.com", name)

    return _make


@pytest.fixture()
def make_puzzle(db_session: Session):
    def _make(**overrides) -> Puzzle:
        data = {
            "title": "Golden Era",
            "grid_data": {"rows": 5, "cols": 5, "cells": []},
            "clues_across": {"1": "Queens MC"},
            "clues_down": {"2": "Boom ___"},
            "difficulty": "beginner",
            "estimated_time": 300,
            "base_points": 100,
        }
        data.update(overrides)
        return puzzle_service.create_puzzle(db_session, data)

    return _make


@pytest.fixture()
def client(db_session: Session) -> Iterator[TestClient]:
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
