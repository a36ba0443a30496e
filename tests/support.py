"""Shared helpers for tests: in-memory SQLite sessions and request builders."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from userhub.models import Base
from userhub.schemas.user import UserCreateRequest, UserUpdateRequest


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with the full schema; one connection shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_session() -> Session:
    return make_session_factory()()


def create_request(
    username: str = "alice",
    password: str = "password123",
    source: str = "s3://photos/alice.png",
    media_type: str = "image/png",
) -> UserCreateRequest:
    return UserCreateRequest(
        username=username,
        password=password,
        photograph={"source": source, "media_type": media_type},
    )


def update_request(
    media_id: int,
    username: str = "alice2",
    source: str = "s3://photos/alice2.jpg",
    media_type: str = "image/jpeg",
) -> UserUpdateRequest:
    return UserUpdateRequest(
        username=username,
        photograph={"media_id": media_id, "source": source, "media_type": media_type},
    )
