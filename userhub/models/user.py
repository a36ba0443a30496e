"""ORM models for user accounts and their profile photograph."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from userhub.models.base import Base
from userhub.models.enums import AccountStatus, UserRole


class User(Base):
    """
    User account. Deleting a user flips account_status to INACTIVE; rows are never removed.

    Every user owns exactly one Photograph, created and updated with it.
    """

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    user_role = Column(
        Enum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.USER,
    )
    account_status = Column(
        Enum(AccountStatus, name="account_status"),
        nullable=False,
        default=AccountStatus.ACTIVE,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    photograph = relationship(
        "Photograph",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )


class Photograph(Base):
    """Profile image owned 1:1 by a user."""

    __tablename__ = "photographs"

    media_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.user_id"),
        nullable=False,
        unique=True,
        index=True,
    )
    source = Column(String(2048), nullable=False)
    media_type = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="photograph")
