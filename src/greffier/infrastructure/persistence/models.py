"""
SQLAlchemy models for Greffier persistence.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""


class UserModel(Base):
    """User database model - one row per external subject identifier."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint(
            "external_subject_id", name="uq_users_external_subject_id"
        ),
        UniqueConstraint("wallet_address", name="uq_users_wallet_address"),
    )

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    external_subject_id: Mapped[str] = mapped_column(String(255), nullable=False)
    wallet_address: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )

    # Relationships
    roles: Mapped[list["RoleModel"]] = relationship(
        "RoleModel",
        secondary="user_roles",
        lazy="selectin",
        viewonly=True,
    )


class RoleModel(Base):
    """Role database model - managed outside this service."""

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)


class UserRoleModel(Base):
    """Association between users and roles."""

    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
