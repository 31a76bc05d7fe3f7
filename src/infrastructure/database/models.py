"""SQLAlchemy ORM models."""

from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored by every backend."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserModel(Base):
    """Registered Discord user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True)
    pokemon_go_code: Mapped[str | None] = mapped_column(String(32))
    pokemon_pocket_code: Mapped[str | None] = mapped_column(String(32))
    switch_code: Mapped[str | None] = mapped_column(String(32))


class ProfileModel(Base):
    """One profile snapshot. Owned by a user through ``user_id`` only."""

    __tablename__ = "profiles"
    __table_args__ = (
        Index("ix_profiles_user_id_is_active", "user_id", "is_active"),
        Index("ix_profiles_user_id_created_at", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    thumbnail_url: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(Text)

    trainer_class: Mapped[str | None] = mapped_column(Text)
    nature: Mapped[str | None] = mapped_column(Text)
    partner_pokemon: Mapped[str | None] = mapped_column(Text)
    starting_region: Mapped[str | None] = mapped_column(Text)
    favourite_food: Mapped[str | None] = mapped_column(Text)
    likes: Mapped[str | None] = mapped_column(Text)
    quotes: Mapped[str | None] = mapped_column(Text)

    pokemon_go_code: Mapped[str | None] = mapped_column(String(32))
    pokemon_pocket_code: Mapped[str | None] = mapped_column(String(32))
    switch_code: Mapped[str | None] = mapped_column(String(32))

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class StaffRoleModel(Base):
    """Discord role whose members count as staff."""

    __tablename__ = "staff_roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    discord_role_id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True)
