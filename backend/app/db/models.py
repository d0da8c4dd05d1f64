"""SQLAlchemy ORM models for travels, itineraries, activities and places."""

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import (
    Date,
    DateTime,
    Double,
    ForeignKey,
    Index,
    Numeric,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class User(Base):
    """User table - travel owners and activity authors."""

    __tablename__ = "user"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    travels: Mapped[list["Travel"]] = relationship("Travel", back_populates="owner")


class Travel(Base):
    """Travel table - a trip owning itineraries and a wishlist."""

    __tablename__ = "travel"
    __table_args__ = (Index("idx_travel_owner", "owner_id", "created_at"),)

    travel_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("user.user_id"), nullable=False
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="travels")
    itineraries: Mapped[list["Itinerary"]] = relationship(
        "Itinerary", back_populates="travel", cascade="all, delete-orphan"
    )


class Itinerary(Base):
    """Itinerary table - one day of a travel."""

    __tablename__ = "itinerary"
    __table_args__ = (Index("idx_itinerary_travel", "travel_id", "day"),)

    itinerary_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    travel_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("travel.travel_id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    day: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    # Relationships
    travel: Mapped["Travel"] = relationship("Travel", back_populates="itineraries")


class Place(Base):
    """Place table - canonical deduplicated locations."""

    __tablename__ = "place"
    __table_args__ = (
        UniqueConstraint("external_id", "provider", name="uq_place_external"),
        Index("idx_place_name", "name"),
    )

    place_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[float] = mapped_column(Numeric(10, 7, asdecimal=False), nullable=False)
    longitude: Mapped[float] = mapped_column(Numeric(10, 7, asdecimal=False), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    external_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    provider: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )


class Activity(Base):
    """Activity table - ordered within an itinerary or the travel wishlist."""

    __tablename__ = "activity"
    __table_args__ = (
        Index("idx_activity_itinerary_order", "itinerary_id", "order_index"),
        Index("idx_activity_travel_bucket_order", "travel_id", "itinerary_id", "order_index"),
    )

    activity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    travel_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("travel.travel_id", ondelete="CASCADE"), nullable=False
    )
    # NULL means the activity sits in the travel's wishlist
    itinerary_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("itinerary.itinerary_id", ondelete="CASCADE"),
        nullable=True,
    )
    place_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("place.place_id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float] = mapped_column(Double, nullable=False)
    longitude: Mapped[float] = mapped_column(Double, nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_time: Mapped[str | None] = mapped_column(Text, nullable=True)
    order_index: Mapped[float] = mapped_column(Double, nullable=False, default=0.0)
    created_by_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("user.user_id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )
