"""
PayrollHub - Geography Models

Country -> State -> City reference hierarchy and office locations.
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Numeric, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import AuditMixin, BaseModel, StatusMixin


class Country(BaseModel, StatusMixin):
    __tablename__ = "countries"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    iso: Mapped[str] = mapped_column(String(3), unique=True, nullable=False)
    phone_code: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)


class State(BaseModel, StatusMixin):
    """Province or territory."""

    __tablename__ = "states"
    __table_args__ = (
        UniqueConstraint("name", "country_id", name="uq_states_name_country"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    country_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("countries.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )


class City(BaseModel, AuditMixin, StatusMixin):
    __tablename__ = "cities"
    __table_args__ = (
        UniqueConstraint("name", "state_id", name="uq_cities_name_state"),
    )

    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    country_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("countries.id", ondelete="RESTRICT"),
        nullable=False,
    )
    state_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("states.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    latitude: Mapped[Optional[float]] = mapped_column(Numeric(precision=9, scale=6, asdecimal=False), nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Numeric(precision=9, scale=6, asdecimal=False), nullable=True)


class Location(BaseModel, AuditMixin, StatusMixin):
    """Office or branch where employees are posted."""

    __tablename__ = "locations"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("cities.id", ondelete="RESTRICT"),
        nullable=True,
    )
