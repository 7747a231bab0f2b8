"""
PayrollHub - Geography Seed

Loads cities from a JSON file of ``[{name, country, lat, lng}]`` records,
keeps one country, assigns each city a province and inserts the ones not
already present.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.geography import City, Country, State
from app.services.province_resolver import PROVINCES, resolve_province

logger = logging.getLogger(__name__)


# iso -> (name, phone code)
COUNTRIES = {
    "PK": ("Pakistan", "92"),
}


def _coordinate(value: Any) -> Optional[float]:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


async def ensure_country(db: AsyncSession, iso: str) -> Country:
    result = await db.execute(select(Country).where(Country.iso == iso))
    country = result.scalar_one_or_none()
    if country is None:
        name, phone_code = COUNTRIES[iso]
        country = Country(name=name, iso=iso, phone_code=phone_code)
        db.add(country)
        await db.flush()
        logger.info("Created country %s", name)
    return country


async def ensure_states(db: AsyncSession, country: Country) -> Dict[str, State]:
    """Make sure every province exists for the country; returns them by name."""
    result = await db.execute(select(State).where(State.country_id == country.id))
    states = {s.name: s for s in result.scalars().all()}
    for name in PROVINCES:
        if name not in states:
            state = State(name=name, country_id=country.id)
            db.add(state)
            states[name] = state
    await db.flush()
    return states


async def seed_cities(
    db: AsyncSession,
    path: Optional[Union[str, Path]] = None,
    country_code: Optional[str] = None,
) -> Dict[str, int]:
    """
    Seed states and cities from the cities file.

    Returns:
        Counts of states and cities created or skipped
    """
    path = Path(path or settings.cities_file)
    country_code = country_code or settings.cities_country_code
    summary = {"states_created": 0, "cities_created": 0, "cities_skipped": 0, "total_cities": 0}

    if not path.exists():
        logger.warning("Cities file %s not found, skipping city seed", path)
        return summary

    with path.open(encoding="utf-8") as fh:
        records = json.load(fh)
    cities = [r for r in records if r.get("country") == country_code]
    summary["total_cities"] = len(cities)
    logger.info("Found %d cities for %s in %s", len(cities), country_code, path)

    country = await ensure_country(db, country_code)
    existing_states = (
        await db.execute(select(State.name).where(State.country_id == country.id))
    ).scalars().all()
    states = await ensure_states(db, country)
    summary["states_created"] = len(states) - len(existing_states)

    result = await db.execute(select(City.name, City.state_id).where(City.country_id == country.id))
    seen = {(name, state_id) for name, state_id in result.all()}

    for record in cities:
        name = (record.get("name") or "").strip()
        if not name:
            continue
        lat = _coordinate(record.get("lat"))
        lng = _coordinate(record.get("lng"))
        state = states[resolve_province(name, lat, lng)]

        key = (name, state.id)
        if key in seen:
            summary["cities_skipped"] += 1
            continue
        db.add(City(
            name=name,
            country_id=country.id,
            state_id=state.id,
            latitude=lat,
            longitude=lng,
        ))
        seen.add(key)
        summary["cities_created"] += 1

    await db.commit()
    logger.info(
        "Cities: %d created, %d skipped (%d states created)",
        summary["cities_created"], summary["cities_skipped"], summary["states_created"],
    )
    return summary
