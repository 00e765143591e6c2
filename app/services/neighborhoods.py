import asyncio
import datetime as dt
import logging
from dataclasses import dataclass
from typing import List, Optional

from pymongo import ASCENDING

from app.config import settings
from app.database import get_event_collection, get_zipcode_collection
from app.models import Event, Neighborhood
from app.zipcodes import is_valid_zipcode

logger = logging.getLogger(__name__)

class ZipNotFound(Exception):
    """Raised when a ZIP is malformed or has no neighborhood record."""

    def __init__(self, zipcode: str):
        super().__init__(f"ZIP code not found: {zipcode!r}")
        self.zipcode = zipcode

class MultipleRecordsError(Exception):
    pass

class NeighborhoodRepository:
    """Read-only access to the ``zipcodes`` and ``events`` collections."""

    def __init__(self, zipcodes, events):
        self.zipcodes = zipcodes
        self.events = events

    async def find_zipcode(self, zipcode: str) -> Optional[dict]:
        # at most one row per zipcode; a second match is an error
        docs = await self.zipcodes.find({"zipcode": zipcode}).limit(2).to_list(length=2)
        if len(docs) > 1:
            raise MultipleRecordsError(f"{len(docs)} zipcodes rows for {zipcode}")
        return docs[0] if docs else None

    async def find_upcoming_events(self, zipcode: str, now: dt.datetime) -> List[dict]:
        # string timestamps can't be range-compared server-side; get_events filters them
        cursor = self.events.find(
            {
                "zipcode": zipcode,
                "$or": [
                    {"start_datetime": {"$gte": now}},
                    {"start_datetime": {"$type": "string"}},
                ],
            },
            sort=[("start_datetime", ASCENDING)],
        )
        return await cursor.to_list(length=None)

def get_repository() -> NeighborhoodRepository:
    return NeighborhoodRepository(get_zipcode_collection(), get_event_collection())

async def get_zip_data(repo: NeighborhoodRepository, zipcode: str) -> Optional[Neighborhood]:
    try:
        doc = await repo.find_zipcode(zipcode)
        return Neighborhood(**doc) if doc else None
    except Exception as e:
        logger.error("Error fetching ZIP data for %s: %s", zipcode, e)
        return None

async def get_events(repo: NeighborhoodRepository, zipcode: str, now: dt.datetime) -> List[Event]:
    try:
        docs = await repo.find_upcoming_events(zipcode, now)
    except Exception as e:
        logger.error("Error fetching events for %s: %s", zipcode, e)
        return []

    events = []
    for doc in docs or []:
        try:
            events.append(Event.from_document(doc))
        except ValueError as e:
            logger.warning("Skipping bad event row %r for %s: %s", doc.get("_id"), zipcode, e)

    events = [ev for ev in events if ev.start_datetime >= now]
    # dates and strings sort as separate BSON types
    events.sort(key=lambda ev: ev.start_datetime)
    return events

@dataclass(frozen=True)
class ZipPage:
    zipcode: str
    neighborhood: str
    city: str
    state: str
    events: List[Event]
    record: Neighborhood

    @property
    def event_count(self) -> int:
        return len(self.events)

def neighborhood_label(record: Neighborhood) -> str:
    return record.neighborhood or f"ZIP {record.zipcode}"

def display_city(record: Neighborhood) -> str:
    return record.city or settings.DEFAULT_CITY

async def load_zip_page(
    repo: NeighborhoodRepository, zipcode: str, now: Optional[dt.datetime] = None
) -> ZipPage:
    if not is_valid_zipcode(zipcode):
        raise ZipNotFound(zipcode)

    now = now or dt.datetime.now(dt.timezone.utc)
    record, events = await asyncio.gather(
        get_zip_data(repo, zipcode),
        get_events(repo, zipcode, now),
    )
    if record is None:
        raise ZipNotFound(zipcode)

    return ZipPage(
        zipcode=zipcode,
        neighborhood=neighborhood_label(record),
        city=display_city(record),
        state=settings.STATE_NAME,
        events=events,
        record=record,
    )
