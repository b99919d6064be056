import datetime
import typing
from dataclasses import dataclass

from . import settings


@dataclass
class CalendarEntry:
    uid: str
    start: datetime.datetime
    end: datetime.datetime
    summary: str
    stamp: datetime.datetime
    description: typing.Optional[str] = None
    location: typing.Optional[str] = None


def event_uid(event, host=None):
    return 'event-%s@%s' % (event.pk, host or settings.CALENDAR_HOST)


def calendar_feed(conference, host=None):
    """
    Calendar records of the public, accepted and scheduled events of
    `conference`, ordered by title; events without a start time are left
    out.
    """
    events = conference.events\
        .public()\
        .accepted()\
        .filter(start_time__isnull=False)\
        .select_related('room', 'conference')\
        .order_by('title', 'pk')

    output = []
    for event in events:
        output.append(CalendarEntry(
            uid=event_uid(event, host),
            start=event.start_time,
            end=event.end_time,
            summary=event.title,
            stamp=event.modified,
            description=event.abstract or None,
            location=event.room.name if event.room else None,
        ))
    return output
