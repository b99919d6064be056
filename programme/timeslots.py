import logging
from decimal import Decimal, ROUND_HALF_UP

from django.core.exceptions import ValidationError
from django.db import transaction

from . import audit, signals

log = logging.getLogger('programme')


def scale_time_slots(time_slots, old_duration, new_duration):
    """
    Number of `new_duration` minute slots that cover `time_slots` slots of
    `old_duration` minutes, rounded half up. An event that had a length
    keeps at least one slot.

    >>> scale_time_slots(3, 15, 5)
    9
    >>> scale_time_slots(3, 10, 20)
    2
    >>> scale_time_slots(1, 5, 15)
    1
    """
    factor = Decimal(old_duration) / Decimal(new_duration)
    scaled = int((time_slots * factor).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    if time_slots > 0:
        return max(scaled, 1)
    return scaled


def rescale_event_timeslots(conference, old_duration, new_duration):
    """
    Rescale the time slots of every event of `conference` after its timeslot
    duration went from `old_duration` to `new_duration` minutes.

    The rewrite is a mechanical consequence of the configuration change, so
    it is not recorded in the event audit trail. Returns the number of
    rescaled events.
    """
    if old_duration == new_duration:
        return 0

    from .models import Event

    with transaction.atomic():
        events = list(conference.events.select_for_update().order_by('pk'))
        if not events:
            return 0
        with audit.disabled(Event):
            for event in events:
                event.time_slots = scale_time_slots(event.time_slots, old_duration, new_duration)
                event.save(update_fields=['time_slots'])

    log.info(
        'Rescaled %d events of %s from %d to %d minute timeslots',
        len(events), conference.acronym, old_duration, new_duration)
    signals.timeslots_rescaled.send(
        sender=conference.__class__,
        conference=conference,
        old_duration=old_duration,
        new_duration=new_duration,
        count=len(events),
    )
    return len(events)


def change_timeslot_duration(conference, minutes):
    """
    Validate and store a new timeslot duration; an invalid value (zero or
    negative included) raises ValidationError before anything is written.
    """
    previous = conference.timeslot_duration
    conference.timeslot_duration = minutes
    try:
        conference.full_clean()
    except ValidationError:
        conference.timeslot_duration = previous
        raise
    conference.save()
    return conference
