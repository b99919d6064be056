"""
Read-only statistics of a conference, shaped for the charting layer.
"""
import datetime

from django.db.models import Count, Q
from django.utils import timezone

from .locales import language_codes
from .models import BUCKETS, STATE_BUCKETS


def _midnight_ms(day, tz):
    midnight = datetime.datetime.combine(day, datetime.time.min, tzinfo=tz)
    return int(midnight.timestamp()) * 1000


def submissions_by_day(conference):
    tz = conference.tzinfo
    days = [
        timezone.localtime(created, tz).date()
        for created in conference.events.order_by('created').values_list('created', flat=True)
    ]

    result = {}
    if len(days) > 1:
        day = days[0]
        step = datetime.timedelta(days=1)
        while day <= days[-1]:
            result[_midnight_ms(day, tz)] = 0
            day += step
    for day in days:
        key = _midnight_ms(day, tz)
        result[key] = result.get(key, 0) + 1
    return sorted(result.items())
submissions_by_day.short_description = 'Submissions per day'


def events_by_state(conference):
    counts = dict.fromkeys(BUCKETS, 0)
    qs = conference.events\
        .order_by()\
        .values('state')\
        .annotate(total=Count('id'))
    for row in qs:
        counts[STATE_BUCKETS[row['state']]] += row['total']
    return [(bucket, counts[bucket]) for bucket in BUCKETS]
events_by_state.short_description = 'Events by state'


def language_breakdown(conference, accepted_only=False):
    """
    Events per conference language, in the stored order, plus an "unknown"
    bucket for events with no language or one the conference does not use;
    the buckets always add up to the number of events.
    """
    events = conference.events.all()
    if accepted_only:
        events = events.accepted()

    output = []
    known = Q()
    for code in language_codes(conference):
        output.append({
            'label': code,
            'data': events.with_language(code).count(),
        })
        known |= Q(language__iexact=code)
    unknown = events.exclude(known) if known else events
    output.append({
        'label': 'unknown',
        'data': unknown.count(),
    })
    return output
language_breakdown.short_description = 'Events by language'
