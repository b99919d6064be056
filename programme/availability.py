"""
Availabilities coming from the slider form of the person page.

The form posts one row per slider, `{'id': ..., 'start_date': ...,
'end_date': ...}`. Sliders the user removed come back with a start of
`-1`; sliders never touched come back with a start of `0` (or earlier).
"""
import datetime
import logging
import re

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from django.utils.translation import gettext as _

from .models import Availability

log = logging.getLogger('programme')

DELETED = -1

_EPOCH_SECONDS = re.compile(r'^[+-]?\d+$')


def _rows(entries):
    if entries is None:
        return []
    if hasattr(entries, 'values'):
        return list(entries.values())
    return list(entries)


def parse_timestamp(value, tz):
    """
    An aware datetime from either seconds since the epoch or a date-time
    string; naive date-times are read in `tz`.
    """
    if isinstance(value, datetime.datetime):
        dt = value
    elif isinstance(value, int) or _EPOCH_SECONDS.match(str(value).strip()):
        try:
            return datetime.datetime.fromtimestamp(int(value), tz)
        except (OverflowError, OSError, ValueError):
            raise ValidationError(
                _('Invalid date: %(value)s'), code='invalid_date', params={'value': value})
    else:
        try:
            dt = parse_datetime(str(value).strip())
        except ValueError:
            dt = None
        if dt is None:
            raise ValidationError(
                _('Invalid date: %(value)s'), code='invalid_date', params={'value': value})
    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt, tz)
    return dt


def decode_start(value, tz):
    """
    Seconds since the epoch of a start field, as the slider form sends it.
    """
    if value is None or value == '':
        raise ValidationError(_('Missing start date'), code='invalid_date')
    if isinstance(value, int) or _EPOCH_SECONDS.match(str(value).strip()):
        return int(value)
    return int(parse_timestamp(value, tz).timestamp())


def update_from_slider_form(person, conference, entries):
    """
    Store the availabilities of `person` in `conference` posted by the
    slider form.

    Rows with a start of -1 delete the availability they refer to, rows
    starting at or before the epoch are ignored, the others are created or
    updated. Everything happens in one transaction: a malformed row aborts
    the whole update, deletions included. Returns the saved availabilities.
    """
    tz = conference.tzinfo
    rows = _rows(entries)
    saved = []
    with transaction.atomic():
        starts = [decode_start(row.get('start_date'), tz) for row in rows]

        for row, start in zip(rows, starts):
            if start == DELETED and row.get('id'):
                deleted, _details = person.availabilities\
                    .filter(pk=row['id'], conference=conference)\
                    .delete()
                if deleted:
                    log.info('Deleted availability %s of "%s"', row['id'], person.full_name)

        for row, start in zip(rows, starts):
            if start <= 0:
                continue
            start_date = parse_timestamp(row.get('start_date'), tz)
            end_value = row.get('end_date')
            if end_value is None or end_value == '':
                raise ValidationError(_('Missing end date'), code='invalid_date')
            end_date = parse_timestamp(end_value, tz)

            if row.get('id'):
                try:
                    availability = person.availabilities.get(pk=row['id'], conference=conference)
                except Availability.DoesNotExist:
                    raise ValidationError(
                        _('Unknown availability: %(id)s'), code='invalid', params={'id': row['id']})
            else:
                availability = Availability(person=person, conference=conference)
            availability.start_date = start_date
            availability.end_date = end_date
            availability.full_clean()
            availability.save()
            saved.append(availability)
    return saved


def availabilities_in(person, conference):
    """
    Availabilities of `person` in `conference`, with the dates in the
    conference time zone.
    """
    tz = conference.tzinfo
    output = list(person.availabilities.filter(conference=conference))
    for a in output:
        a.start_date = timezone.localtime(a.start_date, tz)
        a.end_date = timezone.localtime(a.end_date, tz)
    return output
