import datetime
import logging
import zoneinfo

from django.conf import settings as dsettings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.core import exceptions
from django.core.cache import cache
from django.core.serializers.json import DjangoJSONEncoder
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db import transaction
from django.db.models.functions import Lower
from django.db.models.query import QuerySet
from django.utils.translation import gettext_lazy as _

from model_utils import Choices
from model_utils.models import TimeStampedModel

from . import settings, signals
from .avatars import avatar_upload_to, avatar_url, validate_avatar_content_type

log = logging.getLogger('programme')


CURRENT_CONFERENCE_CACHE_KEY = 'PROGRAMME_CURRENT_CONFERENCE'


def validate_timezone(value):
    try:
        zoneinfo.ZoneInfo(value)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        raise exceptions.ValidationError(
            _('Unknown time zone: %(value)s'), code='invalid_timezone', params={'value': value})


class ConferenceManager(models.Manager):
    def current(self):
        """
        The most recently created conference.
        """
        data = cache.get(CURRENT_CONFERENCE_CACHE_KEY)
        if data is None:
            data = self.order_by('-created', '-id').first()
            if data is not None:
                cache.set(CURRENT_CONFERENCE_CACHE_KEY, data, settings.CURRENT_CACHE_TIMEOUT)
        return data

    @classmethod
    def clear_cache(cls, sender, **kwargs):
        cache.delete(CURRENT_CONFERENCE_CACHE_KEY)


class Conference(TimeStampedModel):
    title = models.CharField(_('Title'), max_length=255)
    acronym = models.CharField(_('Acronym'), max_length=50, unique=True)
    timeslot_duration = models.PositiveIntegerField(
        _('Timeslot duration'),
        default=15,
        validators=[MinValueValidator(1)],
        help_text=_('Length of a single timeslot, in minutes. Changing it '
                    'rescales the time slots of every event.'))
    first_day = models.DateField(null=True, blank=True)
    last_day = models.DateField(null=True, blank=True)
    timezone = models.CharField(
        max_length=64, default=dsettings.TIME_ZONE, validators=[validate_timezone])
    email = models.EmailField(blank=True)

    objects = ConferenceManager()

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(timeslot_duration__gt=0),
                name='conference_timeslot_duration_positive',
            ),
        ]

    def __str__(self):
        return 'Conference: %s (%s)' % (self.title, self.acronym)

    def save(self, *args, **kwargs):
        """
        When the timeslot duration changes the time slots of every event are
        rescaled within the same transaction, so the real duration of the
        events stays the same.
        """
        from .timeslots import rescale_event_timeslots

        update_fields = kwargs.get('update_fields')
        with transaction.atomic():
            old_duration = None
            if self.pk is not None and (update_fields is None or 'timeslot_duration' in update_fields):
                old_duration = Conference.objects\
                    .select_for_update()\
                    .filter(pk=self.pk)\
                    .values_list('timeslot_duration', flat=True)\
                    .first()
            super().save(*args, **kwargs)
            if old_duration is not None and old_duration != self.timeslot_duration:
                rescale_event_timeslots(self, old_duration, self.timeslot_duration)

    def clean(self):
        if self.first_day and self.last_day and self.first_day > self.last_day:
            raise exceptions.ValidationError(
                {'last_day': _('The last day must not be before the first day')})

    @property
    def tzinfo(self):
        return zoneinfo.ZoneInfo(self.timezone)

    def days(self):
        output = []
        if self.first_day and self.last_day:
            d = self.first_day
            step = datetime.timedelta(days=1)
            while d <= self.last_day:
                output.append(d)
                d += step
        return output

    def language_codes(self):
        from .locales import language_codes
        return language_codes(self)


class Room(models.Model):
    conference = models.ForeignKey(Conference, related_name='rooms', on_delete=models.CASCADE)
    name = models.CharField(_('Name'), max_length=100)
    size = models.PositiveIntegerField(null=True, blank=True)
    public = models.BooleanField(default=True)
    rank = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['rank', 'name']

    def __str__(self):
        return self.name


class Track(models.Model):
    conference = models.ForeignKey(Conference, related_name='tracks', on_delete=models.CASCADE)
    name = models.CharField(_('Name'), max_length=100)
    color = models.CharField(max_length=20, blank=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


EVENT_STATE = Choices(
    ('new', _('New')),
    ('review', _('Review')),
    ('unconfirmed', _('Unconfirmed')),
    ('confirmed', _('Confirmed')),
    ('rejected', _('Rejected')),
    ('withdrawn', _('Withdrawn')),
    ('canceled', _('Canceled')),
)

ACCEPTED_STATES = (EVENT_STATE.unconfirmed, EVENT_STATE.confirmed)

# Reporting bucket of every event state; `stats.events_by_state` emits the
# buckets in BUCKETS order.
STATE_BUCKETS = {
    EVENT_STATE.new: 0,
    EVENT_STATE.review: 0,
    EVENT_STATE.unconfirmed: 1,
    EVENT_STATE.confirmed: 1,
    EVENT_STATE.rejected: 2,
    EVENT_STATE.withdrawn: 3,
    EVENT_STATE.canceled: 3,
}
BUCKETS = (0, 1, 2, 3)

_unbucketed = set(EVENT_STATE._db_values) - set(STATE_BUCKETS)
if _unbucketed:
    raise exceptions.ImproperlyConfigured(
        'Event states without a reporting bucket: %s' % ', '.join(sorted(_unbucketed)))

EVENT_TYPE = Choices(
    ('lecture', _('Lecture')),
    ('workshop', _('Workshop')),
    ('podium', _('Podium discussion')),
    ('lightning_talk', _('Lightning talk')),
    ('meeting', _('Meeting')),
    ('other', _('Other')),
)


class EventQuerySet(QuerySet):
    def accepted(self):
        return self.filter(state__in=ACCEPTED_STATES)

    def public(self):
        return self.filter(public=True)

    def in_bucket(self, bucket):
        states = [state for state, b in STATE_BUCKETS.items() if b == bucket]
        return self.filter(state__in=states)

    def with_language(self, code):
        return self.filter(language__iexact=code)


class Event(TimeStampedModel):
    """
    A submission to a conference. `created` is the submission time and
    `modified` the last-modified stamp published in the calendar feed.
    """
    conference = models.ForeignKey(Conference, related_name='events', on_delete=models.CASCADE)
    title = models.CharField(_('Title'), max_length=255)
    subtitle = models.CharField(_('Subtitle'), max_length=255, blank=True)
    event_type = models.CharField(max_length=20, choices=EVENT_TYPE, default=EVENT_TYPE.lecture)
    abstract = models.TextField(blank=True)
    description = models.TextField(blank=True)
    start_time = models.DateTimeField(null=True, blank=True)
    time_slots = models.PositiveIntegerField(
        default=0,
        help_text=_('Length of the event, in timeslots of the conference.'))
    language = models.CharField(
        max_length=16, blank=True, default='',
        help_text=_('Language code; leave empty if unknown.'))
    state = models.CharField(max_length=12, choices=EVENT_STATE, default=EVENT_STATE.new, db_index=True)
    public = models.BooleanField(default=True)
    room = models.ForeignKey(Room, null=True, blank=True, related_name='events', on_delete=models.SET_NULL)
    track = models.ForeignKey(Track, null=True, blank=True, related_name='events', on_delete=models.SET_NULL)

    objects = EventQuerySet.as_manager()

    class Meta:
        ordering = ['title']

    def __str__(self):
        return '%s [%s][%s]' % (self.title, self.conference.acronym, self.state)

    def clean(self):
        if self.language and self.conference_id is not None:
            if self.language.strip().lower() not in self.conference.language_codes():
                raise exceptions.ValidationError(
                    {'language': _('%(code)s is not a language of this conference') % {'code': self.language}})

    @property
    def duration(self):
        """
        Real length of the event in minutes.
        """
        return self.time_slots * self.conference.timeslot_duration

    @property
    def end_time(self):
        if self.start_time is None:
            return None
        return self.start_time + datetime.timedelta(minutes=self.duration)

    @property
    def bucket(self):
        return STATE_BUCKETS[self.state]

    @property
    def accepted(self):
        return self.state in ACCEPTED_STATES

    @property
    def feedback_count(self):
        return self.feedbacks.count()

    @property
    def average_feedback(self):
        return self.feedbacks.aggregate(avg=models.Avg('rating'))['avg']


class EventFeedback(models.Model):
    event = models.ForeignKey(Event, related_name='feedbacks', on_delete=models.CASCADE)
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True)
    created = models.DateTimeField(auto_now_add=True)


GENDERS = Choices(
    ('male', _('Male')),
    ('female', _('Female')),
)

EVENT_ROLE = Choices(
    ('submitter', _('Submitter')),
    ('speaker', _('Speaker')),
    ('moderator', _('Moderator')),
    ('coordinator', _('Coordinator')),
    ('reviewer', _('Reviewer')),
)

PRESENTER_ROLES = (EVENT_ROLE.speaker, EVENT_ROLE.moderator)

ROLE_STATE = Choices(
    ('pending', _('Pending')),
    ('unclear', _('Unclear')),
    ('confirmed', _('Confirmed')),
    ('declined', _('Declined')),
    ('canceled', _('Canceled')),
)


class PersonQuerySet(QuerySet):
    def involved_in(self, conference):
        return self.filter(event_people__event__conference=conference).distinct()

    def speaking_at(self, conference):
        return self.filter(
            event_people__event__conference=conference,
            event_people__event_role__in=PRESENTER_ROLES,
            event_people__event__state__in=ACCEPTED_STATES,
        ).distinct()

    def publicly_speaking_at(self, conference):
        return self.filter(
            event_people__event__conference=conference,
            event_people__event_role__in=PRESENTER_ROLES,
            event_people__event__state__in=ACCEPTED_STATES,
            event_people__event__public=True,
        ).distinct()

    def confirmed(self, conference):
        return self.filter(
            event_people__event__conference=conference,
            event_people__event__state=EVENT_STATE.confirmed,
        ).distinct()


class Person(models.Model):
    user = models.OneToOneField(
        dsettings.AUTH_USER_MODEL, null=True, blank=True,
        related_name='person', on_delete=models.SET_NULL)
    first_name = models.CharField(_('First name'), max_length=100, blank=True)
    last_name = models.CharField(_('Last name'), max_length=100, blank=True)
    public_name = models.CharField(_('Public name'), max_length=255)
    email = models.EmailField(_('Email'))
    gender = models.CharField(max_length=10, choices=GENDERS, blank=True)
    abstract = models.TextField(blank=True)
    description = models.TextField(blank=True)
    avatar = models.FileField(
        upload_to=avatar_upload_to, blank=True, validators=[validate_avatar_content_type])

    objects = PersonQuerySet.as_manager()

    class Meta:
        ordering = ['public_name']

    def __str__(self):
        return 'Person: %s' % self.full_name

    @property
    def full_name(self):
        if (not self.first_name or not self.last_name) and self.public_name:
            return self.public_name
        return '%s %s' % (self.first_name, self.last_name)

    @property
    def full_public_name(self):
        return self.public_name or self.full_name

    @property
    def user_email(self):
        if self.user_id:
            return self.user.email

    def avatar_url(self, size='medium'):
        return avatar_url(self, size)

    def locale_for_mailing(self, conference):
        from .locales import best_locale
        return best_locale(self, conference)

    def events(self):
        return Event.objects.filter(event_people__person=self).distinct()

    def events_in(self, conference):
        return self.events().filter(conference=conference)

    def events_as_presenter_in(self, conference):
        return Event.objects.filter(
            conference=conference,
            event_people__person=self,
            event_people__event_role__in=PRESENTER_ROLES,
        ).distinct()

    def events_as_presenter_not_in(self, conference):
        return Event.objects.filter(
            event_people__person=self,
            event_people__event_role__in=PRESENTER_ROLES,
        ).exclude(conference=conference).distinct()

    def public_and_accepted_events_as_speaker_in(self, conference):
        return Event.objects.public().accepted().filter(
            conference=conference,
            state=EVENT_STATE.confirmed,
            event_people__person=self,
            event_people__event_role__in=PRESENTER_ROLES,
        ).distinct()

    def is_involved_in(self, conference):
        return self.event_people.filter(event__conference=conference).exists()

    def is_active_presenter_anywhere(self):
        """
        True when the person speaks at or moderates an accepted event of any
        conference.
        """
        return self.event_people.filter(
            event_role__in=PRESENTER_ROLES,
            event__state__in=ACCEPTED_STATES,
        ).exists()

    def presenter_participations(self, conference):
        """
        Speaker and moderator rows of this person in `conference`, oldest
        first.
        """
        return self.event_people\
            .filter(event__conference=conference, event_role__in=PRESENTER_ROLES)\
            .order_by('id')

    def role_state(self, conference):
        states = []
        for state in self.presenter_participations(conference).values_list('role_state', flat=True):
            if state not in states:
                states.append(state)
        return ', '.join(states)

    def set_role_state(self, conference, state):
        """
        Set `state` on every speaker/moderator participation of this person
        in `conference`. All rows are written or none: any invalid row aborts
        the whole update.
        """
        with transaction.atomic():
            participations = list(self.presenter_participations(conference).select_for_update())
            for ep in participations:
                ep.role_state = state
                ep.full_clean()
                ep.save()
        log.info(
            'Set role state "%s" on %d participations of "%s" in %s',
            state, len(participations), self.full_name, conference.acronym)
        signals.role_state_changed.send(
            sender=Person, person=self, conference=conference, state=state, count=len(participations))
        return len(participations)

    def average_feedback_as_speaker(self):
        """
        Mean feedback of the events this person presents, weighted by the
        number of feedbacks of every event; None when there is no feedback.
        """
        events = Event.objects.filter(
            event_people__person=self,
            event_people__event_role__in=PRESENTER_ROLES,
        ).distinct()
        feedback = 0.0
        count = 0
        for event in events:
            current = event.average_feedback
            if current is None:
                continue
            n = event.feedback_count
            feedback += current * n
            count += n
        if count == 0:
            return None
        return feedback / count


class EventPerson(models.Model):
    event = models.ForeignKey(Event, related_name='event_people', on_delete=models.CASCADE)
    person = models.ForeignKey(Person, related_name='event_people', on_delete=models.CASCADE)
    event_role = models.CharField(max_length=20, choices=EVENT_ROLE, default=EVENT_ROLE.submitter)
    role_state = models.CharField(max_length=20, choices=ROLE_STATE, blank=True)

    class Meta:
        ordering = ['id']
        unique_together = (('event', 'person', 'event_role'),)

    def __str__(self):
        return '%s: %s (%s)' % (self.event_role, self.person.full_name, self.event.title)


class Availability(models.Model):
    """
    A range of time in which a person can present at a conference.
    """
    person = models.ForeignKey(Person, related_name='availabilities', on_delete=models.CASCADE)
    conference = models.ForeignKey(Conference, related_name='availabilities', on_delete=models.CASCADE)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()

    class Meta:
        ordering = ['start_date']
        verbose_name_plural = 'availabilities'

    def __str__(self):
        return '%s - %s' % (self.start_date, self.end_date)

    def clean(self):
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise exceptions.ValidationError({'end_date': _('The end must be after the start')})


class Language(models.Model):
    """
    A language used by a conference or spoken by a person; exactly one of
    the two owners is set.
    """
    OWNER_KIND = Choices(
        ('conference', _('Conference')),
        ('person', _('Person')),
    )

    code = models.CharField(max_length=16)
    conference = models.ForeignKey(
        Conference, null=True, blank=True, related_name='languages', on_delete=models.CASCADE)
    person = models.ForeignKey(
        Person, null=True, blank=True, related_name='languages', on_delete=models.CASCADE)

    class Meta:
        ordering = ['id']
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(conference__isnull=False, person__isnull=True) |
                    models.Q(conference__isnull=True, person__isnull=False)
                ),
                name='language_single_owner',
            ),
            models.UniqueConstraint(
                Lower('code'), models.F('conference'),
                condition=models.Q(conference__isnull=False),
                name='language_unique_per_conference',
            ),
        ]

    def __str__(self):
        return self.code

    @property
    def owner_kind(self):
        if self.conference_id is not None:
            return self.OWNER_KIND.conference
        return self.OWNER_KIND.person

    @property
    def owner(self):
        if self.conference_id is not None:
            return self.conference
        return self.person

    def clean(self):
        if (self.conference_id is None) == (self.person_id is None):
            raise exceptions.ValidationError(_('A language belongs to either a conference or a person'))


PHONE_TYPE = Choices('mobile', 'landline', 'office', 'private', 'fax')

IM_TYPE = Choices('jabber', 'matrix', 'irc', 'signal', 'skype')


class PhoneNumber(models.Model):
    person = models.ForeignKey(Person, related_name='phone_numbers', on_delete=models.CASCADE)
    phone_type = models.CharField(max_length=10, choices=PHONE_TYPE, default=PHONE_TYPE.mobile)
    phone_number = models.CharField(max_length=30)

    def __str__(self):
        return self.phone_number


class ImAccount(models.Model):
    person = models.ForeignKey(Person, related_name='im_accounts', on_delete=models.CASCADE)
    im_type = models.CharField(max_length=10, choices=IM_TYPE)
    im_address = models.CharField(max_length=255)

    def __str__(self):
        return '%s: %s' % (self.im_type, self.im_address)


class Link(models.Model):
    person = models.ForeignKey(Person, related_name='links', on_delete=models.CASCADE)
    title = models.CharField(max_length=255)
    url = models.URLField()

    def __str__(self):
        return self.title


AUDIT_ACTION = Choices('create', 'update', 'delete')


class AuditEntry(models.Model):
    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.PositiveIntegerField(db_index=True)
    content_object = GenericForeignKey('content_type', 'object_id')
    action = models.CharField(max_length=10, choices=AUDIT_ACTION)
    changes = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    created = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created', 'id']
        verbose_name_plural = 'audit entries'

    def __str__(self):
        return '%s %s #%s' % (self.action, self.content_type.model, self.object_id)
