import datetime
import zoneinfo

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import override_settings

from programme.models import (
    BUCKETS,
    EVENT_STATE,
    STATE_BUCKETS,
    Availability,
    Conference,
    Event,
    Language,
)

from .factories import (
    ConferenceFactory,
    ConferenceLanguageFactory,
    EventFactory,
    EventFeedbackFactory,
    PersonFactory,
    PersonLanguageFactory,
)

pytestmark = pytest.mark.django_db


def test_every_state_has_a_bucket():
    assert set(STATE_BUCKETS) == {value for value, label in EVENT_STATE}
    assert set(STATE_BUCKETS.values()) == set(BUCKETS)


@pytest.mark.parametrize("state,bucket", [
    ("new", 0), ("review", 0), ("unconfirmed", 1), ("confirmed", 1),
    ("rejected", 2), ("withdrawn", 3), ("canceled", 3),
])
def test_event_bucket(state, bucket):
    assert EventFactory.build(state=state).bucket == bucket


def test_event_end_time(conference):
    start = datetime.datetime(2024, 5, 1, 10, tzinfo=zoneinfo.ZoneInfo("Europe/Berlin"))
    event = EventFactory(conference=conference, time_slots=3, start_time=start)
    assert event.duration == 45
    assert event.end_time == start + datetime.timedelta(minutes=45)
    assert EventFactory(conference=conference, start_time=None).end_time is None


def test_event_feedback(conference):
    event = EventFactory(conference=conference)
    assert event.feedback_count == 0
    assert event.average_feedback is None
    EventFeedbackFactory(event=event, rating=2)
    EventFeedbackFactory(event=event, rating=5)
    assert event.feedback_count == 2
    assert event.average_feedback == pytest.approx(3.5)


def test_feedback_rating_range(conference):
    feedback = EventFeedbackFactory.build(event=EventFactory(conference=conference), rating=6)
    with pytest.raises(ValidationError):
        feedback.full_clean()


def test_event_queryset(conference):
    accepted = EventFactory(conference=conference, state="confirmed", language="de")
    EventFactory(conference=conference, state="new", public=False)
    EventFactory(conference=conference, state="withdrawn")

    assert list(Event.objects.accepted()) == [accepted]
    assert Event.objects.public().count() == 2
    assert Event.objects.in_bucket(3).count() == 1
    assert list(Event.objects.with_language("de")) == [accepted]


def test_conference_str_and_days():
    conference = ConferenceFactory(
        title="EuroConf", acronym="ec24",
        first_day=datetime.date(2024, 2, 28), last_day=datetime.date(2024, 3, 1))
    assert str(conference) == "Conference: EuroConf (ec24)"
    assert conference.days() == [
        datetime.date(2024, 2, 28),
        datetime.date(2024, 2, 29),
        datetime.date(2024, 3, 1),
    ]
    assert ConferenceFactory(first_day=None, last_day=None).days() == []


def test_conference_tzinfo():
    conference = ConferenceFactory(timezone="America/New_York")
    assert conference.tzinfo == zoneinfo.ZoneInfo("America/New_York")


@override_settings(CACHES={"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}})
def test_current_conference():
    Conference.objects.clear_cache(sender=Conference)
    assert Conference.objects.current() is None
    ConferenceFactory()
    latest = ConferenceFactory()
    assert Conference.objects.current() == latest
    newest = ConferenceFactory()
    assert Conference.objects.current() == newest


def test_language_owner(conference, person):
    conference_language = ConferenceLanguageFactory(conference=conference, code="de")
    person_language = PersonLanguageFactory(person=person, code="fr")

    assert conference_language.owner_kind == Language.OWNER_KIND.conference
    assert conference_language.owner == conference
    assert person_language.owner_kind == Language.OWNER_KIND.person
    assert person_language.owner == person


def test_language_needs_exactly_one_owner(conference, person):
    with pytest.raises(ValidationError):
        Language(code="en").full_clean()
    with pytest.raises(ValidationError):
        Language(code="en", conference=conference, person=person).full_clean()

    with pytest.raises(IntegrityError), transaction.atomic():
        Language.objects.create(code="en")


def test_conference_language_codes_are_unique(conference):
    ConferenceLanguageFactory(conference=conference, code="de")
    with pytest.raises(IntegrityError), transaction.atomic():
        ConferenceLanguageFactory(conference=conference, code="DE")

    ConferenceLanguageFactory(conference=ConferenceFactory(), code="de")
    with pytest.raises(ValidationError):
        Language(code="de", conference=conference).full_clean()


def test_people_may_repeat_a_language(person):
    PersonLanguageFactory(person=person, code="de")
    PersonLanguageFactory(person=person, code="de")
    assert person.languages.count() == 2


def test_event_language_must_belong_to_the_conference(conference):
    ConferenceLanguageFactory(conference=conference, code="en")

    with pytest.raises(ValidationError) as exc:
        EventFactory.build(conference=conference, language="fr").full_clean()
    assert "language" in exc.value.message_dict

    EventFactory.build(conference=conference, language="EN").full_clean()
    EventFactory.build(conference=conference, language="").full_clean()


def test_availability_end_after_start(conference):
    start = datetime.datetime(2024, 5, 1, 10, tzinfo=datetime.timezone.utc)
    availability = Availability(
        person=PersonFactory(), conference=conference, start_date=start, end_date=start)
    with pytest.raises(ValidationError):
        availability.full_clean()


def test_deleting_a_conference_removes_its_events(conference):
    EventFactory.create_batch(2, conference=conference)
    conference.delete()
    assert Event.objects.count() == 0
