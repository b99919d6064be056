import datetime

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from programme.forms import ConferenceForm, PersonForm
from programme.models import Event

from .factories import ConferenceFactory, EventFactory

pytestmark = pytest.mark.django_db


def _conference_data(**kw):
    data = {
        "title": "PyCon Test",
        "acronym": "pytest24",
        "timeslot_duration": "15",
        "first_day": "2024-05-01",
        "last_day": "2024-05-03",
        "timezone": "Europe/Berlin",
        "email": "info@example.com",
    }
    data.update(kw)
    return data


def test_valid_conference_form():
    form = ConferenceForm(data=_conference_data())
    assert form.is_valid(), form.errors
    conference = form.save()
    assert conference.days() == [
        datetime.date(2024, 5, 1),
        datetime.date(2024, 5, 2),
        datetime.date(2024, 5, 3),
    ]


def test_duplicate_acronym_is_rejected():
    ConferenceFactory(acronym="PyTest24")
    form = ConferenceForm(data=_conference_data())
    assert not form.is_valid()
    assert "acronym" in form.errors


def test_own_acronym_is_accepted():
    conference = ConferenceFactory(acronym="pytest24")
    form = ConferenceForm(data=_conference_data(), instance=conference)
    assert form.is_valid(), form.errors


@pytest.mark.parametrize("value", ["0", "-15"])
def test_non_positive_timeslot_duration_is_rejected(value):
    form = ConferenceForm(data=_conference_data(timeslot_duration=value))
    assert not form.is_valid()
    assert "timeslot_duration" in form.errors


def test_last_day_before_first_day():
    form = ConferenceForm(data=_conference_data(first_day="2024-05-03", last_day="2024-05-01"))
    assert not form.is_valid()
    assert "last_day" in form.errors


def test_unknown_timezone():
    form = ConferenceForm(data=_conference_data(timezone="Mars/Olympus_Mons"))
    assert not form.is_valid()
    assert "timezone" in form.errors


def test_changing_the_duration_rescales_the_events(conference):
    event = EventFactory(conference=conference, time_slots=2)
    form = ConferenceForm(
        data=_conference_data(acronym=conference.acronym, timeslot_duration="5"),
        instance=conference,
    )
    assert form.is_valid(), form.errors
    form.save()

    assert Event.objects.get(pk=event.pk).time_slots == 6


def test_person_form_requires_a_public_name_and_an_email():
    form = PersonForm(data={"first_name": "Ada"})
    assert not form.is_valid()
    assert set(form.errors) == {"public_name", "email"}


def test_person_form_normalizes_the_email():
    form = PersonForm(data={"public_name": "Ada", "email": "  Ada@Example.COM "})
    assert form.is_valid(), form.errors
    assert form.cleaned_data["email"] == "ada@example.com"


def test_person_form_rejects_other_files():
    upload = SimpleUploadedFile("cv.pdf", b"%PDF-1.4", content_type="application/pdf")
    form = PersonForm(data={"public_name": "Ada", "email": "ada@example.com"}, files={"avatar": upload})
    assert not form.is_valid()
    assert "avatar" in form.errors


def test_person_form_accepts_images():
    upload = SimpleUploadedFile("me.png", b"\x89PNG\r\n\x1a\n", content_type="image/png")
    form = PersonForm(data={"public_name": "Ada", "email": "ada@example.com"}, files={"avatar": upload})
    assert form.is_valid(), form.errors
