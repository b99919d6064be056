import pytest

from programme import audit
from programme.models import AuditEntry, Event, Person, Room

from .factories import EventFactory, PersonFactory, RoomFactory

pytestmark = pytest.mark.django_db


def test_create_update_and_delete_are_recorded(conference):
    event = EventFactory(conference=conference, title="First")
    event.title = "Second"
    event.save()
    pk = event.pk
    event.delete()

    entries = list(AuditEntry.objects.filter(object_id=pk, content_type__model="event"))
    assert [e.action for e in entries] == ["create", "update", "delete"]
    assert entries[0].changes["title"] == "First"
    assert entries[1].changes["title"] == "Second"
    assert entries[1].changes["conference_id"] == conference.pk


def test_history(conference):
    event = EventFactory(conference=conference)
    event.save()
    other = EventFactory(conference=conference)

    assert [e.action for e in audit.history(event)] == ["create", "update"]
    assert [e.action for e in audit.history(other)] == ["create"]


def test_conference_and_person_are_audited(conference):
    person = PersonFactory()
    assert [e.action for e in audit.history(conference)] == ["create"]
    assert [e.action for e in audit.history(person)] == ["create"]


def test_models_outside_the_list_are_not_audited(conference):
    room = RoomFactory(conference=conference)
    assert not audit.is_audited(Room)
    assert not audit.history(room).exists()


def test_snapshot_is_json_friendly(conference):
    person = PersonFactory(avatar="avatars/1.png")
    entry = audit.history(person).get()
    assert entry.changes["avatar"] == "avatars/1.png"
    entry.refresh_from_db()
    assert entry.changes["public_name"] == person.public_name


def test_disabled_suspends_recording(conference):
    with audit.disabled(Event):
        assert not audit.is_enabled(Event)
        event = EventFactory(conference=conference)
        PersonFactory()
    assert audit.is_enabled(Event)
    assert not audit.history(event).exists()
    assert AuditEntry.objects.filter(content_type__model="person").count() == 1


def test_disabled_restores_the_state_on_error():
    with pytest.raises(RuntimeError):
        with audit.disabled(Event, Person):
            raise RuntimeError("boom")
    assert audit.is_enabled(Event)
    assert audit.is_enabled(Person)


def test_nested_disabled_keeps_the_outer_state():
    with audit.disabled(Event):
        with audit.disabled(Event):
            pass
        assert not audit.is_enabled(Event)
    assert audit.is_enabled(Event)


def test_enable_and_disable():
    audit.disable(Person)
    try:
        assert not audit.is_enabled(Person)
    finally:
        audit.enable(Person)
    assert audit.is_enabled(Person)
