import pytest

from . import factories


@pytest.fixture
def conference():
    return factories.ConferenceFactory(timeslot_duration=15)


@pytest.fixture
def person():
    return factories.PersonFactory()


@pytest.fixture
def speaker(person, conference):
    """
    A person speaking at a confirmed event of `conference`.
    """
    event = factories.EventFactory(conference=conference, state="confirmed")
    factories.EventPersonFactory(event=event, person=person, event_role="speaker")
    return person
