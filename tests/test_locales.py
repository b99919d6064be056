import pytest

from programme.locales import best_locale, language_codes

from .factories import ConferenceLanguageFactory, PersonLanguageFactory

pytestmark = pytest.mark.django_db


def _speaks(person, *codes):
    for code in codes:
        PersonLanguageFactory(person=person, code=code)


def _uses(conference, *codes):
    for code in codes:
        ConferenceLanguageFactory(conference=conference, code=code)


def test_language_codes_are_lowercase_and_unique(person):
    _speaks(person, "DE", "en", "de", " Fr ")
    assert language_codes(person) == ["de", "en", "fr"]


def test_shared_language_wins(person, conference):
    _speaks(person, "de")
    _uses(conference, "en", "de")
    assert best_locale(person, conference) == "de"


def test_person_without_languages_gets_the_default(person, conference):
    _uses(conference, "en", "de")
    assert best_locale(person, conference) == "en"


def test_no_common_language_gets_the_default(person, conference):
    _speaks(person, "fr")
    _uses(conference, "en", "de")
    assert best_locale(person, conference) == "en"


def test_the_default_locale_wins_when_spoken(person, conference):
    _speaks(person, "de", "en")
    _uses(conference, "de", "en")
    assert best_locale(person, conference) == "en"


def test_the_order_of_the_person_languages_is_kept(person, conference):
    _speaks(person, "nl", "fr", "de")
    _uses(conference, "de", "fr")
    assert best_locale(person, conference) == "fr"


def test_conference_without_languages(person, conference):
    _speaks(person, "de")
    assert best_locale(person, conference) == "en"


def test_default_locale_is_configurable(person, conference, monkeypatch):
    monkeypatch.setattr("programme.settings.DEFAULT_LOCALE", "de")
    _speaks(person, "fr")
    _uses(conference, "en")
    assert best_locale(person, conference) == "de"


def test_person_shortcut(person, conference):
    _speaks(person, "it")
    _uses(conference, "it")
    assert person.locale_for_mailing(conference) == "it"
    assert conference.language_codes() == ["it"]
