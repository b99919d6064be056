from . import settings


def language_codes(owner):
    """
    Lowercase language codes of a conference or a person, in the order they
    were stored and without repetitions.
    """
    codes = []
    for code in owner.languages.order_by('id').values_list('code', flat=True):
        code = code.strip().lower()
        if code and code not in codes:
            codes.append(code)
    return codes


def best_locale(person, conference):
    """
    Locale to use when writing to `person` about `conference`.

    The default locale wins when the person speaks it, speaks nothing, or
    shares no language with the conference; otherwise the first language of
    the person, in their order, that the conference also uses.
    """
    own = language_codes(person)
    if not own or settings.DEFAULT_LOCALE in own:
        return settings.DEFAULT_LOCALE
    conference_codes = set(language_codes(conference))
    common = [code for code in own if code in conference_codes]
    if not common:
        return settings.DEFAULT_LOCALE
    return common[0]
