import socket

from django.conf import settings

# Locale returned by `best_locale` when a person and a conference share no
# language, or when the person speaks it anyway.
DEFAULT_LOCALE = getattr(settings, 'PROGRAMME_DEFAULT_LOCALE', 'en')

# Host name used to build the calendar uid of an event ("event-<id>@<host>")
CALENDAR_HOST = getattr(settings, 'PROGRAMME_CALENDAR_HOST', None) or socket.gethostname()

AVATAR_CONTENT_TYPES = getattr(settings, 'PROGRAMME_AVATAR_CONTENT_TYPES', (
    'image/jpg',
    'image/jpeg',
    'image/png',
    'image/gif',
))

# Avatar sizes in pixels, used when falling back to gravatar.
AVATAR_SIZES = getattr(settings, 'PROGRAMME_AVATAR_SIZES', {
    'tiny': 16,
    'small': 32,
    'medium': 64,
    'large': 128,
})

# Models whose writes are captured by the audit recorder (app_label.ModelName).
AUDITED_MODELS = getattr(settings, 'PROGRAMME_AUDITED_MODELS', (
    'programme.Conference',
    'programme.Event',
    'programme.Person',
))

CURRENT_CACHE_TIMEOUT = getattr(settings, 'PROGRAMME_CURRENT_CACHE_TIMEOUT', 60 * 60 * 24 * 7)
