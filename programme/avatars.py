"""
Avatar helpers: upload path, content-type validation and the URL of a
person's picture, falling back to Gravatar.
"""
import hashlib
import mimetypes
import os.path
import urllib.parse

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from . import settings


def avatar_upload_to(instance, filename):
    return os.path.join('avatars', '%s%s' % (instance.pk or 'new', os.path.splitext(filename)[1].lower()))


def content_type_of(value):
    # uploaded files carry the type sent by the browser, stored ones don't
    content_type = getattr(value, 'content_type', None)
    if not content_type:
        content_type, _encoding = mimetypes.guess_type(value.name or '')
    return content_type


def validate_avatar_content_type(value):
    content_type = content_type_of(value)
    if content_type not in settings.AVATAR_CONTENT_TYPES:
        raise ValidationError(
            _('Unsupported image type %(content_type)s, use a jpg, png or gif file.'),
            code='invalid_content_type',
            params={'content_type': content_type or 'unknown'},
        )


def gravatar(email, size=80, default='identicon', rating='r'):
    """Create a Gravatar URL given the user email address."""
    digest = hashlib.md5(email.strip().lower().encode('utf-8')).hexdigest()
    return 'https://secure.gravatar.com/avatar/{}?{}'.format(digest, urllib.parse.urlencode({
        'default': default,
        'size': size,
        'rating': rating,
    }))


def avatar_url(person, size='medium'):
    try:
        pixels = settings.AVATAR_SIZES[size]
    except KeyError:
        raise ValueError('unknown avatar size: %r' % (size,))
    if person.avatar:
        return person.avatar.url
    if person.email:
        return gravatar(person.email, size=pixels)
    return None
