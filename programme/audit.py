"""
A small change recorder for the programme models.

Every save or delete of an audited model (see `settings.AUDITED_MODELS`)
leaves an `AuditEntry` behind, written by the receivers in `listeners.py`.
Recording can be switched off per model; the switch lives in a thread local
so a bulk rewrite running in one request does not silence the others.

    with audit.disabled(Event):
        for event in events:
            event.save()
"""
import logging
import threading
from contextlib import contextmanager

from django.contrib.contenttypes.models import ContentType
from django.db import models

from . import settings

log = logging.getLogger('programme.audit')

_state = threading.local()


def _disabled_labels():
    try:
        return _state.disabled
    except AttributeError:
        _state.disabled = set()
        return _state.disabled


def _label(model):
    return model._meta.label


def is_audited(model):
    return _label(model) in settings.AUDITED_MODELS


def is_enabled(model):
    return _label(model) not in _disabled_labels()


def disable(model):
    _disabled_labels().add(_label(model))


def enable(model):
    _disabled_labels().discard(_label(model))


@contextmanager
def disabled(*models):
    """
    Suspend the recording for `models` while the block runs; the previous
    state is restored on exit, even when the block raises.
    """
    labels = [_label(m) for m in models]
    already_disabled = set(labels) & _disabled_labels()
    for label in labels:
        _disabled_labels().add(label)
    log.debug('auditing suspended for %s', ', '.join(labels))
    try:
        yield
    finally:
        for label in labels:
            if label not in already_disabled:
                _disabled_labels().discard(label)
        log.debug('auditing resumed for %s', ', '.join(labels))


def snapshot(instance):
    """
    Column values of `instance`, keyed by attribute name (foreign keys as
    ids, files as their stored name).
    """
    data = {}
    for field in instance._meta.concrete_fields:
        value = field.value_from_object(instance)
        if isinstance(field, models.FileField):
            value = value.name if value else ''
        data[field.attname] = value
    return data


def record(instance, action):
    from .models import AuditEntry
    return AuditEntry.objects.create(
        content_type=ContentType.objects.get_for_model(instance),
        object_id=instance.pk,
        action=action,
        changes=snapshot(instance),
    )


def history(instance):
    from .models import AuditEntry
    return AuditEntry.objects.filter(
        content_type=ContentType.objects.get_for_model(instance),
        object_id=instance.pk,
    ).order_by('created', 'id')
