from django.db.models.signals import post_delete, post_save

from . import audit
from .models import AUDIT_ACTION, AuditEntry, Conference, ConferenceManager


def _should_record(sender):
    return sender is not AuditEntry and audit.is_audited(sender) and audit.is_enabled(sender)


def on_audited_saved(sender, instance, created, raw=False, **kw):
    """
    Keep a trail of the writes to the audited models.
    """
    if raw or not _should_record(sender):
        return
    audit.record(instance, AUDIT_ACTION.create if created else AUDIT_ACTION.update)


def on_audited_deleted(sender, instance, **kw):
    if not _should_record(sender):
        return
    audit.record(instance, AUDIT_ACTION.delete)


post_save.connect(on_audited_saved, dispatch_uid='programme.audit.saved')
post_delete.connect(on_audited_deleted, dispatch_uid='programme.audit.deleted')

post_save.connect(ConferenceManager.clear_cache, sender=Conference)
