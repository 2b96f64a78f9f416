from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from announcements.models import Announcement
from documents.models import StudentDocument
from . import change_feed
from .models import Message


def _publish_on_commit(table_name, instance, created):
    event = 'INSERT' if created else 'UPDATE'
    row = change_feed.row_dict(instance)
    transaction.on_commit(lambda: change_feed.publish(table_name, event, row))


@receiver(post_save, sender=Message, dispatch_uid='change_feed_messages')
def publish_message(sender, instance, created, **kwargs):
    _publish_on_commit('messages', instance, created)


@receiver(post_save, sender=StudentDocument, dispatch_uid='change_feed_student_documents')
def publish_student_document(sender, instance, created, **kwargs):
    _publish_on_commit('student_documents', instance, created)


@receiver(post_save, sender=Announcement, dispatch_uid='change_feed_announcements')
def publish_announcement(sender, instance, created, **kwargs):
    _publish_on_commit('announcements', instance, created)
