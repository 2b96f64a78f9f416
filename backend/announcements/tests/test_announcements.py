from django.core.exceptions import PermissionDenied, ValidationError
from django.test import TestCase
from rest_framework.test import APIClient

from announcements.models import Announcement
from announcements.services import create_announcement, delete_announcement, list_announcements
from documents.tests.helpers import make_user


class AnnouncementServiceTests(TestCase):
    def setUp(self):
        self.coordinator = make_user('coord@uni.edu', role='COORDINATOR')
        self.student = make_user('alice@uni.edu')

    def test_pinned_first_then_newest(self):
        old = create_announcement(self.coordinator, 'Old', 'first post')
        pinned = create_announcement(self.coordinator, 'Pinned', 'read me', is_pinned=True)
        new = create_announcement(self.coordinator, 'New', 'latest post')

        result = list_announcements(self.student)
        self.assertTrue(result.ok)
        self.assertEqual([a.pk for a in result.items], [pinned.pk, new.pk, old.pk])

    def test_empty_list_is_not_an_error(self):
        result = list_announcements(self.student)
        self.assertTrue(result.is_empty)

    def test_title_and_content_required(self):
        with self.assertRaises(ValidationError) as ctx:
            create_announcement(self.coordinator, ' ', '')
        self.assertEqual(set(ctx.exception.message_dict), {'title', 'content'})

    def test_students_cannot_publish_or_delete(self):
        with self.assertRaises(PermissionDenied):
            create_announcement(self.student, 'Hi', 'there')
        a = create_announcement(self.coordinator, 'Hi', 'there')
        with self.assertRaises(PermissionDenied):
            delete_announcement(self.student, a.pk)
        delete_announcement(self.coordinator, a.pk)
        self.assertFalse(Announcement.objects.exists())

    def test_publish_is_logged(self):
        with self.assertLogs('documents.services.notification_service', level='INFO') as logs:
            create_announcement(self.coordinator, 'Deadline', 'Submit by Friday')
        self.assertIn('announcement_published', logs.output[0])


class AnnouncementApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.coordinator = make_user('coord@uni.edu', role='COORDINATOR')
        self.student = make_user('alice@uni.edu')

    def test_create_list_delete(self):
        self.client.force_authenticate(self.coordinator)
        resp = self.client.post('/api/announcements/', {'title': 'Viva dates', 'content': 'See board', 'is_pinned': True}, format='json')
        self.assertEqual(resp.status_code, 201)
        pk = resp.data['id']

        self.client.force_authenticate(self.student)
        resp = self.client.get('/api/announcements/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data[0]['title'], 'Viva dates')
        self.assertEqual(self.client.delete(f'/api/announcements/{pk}/').status_code, 403)
        self.assertEqual(self.client.post('/api/announcements/', {'title': 'x', 'content': 'y'}, format='json').status_code, 403)

        self.client.force_authenticate(self.coordinator)
        self.assertEqual(self.client.delete(f'/api/announcements/{pk}/').status_code, 204)
        self.assertEqual(self.client.delete(f'/api/announcements/{pk}/').status_code, 404)
