from django.core.exceptions import PermissionDenied, ValidationError
from django.db import DatabaseError
from django.test import SimpleTestCase

from documents.models import StudentDocument
from rdms.exceptions import AuthenticationRequired, BackendError, custom_exception_handler
from rdms.results import fetch


class ExceptionHandlerTests(SimpleTestCase):
    def handle(self, exc):
        return custom_exception_handler(exc, {'view': None})

    def test_authentication_required_is_401(self):
        resp = self.handle(AuthenticationRequired())
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.data['status_code'], 401)

    def test_validation_error_is_400_with_fields(self):
        resp = self.handle(ValidationError({'remarks': 'required'}))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data['remarks'], ['required'])

    def test_plain_validation_error_is_wrapped(self):
        resp = self.handle(ValidationError('nope'))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data['detail'], ['nope'])
        self.assertEqual(resp.data['status_code'], 400)

    def test_not_found(self):
        resp = self.handle(StudentDocument.DoesNotExist('missing'))
        self.assertEqual(resp.status_code, 404)

    def test_permission_denied(self):
        self.assertEqual(self.handle(PermissionDenied('no')).status_code, 403)

    def test_backend_error_is_503(self):
        with self.assertLogs('rdms.exceptions', level='ERROR'):
            resp = self.handle(BackendError('store down'))
        self.assertEqual(resp.status_code, 503)
        self.assertEqual(resp.data['detail'], 'store down')

    def test_unknown_errors_fall_through(self):
        self.assertIsNone(self.handle(RuntimeError('boom')))


class FetchResultTests(SimpleTestCase):
    def test_empty_is_not_an_error(self):
        result = fetch(lambda: [])
        self.assertTrue(result.ok)
        self.assertTrue(result.is_empty)

    def test_database_error_is_captured(self):
        def broken():
            raise DatabaseError('connection lost')

        result = fetch(broken, what='announcements')
        self.assertFalse(result.ok)
        self.assertFalse(result.is_empty)
        self.assertEqual(result.error, 'Could not load announcements: connection lost')
