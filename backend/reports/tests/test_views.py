from django.test import TestCase
from rest_framework.test import APIClient

from documents.models import StudentDocument
from documents.tests.helpers import make_program, make_student, make_user


class ReportApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.coordinator = make_user('coord@uni.edu', role='COORDINATOR')
        program, items = make_program(titles=('Proposal',))
        done = make_student(make_user('done@uni.edu', full_name='Done Student'), program)
        make_student(make_user('idle@uni.edu', full_name='Idle Student'), program)
        StudentDocument.objects.create(student=done, checklist_item=items[0], file_path='x.pdf', status='approved')

    def test_report_json(self):
        self.client.force_authenticate(self.coordinator)
        resp = self.client.get('/api/reports/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['completed'], 1)
        self.assertEqual(resp.data['status_distribution']['NOT STARTED'], 1)
        self.assertEqual([r['name'] for r in resp.data['rows']], ['Done Student', 'Idle Student'])

    def test_report_status_filter(self):
        self.client.force_authenticate(self.coordinator)
        resp = self.client.get('/api/reports/', {'status': 'COMPLETE'})
        self.assertEqual([r['name'] for r in resp.data['rows']], ['Done Student'])

    def test_export_pdf(self):
        self.client.force_authenticate(self.coordinator)
        resp = self.client.get('/api/reports/export/', {'format': 'pdf'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp['Content-Type'], 'application/pdf')
        self.assertTrue(resp.content.startswith(b'%PDF'))

    def test_students_forbidden(self):
        self.client.force_authenticate(make_user('someone@uni.edu'))
        resp = self.client.get('/api/reports/')
        self.assertEqual(resp.status_code, 403)
