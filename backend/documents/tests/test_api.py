from django.test import TestCase
from rest_framework.test import APIClient

from documents.models import StudentDocument
from documents.services import document_service
from .helpers import TempMediaMixin, make_program, make_student, make_user, pdf_file


class DocumentApiTests(TempMediaMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.coordinator = make_user('coord@uni.edu', role='COORDINATOR')
        self.student_user = make_user('alice@uni.edu', full_name='Alice Khan')
        self.program, self.items = make_program()
        self.profile = make_student(self.student_user, self.program, registration_number='MS-001', department='CS')

    def test_requires_authentication(self):
        resp = self.client.get('/api/documents/checklist/')
        self.assertEqual(resp.status_code, 401)

    def test_student_checklist(self):
        self.client.force_authenticate(self.student_user)
        resp = self.client.get('/api/documents/checklist/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data['rows']), 3)
        self.assertEqual(resp.data['summary']['missing'], 3)
        self.assertEqual(resp.data['summary']['status_label'], 'Incomplete')
        self.assertIsNone(resp.data['avatar_url'])

    def test_upload_then_avatar_is_signed(self):
        self.client.force_authenticate(self.student_user)
        photo = self.items[2]
        resp = self.client.post(
            '/api/documents/upload/',
            {'checklist_item': photo.pk, 'file': pdf_file('me.png', b'\x89PNG fake')},
            format='multipart',
        )
        self.assertEqual(resp.status_code, 201, resp.data)
        self.assertEqual(resp.data['version'], 1)

        resp = self.client.get('/api/documents/checklist/')
        avatar_url = resp.data['avatar_url']
        self.assertTrue(avatar_url.startswith('/api/documents/files/'))

        # signed link works without authentication
        anon = APIClient()
        download = anon.get(avatar_url)
        self.assertEqual(download.status_code, 200)
        self.assertEqual(b''.join(download.streaming_content), b'\x89PNG fake')

    def test_tampered_link_is_refused(self):
        resp = APIClient().get('/api/documents/files/not-a-token/')
        self.assertEqual(resp.status_code, 403)

    def test_reject_without_remarks_returns_400(self):
        doc = document_service.upload_document(self.student_user, self.items[0], pdf_file())
        self.client.force_authenticate(self.coordinator)
        resp = self.client.post(f'/api/documents/{doc.pk}/reject/', {'remarks': '  '}, format='json')
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data['status_code'], 400)
        self.assertIn('remarks', resp.data)

    def test_reject_and_logs(self):
        doc = document_service.upload_document(self.student_user, self.items[0], pdf_file())
        self.client.force_authenticate(self.coordinator)
        resp = self.client.post(f'/api/documents/{doc.pk}/reject/', {'remarks': 'blurry scan'}, format='json')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data['status'], 'rejected')

        resp = self.client.get(f'/api/documents/{doc.pk}/logs/')
        self.assertEqual([row['new_status'] for row in resp.data], ['pending', 'rejected'])

    def test_illegal_approve_returns_400(self):
        doc = document_service.upload_document(self.student_user, self.items[0], pdf_file())
        document_service.reject_document(self.coordinator, doc.pk, 'blurry')
        self.client.force_authenticate(self.coordinator)
        resp = self.client.post(f'/api/documents/{doc.pk}/approve/')
        self.assertEqual(resp.status_code, 400)

    def test_approve_missing_document_returns_404(self):
        self.client.force_authenticate(self.coordinator)
        resp = self.client.post('/api/documents/9999/approve/')
        self.assertEqual(resp.status_code, 404)

    def test_student_cannot_approve(self):
        doc = document_service.upload_document(self.student_user, self.items[0], pdf_file())
        self.client.force_authenticate(self.student_user)
        resp = self.client.post(f'/api/documents/{doc.pk}/approve/')
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(StudentDocument.objects.get(pk=doc.pk).status, 'pending')

    def test_history_newest_first(self):
        document_service.upload_document(self.student_user, self.items[0], pdf_file())
        document_service.upload_document(self.student_user, self.items[1], pdf_file())
        self.client.force_authenticate(self.student_user)
        resp = self.client.get('/api/documents/history/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([row['checklist_item_id'] for row in resp.data], [self.items[1].pk, self.items[0].pk])

    def test_coordinator_student_list_and_totals(self):
        pending_user = make_user('new@uni.edu')
        make_student(pending_user, self.program, status='pending')
        document_service.upload_document(self.student_user, self.items[0], pdf_file())

        self.client.force_authenticate(self.coordinator)
        resp = self.client.get('/api/documents/students/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([s['email'] for s in resp.data['students']], ['alice@uni.edu'])
        self.assertEqual([s['email'] for s in resp.data['pending_accounts']], ['new@uni.edu'])
        self.assertEqual(resp.data['students'][0]['missing'], 2)
        self.assertEqual(resp.data['totals']['incomplete'], 1)
        self.assertEqual(resp.data['totals']['total_students'], 1)

    def test_quick_view(self):
        self.client.force_authenticate(self.coordinator)
        resp = self.client.get(f'/api/documents/students/{self.profile.pk}/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data['rows']), 3)
        self.assertIsNone(resp.data['research'])
        self.assertEqual(resp.data['profile']['registration_number'], 'MS-001')

    def test_student_cannot_quick_view_others(self):
        other = make_user('bob@uni.edu')
        make_student(other, self.program)
        self.client.force_authenticate(other)
        resp = self.client.get(f'/api/documents/students/{self.profile.pk}/')
        self.assertEqual(resp.status_code, 403)

    def test_export_csv(self):
        self.client.force_authenticate(self.coordinator)
        resp = self.client.get('/api/documents/export/', {'format': 'csv'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp['Content-Type'], 'text/csv; charset=utf-8')
        body = resp.content.decode('utf-8-sig')
        self.assertTrue(body.startswith('Name,Email,Reg No,Program,Dept,Status,Missing docs'))
        self.assertIn('Alice Khan,alice@uni.edu,MS-001', body)

    def test_export_pdf(self):
        self.client.force_authenticate(self.coordinator)
        resp = self.client.get('/api/documents/export/', {'format': 'pdf'})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.content.startswith(b'%PDF'))

    def test_export_unknown_format(self):
        self.client.force_authenticate(self.coordinator)
        resp = self.client.get('/api/documents/export/', {'format': 'doc'})
        self.assertEqual(resp.status_code, 400)
