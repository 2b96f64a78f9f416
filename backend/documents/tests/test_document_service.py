import os

from django.core.exceptions import PermissionDenied, ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.test import TestCase, override_settings

from documents.models import DocumentLog, StudentDocument
from documents.services import document_service
from documents.services.lifecycle import IllegalTransition
from rdms.exceptions import AuthenticationRequired, BackendError
from .helpers import TempMediaMixin, make_program, make_student, make_user, pdf_file


def stored_files(root):
    found = []
    for dirpath, _, filenames in os.walk(root):
        found.extend(os.path.join(dirpath, f) for f in filenames)
    return found


class DocumentServiceTests(TempMediaMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.coordinator = make_user('coord@uni.edu', role='COORDINATOR')
        self.student_user = make_user('alice@uni.edu')
        self.program, self.items = make_program()
        self.profile = make_student(self.student_user, self.program, coordinator=self.coordinator)

    def _upload(self, item=None, f=None):
        return document_service.upload_document(self.student_user, item or self.items[0], f or pdf_file())

    def test_first_upload_creates_version_one_and_log(self):
        doc = self._upload()
        self.assertEqual(doc.status, 'pending')
        self.assertEqual(doc.version, 1)
        self.assertTrue(doc.file_path.startswith(f'{self.student_user.pk}/{self.items[0].pk}/'))
        self.assertTrue(doc.file_path.endswith('.pdf'))
        log = DocumentLog.objects.get(document=doc)
        self.assertEqual((log.old_status, log.new_status, log.remarks), ('missing', 'pending', 'Uploaded by student'))

    def test_reupload_after_rejection_overwrites_same_row(self):
        doc = self._upload()
        document_service.reject_document(self.coordinator, doc.pk, 'blurry scan')

        again = self._upload(f=pdf_file('scan2.pdf'))

        self.assertEqual(again.pk, doc.pk)
        self.assertEqual(StudentDocument.objects.filter(student=self.profile).count(), 1)
        again.refresh_from_db()
        self.assertEqual(again.status, 'pending')
        self.assertIsNone(again.remarks)
        self.assertEqual(again.version, 2)
        last = again.logs.last()
        self.assertEqual((last.old_status, last.remarks), ('rejected', 'Re-uploaded by student'))

    def test_upload_while_pending_is_illegal(self):
        self._upload()
        with self.assertRaises(IllegalTransition):
            self._upload(f=pdf_file('again.pdf'))

    def test_reject_requires_remarks_without_touching_database(self):
        doc = self._upload()
        for remarks in ('', '   ', None):
            with self.subTest(remarks=remarks):
                with self.assertNumQueries(0):
                    with self.assertRaises(ValidationError):
                        document_service.reject_document(self.coordinator, doc.pk, remarks)
        doc.refresh_from_db()
        self.assertEqual(doc.status, 'pending')

    def test_reject_stores_remarks_and_appends_log(self):
        doc = self._upload()
        first_log = DocumentLog.objects.get(document=doc)

        rejected = document_service.reject_document(self.coordinator, doc.pk, 'blurry scan')

        self.assertEqual(rejected.status, 'rejected')
        self.assertEqual(rejected.remarks, 'blurry scan')
        logs = list(DocumentLog.objects.filter(document=doc).order_by('id'))
        self.assertEqual(len(logs), 2)
        self.assertEqual((logs[1].old_status, logs[1].new_status, logs[1].remarks), ('pending', 'rejected', 'blurry scan'))
        self.assertEqual(logs[1].changed_by, self.coordinator)
        first_log.refresh_from_db()
        self.assertEqual((first_log.new_status, first_log.remarks), ('pending', 'Uploaded by student'))

    def test_approve_twice_is_noop(self):
        doc = self._upload()
        document_service.approve_document(self.coordinator, doc.pk)
        document_service.approve_document(self.coordinator, doc.pk)
        self.assertEqual(DocumentLog.objects.filter(document=doc, new_status='approved').count(), 1)
        last = DocumentLog.objects.filter(document=doc).last()
        self.assertEqual(last.remarks, 'Approved by coordinator')

    def test_cannot_approve_rejected_document(self):
        doc = self._upload()
        document_service.reject_document(self.coordinator, doc.pk, 'wrong form')
        with self.assertRaises(IllegalTransition):
            document_service.approve_document(self.coordinator, doc.pk)

    def test_students_cannot_review(self):
        doc = self._upload()
        with self.assertRaises(PermissionDenied):
            document_service.approve_document(self.student_user, doc.pk)

    def test_upload_requires_actor(self):
        with self.assertRaises(AuthenticationRequired):
            document_service.upload_document(None, self.items[0], pdf_file())

    def test_rejects_unsupported_type(self):
        f = SimpleUploadedFile('tool.exe', b'MZ', content_type='application/x-msdownload')
        with self.assertRaises(ValidationError):
            self._upload(f=f)
        self.assertEqual(stored_files(self.media_root), [])

    def test_content_type_falls_back_to_extension(self):
        f = SimpleUploadedFile('notes.txt', b'hello', content_type='application/octet-stream')
        doc = self._upload(f=f)
        self.assertTrue(doc.file_path.endswith('.txt'))

    @override_settings(RDMS_MAX_UPLOAD_MB=0)
    def test_rejects_oversized_file(self):
        with self.assertRaises(ValidationError):
            self._upload()

    def test_item_from_other_program_is_forbidden(self):
        _, other_items = make_program(name='PhD Physics', titles=('Proposal',))
        with self.assertRaises(PermissionDenied):
            self._upload(item=other_items[0])

    def test_failed_database_write_removes_stored_file(self):
        original = document_service._append_log

        def broken(*args, **kwargs):
            raise DatabaseError('disk full')

        document_service._append_log = broken
        try:
            with self.assertRaises(BackendError):
                self._upload()
        finally:
            document_service._append_log = original

        self.assertEqual(stored_files(self.media_root), [])
        self.assertFalse(StudentDocument.objects.exists())

    def test_history_is_chronological_and_private(self):
        doc = self._upload()
        document_service.reject_document(self.coordinator, doc.pk, 'missing signature')
        history = document_service.document_history(self.student_user, doc)
        self.assertEqual([h.new_status for h in history], ['pending', 'rejected'])

        other = make_user('bob@uni.edu')
        make_student(other, self.program)
        with self.assertRaises(PermissionDenied):
            document_service.document_history(other, doc)

    def test_log_entries_are_append_only(self):
        doc = self._upload()
        log = DocumentLog.objects.get(document=doc)
        log.remarks = 'edited'
        with self.assertRaises(ValidationError):
            log.save()
        with self.assertRaises(ValidationError):
            log.delete()

    def test_list_my_documents(self):
        self._upload()
        self._upload(item=self.items[1])
        result = document_service.list_my_documents(self.student_user)
        self.assertTrue(result.ok)
        self.assertEqual(len(result.items), 2)
