import shutil
import tempfile

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings

from academics.models import ChecklistItem, Program, StudentProfile


def make_user(email, role='STUDENT', **extra):
    User = get_user_model()
    extra.setdefault('full_name', email.split('@')[0].title())
    return User.objects.create_user(username=email, email=email, password='pass12345', role=role, **extra)


def make_program(name='MS Computer Science', titles=('Thesis Proposal', 'Ethics Form', 'Profile Picture')):
    program = Program.objects.create(name=name, type='MS')
    items = [
        ChecklistItem.objects.create(program=program, title=t, order_index=i, is_required=True)
        for i, t in enumerate(titles, start=1)
    ]
    return program, items


def make_student(user, program=None, status=StudentProfile.Status.APPROVED, **extra):
    return StudentProfile.objects.create(user=user, program=program, status=status, **extra)


def pdf_file(name='scan.pdf', body=b'%PDF-1.4 test document'):
    return SimpleUploadedFile(name, body, content_type='application/pdf')


class TempMediaMixin:
    """Point default_storage at a throwaway directory for each test."""

    def setUp(self):
        super().setUp()
        self.media_root = tempfile.mkdtemp(prefix='rdms-test-')
        self._media_override = override_settings(MEDIA_ROOT=self.media_root)
        self._media_override.enable()

    def tearDown(self):
        self._media_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)
        super().tearDown()
