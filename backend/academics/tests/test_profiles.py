from django.core.exceptions import ValidationError
from django.test import TestCase
from rest_framework.test import APIClient

from academics.models import ChecklistItem, Program, StudentProfile
from academics.services import get_or_provision_student_profile
from documents.tests.helpers import make_student, make_user


class StudentProfileTests(TestCase):
    def test_registration_number_can_be_corrected(self):
        profile = make_student(make_user('alice@uni.edu'), registration_number='R-1')
        profile.registration_number = 'R-2'
        profile.save()
        profile.refresh_from_db()
        self.assertEqual(profile.registration_number, 'R-2')

    def test_blank_registration_number_stored_as_null(self):
        a = make_student(make_user('a@uni.edu'), registration_number='')
        b = make_student(make_user('b@uni.edu'), registration_number='')
        self.assertIsNone(a.registration_number)
        self.assertIsNone(b.registration_number)

    def test_coordinator_must_be_coordinator(self):
        with self.assertRaises(ValidationError):
            make_student(make_user('a@uni.edu'), coordinator=make_user('b@uni.edu'))


class ProvisioningTests(TestCase):
    def test_existing_profile_is_returned(self):
        user = make_user('alice@uni.edu')
        profile = make_student(user)
        self.assertEqual(get_or_provision_student_profile(user).pk, profile.pk)

    def test_non_students_get_none(self):
        self.assertIsNone(get_or_provision_student_profile(make_user('c@uni.edu', role='COORDINATOR')))

    def test_clashing_registration_number_is_dropped(self):
        make_student(make_user('first@uni.edu'), registration_number='R-7')
        late = make_user('late@uni.edu', signup_metadata={'registration_number': 'R-7', 'department': 'Physics'})
        profile = get_or_provision_student_profile(late)
        self.assertIsNone(profile.registration_number)
        self.assertEqual(profile.department, 'Physics')
        self.assertEqual(profile.status, StudentProfile.Status.PENDING)


class AcademicsApiTests(TestCase):
    def test_programs_public_and_checklist_ordered(self):
        program = Program.objects.create(name='MS', type='MS')
        ChecklistItem.objects.create(program=program, title='Second', order_index=2)
        ChecklistItem.objects.create(program=program, title='First', order_index=1)
        client = APIClient()

        self.assertEqual(client.get('/api/academics/programs/').status_code, 200)
        self.assertEqual(client.get(f'/api/academics/programs/{program.pk}/checklist/').status_code, 401)

        client.force_authenticate(make_user('alice@uni.edu'))
        resp = client.get(f'/api/academics/programs/{program.pk}/checklist/')
        self.assertEqual([i['title'] for i in resp.data], ['First', 'Second'])
