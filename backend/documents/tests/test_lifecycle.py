from types import SimpleNamespace

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase

from documents.services import lifecycle
from documents.services.lifecycle import (
    Approve, Approved, IllegalTransition, Missing, Pending, Reject, Rejected, Upload,
)


class LifecycleTransitionTests(SimpleTestCase):
    def test_allowed_transitions(self):
        self.assertEqual(lifecycle.next_state(Missing(), Upload()), Pending())
        self.assertEqual(lifecycle.next_state(Pending(), Approve()), Approved())
        self.assertEqual(lifecycle.next_state(Pending(), Reject('blurry')), Rejected('blurry'))
        self.assertEqual(lifecycle.next_state(Rejected('blurry'), Upload()), Pending())

    def test_approve_approved_is_noop(self):
        before = Approved()
        after = lifecycle.next_state(before, Approve())
        self.assertTrue(lifecycle.is_noop(before, after))

    def test_illegal_transitions_raise(self):
        cases = [
            (Missing(), Approve()),
            (Missing(), Reject('x')),
            (Pending(), Upload()),
            (Approved(), Upload()),
            (Approved(), Reject('x')),
            (Rejected('x'), Approve()),
            (Rejected('x'), Reject('y')),
        ]
        for state, event in cases:
            with self.subTest(state=state, event=event):
                with self.assertRaises(IllegalTransition):
                    lifecycle.next_state(state, event)

    def test_illegal_transition_is_validation_error(self):
        with self.assertRaises(ValidationError) as ctx:
            lifecycle.next_state(Missing(), Approve())
        self.assertIn('missing', ctx.exception.messages[0])

    def test_state_of_maps_legacy_under_review(self):
        doc = SimpleNamespace(status='under_review', remarks=None)
        self.assertEqual(lifecycle.state_of(doc), Pending())
        self.assertEqual(lifecycle.state_of(None), Missing())
        self.assertEqual(lifecycle.state_of(SimpleNamespace(status='rejected', remarks='bad')), Rejected('bad'))
