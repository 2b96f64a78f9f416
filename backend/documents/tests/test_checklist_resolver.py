from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from django.test import SimpleTestCase

from documents.services import checklist_resolver as resolver


def item(pk, title, order, required=True):
    return SimpleNamespace(id=pk, title=title, description='', is_required=required, order_index=order)


def submission(pk, item_id, status, version=1, updated_at=None, remarks=None):
    return SimpleNamespace(
        id=pk,
        checklist_item_id=item_id,
        status=status,
        version=version,
        file_path=f'1/{item_id}/{pk}.pdf',
        remarks=remarks,
        submission_date=updated_at,
        updated_at=updated_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class ResolveChecklistTests(SimpleTestCase):
    def setUp(self):
        self.items = [item(1, 'Proposal', 1), item(2, 'Ethics', 2), item(3, 'Transcript', 3)]

    def test_missing_row_has_version_zero_and_no_file(self):
        rows = resolver.resolve_checklist(self.items, [])
        self.assertEqual([r.status for r in rows], ['missing'] * 3)
        self.assertTrue(all(r.version == 0 and r.file_path is None for r in rows))

    def test_rows_follow_order_index(self):
        shuffled = [self.items[2], self.items[0], self.items[1]]
        rows = resolver.resolve_checklist(shuffled, [])
        self.assertEqual([r.item_id for r in rows], [1, 2, 3])

    def test_partial_progress_summary(self):
        subs = [submission(10, 1, 'approved'), submission(11, 2, 'pending')]
        summary = resolver.summarize(resolver.resolve_checklist(self.items, subs))
        self.assertEqual((summary.approved, summary.pending, summary.rejected, summary.missing), (1, 1, 0, 1))
        self.assertEqual(summary.status_label, 'Incomplete')
        self.assertEqual(summary.completion_percentage, 33)

    def test_all_approved_is_complete(self):
        subs = [submission(10 + i, i, 'approved') for i in (1, 2, 3)]
        summary = resolver.summarize(resolver.resolve_checklist(self.items, subs))
        self.assertEqual(summary.status_label, 'Complete')
        self.assertEqual(summary.completion_percentage, 100)

    def test_pending_without_missing_is_pending(self):
        subs = [submission(10, 1, 'approved'), submission(11, 2, 'under_review'), submission(12, 3, 'approved')]
        summary = resolver.summarize(resolver.resolve_checklist(self.items, subs))
        self.assertEqual(summary.status_label, 'Pending')
        self.assertEqual(summary.pending, 1)

    def test_no_required_items_gives_zero_percent(self):
        optional = [item(1, 'Extra', 1, required=False)]
        summary = resolver.summarize(resolver.resolve_checklist(optional, [submission(10, 1, 'approved')]))
        self.assertEqual(summary.completion_percentage, 0)

    def test_empty_checklist(self):
        summary = resolver.summarize(resolver.resolve_checklist([], []))
        self.assertEqual(summary.total, 0)
        self.assertEqual(summary.completion_percentage, 0)
        self.assertEqual(summary.status_label, 'Complete')

    def test_orphaned_submissions_are_ignored(self):
        rows = resolver.resolve_checklist(self.items, [submission(10, 99, 'approved')])
        self.assertEqual(len(rows), 3)
        self.assertTrue(all(r.is_missing for r in rows))

    def test_latest_submission_wins(self):
        old = datetime(2024, 1, 1, tzinfo=timezone.utc)
        subs = [
            submission(10, 1, 'rejected', version=1, updated_at=old),
            submission(11, 1, 'pending', version=2, updated_at=old + timedelta(days=1)),
        ]
        row = resolver.resolve_checklist(self.items, subs)[0]
        self.assertEqual((row.status, row.version, row.document_id), ('pending', 2, 11))


class AvatarTests(SimpleTestCase):
    def test_find_avatar_item_matches_keywords(self):
        items = [item(1, 'Thesis', 1), item(2, 'Passport Size Photo', 2)]
        self.assertEqual(resolver.find_avatar_item(items).id, 2)
        self.assertIsNone(resolver.find_avatar_item([item(1, 'Thesis', 1)]))

    def test_rejected_avatar_is_not_signed(self):
        rows = resolver.resolve_checklist([item(1, 'Profile Picture', 1)], [submission(10, 1, 'rejected')])
        self.assertIsNone(resolver.resolve_avatar_url(rows))

    def test_batch_signing_skips_failures(self):
        rows = resolver.resolve_checklist([item(1, 'Profile Picture', 1)], [submission(10, 1, 'approved')])
        # file does not exist in storage, so signing fails for this student
        urls = resolver.resolve_avatar_urls({5: rows, 6: []})
        self.assertEqual(urls, {5: None, 6: None})
