import os
import shutil
import tempfile
import unittest
from unittest.mock import MagicMock

from contentgen.models import Outcome
from contentgen.notifier import EmailNotifier
from contentgen.report import build_summary, folder_stats, render_body, render_subject, send_report


def outcomes():
    return [
        Outcome(item_id="1", name="alpha.mdx", success=True),
        Outcome(item_id="2", name="Beta.txt", success=False, error="Failed after 5 attempts: quota"),
        Outcome(item_id="3", name="gamma.mdx", success=True),
    ]


class TestReport(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def test_build_summary_partitions(self):
        summary = build_summary(outcomes())
        self.assertEqual(summary.total, 3)
        self.assertEqual(summary.succeeded, ["alpha.mdx", "gamma.mdx"])
        self.assertEqual([o.item_id for o in summary.failed], ["2"])
        self.assertIsNone(summary.folder_stats)

    def test_folder_stats_ignores_hidden_files(self):
        for name, content in (("a.mdx", "12345"), ("b.mdx", "123"), (".tmp-x.mdx", "zzzz")):
            with open(os.path.join(self.tmp, name), "w", encoding="utf-8") as f:
                f.write(content)

        stats = folder_stats(self.tmp)
        self.assertEqual(stats.file_count, 2)
        self.assertEqual(stats.total_bytes, 8)
        self.assertIsNone(folder_stats(os.path.join(self.tmp, "missing")))

    def test_render(self):
        summary = build_summary(outcomes(), self.tmp)
        self.assertEqual(render_subject(summary), "Content Generation Report: 2 Success, 1 Failed")

        body = render_body(summary)
        self.assertIn("Total Processed: 3", body)
        self.assertIn("- alpha.mdx\n- gamma.mdx", body)
        self.assertIn("- Beta.txt: Failed after 5 attempts: quota", body)
        self.assertIn("- Files: 0", body)

    def test_render_empty_batch(self):
        summary = build_summary([])
        self.assertEqual(render_subject(summary), "Content Generation Report: 0 Success, 0 Failed")
        self.assertIn("Total Processed: 0", render_body(summary))

    def test_send_report_delegates(self):
        notifier = MagicMock(spec=EmailNotifier)
        notifier.send.return_value = True
        summary = build_summary(outcomes())

        self.assertTrue(send_report(summary, notifier))
        notifier.send.assert_called_once_with(render_subject(summary), render_body(summary))

    def test_send_report_swallows_notifier_errors(self):
        notifier = MagicMock(spec=EmailNotifier)
        notifier.send.side_effect = RuntimeError("boom")
        self.assertFalse(send_report(build_summary(outcomes()), notifier))

    def test_unconfigured_notifier_is_noop(self):
        self.assertFalse(send_report(build_summary(outcomes()), EmailNotifier(None)))


if __name__ == "__main__":
    unittest.main()
