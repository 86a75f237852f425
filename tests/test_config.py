import unittest

from contentgen.config import DEFAULT_API_BASE, DEFAULT_MODEL, Settings
from contentgen.errors import ConfigurationError


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        settings = Settings.from_env({})
        self.assertEqual(settings.api_base, DEFAULT_API_BASE)
        self.assertEqual(settings.model, DEFAULT_MODEL)
        self.assertEqual(settings.batch_size, 20)
        self.assertEqual(settings.concurrency, 3)
        self.assertEqual(settings.max_attempts, 5)
        self.assertEqual(settings.credential_prefix, "GEMINI_API_KEY")
        self.assertFalse(settings.notify_empty_batch)

    def test_environment_values(self):
        settings = Settings.from_env({
            "FILES_API_BASE": "https://files.test",
            "GEMINI_MODEL": "gemini-2.5-flash",
            "BATCH_SIZE": "7",
            "CONCURRENCY": "5",
            "REQUEST_DELAY": "0.25",
            "NOTIFY_EMPTY_BATCH": "true",
            "OUTPUT_DIR": "  ",
        })
        self.assertEqual(settings.api_base, "https://files.test")
        self.assertEqual(settings.model, "gemini-2.5-flash")
        self.assertEqual(settings.batch_size, 7)
        self.assertEqual(settings.concurrency, 5)
        self.assertEqual(settings.request_delay, 0.25)
        self.assertTrue(settings.notify_empty_batch)
        self.assertEqual(settings.output_dir, "generated-content")

    def test_overrides_win_and_none_is_ignored(self):
        settings = Settings.from_env({"BATCH_SIZE": "7", "CONCURRENCY": "5"},
                                     overrides={"batch_size": 2, "concurrency": None})
        self.assertEqual(settings.batch_size, 2)
        self.assertEqual(settings.concurrency, 5)

    def test_invalid_values(self):
        for env in ({"CONCURRENCY": "0"}, {"MAX_ATTEMPTS": "many"}, {"REQUEST_DELAY": "-1"}):
            with self.subTest(env=env):
                with self.assertRaises(ConfigurationError):
                    Settings.from_env(env)


if __name__ == "__main__":
    unittest.main()
