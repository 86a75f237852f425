import unittest

from contentgen.errors import EmptyGenerationError, RetryExhaustedError
from contentgen.taskmanager.credentials import CredentialRotator
from contentgen.taskmanager.generation import GenerationClient

from .mocks import MockBackendManager, NoSleep

MODEL = "gemini-3-flash-preview"


class TestGenerationClient(unittest.TestCase):

    def make_client(self, backend, max_attempts=5, request_delay=0.5, backoff_base=1.0):
        self.sleep = NoSleep()
        self.rotator = CredentialRotator(["k1", "k2", "k3"])
        return GenerationClient(backend, self.rotator, max_attempts=max_attempts,
                                request_delay=request_delay, backoff_base=backoff_base,
                                sleep=self.sleep)

    def test_success_first_attempt(self):
        backend = MockBackendManager()
        client = self.make_client(backend)

        self.assertEqual(client.generate("hello", MODEL), "Generated for hello")
        self.assertEqual(len(backend.processed_requests), 1)
        self.assertEqual(backend.processed_requests[0].model, MODEL)
        # the inter-request delay is paid even when nothing fails
        self.assertEqual(self.sleep.delays, [0.5])

    def test_fails_m_times_then_succeeds(self):
        for m in range(5):
            with self.subTest(m=m):
                backend = MockBackendManager(fail_first=m)
                client = self.make_client(backend)

                self.assertEqual(client.generate("p", MODEL), "Generated for p")
                self.assertEqual(backend.calls_for("p"), m + 1)

    def test_delay_and_linear_backoff_order(self):
        backend = MockBackendManager(fail_first=2)
        client = self.make_client(backend, request_delay=2.0, backoff_base=1.0)

        client.generate("p", MODEL)
        self.assertEqual(self.sleep.delays, [2.0, 1.0, 2.0, 2.0, 2.0])

    def test_always_failing_raises_after_max_attempts(self):
        backend = MockBackendManager(failing_prompts=["bad"])
        client = self.make_client(backend, max_attempts=5)

        with self.assertRaises(RetryExhaustedError) as ctx:
            client.generate("bad", MODEL)
        self.assertEqual(backend.calls_for("bad"), 5)
        self.assertEqual(ctx.exception.attempts, 5)
        self.assertIn("Simulated failure for bad", str(ctx.exception))

    def test_empty_output_is_retried(self):
        backend = MockBackendManager(empty_first=2)
        client = self.make_client(backend)

        self.assertEqual(client.generate("p", MODEL), "Generated for p")
        self.assertEqual(backend.calls_for("p"), 3)

    def test_empty_output_exhausts_as_empty_generation_error(self):
        backend = MockBackendManager(empty_first=10)
        client = self.make_client(backend, max_attempts=2)

        with self.assertRaises(RetryExhaustedError) as ctx:
            client.generate("p", MODEL)
        self.assertIsInstance(ctx.exception.last_error, EmptyGenerationError)

    def test_each_attempt_rotates_credential(self):
        backend = MockBackendManager(fail_first=3)
        client = self.make_client(backend)

        client.generate("p", MODEL)
        self.assertEqual(backend.credentials_used, ["k1", "k2", "k3", "k1"])
        self.assertEqual(self.rotator.position, 1)

    def test_rate_limit_is_logged_and_retried(self):
        backend = MockBackendManager(fail_first=1, rate_limited=True)
        client = self.make_client(backend)

        with self.assertLogs("contentgen.taskmanager.generation", level="WARNING") as logs:
            self.assertEqual(client.generate("p", MODEL), "Generated for p")
        self.assertTrue(any("Rate limited" in line for line in logs.output))
        self.assertEqual(backend.calls_for("p"), 2)


if __name__ == "__main__":
    unittest.main()
