from .backend import BackendManager, GeminiBackendManager, Request, Response
from .counter import AtomicCounter
from .credentials import CredentialRotator, load_credentials
from .generation import GenerationClient
from .processor import FileProcessor
from .retry import RetryPolicy, linear_backoff, retry_call
from .taskmanager import QueueRunner

__all__ = [
    'QueueRunner',
    'FileProcessor',
    'GenerationClient',
    'CredentialRotator',
    'load_credentials',
    'AtomicCounter',
    'RetryPolicy',
    'linear_backoff',
    'retry_call',
    'BackendManager',
    'GeminiBackendManager',
    'Request',
    'Response'
]
