from .base import BackendManager
from .gemini import GeminiBackendManager
from .request import Request, Response

__all__ = ['BackendManager', 'GeminiBackendManager', 'Request', 'Response']
