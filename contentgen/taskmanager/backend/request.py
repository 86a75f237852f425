from typing import Optional


class Request:
    """
    A single generation call: prompt text, target model and the credential
    to authenticate with.
    """
    def __init__(self, prompt: str, model: str, credential: str, attempt: int = 1):
        self.prompt = prompt
        self.model = model
        self.credential = credential
        self.attempt = attempt

    def to_messages(self):
        return [{"role": "user", "content": self.prompt}]


class Response:
    """
    Outcome of a generation call: the produced text, or the error raised while
    producing it, along with the original request.
    """
    def __init__(self,
                 request: Request,
                 text: Optional[str] = None,
                 error: Optional[Exception] = None):
        self.request = request
        self.text = text
        self.error = error

    @property
    def is_success(self) -> bool:
        """Empty output counts as a failure."""
        return self.error is None and bool(self.text)

    @classmethod
    def from_error(cls, request: Request, error: Exception) -> 'Response':
        return cls(request=request, text=None, error=error)
