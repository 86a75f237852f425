from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from contentgen.errors import ConfigurationError
from contentgen.taskmanager.backend.gemini import GEMINI_OPENAI_BASE_URL
from contentgen.taskmanager.credentials import DEFAULT_PREFIX

DEFAULT_API_BASE = "https://cloud-text-manager-server.vercel.app"
DEFAULT_MODEL = "gemini-3-flash-preview"

# Settings field -> environment variable
ENV_VARS = {
    "api_base": "FILES_API_BASE",
    "model": "GEMINI_MODEL",
    "credential_prefix": "CREDENTIAL_PREFIX",
    "generation_base_url": "GEMINI_BASE_URL",
    "output_dir": "OUTPUT_DIR",
    "batch_size": "BATCH_SIZE",
    "concurrency": "CONCURRENCY",
    "max_attempts": "MAX_ATTEMPTS",
    "request_delay": "REQUEST_DELAY",
    "backoff_base": "BACKOFF_BASE",
    "request_timeout": "REQUEST_TIMEOUT",
    "notify_empty_batch": "NOTIFY_EMPTY_BATCH",
}


class Settings(BaseModel):
    api_base: str = DEFAULT_API_BASE
    model: str = DEFAULT_MODEL
    credential_prefix: str = DEFAULT_PREFIX
    generation_base_url: str = GEMINI_OPENAI_BASE_URL
    output_dir: str = "generated-content"
    batch_size: int = Field(20, ge=0)
    concurrency: int = Field(3, ge=1)
    max_attempts: int = Field(5, ge=1)
    request_delay: float = Field(2.0, ge=0)
    backoff_base: float = Field(2.0, ge=0)
    request_timeout: float = Field(120, gt=0)
    # Whether an empty queue still produces a (zero-count) report mail.
    notify_empty_batch: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str], overrides: Optional[Dict[str, Any]] = None) -> "Settings":
        """
        Build settings from environment variables, then apply overrides
        (CLI flags). None-valued overrides are ignored.
        """
        values: Dict[str, Any] = {}
        for field_name, var in ENV_VARS.items():
            raw = environ.get(var)
            if raw is not None and raw.strip() != "":
                values[field_name] = raw.strip()
        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
