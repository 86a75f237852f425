import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from contentgen.client import FilesClient
from contentgen.models import FileRecord, Outcome
from contentgen.slug import DEFAULT_EXTENSION, safe_filename
from .generation import GenerationClient


class FileProcessor:
    """
    Processes one pending file end to end:
    fetch prompt -> generate -> write output -> report status upstream.
    """

    def __init__(self,
                 files_client: FilesClient,
                 generator: GenerationClient,
                 output_dir: Union[str, Path],
                 model: str,
                 extension: str = DEFAULT_EXTENSION):
        self.files_client = files_client
        self.generator = generator
        self.output_dir = Path(output_dir)
        self.model = model
        self.extension = extension

        self.logger = logging.getLogger(__name__)

    def process_file(self, item: FileRecord) -> Outcome:
        """Never raises for per-item problems; they come back as a failed Outcome."""
        self.logger.info(f"Processing file: {item.original_filename} ({item.id})")
        try:
            prompt = self.files_client.fetch_prompt(item.secure_url)
            content = self.generator.generate(prompt, self.model)

            filename = safe_filename(item.original_filename, self.extension)
            path = self.write_output(filename, content)
            self.logger.info(f"Saved content to: {path}")

            self.files_client.mark_complete(item.id)
            self.logger.info(f"Updated status for {item.id}")
            return Outcome.ok(item, filename)
        except Exception as e:
            self.logger.error(f"Failed to process {item.original_filename}: {e}")
            return Outcome.failed(item, e)

    def write_output(self, filename: str, content: str) -> Path:
        """Write via a temp file in the same directory so readers never see half a file."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.output_dir / filename

        fd, tmp_path = tempfile.mkstemp(dir=self.output_dir, prefix=".tmp-", suffix=self.extension)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, target)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        return target
