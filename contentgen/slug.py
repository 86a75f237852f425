"""Filesystem-safe names for generated content."""
import re
import unicodedata
from pathlib import PurePosixPath

DEFAULT_EXTENSION = ".mdx"

_DISALLOWED = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_]+", re.ASCII)
_HYPHENS = re.compile(r"-+")


def strip_extension(name: str) -> str:
    """Drop any directory part and the last extension: ``notes/a.b.txt`` -> ``a.b``."""
    return PurePosixPath(name.replace("\\", "/")).stem


def slugify(text: str) -> str:
    text = unicodedata.normalize("NFKD", text).lower()
    text = _DISALLOWED.sub("", text)
    text = _SEPARATORS.sub("-", text.strip())
    text = _HYPHENS.sub("-", text)
    return text.strip("-")


def safe_filename(original_filename: str, extension: str = DEFAULT_EXTENSION) -> str:
    """
    Map an arbitrary filename to ``<slug><extension>``.

    Never raises for a str; an empty or fully stripped name degrades to the
    bare extension.
    """
    return slugify(strip_extension(original_filename)) + extension
