import json
import logging
import os
import re
from typing import Any, List, Optional

from sentix.config import MAX_FILE_TEXTS
from sentix.errors import IngestionError, UnsupportedFormatError

logger = logging.getLogger(__name__)

EXTENSION_FORMATS = {".json": "json", ".csv": "csv", ".txt": "txt"}
CONTENT_TYPE_FORMATS = {"application/json": "json", "text/csv": "csv", "text/plain": "txt"}

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def detect_format(filename: Optional[str], content_type: Optional[str] = None) -> Optional[str]:
    """Return "json", "csv" or "txt", or None for anything else."""
    if filename:
        extension = os.path.splitext(filename)[1].lower()
        if extension in EXTENSION_FORMATS:
            return EXTENSION_FORMATS[extension]
    if content_type:
        return CONTENT_TYPE_FORMATS.get(content_type.split(";")[0].strip().lower())
    return None


def _as_text(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict) and item.get("text"):
        return str(item["text"])
    return json.dumps(item)


def _texts_from_json(content: str) -> List[str]:
    parsed = json.loads(content)
    if isinstance(parsed, list):
        return [_as_text(item) for item in parsed]
    return [_as_text(parsed)]


def _texts_from_csv(content: str) -> List[str]:
    lines = [line.strip() for line in content.split("\n")]
    lines = [line for line in lines if line]
    # First line is taken as a header whenever there is more than one
    if len(lines) > 1:
        lines = lines[1:]
    return lines


def _texts_from_plain(content: str) -> List[str]:
    paragraphs = [p.strip() for p in PARAGRAPH_BREAK.split(content)]
    return [p for p in paragraphs if p]


PARSERS = {
    "json": _texts_from_json,
    "csv": _texts_from_csv,
    "txt": _texts_from_plain,
}


def extract_texts(data: bytes, fmt: str, limit: int = MAX_FILE_TEXTS) -> List[str]:
    """
    Turn the bytes of an uploaded file into a list of texts.

    Args:
        data: raw file content, UTF-8 encoded.
        fmt: one of the values returned by :func:`detect_format`.
        limit: maximum number of texts returned.

    Raises:
        UnsupportedFormatError: ``fmt`` is not a known format.
        IngestionError: the content could not be decoded or parsed.
    """
    if fmt not in PARSERS:
        raise UnsupportedFormatError("Unsupported file format. Please use .txt, .json, or .csv")

    try:
        content = data.decode("utf-8-sig")
        texts = PARSERS[fmt](content)
    except (UnicodeDecodeError, ValueError) as e:
        logger.warning("Could not parse %s upload: %s", fmt, e)
        raise IngestionError("Failed to parse file. Ensure format is valid.") from e

    if len(texts) > limit:
        logger.info("Keeping the first %d of %d texts", limit, len(texts))
    return texts[:limit]
