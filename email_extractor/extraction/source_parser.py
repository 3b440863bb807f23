"""
email_extractor/extraction/source_parser.py
Candidate URL extraction from CSV uploads (first column only).
"""

import logging
import re
from pathlib import Path
from typing import List, Union

from ..errors import InputError

logger = logging.getLogger(__name__)

URL_PREFIXES = ("http://", "https://")
_LINE_BREAK = re.compile(r"\r?\n")


def parse_urls(raw_text: str) -> List[str]:
    """
    Return the first field of every line that looks like an http(s) URL.

    Quoting is not interpreted: every double quote in the field is removed.
    Headers, blank lines and other schemes are dropped silently. Order and
    duplicates are preserved.
    """
    urls = []
    for line in _LINE_BREAK.split(raw_text):
        candidate = line.split(",", 1)[0].strip().replace('"', "")
        if candidate and candidate.startswith(URL_PREFIXES):
            urls.append(candidate)
    return urls


def load_urls_from_csv(path: Union[str, Path]) -> List[str]:
    """Read a .csv file and parse its URLs; raises InputError when nothing usable is found"""
    path = Path(path)

    if not path.name.endswith(".csv"):
        raise InputError("Invalid file type. Please upload a .csv file.")

    try:
        raw_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        raise InputError("Failed to read the file.") from e

    urls = parse_urls(raw_text)
    if not urls:
        raise InputError("No valid URLs found in the CSV file.")

    logger.info(f"Loaded {len(urls)} URL(s) from {path.name}")
    return urls
