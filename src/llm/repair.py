from __future__ import annotations

import json
import logging
import re
from typing import Any, List

from syllabus_deadlines.exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

# opening fence line, optionally tagged (```json), and the closing fence
_OPEN_FENCE_RE = re.compile(r"\A\s*```[\w-]*[ \t]*\n?")
_CLOSE_FENCE_RE = re.compile(r"\n?[ \t]*```\s*\Z")


def repair_response(raw: str) -> str:
    """Strip code-fence markers and surrounding whitespace from model output."""
    text = _OPEN_FENCE_RE.sub("", raw, count=1)
    text = _CLOSE_FENCE_RE.sub("", text, count=1)
    return text.strip()


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # models like to add prose before/after the array
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        raise ValueError("no JSON array found")
    return json.loads(text[start : end + 1])


def parse_drafts(raw: str) -> List[Any]:
    """
    Repair the raw model text and parse it as a JSON array.

    Raises MalformedResponseError when no JSON array can be recovered or the
    top-level value is something other than an array.
    """
    text = repair_response(raw or "")
    try:
        data = _loads(text)
    except ValueError as e:
        logger.warning(f"Could not parse model response as JSON: {e}")
        raise MalformedResponseError("Model response is not valid JSON", raw_text=raw) from e

    if not isinstance(data, list):
        logger.warning(f"Model response is JSON but not an array ({type(data).__name__})")
        raise MalformedResponseError("Model response is not a JSON array", raw_text=raw)

    return data
