"""Pull a JSON object out of model response text.

JSON mode usually returns a bare object, but some responses still arrive
wrapped in a ```json fence or with a sentence around the object.
"""

import json
import re
from typing import Any, Optional

_FENCED_OBJECT_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_OUTERMOST_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _loads_object(candidate: str) -> Optional[dict[str, Any]]:
    try:
        value = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def parse_json_from_text(text: str) -> Optional[dict[str, Any]]:
    """Return the JSON object in ``text``, or None.

    Tried in order: the whole text, a fenced block, the outermost ``{...}`` span.
    A top-level array is not an object and is skipped.
    """
    text = (text or "").strip()
    if not text:
        return None
    candidates = [text]
    fenced = _FENCED_OBJECT_RE.search(text)
    if fenced:
        candidates.append(fenced.group(1))
    outer = _OUTERMOST_OBJECT_RE.search(text)
    if outer:
        candidates.append(outer.group(0))
    for candidate in candidates:
        parsed = _loads_object(candidate)
        if parsed is not None:
            return parsed
    return None
