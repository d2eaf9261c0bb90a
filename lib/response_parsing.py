# =============================================================================
# lib/response_parsing.py - Model Response Cleanup
# =============================================================================
# Helpers for turning the text a generative model returns into Python data.
#
# Even when JSON output is requested, models sometimes wrap the payload in a
# markdown code fence:
#
#   ```json
#   {"title": "Scones", ...}
#   ```
#
# strip_code_fences() removes one leading fence (with or without a language
# tag) and one trailing fence. On text that has no fences it only trims
# whitespace, so applying it twice gives the same result as applying it once.
# =============================================================================

import json
from typing import Any

JSON_FENCE = "```json"
FENCE = "```"


def strip_code_fences(text: str) -> str:
    """
    Remove surrounding markdown code-fence markers from model output.

    Args:
        text: Raw model text

    Returns:
        The text without a leading "```json" / "```" marker and without a
        trailing "```" marker, whitespace-trimmed on both ends.

    Example:
        strip_code_fences('```json\\n{"a": 1}\\n```')  # '{"a": 1}'
    """
    cleaned = text.strip()

    if cleaned.startswith(JSON_FENCE):
        cleaned = cleaned[len(JSON_FENCE):]
    elif cleaned.startswith(FENCE):
        cleaned = cleaned[len(FENCE):]

    if cleaned.endswith(FENCE):
        cleaned = cleaned[:-len(FENCE)]

    return cleaned.strip()


def decode_json(text: str) -> Any:
    """
    Decode JSON text into plain Python values.

    Objects become dicts, arrays lists, and scalars bool/int/float/str/None.
    No schema is applied here; callers check the shape they need.

    Raises:
        ValueError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e.msg} at position {e.pos}") from e


def extract_json_object(text: str) -> dict[str, Any]:
    """
    Clean model text and decode it, requiring a JSON object.

    Raises:
        ValueError: If the cleaned text is not a JSON object
    """
    data = decode_json(strip_code_fences(text))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data
