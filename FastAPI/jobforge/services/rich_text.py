"""
Job descriptions are rich-text editor documents serialized as JSON.
The API stores them as opaque strings; it only checks that they parse.
"""
import json
from typing import Any


def parse_document(raw: str) -> dict[str, Any]:
    """Parse a serialized document. Raises ValueError if it is not a JSON object."""
    try:
        doc = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise ValueError("Job description must be a serialized rich-text document") from e
    if not isinstance(doc, dict):
        raise ValueError("Job description must be a serialized rich-text document")
    return doc
