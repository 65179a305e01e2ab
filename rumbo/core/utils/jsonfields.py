"""
JSON helpers
"""

import json
from typing import Any


def decode_json_text(value: Any) -> Any:
    """Decodifica columnas JSON que llegan como texto; el resto se devuelve tal cual"""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value
