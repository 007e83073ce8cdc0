"""
JSON serializer utility for the change-history blob
"""
import json
import logging
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from uuid import UUID
from typing import Any, Optional

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)


def to_json_safe(value: Any) -> Any:
    """
    Recursively convert Python objects to JSON-safe values

    Args:
        value: Any Python object to convert

    Returns:
        JSON-safe equivalent of the input value
    """
    if value is None:
        return None
    elif isinstance(value, (str, int, float, bool)):
        return value
    elif isinstance(value, (date, datetime, time)):
        return value.isoformat()
    elif isinstance(value, Decimal):
        return float(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, UUID):
        return str(value)
    elif isinstance(value, dict):
        return {str(k): to_json_safe(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple, set)):
        return [to_json_safe(item) for item in value]
    elif isinstance(value, BaseModel):
        return to_json_safe(value.model_dump())
    else:
        return str(value)


def dump_change_history(changes: Any) -> Optional[str]:
    """Serialize a change-history structure for the legacy text column"""
    if changes is None:
        return None
    return json.dumps(to_json_safe(changes), sort_keys=True)


def load_change_history(raw: Optional[str]) -> Any:
    """
    Deserialize the legacy change-history column

    Rows written by this service are JSON. Older rows hold the YAML the
    previous application wrote; text that parses as neither (e.g. YAML with
    Ruby object tags) is returned unchanged. Blank values read as None.
    """
    if raw is None or raw == "":
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        logger.warning("Unreadable change history kept as text: %.60r", raw)
        return raw
