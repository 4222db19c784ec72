import json
import logging
from typing import Any, Optional

import json5
import demjson3

logger = logging.getLogger(__name__)


def extract_json_object(response_text: str) -> Optional[Any]:
    """
    Pull the JSON object out of a model response.

    The model is asked for bare JSON but may wrap it in prose or code fences,
    so everything between the first "{" and the last "}" (inclusive) is parsed
    through several increasingly tolerant layers:
    1. Standard json.loads()
    2. json5 parser (tolerates comments and trailing commas)
    3. demjson3 parser (auto-repairs many errors)

    Deeply nested replies that exhaust the recursion limit count as failures.

    Args:
        response_text: Raw text returned by the model

    Returns:
        The parsed value, or None if no brace pair exists or every layer fails
    """
    if not response_text:
        return None

    first_brace = response_text.find("{")
    last_brace = response_text.rfind("}")
    if first_brace < 0 or last_brace <= first_brace:
        logger.warning("No JSON object found in model response")
        return None

    candidate = response_text[first_brace : last_brace + 1]
    errors = []

    # Layer 1: Standard JSON parser
    try:
        return json.loads(candidate)
    except (json.JSONDecodeError, RecursionError) as e:
        errors.append(f"Standard JSON: {e}")
        logger.debug("Layer 1 failed: %s", e)

    # Layer 2: json5
    try:
        return json5.loads(candidate)
    except Exception as e:
        errors.append(f"JSON5: {e}")
        logger.debug("Layer 2 failed: %s", e)

    # Layer 3: demjson3
    try:
        return demjson3.decode(candidate)
    except Exception as e:
        errors.append(f"DemJSON: {e}")
        logger.debug("Layer 3 failed: %s", e)

    logger.warning(
        "Model JSON parse failed: %s. Response preview: %s",
        "; ".join(errors[:2]),
        candidate[:200],
    )
    return None
