"""
Parsing of raw vision replies into ``DiagramAnalysis`` values.
"""

import json
import re

from pydantic import ValidationError as PydanticValidationError

from ...shared import DiagramAnalysis, VisionParseError, get_logger

logger = get_logger(__name__)

SNIPPET_LENGTH = 200

# Greedy: first "{" to last "}" in the reply.
_EMBEDDED_OBJECT = re.compile(r'\{.*\}', re.DOTALL)


def extract_json_object(reply: str) -> dict:
    """
    Extract a JSON object from a model reply.
    
    The whole reply is parsed strictly first. If that fails, the outermost
    ``{...}`` span is parsed instead, which tolerates prose or markdown fences
    around the object.
    
    Raises:
        VisionParseError: If neither attempt yields a JSON object
    """
    text = (reply or "").strip()
    
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        match = _EMBEDDED_OBJECT.search(text)
        if not match:
            raise VisionParseError(str(e), text[:SNIPPET_LENGTH])
        try:
            parsed = json.loads(match.group())
        except json.JSONDecodeError:
            raise VisionParseError(str(e), text[:SNIPPET_LENGTH])
        logger.debug("Recovered JSON object embedded in vision reply")
    
    if not isinstance(parsed, dict):
        raise VisionParseError(
            f"expected a JSON object, got {type(parsed).__name__}", text[:SNIPPET_LENGTH]
        )
    
    return parsed


def parse_analysis_reply(reply: str) -> DiagramAnalysis:
    """Parse a raw reply into a validated ``DiagramAnalysis``."""
    payload = extract_json_object(reply)
    
    try:
        return DiagramAnalysis.model_validate(payload)
    except PydanticValidationError as e:
        raise VisionParseError(
            f"reply does not describe a diagram: {e.error_count()} invalid field(s)",
            (reply or "").strip()[:SNIPPET_LENGTH]
        )
