"""Extract a function call from raw model output.

Models frequently ignore "no markdown" instructions, so a reply may arrive
wrapped in a code fence, with or without a ``json`` language tag. The parser
strips that, decodes the JSON envelope and maps it onto one of the result
types in ``agent.intents``. It never raises.
"""

import json
from decimal import Decimal

from pydantic import ValidationError

from agent.intents import (
    FunctionCall,
    LOG_TRANSACTION,
    LogTransactionCall,
    ParsedIntent,
    ParseFailure,
    READ_TRANSACTIONS,
    ReadTransactionsCall,
    UnknownFunction,
)
from logger import get_logger

logger = get_logger()

FENCE = "```"


def strip_code_fence(text: str) -> str:
    """Remove the outermost triple-backtick fence from ``text``.

    With two or more fence markers everything between the first and the
    last is kept. A lone marker is simply removed. A leading ``json``
    language tag is dropped afterwards.
    """
    text = text.strip()

    first = text.find(FENCE)
    if first == -1:
        return text

    last = text.rfind(FENCE)
    if last == first:
        text = text[:first] + text[first + len(FENCE):]
    else:
        text = text[first + len(FENCE):last]

    text = text.strip()
    if text[:4].lower() == "json":
        text = text[4:].lstrip()

    return text


def parse(raw_output: str) -> ParsedIntent:
    """Turn raw model output into a ParsedIntent.

    Args:
        raw_output: Text returned by the completion provider.

    Returns:
        ParseFailure if the text is not a JSON function call, UnknownFunction
        if it names a function outside KNOWN_FUNCTIONS, otherwise the
        matching call with its raw parameters.
    """
    if raw_output is None:
        return ParseFailure("empty response")

    text = strip_code_fence(raw_output)
    if not text:
        return ParseFailure("empty response")

    try:
        payload = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        logger.debug(f"Model output is not JSON: {e}")
        return ParseFailure(f"invalid JSON: {e.msg}")
    except (ValueError, RecursionError) as e:
        # Oversized integers or pathologically deep nesting
        logger.debug(f"Model output could not be decoded: {type(e).__name__}")
        return ParseFailure("undecodable JSON")

    if not isinstance(payload, dict):
        return ParseFailure("JSON is not an object")

    try:
        call = FunctionCall.model_validate(payload)
    except ValidationError as e:
        logger.debug(f"Model output is not a function call: {e}")
        return ParseFailure("missing or invalid function name")

    name = call.name.strip()
    if not name:
        return ParseFailure("empty function name")

    params = call.parameters

    if name == LOG_TRANSACTION:
        return LogTransactionCall(
            amount=params.get("amount"),
            category=params.get("category"),
            description=params.get("description"),
            date=params.get("date"),
        )

    if name == READ_TRANSACTIONS:
        return ReadTransactionsCall()

    return UnknownFunction(name=name, parameters=params)
