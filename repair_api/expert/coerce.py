"""Best-effort recovery of a JSON object from raw LLM text."""

import json
import re
from typing import Callable, Iterator, Optional, Tuple

import structlog

from repair_api.expert.schemas import LooseRecord

logger = structlog.get_logger()

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
# First opening bracket through the last closing bracket, across newlines.
_OUTER_SPAN_PATTERN = re.compile(r"([\[{][\s\S]*[\]}])")

_decoder = json.JSONDecoder()


def _loads_container(text: str) -> Optional[LooseRecord]:
    """Strict parse; only objects and arrays count as a success."""
    try:
        value = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if isinstance(value, (dict, list)):
        return value
    return None


def _scan_balanced(text: str) -> Optional[LooseRecord]:
    """Decode the first JSON object that starts at a brace.

    Handles replies holding several fragments, where the outer span runs
    from the first fragment's opening bracket to the last one's close.
    Only objects count here; a bare array in prose is a footnote such as
    ``[1]``, not a reply.
    """
    for match in re.finditer(r"\{", text):
        try:
            value, _ = _decoder.raw_decode(text, match.start())
        except (ValueError, RecursionError):
            continue
        if isinstance(value, dict):
            return value
    return None


def _candidates(raw: str) -> Iterator[Tuple[str, Callable[[], Optional[LooseRecord]]]]:
    yield "strict", lambda: _loads_container(raw)

    fence = _FENCE_PATTERN.search(raw)
    if fence:
        yield "code_fence", lambda: _loads_container(fence.group(1))

    span = _OUTER_SPAN_PATTERN.search(raw)
    if span:
        yield "outer_span", lambda: _loads_container(span.group(1))
        yield "balanced_scan", lambda: _scan_balanced(raw)


def coerce_to_json_object(text: str) -> LooseRecord:
    """Turn any text into a dict or list. Never raises.

    Tries, in order: the whole trimmed text, the body of a markdown code
    fence, the outermost bracketed span, then each bracketed fragment in
    turn. When nothing parses, the trimmed text is wrapped as
    ``{"message": text}``.
    """
    raw = (text or "").strip()

    for step, attempt in _candidates(raw):
        parsed = attempt()
        if parsed is not None:
            logger.debug("coerce_parsed", step=step, kind=type(parsed).__name__)
            return parsed

    logger.debug("coerce_fallback_message", length=len(raw))
    return {"message": raw}
