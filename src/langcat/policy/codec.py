"""Policy codec - the ``MODE|cat1,cat2`` wire format used in the key-value store."""

from typing import Any
from ..utils.errors import DecodeError
from ..utils.logging import get_logger
from .models import Policy, DefaultPolicy, Mode, normalize_category
from .engine import normalize

logger = get_logger("policy.codec")

MODE_SEPARATOR = "|"
CATEGORY_SEPARATOR = ","


def encode_policy(policy: Policy) -> str:
    """
    Encode a policy for storage.

    Args:
        policy: Policy to encode

    Returns:
        String such as ``ONLY|news,sports`` or ``ALL|``
    """
    cats = CATEGORY_SEPARATOR.join(sorted(normalize_category(c) for c in policy.cats))
    return f"{policy.mode.value}{MODE_SEPARATOR}{cats}"


def parse_policy(raw: Any) -> Policy:
    """
    Strictly parse a stored policy value.

    A value without ``|`` is read as a bare mode with no categories.

    Args:
        raw: Stored value

    Returns:
        Normalized Policy

    Raises:
        DecodeError: If the value is not a string or the mode is unknown
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Policy value is not valid UTF-8: {e}")

    if not isinstance(raw, str):
        raise DecodeError(f"Policy value must be a string, got {type(raw).__name__}")

    mode_token, _, tail = raw.partition(MODE_SEPARATOR)
    if not mode_token:
        raise DecodeError(f"Policy value has no mode: {raw!r}")

    try:
        mode = Mode(mode_token)  # exact, as written by encode_policy
    except ValueError:
        raise DecodeError(f"Unknown policy mode {mode_token!r} in {raw!r}")

    cats = {
        normalize_category(segment)
        for segment in tail.split(CATEGORY_SEPARATOR)
        if segment.strip()
    }
    return normalize(Policy(mode=mode, cats=cats))


def decode_policy(raw: Any, default: DefaultPolicy) -> Policy:
    """Parse a stored value, falling back to a fresh copy of the default on any error."""
    try:
        return parse_policy(raw)
    except DecodeError as e:
        logger.warning(f"Malformed stored policy, using default: {e}")
        return default.to_policy()
