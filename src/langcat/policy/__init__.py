"""Policy model, decision and transition logic."""

from .models import Policy, DefaultPolicy, Mode, normalize_category, UNCATEGORIZED
from .engine import (
    Transition,
    decide,
    normalize,
    enable_all,
    disable_all,
    enable_only,
    disable_only,
    enable,
    disable,
    toggle,
    bind,
    describe,
)
from .codec import encode_policy, parse_policy, decode_policy

__all__ = [
    "Policy",
    "DefaultPolicy",
    "Mode",
    "UNCATEGORIZED",
    "normalize_category",
    "Transition",
    "decide",
    "normalize",
    "enable_all",
    "disable_all",
    "enable_only",
    "disable_only",
    "enable",
    "disable",
    "toggle",
    "bind",
    "describe",
    "encode_policy",
    "parse_policy",
    "decode_policy",
]
