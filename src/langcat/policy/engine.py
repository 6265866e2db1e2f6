"""Policy engine - decisions and state transitions.

Every transition mutates the given policy in place, normalizes it and returns
the same object. Nothing here performs I/O.
"""

from functools import partial
from typing import Callable, Optional, Union
from .models import Policy, DefaultPolicy, Mode, normalize_category

Transition = Callable[[Policy], Policy]


def decide(policy: Union[Policy, DefaultPolicy], category: Optional[str]) -> bool:
    """
    Decide whether a category is visible under a policy.

    Args:
        policy: Policy (or the default policy) to evaluate
        category: Category name; ``None`` or empty means ``uncategorized``

    Returns:
        True if the category is allowed
    """
    cat = normalize_category(category)

    if policy.mode == Mode.ALL:
        return True
    if policy.mode == Mode.NONE:
        return False
    if policy.mode == Mode.ONLY:
        return cat in policy.cats
    # EXCEPT
    return cat not in policy.cats


def normalize(policy: Policy) -> Policy:
    """Collapse a policy to its simplest equivalent form."""
    if policy.mode in (Mode.ALL, Mode.NONE):
        policy.cats.clear()
    elif not policy.cats:
        policy.mode = Mode.NONE if policy.mode == Mode.ONLY else Mode.ALL
    return policy


def _reset(policy: Policy, mode: Mode, category: Optional[str] = None) -> Policy:
    policy.mode = mode
    policy.cats.clear()
    if category is not None:
        policy.cats.add(normalize_category(category))
    return normalize(policy)


def enable_all(policy: Policy) -> Policy:
    """Allow every category (mode=ALL)."""
    return _reset(policy, Mode.ALL)


def disable_all(policy: Policy) -> Policy:
    """Deny every category (mode=NONE)."""
    return _reset(policy, Mode.NONE)


def enable_only(policy: Policy, category: str) -> Policy:
    """Allow exactly one category (mode=ONLY)."""
    return _reset(policy, Mode.ONLY, category)


def disable_only(policy: Policy, category: str) -> Policy:
    """Block exactly one category, allow all others (mode=EXCEPT)."""
    return _reset(policy, Mode.EXCEPT, category)


def enable(policy: Policy, category: str) -> Policy:
    """
    Allow one more category, keeping the rest of the policy.

    NONE starts an allow-list, ONLY grows it, EXCEPT shrinks the deny-list,
    ALL is left alone.
    """
    cat = normalize_category(category)

    if policy.mode == Mode.NONE:
        return _reset(policy, Mode.ONLY, cat)
    if policy.mode == Mode.ONLY:
        policy.cats.add(cat)
    elif policy.mode == Mode.EXCEPT:
        policy.cats.discard(cat)

    return normalize(policy)


def disable(policy: Policy, category: str) -> Policy:
    """
    Block one more category, keeping the rest of the policy.

    ALL starts a deny-list, EXCEPT grows it, ONLY shrinks the allow-list,
    NONE is left alone.
    """
    cat = normalize_category(category)

    if policy.mode == Mode.ALL:
        return _reset(policy, Mode.EXCEPT, cat)
    if policy.mode == Mode.ONLY:
        policy.cats.discard(cat)
    elif policy.mode == Mode.EXCEPT:
        policy.cats.add(cat)

    return normalize(policy)


def toggle(policy: Policy, category: str) -> Policy:
    """Flip a single category between allowed and blocked."""
    cat = normalize_category(category)

    if policy.mode == Mode.NONE:
        return _reset(policy, Mode.ONLY, cat)
    if policy.mode == Mode.ALL:
        return _reset(policy, Mode.EXCEPT, cat)

    # ONLY and EXCEPT: flip membership in the list
    if cat in policy.cats:
        policy.cats.discard(cat)
    else:
        policy.cats.add(cat)

    return normalize(policy)


def bind(transition: Callable[..., Policy], category: str) -> Transition:
    """Fix the category argument of a transition, e.g. ``bind(enable, "news")``."""
    return partial(transition, category=category)


def describe(policy: Union[Policy, DefaultPolicy]) -> str:
    """One-line summary such as ``mode=ONLY, set=[news, sports]``."""
    return f"mode={policy.mode.value}, set=[{', '.join(sorted(policy.cats))}]"
