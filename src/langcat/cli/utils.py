"""Shared helpers for CLI commands."""

import asyncio
import click
from typing import Awaitable, Callable, Optional, TypeVar
from ..backends.memory import InMemoryKeyValueStore
from ..service import LangCategory
from ..utils.logging import get_logger

logger = get_logger("cli.utils")

T = TypeVar("T")

UNPERSISTED_WARNING = (
    "Warning: storage backend is 'memory'; this change is lost when the command exits.\n"
    "Tip: set storage.backend to 'redis' in your langcat config to keep policies."
)


def format_error(message: str, suggestion: Optional[str] = None) -> str:
    """
    Format error message with optional suggestion.

    Args:
        message: Error message
        suggestion: Optional suggestion or help text

    Returns:
        Formatted error string
    """
    error = f"Error: {message}"
    if suggestion:
        error += f"\nTip: {suggestion}"
    return error


def run_with_gate(
    config_path: Optional[str],
    action: Callable[[LangCategory], Awaitable[T]],
    mutates: bool = False
) -> T:
    """
    Build a gate from config, run one async action and close it again.

    Pending background writes are flushed before returning, so a mutation
    made by a CLI command is persisted once the command exits. When
    ``mutates`` is set and the configured backend is the in-process memory
    store, a warning goes to stderr since nothing outlives the command.
    """
    async def _run() -> T:
        gate = LangCategory.from_config(config_path)
        if mutates and isinstance(gate.store.backend, InMemoryKeyValueStore):
            logger.debug("Mutating against the memory backend")
            click.echo(UNPERSISTED_WARNING, err=True)
        try:
            return await action(gate)
        finally:
            await gate.aclose()

    return asyncio.run(_run())
