"""Explicit results for override hooks.

``resource_err`` and ``middleware_err`` hooks decide whether an error is
handled by what they return::

    def on_error(ctx, exc):
        if isinstance(exc, PermissionError):
            ctx.status = 403
            return Handled()
        return Propagate(exc)

Raising from the hook works too. Any other return value is taken as the
dispatch outcome unchanged.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Handled:
    """The hook produced a response; ``value`` becomes the dispatch outcome."""

    value: Any = None


@dataclass(frozen=True, slots=True)
class Propagate:
    """The hook declines; ``error`` is re-raised to the host."""

    error: BaseException


def resolve_outcome(outcome: Any) -> Any:
    """Unwrap a hook's return value into the dispatch outcome."""
    if isinstance(outcome, Propagate):
        raise outcome.error
    if isinstance(outcome, Handled):
        return outcome.value
    return outcome
