"""
Error taxonomy and invalid-input policy.

Every public numeric entry point validates its arguments before doing
any work.  Two kinds of bad input are distinguished:

- ``InvalidArgument``: an argument is NaN;
- ``OutOfRange``: an argument is a number (possibly infinite) outside
  the documented domain of the function.

What happens on bad input is governed by an ``InvalidInputPolicy``.
Under ``RAISE`` the typed exception is raised; under ``NAN`` the
function returns a quiet NaN instead.  The process-wide default is read
from the ``PF_INVALID_INPUT`` environment variable at import time and can
be changed with :func:`set_invalid_input_policy`.  Each call may also
pass ``policy=`` explicitly, which takes precedence over the default.

Polygons with fewer than three distinct vertices are not an error: the
perimeter engine reports zero-valued results for them.
"""

from __future__ import annotations

import enum
import logging
import math
import os
from typing import Optional

logger = logging.getLogger(__name__)


class PerimeterError(Exception):
    """Base class for errors reported by the perimeter services."""


class InvalidArgument(PerimeterError, ValueError):
    """A numeric argument is NaN."""


class OutOfRange(PerimeterError, ValueError):
    """A numeric argument lies outside the function's domain."""


class InvalidInputPolicy(str, enum.Enum):
    RAISE = "raise"
    NAN = "nan"


def _policy_from_env() -> InvalidInputPolicy:
    raw = (os.getenv("PF_INVALID_INPUT") or "raise").strip().lower()
    try:
        return InvalidInputPolicy(raw)
    except ValueError:
        logger.warning("Unknown PF_INVALID_INPUT=%r, using 'raise'", raw)
        return InvalidInputPolicy.RAISE


_default_policy: InvalidInputPolicy = _policy_from_env()


def get_invalid_input_policy() -> InvalidInputPolicy:
    return _default_policy


def set_invalid_input_policy(policy: InvalidInputPolicy | str) -> InvalidInputPolicy:
    """Set the process-wide policy and return the previous one."""
    global _default_policy
    previous = _default_policy
    _default_policy = InvalidInputPolicy(policy)
    return previous


def resolve_policy(policy: Optional[InvalidInputPolicy]) -> InvalidInputPolicy:
    return _default_policy if policy is None else InvalidInputPolicy(policy)


def is_nan(name: str, policy: Optional[InvalidInputPolicy], *values: float) -> bool:
    """Return True if any of *values* is NaN and the policy is ``NAN``.

    Raises:
        InvalidArgument: if any of *values* is NaN and the policy is ``RAISE``.
    """
    if not any(math.isnan(v) for v in values):
        return False
    if resolve_policy(policy) is InvalidInputPolicy.RAISE:
        raise InvalidArgument(f"{name}: argument is NaN")
    return True


def out_of_range(cond: bool, name: str, policy: Optional[InvalidInputPolicy]) -> bool:
    """Return True if *cond* fails and the policy is ``NAN``.

    Raises:
        OutOfRange: if *cond* fails and the policy is ``RAISE``.
    """
    if cond:
        return False
    if resolve_policy(policy) is InvalidInputPolicy.RAISE:
        raise OutOfRange(f"{name}: argument out of range")
    return True
