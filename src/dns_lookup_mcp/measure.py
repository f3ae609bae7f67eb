"""Timing and error capture shared by every lookup."""

import logging
import time
from datetime import timedelta
from typing import Callable, Iterable, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)


class SupportsCommonFields(Protocol):
    def set_common_fields(self, duration: timedelta, err: Optional[BaseException]) -> None:
        ...


T = TypeVar("T", bound=SupportsCommonFields)
R = TypeVar("R")


def measure(result_type: Callable[[], T], fn: Callable[[], T]) -> T:
    """Run a lookup once and record its duration and error.

    Args:
        result_type: Zero-argument factory for the empty response, used
            when ``fn`` raises
        fn: The lookup to run

    Returns:
        The response from ``fn``, or the empty response on failure, with
        its common fields set. Never raises.
    """
    start = time.perf_counter()
    err: Optional[Exception] = None
    try:
        result = fn()
    except Exception as e:
        err = e
        result = result_type()
    elapsed = timedelta(seconds=time.perf_counter() - start)

    if err is not None:
        logger.debug(f"Lookup failed after {elapsed}: {err!r}")

    result.set_common_fields(elapsed, err)
    return result


def to_strings(values: Iterable[object]) -> list[str]:
    """Convert each value to its string form, keeping order."""
    return [str(v) for v in values]


def to_records(values: Iterable[object], factory: Callable[[object], R]) -> list[R]:
    """Build one independent record per resolver value, keeping order."""
    return [factory(v) for v in values]
