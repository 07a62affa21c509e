"""Cause-chain inspection for raised errors."""

from __future__ import annotations

import traceback
from typing import Iterator


def iter_chain(error: BaseException | None) -> Iterator[BaseException]:
    """Yield `error` and each error it was caused by, outermost first.

    Follows `__cause__`, or `__context__` when no explicit cause was set and
    the context was not suppressed. Stops on a repeated error so cyclic chains
    terminate.
    """
    seen: set[int] = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def chain_contains(error: BaseException | None, marker_type: type[BaseException]) -> bool:
    for link in iter_chain(error):
        if isinstance(link, marker_type):
            return True
    return False


def format_stacktrace(error: BaseException) -> str:
    remote = getattr(error, "stacktrace", None)
    if isinstance(remote, str) and remote:
        return remote
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))
