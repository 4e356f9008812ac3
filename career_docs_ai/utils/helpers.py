"""Helper utilities for the career document generator."""

import asyncio
from typing import AsyncIterator, Iterator, List, TypeVar

T = TypeVar("T")


def deduplicate_names(names: List[str]) -> List[str]:
    """Remove case-insensitive duplicates, keeping the first spelling and order."""
    seen: set[str] = set()
    result: List[str] = []
    for name in names:
        key = name.strip().lower()
        if key not in seen:
            seen.add(key)
            result.append(name)
    return result


def iterate_async_in_sync(stream: AsyncIterator[T]) -> Iterator[T]:
    """
    Drive an async iterator from sync code (e.g. Streamlit), one item at a time.
    Items are yielded as soon as they arrive; nothing is buffered. Closing the
    returned iterator early closes ``stream`` and any async generators it left open.
    """
    loop = asyncio.new_event_loop()
    try:
        while True:
            try:
                item = loop.run_until_complete(stream.__anext__())
            except StopAsyncIteration:
                break
            yield item
    finally:
        try:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                loop.run_until_complete(aclose())
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            loop.close()
