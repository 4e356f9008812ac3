from __future__ import annotations

from career_docs_ai.utils.helpers import deduplicate_names, iterate_async_in_sync


def test_deduplicate_names_is_case_insensitive_and_order_preserving() -> None:
    assert deduplicate_names(["Acme", "Globex", "ACME", " acme ", "Initech"]) == ["Acme", "Globex", "Initech"]
    assert deduplicate_names([]) == []


def test_iterate_async_in_sync_yields_items_lazily() -> None:
    produced: list[int] = []

    async def numbers():
        for i in range(3):
            produced.append(i)
            yield i

    iterator = iterate_async_in_sync(numbers())
    assert next(iterator) == 0
    assert produced == [0]
    assert list(iterator) == [1, 2]


def test_closing_early_finalizes_nested_async_generators() -> None:
    finalized: list[str] = []

    async def inner():
        try:
            for i in range(3):
                yield i
        finally:
            finalized.append("inner")

    async def outer():
        try:
            # Not closed by outer itself; left suspended when outer is closed
            async for i in inner():
                yield i
        finally:
            finalized.append("outer")

    iterator = iterate_async_in_sync(outer())
    assert next(iterator) == 0
    iterator.close()

    assert sorted(finalized) == ["inner", "outer"]
