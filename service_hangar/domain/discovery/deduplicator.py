"""Streaming deduplication of discovered providers by concrete class."""

from typing import Iterable, Iterator, TypeVar

T = TypeVar("T")


def deduplicate(instances: Iterable[T]) -> Iterator[T]:
    """Yield only the first instance of each concrete class.

    The seen-set lives for a single pass. The input is consumed lazily,
    one element at a time.
    """
    seen: set[type] = set()
    for instance in instances:
        cls = type(instance)
        if cls in seen:
            continue
        seen.add(cls)
        yield instance
