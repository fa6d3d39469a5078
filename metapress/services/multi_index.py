from __future__ import annotations

from typing import Callable, Dict, FrozenSet, Generic, Iterable, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from metapress.models.content import newest_first


T = TypeVar("T")

Ordering = Callable[[Iterable[T]], List[T]]


class MultiIndex(Generic[T]):
    """Named secondary indexes mapping a key to an ordered bucket of items.

    Items are added first, then :meth:`build` sorts every bucket once with the
    index's ordering and freezes it. Lookups of unknown indexes or keys give an
    empty result rather than an error.
    """

    def __init__(self, ordering: Ordering = newest_first) -> None:
        self._ordering = ordering
        self._indexes: Dict[str, Dict[str, List[T]]] = {}
        self._built: Dict[str, Dict[str, Tuple[T, ...]]] = {}
        self._is_built = False

    def add(self, index: str, item: T, keys: Union[Optional[str], Iterable[Optional[str]]]) -> None:
        """Append ``item`` to the bucket of every non-empty key in ``keys``.

        Adding the same item twice under one key gives a duplicate entry.
        """
        if self._is_built:
            raise RuntimeError("cannot add to an index after build()")
        if keys is None or isinstance(keys, str):
            keys = [keys]
        buckets = self._indexes.setdefault(index, {})
        for key in keys:
            if not key:
                continue
            buckets.setdefault(key, []).append(item)

    def build(self) -> None:
        if self._is_built:
            raise RuntimeError("index has already been built")
        self._built = {
            name: {key: tuple(self._ordering(bucket)) for key, bucket in buckets.items()}
            for name, buckets in self._indexes.items()
        }
        self._indexes = {}
        self._is_built = True

    @property
    def is_built(self) -> bool:
        return self._is_built

    def keys_for(self, index: str) -> FrozenSet[str]:
        return frozenset(self._buckets(index))

    def find(self, index: str, key: str) -> Tuple[T, ...]:
        return tuple(self._buckets(index).get(key, ()))

    def _buckets(self, index: str) -> Mapping[str, Sequence[T]]:
        if self._is_built:
            return self._built.get(index, {})
        return self._indexes.get(index, {})
