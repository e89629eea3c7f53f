# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import (
    Callable,
    ItemsView,
    Iterable,
    Iterator,
    KeysView,
    Mapping,
    ValuesView,
)
from html import escape
from typing import Any, Generic, TypeVar

import pandas as pd
import polars as pl
import structlog

from pydiverse.bimap._internal import errors
from pydiverse.bimap._internal.errors import (
    ConflictError,
    KeyConflictError,
    NoSuchKeyError,
    NoSuchValueError,
    ValueConflictError,
)
from pydiverse.bimap._internal.sources import (
    Frame,
    iter_pairs,
    pairs_from_fields,
    pairs_from_frame,
    pairs_from_mapping,
    pairs_from_sequence,
)
from pydiverse.bimap._internal.targets import (
    Dict,
    DictOfLists,
    ListOfDicts,
    Pandas,
    Polars,
    Target,
)

KT = TypeVar("KT")
VT = TypeVar("VT")

logger = structlog.get_logger(__name__)


class BiMap(Mapping[KT, VT], Generic[KT, VT]):
    """
    Bidirectional map. All keys and all values are unique, so every pair can be
    looked up from either side in constant time.

    Internally, a forward table (key -> value) and an inverse table
    (value -> key) are kept as exact mirrors of each other. Every mutating
    method leaves both tables consistent before it returns.

    There are two insertion policies:

    * :meth:`set` (upsert) evicts any stored pair with the same key or the same
      value before inserting.
    * :meth:`add` (strict) raises :class:`KeyConflictError` or
      :class:`ValueConflictError` and leaves the BiMap untouched.

    Examples
    --------
    >>> bimap = BiMap({"a": 1, "b": 2})
    >>> bimap.get_key(2)
    'b'
    >>> bimap.set("a", 2)
    BiMap({'a': 2})
    >>> isinstance(bimap.try_add("c", 2), ValueConflictError)
    True
    >>> bimap
    BiMap({'a': 2})
    """

    __slots__ = ["_fwd", "_bwd"]

    def __init__(self, source: Any = None, /):
        """
        Creates a new BiMap.

        :param source:
            Optional initial pairs. This can be another BiMap, any mapping, an
            iterable of (key, value) pairs, a dataclass instance or a polars /
            pandas data frame with a `key` and a `value` column. The pairs are
            inserted with :meth:`add_all`, so a repeated key or value raises.
        """
        self._fwd: dict[KT, VT] = {}
        self._bwd: dict[VT, KT] = {}
        if source is not None:
            self.add_all(source)

    @classmethod
    def _from_tables(cls, fwd: dict[KT, VT], bwd: dict[VT, KT]) -> BiMap[KT, VT]:
        bimap = cls.__new__(cls)
        bimap._fwd = fwd
        bimap._bwd = bwd
        return bimap

    # --- Construction helpers ---

    @classmethod
    def from_source(cls, source: Any) -> BiMap:
        """
        Creates a BiMap from any supported source, equivalent to
        ``BiMap().add_all(source)``.
        """
        return cls().add_all(source)

    @classmethod
    def from_mapping(cls, mapping: Mapping[KT, VT]) -> BiMap[KT, VT]:
        errors.check_arg_type(Mapping, "BiMap.from_mapping", "mapping", mapping)
        return cls()._insert_all(pairs_from_mapping(mapping), strict=True)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[KT, VT]]) -> BiMap[KT, VT]:
        errors.check_arg_type(Iterable, "BiMap.from_pairs", "pairs", pairs)
        return cls()._insert_all(pairs_from_sequence(pairs), strict=True)

    @classmethod
    def from_fields(cls, obj: Any = None, /, **fields: Any) -> BiMap[str, Any]:
        """
        Creates a BiMap from a flat field structure: either a dataclass
        instance or keyword arguments, with the field names as keys.

        >>> BiMap.from_fields(one=1, two=2)
        BiMap({'one': 1, 'two': 2})
        """
        if obj is not None and fields:
            raise TypeError(
                "`BiMap.from_fields` takes either a dataclass instance or keyword "
                "arguments, not both"
            )
        pairs = pairs_from_fields(obj) if obj is not None else fields.items()
        return cls()._insert_all(pairs, strict=True)

    @classmethod
    def from_frame(
        cls, df: Frame, *, key: str = "key", value: str = "value"
    ) -> BiMap[Any, Any]:
        """
        Creates a BiMap from two columns of a polars or pandas data frame. Each
        row becomes one pair, in row order.
        """
        errors.check_arg_type(Frame, "BiMap.from_frame", "df", df)
        errors.check_arg_type(str, "BiMap.from_frame", "key", key)
        errors.check_arg_type(str, "BiMap.from_frame", "value", value)
        return cls()._insert_all(pairs_from_frame(df, key, value), strict=True)

    # --- Queries ---

    @property
    def size(self) -> int:
        return len(self._fwd)

    def __len__(self) -> int:
        return len(self._fwd)

    def __iter__(self) -> Iterator[KT]:
        yield from self._fwd.__iter__()

    def __contains__(self, key: object) -> bool:
        return key in self._fwd

    def __getitem__(self, key: KT) -> VT:
        try:
            return self._fwd[key]
        except KeyError:
            raise NoSuchKeyError(key) from None

    def has_key(self, key: KT) -> bool:
        return key in self._fwd

    def has_value(self, value: VT) -> bool:
        return value in self._bwd

    def assert_has_key(self, key: KT) -> None:
        if key not in self._fwd:
            raise NoSuchKeyError(key)

    def assert_has_value(self, value: VT) -> None:
        if value not in self._bwd:
            raise NoSuchValueError(value)

    def get_value(self, key: KT, default: VT | None = None) -> VT | None:
        return self._fwd.get(key, default)

    def get_key(self, value: VT, default: KT | None = None) -> KT | None:
        return self._bwd.get(value, default)

    def keys(self) -> KeysView[KT]:
        return self._fwd.keys()

    def values(self) -> ValuesView[VT]:
        return self._fwd.values()

    def entries(self) -> ItemsView[KT, VT]:
        return self._fwd.items()

    items = entries

    def for_each(self, fn: Callable[[tuple[KT, VT], BiMap[KT, VT]], Any]) -> None:
        """
        Calls ``fn((key, value), self)`` for every pair in insertion order.
        """
        for pair in self._fwd.items():
            fn(pair, self)

    def inverse(self) -> BiMap[VT, KT]:
        """
        Returns a new BiMap with keys and values swapped.
        """
        return type(self)._from_tables(self._bwd.copy(), self._fwd.copy())

    # --- Mutation ---

    def set(self, key: KT, value: VT) -> BiMap[KT, VT]:
        """
        Inserts the pair `(key, value)`. A stored pair with the same key and a
        stored pair with the same value are removed first, so this never raises.
        """
        # both lookups hash their argument, so they run before anything is removed
        key_present = key in self._fwd
        value_present = value in self._bwd

        evicted = []
        if key_present:
            evicted.append((key, self._fwd[key]))
            self.delete_key(key)
        if value_present and value in self._bwd:
            evicted.append((self._bwd[value], value))
            self.delete_value(value)
        if evicted:
            logger.debug(
                "evicted conflicting pairs", key=key, value=value, evicted=evicted
            )

        self._fwd[key] = value
        self._bwd[value] = key
        return self

    def try_add(self, key: KT, value: VT) -> ConflictError | None:
        """
        Inserts the pair `(key, value)` unless the key or the value is already
        present.

        :returns:
            ``None`` on success. Otherwise the conflict is returned (not raised)
            and the BiMap is unchanged. A key conflict takes precedence over a
            value conflict.
        """
        if key in self._fwd:
            return KeyConflictError(key)
        if value in self._bwd:
            return ValueConflictError(value)
        self._fwd[key] = value
        self._bwd[value] = key
        return None

    def add(self, key: KT, value: VT) -> BiMap[KT, VT]:
        """
        Inserts the pair `(key, value)`.

        :raises KeyConflictError: if the key is already present.
        :raises ValueConflictError: if the value is already present.
        """
        conflict = self.try_add(key, value)
        if conflict is not None:
            raise conflict
        return self

    def __setitem__(self, key: KT, value: VT):
        self.set(key, value)

    def __delitem__(self, key: KT):
        if not self.delete_key(key):
            raise NoSuchKeyError(key)

    def delete_key(self, key: KT) -> bool:
        if key not in self._fwd:
            return False
        del self._bwd[self._fwd.pop(key)]
        return True

    def delete_value(self, value: VT) -> bool:
        if value not in self._bwd:
            return False
        del self._fwd[self._bwd.pop(value)]
        return True

    def delete_keys(self, keys: Iterable[KT]) -> int:
        return sum(self.delete_key(key) for key in list(keys))

    def delete_values(self, values: Iterable[VT]) -> int:
        return sum(self.delete_value(value) for value in list(values))

    def set_all(self, source: Any) -> BiMap[KT, VT]:
        """
        Calls :meth:`set` for every pair of `source`, in its iteration order.
        """
        return self._insert_all(iter_pairs(source), strict=False)

    def add_all(self, source: Any) -> BiMap[KT, VT]:
        """
        Calls :meth:`add` for every pair of `source`, in its iteration order.

        The first conflicting pair raises. Pairs inserted before it stay in the
        BiMap; :meth:`clone` beforehand if you need to roll back.
        """
        return self._insert_all(iter_pairs(source), strict=True)

    def _insert_all(
        self, pairs: Iterable[tuple[KT, VT]], *, strict: bool
    ) -> BiMap[KT, VT]:
        # the source may be this BiMap or one of its views
        pairs = list(pairs)
        if not strict:
            for key, value in pairs:
                self.set(key, value)
            return self

        for i, (key, value) in enumerate(pairs):
            conflict = self.try_add(key, value)
            if conflict is not None:
                logger.debug(
                    "aborted strict batch insertion",
                    position=i,
                    key=key,
                    value=value,
                    conflict=type(conflict).__name__,
                )
                raise conflict
        return self

    def clear(self) -> BiMap[KT, VT]:
        self._fwd.clear()
        self._bwd.clear()
        return self

    def clone(self) -> BiMap[KT, VT]:
        return self._from_tables(self._fwd.copy(), self._bwd.copy())

    def __copy__(self) -> BiMap[KT, VT]:
        return self.clone()

    # --- Export ---

    def export(
        self,
        target: Target | type[Target] = Dict,
        *,
        key: str = "key",
        value: str = "value",
    ) -> Any:
        """Converts the pairs of the BiMap to another format.

        :param target:
            A ``Polars``, ``Pandas``, ``Dict``, ``DictOfLists`` or ``ListOfDicts``
            object (or class). For polars, one can specify whether a DataFrame or
            LazyFrame is returned via the ``lazy`` keyword parameter.

        :param key:
            Name of the key column. Ignored for ``Dict``.

        :param value:
            Name of the value column. Ignored for ``Dict``.

        Examples
        --------
        >>> BiMap({"a": 1, "b": 2}).export(DictOfLists)
        {'key': ['a', 'b'], 'value': [1, 2]}
        """

        errors.check_arg_type(Target | type, "BiMap.export", "target", target)

        if not isinstance(target, Target):
            assert issubclass(target, Target)
            target = target()

        if isinstance(target, Dict):
            return dict(self._fwd)

        if key == value:
            raise ValueError(f"key and value column must be different, both are `{key}`")

        if isinstance(target, DictOfLists):
            return {key: list(self._fwd.keys()), value: list(self._fwd.values())}

        elif isinstance(target, ListOfDicts):
            return [{key: k, value: v} for k, v in self._fwd.items()]

        elif isinstance(target, Polars):
            df = pl.DataFrame(
                {
                    key: pl.Series(key, list(self._fwd.keys()), strict=False),
                    value: pl.Series(value, list(self._fwd.values()), strict=False),
                }
            )
            return df.lazy() if target.lazy else df

        elif isinstance(target, Pandas):
            return pd.DataFrame(
                {key: list(self._fwd.keys()), value: list(self._fwd.values())}
            )

        raise TypeError(f"unsupported export target `{type(target).__name__}`")

    # --- Representation ---

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fwd!r})"

    def _repr_html_(self) -> str | None:
        html = f"<code>{type(self).__name__}</code> with {len(self)} pairs</br>"
        try:
            html += self.export(Polars())._repr_html_()
        except Exception as e:
            html += (
                "</br><pre>Failed to convert to a data frame.\n"
                f"{escape(type(e).__name__)}: {escape(str(e))}</pre>"
                f"<pre>{escape(repr(self))}</pre>"
            )
        return html
