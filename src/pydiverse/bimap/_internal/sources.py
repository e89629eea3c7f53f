# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

# Every shape a BiMap can be built from is turned into an iterator of
# (key, value) tuples here. The BiMap itself only ever consumes that iterator.

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeVar

import pandas as pd
import polars as pl

from pydiverse.bimap._internal.errors import ColumnNotFoundError

KT = TypeVar("KT")
VT = TypeVar("VT")

Frame = pl.DataFrame | pl.LazyFrame | pd.DataFrame


def pairs_from_mapping(mapping: Mapping[KT, VT]) -> Iterator[tuple[KT, VT]]:
    yield from mapping.items()


def pairs_from_sequence(pairs: Iterable[Any]) -> Iterator[tuple[Any, Any]]:
    for i, pair in enumerate(pairs):
        if isinstance(pair, (str, bytes)):
            raise TypeError(
                f"element {i} of the pair sequence is not a (key, value) pair, found "
                f"`{type(pair).__name__}` instead"
            )
        try:
            key, value = pair
        except (TypeError, ValueError):
            raise TypeError(
                f"element {i} of the pair sequence is not a (key, value) pair, found "
                f"`{type(pair).__name__}` instead"
            ) from None
        yield key, value


def pairs_from_fields(obj: Any) -> Iterator[tuple[str, Any]]:
    """
    Yields the fields of a dataclass instance in declaration order.
    """
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(
            f"expected a dataclass instance, found `{type(obj).__name__}` instead\n"
            "hint: to build a BiMap from keyword arguments, use "
            "`BiMap.from_fields(**fields)`"
        )
    for field in dataclasses.fields(obj):
        yield field.name, getattr(obj, field.name)


def pairs_from_frame(df: Frame, key: str, value: str) -> Iterator[tuple[Any, Any]]:
    if key == value:
        raise ValueError(
            f"key and value column must be different, both are `{key}`"
        )

    if isinstance(df, (pl.DataFrame, pl.LazyFrame)):
        names = df.collect_schema().names()
    else:
        names = list(df.columns)
    for col in (key, value):
        if col not in names:
            raise ColumnNotFoundError(col, names)

    if isinstance(df, pl.LazyFrame):
        yield from df.select(key, value).collect().iter_rows()
    elif isinstance(df, pl.DataFrame):
        yield from df.select(key, value).iter_rows()
    else:
        yield from df[[key, value]].itertuples(index=False, name=None)


@functools.singledispatch
def iter_pairs(source: Any) -> Iterator[tuple[Any, Any]]:
    """
    Turns any supported construction source into (key, value) tuples.

    Supported are mappings (including other BiMaps), polars and pandas data
    frames with a `key` and a `value` column, dataclass instances and iterables
    of (key, value) pairs.
    """
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        return pairs_from_fields(source)
    if isinstance(source, Iterable) and not isinstance(source, (str, bytes)):
        return pairs_from_sequence(source)
    raise TypeError(
        f"cannot build (key, value) pairs from an object of type "
        f"`{type(source).__name__}`\n"
        "hint: pass a mapping, a BiMap, a data frame, a dataclass instance or an "
        "iterable of (key, value) pairs"
    )


@iter_pairs.register
def _(source: Mapping) -> Iterator[tuple[Any, Any]]:
    return pairs_from_mapping(source)


@iter_pairs.register(pl.DataFrame)
@iter_pairs.register(pl.LazyFrame)
@iter_pairs.register(pd.DataFrame)
def _(source) -> Iterator[tuple[Any, Any]]:
    return pairs_from_frame(source, "key", "value")
