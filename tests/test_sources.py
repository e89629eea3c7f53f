from __future__ import annotations

import dataclasses

import pandas as pd
import polars as pl
import pytest

from pydiverse.bimap import BiMap, ColumnNotFoundError, KeyConflictError, iter_pairs
from pydiverse.bimap._internal.sources import (
    pairs_from_fields,
    pairs_from_frame,
    pairs_from_sequence,
)
from tests.util import assert_pairs


@dataclasses.dataclass
class Point:
    x: int
    y: int


@pytest.fixture
def frame_data():
    return {"name": ["one", "two", "three"], "code": [1, 2, 3], "other": [0, 0, 0]}


class TestIterPairs:
    def test_mapping(self):
        assert list(iter_pairs({"a": 1, "b": 2})) == [("a", 1), ("b", 2)]

    def test_bimap(self):
        assert list(iter_pairs(BiMap({"a": 1, "b": 2}))) == [("a", 1), ("b", 2)]

    def test_sequence(self):
        assert list(iter_pairs([("a", 1), ["b", 2]])) == [("a", 1), ("b", 2)]
        assert list(iter_pairs(zip("ab", [1, 2]))) == [("a", 1), ("b", 2)]
        assert list(iter_pairs(())) == []

    def test_dataclass(self):
        assert list(iter_pairs(Point(3, 4))) == [("x", 3), ("y", 4)]

    def test_frames(self):
        df = pl.DataFrame({"key": ["a", "b"], "value": [1, 2]})
        assert list(iter_pairs(df)) == [("a", 1), ("b", 2)]
        assert list(iter_pairs(df.lazy())) == [("a", 1), ("b", 2)]
        pd_df = pd.DataFrame({"key": ["a", "b"], "value": [1, 2]})
        assert list(iter_pairs(pd_df)) == [("a", 1), ("b", 2)]

    @pytest.mark.parametrize("source", ["ab", b"ab", 42, None, Point])
    def test_invalid_source(self, source):
        with pytest.raises(TypeError):
            list(iter_pairs(source))

    def test_invalid_pair(self):
        with pytest.raises(TypeError, match="element 1"):
            list(pairs_from_sequence([("a", 1), ("b", 2, 3)]))
        with pytest.raises(TypeError, match="element 0"):
            list(pairs_from_sequence(["ab"]))
        with pytest.raises(TypeError, match="`int`"):
            list(pairs_from_sequence([1]))

    def test_fields_requires_dataclass_instance(self):
        with pytest.raises(TypeError, match="dataclass instance"):
            list(pairs_from_fields({"x": 1}))
        with pytest.raises(TypeError, match="dataclass instance"):
            list(pairs_from_fields(Point))


class TestFromFrame:
    def test_polars(self, frame_data):
        bimap = BiMap.from_frame(pl.DataFrame(frame_data), key="name", value="code")
        assert_pairs(bimap, [("one", 1), ("two", 2), ("three", 3)])

    def test_polars_lazy(self, frame_data):
        bimap = BiMap.from_frame(
            pl.DataFrame(frame_data).lazy(), key="code", value="name"
        )
        assert_pairs(bimap, [(1, "one"), (2, "two"), (3, "three")])

    def test_pandas(self, frame_data):
        bimap = BiMap.from_frame(pd.DataFrame(frame_data), key="name", value="code")
        assert bimap.get_value("two") == 2
        assert bimap.get_key(3) == "three"
        assert bimap.size == 3

    def test_default_columns(self):
        df = pl.DataFrame({"key": ["a", "b"], "value": [1, 2]})
        assert_pairs(BiMap.from_frame(df), [("a", 1), ("b", 2)])
        assert_pairs(BiMap(df), [("a", 1), ("b", 2)])

    def test_duplicate_values(self, frame_data):
        df = pl.DataFrame(frame_data)
        with pytest.raises(KeyConflictError):
            BiMap.from_frame(df, key="other", value="code")

    def test_missing_column(self, frame_data):
        df = pl.DataFrame(frame_data)
        with pytest.raises(ColumnNotFoundError, match="colXXX") as exc_info:
            BiMap.from_frame(df, key="colXXX", value="code")
        assert exc_info.value.column == "colXXX"

        with pytest.raises(ColumnNotFoundError, match="`name`, `code`, `other`"):
            BiMap.from_frame(pd.DataFrame(frame_data), key="name", value="colXXX")

    def test_same_column(self, frame_data):
        with pytest.raises(ValueError, match="must be different"):
            list(pairs_from_frame(pl.DataFrame(frame_data), "code", "code"))

    def test_invalid_arguments(self, frame_data):
        with pytest.raises(TypeError, match="`df` of `BiMap.from_frame`"):
            BiMap.from_frame(frame_data)
        with pytest.raises(TypeError, match="`key` of `BiMap.from_frame`"):
            BiMap.from_frame(pl.DataFrame(frame_data), key=1)


class TestFactories:
    def test_from_mapping(self):
        assert_pairs(BiMap.from_mapping({"a": 1}), [("a", 1)])
        with pytest.raises(TypeError, match="must have type `Mapping`"):
            BiMap.from_mapping([("a", 1)])

    def test_from_pairs(self):
        assert_pairs(BiMap.from_pairs([("a", 1), ("b", 2)]), [("a", 1), ("b", 2)])
        with pytest.raises(TypeError):
            BiMap.from_pairs(3)

    def test_from_fields(self):
        assert_pairs(BiMap.from_fields(Point(1, 2)), [("x", 1), ("y", 2)])
        assert_pairs(BiMap.from_fields(), [])
        with pytest.raises(TypeError, match="not both"):
            BiMap.from_fields(Point(1, 2), z=3)
