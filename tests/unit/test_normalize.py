"""Unit tests for input normalization."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import pytest
from pydantic import BaseModel, Field

from row_bind.builder.normalize import Normalizer, QuoteCols, RowSet, classify, normalize
from row_bind.core.config import BindConfig
from row_bind.core.enums import InputShape
from row_bind.core.exceptions import ColumnMismatchError, EmptyInputError, ShapeError


@dataclass
class User:
    username: str = ""
    age: int = 0


@dataclass
class Account:
    UserName: str = ""
    LoginCount: int = 0
    nick: str = field(default="", metadata={"db": "nick_name,omitempty"})
    _secret: str = "hidden"


class UserModel(BaseModel):
    username: str = ""
    age: int = 0
    created: datetime | None = Field(default=None, json_schema_extra={"db": "created_at"})


class TestClassify:
    @pytest.mark.parametrize(
        ("data", "shape"),
        [
            ({"a": 1}, InputShape.MAPPING),
            ([{"a": 1}], InputShape.MAPPINGS),
            (({"a": 1},), InputShape.MAPPINGS),
            (User("x", 1), InputShape.RECORD),
            ([User("x", 1)], InputShape.RECORDS),
            (QuoteCols({"a": 1}), InputShape.QUOTED),
        ],
    )
    def test_shapes(self, data: object, shape: InputShape) -> None:
        assert classify(data) is shape

    def test_none(self) -> None:
        with pytest.raises(EmptyInputError):
            classify(None)

    def test_empty_sequence(self) -> None:
        with pytest.raises(EmptyInputError):
            classify([])

    def test_mixed_sequence(self) -> None:
        with pytest.raises(ShapeError):
            classify([{"a": 1}, User("x", 1)])

    @pytest.mark.parametrize("data", [42, "text", User, object()])
    def test_unsupported(self, data: object) -> None:
        with pytest.raises(ShapeError):
            classify(data)


class TestMapping:
    def test_insertion_order(self) -> None:
        rowset = normalize({"username": "new user", "age": 18})
        assert rowset == RowSet(("username", "age"), (("new user", 18),))

    def test_sorted_keys(self) -> None:
        rowset = normalize({"b": 2, "a": 1}, BindConfig(sort_mapping_keys=True))
        assert rowset.columns == ("a", "b")
        assert rowset.rows == ((1, 2),)

    def test_none_values_are_kept(self) -> None:
        rowset = normalize({"a": None, "b": 0})
        assert rowset.rows == ((None, 0),)

    def test_non_str_keys(self) -> None:
        with pytest.raises(ShapeError):
            normalize({1: "a"})

    def test_empty_mapping(self) -> None:
        with pytest.raises(EmptyInputError):
            normalize({})


class TestMappings:
    def test_columns_fixed_by_first(self) -> None:
        rowset = normalize(
            [
                {"username": "new user", "age": 18},
                {"age": 199, "username": "new user2", "extra": True},
            ]
        )
        assert rowset.columns == ("username", "age")
        assert rowset.rows == (("new user", 18), ("new user2", 199))

    def test_missing_column(self) -> None:
        with pytest.raises(ColumnMismatchError) as exc:
            normalize([{"username": "a", "age": 1}, {"username": "b"}])
        assert exc.value.row_index == 1
        assert exc.value.column == "age"
        assert "values[1]" in str(exc.value)


class TestRecord:
    def test_dataclass(self) -> None:
        rowset = normalize(User("new user", 18))
        assert rowset == RowSet(("username", "age"), (("new user", 18),))

    def test_zero_fields_skipped(self) -> None:
        rowset = normalize(User("new user", 0))
        assert rowset.columns == ("username",)
        assert rowset.rows == (("new user",),)

    def test_naming(self) -> None:
        rowset = normalize(Account(UserName="bob", LoginCount=3, nick="b"))
        assert rowset.columns == ("user_name", "login_count", "nick_name")
        assert rowset.rows == (("bob", 3, "b"),)

    def test_private_fields_skipped(self) -> None:
        rowset = normalize(Account(UserName="bob"))
        assert "_secret" not in rowset.columns
        assert "secret" not in rowset.columns

    def test_pydantic(self) -> None:
        created = datetime(2024, 1, 2, 3, 4, 5)
        rowset = normalize(UserModel(username="new user", age=18, created=created))
        assert rowset.columns == ("username", "age", "created_at")
        assert rowset.rows == (("new user", 18, created),)

    def test_custom_tag_name(self) -> None:
        @dataclass
        class Tagged:
            name: str = field(default="", metadata={"col": "full_name"})

        rowset = Normalizer(BindConfig(tag_name="col")).normalize(Tagged("x"))
        assert rowset.columns == ("full_name",)

    def test_all_fields_unset(self) -> None:
        with pytest.raises(EmptyInputError):
            normalize(User())

    def test_duplicate_column_override(self) -> None:
        @dataclass
        class Clash:
            a: int = field(default=0, metadata={"db": "x"})
            b: int = field(default=0, metadata={"db": "x"})

        with pytest.raises(ShapeError):
            normalize(Clash(1, 2))


class TestRecords:
    def test_columns_fixed_by_first(self) -> None:
        rowset = normalize([User("new user", 18), User("new user2", 199)])
        assert rowset.columns == ("username", "age")
        assert rowset.rows == (("new user", 18), ("new user2", 199))

    def test_later_zero_values_read_against_first(self) -> None:
        rowset = normalize([User("a", 18), User("b", 0)])
        assert rowset.rows == (("a", 18), ("b", 0))

    def test_later_fields_outside_first_columns_dropped(self) -> None:
        rowset = normalize([User("a", 0), User("b", 30)])
        assert rowset.columns == ("username",)
        assert rowset.rows == (("a",), ("b",))

    def test_rows_match_column_width(self) -> None:
        rowset = normalize([User("a", 1), User("", 2), User("c", 0)])
        assert all(len(row) == len(rowset.columns) for row in rowset.rows)

    def test_later_record_missing_column(self) -> None:
        @dataclass
        class Other:
            username: str = ""

        with pytest.raises(ColumnMismatchError) as exc:
            normalize([User("a", 1), Other("b")])
        assert exc.value.row_index == 1
        assert exc.value.column == "age"


class TestEquivalentShapes:
    def test_same_content_for_every_shape(self) -> None:
        expected = RowSet(("username", "age"), (("new user", 18),))
        assert normalize({"username": "new user", "age": 18}) == expected
        assert normalize([{"username": "new user", "age": 18}]) == expected
        assert normalize(User("new user", 18)) == expected
        assert normalize([User("new user", 18)]) == expected
        assert normalize(UserModel(username="new user", age=18)) == expected


class TestQuoteCols:
    def test_unwraps_and_marks(self) -> None:
        rowset = normalize(QuoteCols({"a": 1}))
        assert rowset.quoted is True
        assert rowset.columns == ("a",)

    def test_none_inside(self) -> None:
        with pytest.raises(EmptyInputError):
            normalize(QuoteCols(None))
