"""Field reflection tests: annotation to kind mapping, privacy, declared defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

import pytest

from lib_env_populate.domain.fields import (
    DEFAULT_TAG,
    FieldKind,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    describe_fields,
    kind_of,
    setting,
)

if TYPE_CHECKING:
    from decimal import Decimal


@dataclass
class _Everything:
    name: str = ""
    enabled: bool = False
    plain_int: int = 0
    i8: Int8 = 0
    i16: Int16 = 0
    i32: Int32 = 0
    i64: Int64 = 0
    u8: UInt8 = 0
    u16: UInt16 = 0
    u32: UInt32 = 0
    u64: UInt64 = 0
    plain_float: float = 0.0
    f32: Float32 = 0.0
    f64: Float64 = 0.0
    timeout: timedelta = timedelta(0)
    tags: list = field(default_factory=list)
    maybe: Optional[str] = None
    _private: str = ""


def test_describe_fields_resolves_every_kind_in_declaration_order() -> None:
    kinds = [(d.name, d.kind) for d in describe_fields(_Everything)]
    assert kinds == [
        ("name", FieldKind.STRING),
        ("enabled", FieldKind.BOOL),
        ("plain_int", FieldKind.INT64),
        ("i8", FieldKind.INT8),
        ("i16", FieldKind.INT16),
        ("i32", FieldKind.INT32),
        ("i64", FieldKind.INT64),
        ("u8", FieldKind.UINT8),
        ("u16", FieldKind.UINT16),
        ("u32", FieldKind.UINT32),
        ("u64", FieldKind.UINT64),
        ("plain_float", FieldKind.FLOAT64),
        ("f32", FieldKind.FLOAT32),
        ("f64", FieldKind.FLOAT64),
        ("timeout", FieldKind.DURATION),
        ("tags", FieldKind.OTHER),
        ("maybe", FieldKind.OTHER),
        ("_private", FieldKind.STRING),
    ]


def test_underscore_fields_are_not_settable() -> None:
    settable = {d.name: d.settable for d in describe_fields(_Everything)}
    assert settable["_private"] is False
    assert settable["name"] is True


def test_setting_attaches_default_and_initial_value() -> None:
    @dataclass
    class Local:
        retries: int = setting("3", value=0)
        label: str = setting("svc", value="")

    descriptors = {d.name: d for d in describe_fields(Local)}
    assert descriptors["retries"].default == "3"
    assert descriptors["label"].default == "svc"
    assert Local().retries == 0
    assert Local().label == ""


def test_plain_metadata_default_is_read_as_string() -> None:
    @dataclass
    class Local:
        port: int = field(default=0, metadata={DEFAULT_TAG: 8080})

    assert describe_fields(Local)[0].default == "8080"


def test_kind_of_falls_back_to_other_for_unhashable_annotations() -> None:
    assert kind_of([int]) is FieldKind.OTHER
    assert kind_of(bytes) is FieldKind.OTHER


@dataclass
class _TypeCheckingOnly:
    price: Decimal | None = None
    name: str = ""


def test_type_checking_only_annotation_maps_to_other() -> None:
    kinds = {d.name: d.kind for d in describe_fields(_TypeCheckingOnly)}
    assert kinds == {"price": FieldKind.OTHER, "name": FieldKind.STRING}


def test_function_local_annotation_maps_to_other() -> None:
    class Inner:
        pass

    @dataclass
    class Holder:
        inner: Inner | None = None
        port: Int32 = 0

    kinds = {d.name: d.kind for d in describe_fields(Holder)}
    assert kinds == {"inner": FieldKind.OTHER, "port": FieldKind.INT32}


def test_setting_requires_an_initial_value() -> None:
    with pytest.raises(TypeError):
        setting("x")  # type: ignore[call-arg]
