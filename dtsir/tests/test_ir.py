from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from dtsir.ir import Class, ClassTag, Method, Type, array_of


def test_type_str():
    assert str(Type("number")) == "number"
    assert str(Type("Map", (Type("string"), array_of(Type("Foo"))))) == "Map<string, Array<Foo>>"
    assert str(array_of(None)) == "Array"


def test_method_str():
    method = Method("f", (("x", Type("number")),), ("rest", Type("string")), Type("boolean"))
    assert str(method) == "f(x: number, ...rest: string): boolean"
    assert str(Method("g")) == "g()"


def test_class_str_and_qualified_name():
    cls = Class(
        name="C",
        module_name="A.B",
        exported=True,
        methods=(Method("m"),),
        constructor=Method("constructor", (("x", Type("number")),)),
        tag=ClassTag.CLASS,
    )
    assert cls.qualified_name == "A.B.C"
    assert str(cls).splitlines() == [
        "export class A.B.C",
        "  constructor(x: number)",
        "  m()",
    ]
    assert Class(name="Top").qualified_name == "Top"


def test_interface_cannot_carry_constructor():
    with pytest.raises(ValueError):
        Class(name="I", constructor=Method("constructor"), tag=ClassTag.INTERFACE)


def test_values_are_immutable_and_structural():
    t = Type("Array", (Type("number"),))
    assert t == Type("Array", (Type("number"),))
    with pytest.raises(FrozenInstanceError):
        t.name = "List"  # type: ignore[misc]


def test_to_dict():
    cls = Class(
        name="I",
        exported=False,
        methods=(Method("f", (("x", Type("Array", (Type("number"),))),), None, None),),
        tag=ClassTag.INTERFACE,
    )
    assert cls.to_dict() == {
        "name": "I",
        "module_name": None,
        "exported": False,
        "tag": "interface",
        "constructor": None,
        "methods": [
            {
                "name": "f",
                "params": [
                    {"name": "x", "type": {"name": "Array", "args": [{"name": "number", "args": []}]}},
                ],
                "rest": None,
                "return_type": None,
            }
        ],
    }
