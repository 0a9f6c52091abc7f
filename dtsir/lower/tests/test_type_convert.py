from __future__ import annotations

import pytest

from dtsir.ir import Type
from dtsir.lower import convert_maybe_type, convert_type
from dtsir.parser import ast

L = ast.Located(line=1, column=1)


def _pre(name: str) -> ast.PredefinedType:
    return ast.PredefinedType(loc=L, name=name)


def _fn() -> ast.FunctionType:
    return ast.FunctionType(loc=L, type_params=[], params=[], return_type=_pre("void"))


def _ctor() -> ast.ConstructorType:
    return ast.ConstructorType(loc=L, type_params=[], params=[], return_type=ast.TypeReference(loc=L, name="Foo"))


@pytest.mark.parametrize("name", ["number", "boolean", "string", "any"])
def test_predefined_maps_by_name(name: str):
    assert convert_type(_pre(name)) == Type(name)


def test_void_is_absent():
    assert convert_type(_pre("void")) is None


def test_plain_reference():
    assert convert_type(ast.TypeReference(loc=L, name="HTMLElement")) == Type("HTMLElement")
    assert convert_type(ast.TypeReference(loc=L, name="ns.Inner")) == Type("ns.Inner")


def test_generic_reference_drops_unrepresentable_args():
    node = ast.TypeReference(
        loc=L,
        name="Map",
        args=[_pre("string"), _fn(), ast.TypeReference(loc=L, name="Foo"), _pre("void")],
    )
    assert convert_type(node) == Type("Map", (Type("string"), Type("Foo")))


def test_generic_reference_with_all_args_dropped_keeps_name():
    node = ast.TypeReference(loc=L, name="Promise", args=[_pre("void")])
    assert convert_type(node) == Type("Promise", ())


def test_object_type_is_placeholder():
    node = ast.ObjectType(
        loc=L,
        members=[ast.PropertySignature(loc=L, name="x", type_ann=_pre("number"))],
    )
    assert convert_type(node) == Type("object")


def test_array_of_convertible_element():
    assert convert_type(ast.ArrayType(loc=L, element=_pre("number"))) == Type("Array", (Type("number"),))


def test_array_of_array():
    inner = ast.ArrayType(loc=L, element=ast.TypeReference(loc=L, name="Foo"))
    assert convert_type(ast.ArrayType(loc=L, element=inner)) == Type("Array", (Type("Array", (Type("Foo"),)),))


@pytest.mark.parametrize("element", [_fn(), _ctor(), _pre("void")])
def test_array_of_unrepresentable_element_degrades(element):
    assert convert_type(ast.ArrayType(loc=L, element=element)) == Type("Array")


@pytest.mark.parametrize("node", [_fn(), _ctor(), ast.TypeQuery(loc=L, name="window")])
def test_unrepresentable_types_are_absent(node):
    assert convert_type(node) is None
    assert convert_type(node) is None


def test_convert_maybe_type():
    assert convert_maybe_type(None) is None
    assert convert_maybe_type(_pre("boolean")) == Type("boolean")
