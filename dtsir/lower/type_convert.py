from __future__ import annotations

from typing import Dict, List, Optional

from dtsir.ir import ANY, BOOLEAN, NUMBER, OBJECT, STRING, Type, array_of
from dtsir.parser.ast import (
    ArrayType,
    ConstructorType,
    FunctionType,
    ObjectType,
    PredefinedType,
    TypeNode,
    TypeQuery,
    TypeReference,
)

_PREDEFINED: Dict[str, Optional[Type]] = {
    "any": ANY,
    "number": NUMBER,
    "boolean": BOOLEAN,
    "string": STRING,
    "void": None,
}


def convert_type(node: TypeNode) -> Optional[Type]:
    """Map one declaration type node to an IR `Type`, or None when the node
    has no IR counterpart (void, function/constructor types, type queries)."""
    if isinstance(node, PredefinedType):
        return _PREDEFINED.get(node.name)
    if isinstance(node, TypeReference):
        if not node.args:
            return Type(node.name)
        args: List[Type] = []
        for arg in node.args:
            converted = convert_type(arg)
            # Unrepresentable arguments are dropped, not reported.
            if converted is not None:
                args.append(converted)
        return Type(node.name, tuple(args))
    if isinstance(node, ObjectType):
        return OBJECT
    if isinstance(node, ArrayType):
        return array_of(convert_type(node.element))
    if isinstance(node, (FunctionType, ConstructorType, TypeQuery)):
        return None
    return None


def convert_maybe_type(node: Optional[TypeNode]) -> Optional[Type]:
    if node is None:
        return None
    return convert_type(node)
