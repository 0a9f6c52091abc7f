from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from dtsir.ir import DEFAULT_PARAM_TYPE, Method, Type
from dtsir.parser.ast import AnyParam, Param, RestParam, TypeNode

from .type_convert import convert_maybe_type


def param_type(type_ann: Optional[TypeNode]) -> Type:
    """Parameter type with the `string` default for untyped or unrepresentable annotations."""
    converted = convert_maybe_type(type_ann)
    if converted is None:
        return DEFAULT_PARAM_TYPE
    return converted


def split_params(params: Sequence[AnyParam]) -> Tuple[List[Param], Optional[RestParam]]:
    """
    Partition a parameter list into regular parameters and the rest parameter.

    Only the first rest parameter is kept; the grammar allows a rest parameter
    anywhere in the list, later ones are ignored.
    """
    regular: List[Param] = []
    rest: Optional[RestParam] = None
    for param in params:
        if isinstance(param, RestParam):
            if rest is None:
                rest = param
            continue
        regular.append(param)
    return regular, rest


def extract_method(name: str, params: Sequence[AnyParam], return_type: Optional[TypeNode]) -> Method:
    regular, rest = split_params(params)
    return Method(
        name=name,
        params=tuple((p.name, param_type(p.type_ann)) for p in regular),
        rest=(rest.name, param_type(rest.type_ann)) if rest is not None else None,
        return_type=convert_maybe_type(return_type),
    )
