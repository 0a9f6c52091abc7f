from __future__ import annotations

from typing import List, Optional

from dtsir.ir import Class, ClassTag, Method
from dtsir.parser.ast import InterfaceDecl, MethodSignature, TypeMember

from .signatures import extract_method


def convert_member(member: TypeMember) -> Optional[Method]:
    # Property, index, call and construct signatures have no method form.
    if isinstance(member, MethodSignature):
        return extract_method(member.name, member.signature.params, member.signature.return_type)
    return None


def convert_interface(decl: InterfaceDecl, exported: bool) -> Class:
    """
    Build an interface-tagged `Class` from an interface declaration.

    Type parameters and `extends` clauses are not carried into the IR; the
    module name is filled in by the enclosing ambient module, if any.
    """
    methods: List[Method] = []
    for member in decl.members:
        method = convert_member(member)
        if method is not None:
            methods.append(method)
    return Class(
        name=decl.name,
        module_name=None,
        exported=exported,
        methods=tuple(methods),
        constructor=None,
        tag=ClassTag.INTERFACE,
    )
