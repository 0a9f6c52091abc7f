from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from dtsir.ir import CONSTRUCTOR_NAME, Class, ClassTag, Method
from dtsir.parser.ast import (
    AmbientClassDecl,
    AmbientInterfaceDecl,
    AmbientModuleDecl,
    ConstructorDecl,
    MemberFunction,
)

from .interfaces import convert_interface
from .signatures import extract_method

TOO_MANY_CONSTRUCTORS = "Too many constructors"

ConvertResult = Tuple[List[str], List[Class]]


def convert_ambient(decl: object, exported: bool) -> Optional[ConvertResult]:
    """
    Convert one ambient declaration into `(warnings, classes)`.

    Returns None for declaration kinds with no IR counterpart (variables,
    functions, enums, and the import/export forms allowed inside modules).
    Callers drop those without a warning.
    """
    if isinstance(decl, AmbientClassDecl):
        return convert_ambient_class(decl)
    if isinstance(decl, AmbientInterfaceDecl):
        return [], [convert_interface(decl.interface, exported)]
    if isinstance(decl, AmbientModuleDecl):
        return convert_ambient_module(decl)
    return None


def convert_ambient_class(decl: AmbientClassDecl) -> ConvertResult:
    warnings: List[str] = []
    constructors: List[ConstructorDecl] = []
    functions: List[MemberFunction] = []
    for member in decl.members:
        if isinstance(member, ConstructorDecl):
            constructors.append(member)
        elif isinstance(member, MemberFunction):
            functions.append(member)
    if len(constructors) > 1:
        warnings.append(TOO_MANY_CONSTRUCTORS)
    constructor: Optional[Method] = None
    if constructors:
        # First in source order wins.
        constructor = extract_method(CONSTRUCTOR_NAME, constructors[0].params, None)
    methods = tuple(
        extract_method(fn.name, fn.signature.params, fn.signature.return_type) for fn in functions
    )
    # Ambient classes are always exported, whatever the enclosing modifier says.
    cls = Class(
        name=decl.name,
        module_name=None,
        exported=True,
        methods=methods,
        constructor=constructor,
        tag=ClassTag.CLASS,
    )
    return warnings, [cls]


def convert_ambient_module(decl: AmbientModuleDecl) -> ConvertResult:
    warnings: List[str] = []
    classes: List[Class] = []
    for element in decl.elements:
        result = convert_ambient(element.decl, element.export)
        if result is None:
            continue
        element_warnings, element_classes = result
        warnings.extend(element_warnings)
        classes.extend(element_classes)
    module_path = module_name(decl.path)
    return warnings, [_qualify(cls, module_path) for cls in classes]


def module_name(path: Sequence[str]) -> Optional[str]:
    if not path:
        return None
    return ".".join(path)


def _qualify(cls: Class, module_path: Optional[str]) -> Class:
    # Inner modules have already set their own path; prefix it with ours so the
    # class ends up with the full root-to-leaf path.
    segments = [part for part in (module_path, cls.module_name) if part]
    return replace(cls, module_name=".".join(segments) if segments else None)
