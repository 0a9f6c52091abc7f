from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Located:
    line: int
    column: int


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class TypeNode:
    loc: Located


@dataclass
class PredefinedType(TypeNode):
    loc: Located
    name: str  # any | number | boolean | string | void


@dataclass
class TypeReference(TypeNode):
    loc: Located
    name: str
    args: List[TypeNode] = field(default_factory=list)


@dataclass
class TypeQuery(TypeNode):
    loc: Located
    name: str


@dataclass
class ObjectType(TypeNode):
    loc: Located
    members: List["TypeMember"]


@dataclass
class ArrayType(TypeNode):
    loc: Located
    element: TypeNode


@dataclass
class FunctionType(TypeNode):
    loc: Located
    type_params: List["TypeParam"]
    params: List["AnyParam"]
    return_type: TypeNode


@dataclass
class ConstructorType(TypeNode):
    loc: Located
    type_params: List["TypeParam"]
    params: List["AnyParam"]
    return_type: TypeNode


# ---------------------------------------------------------------------------
# Parameters and signatures
# ---------------------------------------------------------------------------


@dataclass
class TypeParam:
    name: str
    constraint: Optional[TypeNode] = None


@dataclass
class Param:
    loc: Located
    name: str
    type_ann: Optional[TypeNode]
    optional: bool = False
    accessibility: Optional[str] = None


@dataclass
class RestParam:
    loc: Located
    name: str
    type_ann: Optional[TypeNode]


AnyParam = Union[Param, RestParam]


@dataclass
class CallSignature:
    type_params: List[TypeParam]
    params: List[AnyParam]
    return_type: Optional[TypeNode]


# ---------------------------------------------------------------------------
# Interface / object type members
# ---------------------------------------------------------------------------


class TypeMember:
    loc: Located


@dataclass
class PropertySignature(TypeMember):
    loc: Located
    name: str
    type_ann: Optional[TypeNode]
    optional: bool = False


@dataclass
class MethodSignature(TypeMember):
    loc: Located
    name: str
    signature: CallSignature
    optional: bool = False


@dataclass
class CallSignatureMember(TypeMember):
    loc: Located
    signature: CallSignature


@dataclass
class ConstructSignature(TypeMember):
    loc: Located
    signature: CallSignature


@dataclass
class IndexSignature(TypeMember):
    loc: Located
    key_name: str
    key_type: TypeNode
    value_type: TypeNode


@dataclass
class InterfaceDecl:
    loc: Located
    name: str
    type_params: List[TypeParam]
    extends: List[TypeReference]
    members: List[TypeMember]


# ---------------------------------------------------------------------------
# Class members
# ---------------------------------------------------------------------------


class ClassMember:
    loc: Located


@dataclass
class ConstructorDecl(ClassMember):
    loc: Located
    params: List[AnyParam]
    accessibility: Optional[str] = None


@dataclass
class MemberFunction(ClassMember):
    loc: Located
    name: str
    signature: CallSignature
    optional: bool = False
    static: bool = False
    accessibility: Optional[str] = None


@dataclass
class MemberVariable(ClassMember):
    loc: Located
    name: str
    type_ann: Optional[TypeNode]
    optional: bool = False
    static: bool = False
    accessibility: Optional[str] = None


@dataclass
class IndexMember(ClassMember):
    loc: Located
    signature: IndexSignature


# ---------------------------------------------------------------------------
# Ambient declarations
# ---------------------------------------------------------------------------


class AmbientDecl:
    loc: Located


@dataclass
class AmbientVarDecl(AmbientDecl):
    loc: Located
    name: str
    type_ann: Optional[TypeNode]


@dataclass
class AmbientFunctionDecl(AmbientDecl):
    loc: Located
    name: str
    signature: CallSignature


@dataclass
class AmbientClassDecl(AmbientDecl):
    loc: Located
    name: str
    type_params: List[TypeParam]
    extends: Optional[TypeReference]
    implements: List[TypeReference]
    members: List[ClassMember]


@dataclass
class AmbientInterfaceDecl(AmbientDecl):
    loc: Located
    interface: InterfaceDecl


@dataclass
class EnumMember:
    name: str
    value: Optional[str] = None


@dataclass
class AmbientEnumDecl(AmbientDecl):
    loc: Located
    name: str
    members: List[EnumMember]
    const: bool = False


@dataclass
class ModuleElement:
    """One entry of an ambient module body together with its `export` flag."""

    export: bool
    decl: Union[AmbientDecl, "ImportDecl", "ExportDecl"]


@dataclass
class AmbientModuleDecl(AmbientDecl):
    loc: Located
    path: List[str]
    elements: List[ModuleElement]


# ---------------------------------------------------------------------------
# Imports / exports
# ---------------------------------------------------------------------------


class ImportDecl:
    loc: Located


@dataclass
class ImportAliasDecl(ImportDecl):
    """`import x = A.B;`"""

    loc: Located
    alias: str
    entity: str
    export: bool = False


@dataclass
class ExternalImportDecl(ImportDecl):
    """`import x = require("m");`"""

    loc: Located
    alias: str
    module: str
    export: bool = False


@dataclass
class ImportBinding:
    name: str
    alias: Optional[str] = None


@dataclass
class ModuleImportDecl(ImportDecl):
    """ES-style `import ... from "m";` (and the bare `import "m";`)."""

    loc: Located
    module: str
    default: Optional[str] = None
    namespace: Optional[str] = None
    bindings: List[ImportBinding] = field(default_factory=list)


class ExportDecl:
    loc: Located


@dataclass
class ExportAssignment(ExportDecl):
    """`export = x;`"""

    loc: Located
    entity: str


@dataclass
class ExportDefault(ExportDecl):
    loc: Located
    entity: str


@dataclass
class ExportList(ExportDecl):
    loc: Located
    bindings: List[ImportBinding]
    module: Optional[str] = None


# ---------------------------------------------------------------------------
# Top level
# ---------------------------------------------------------------------------


@dataclass
class InterfaceElement:
    loc: Located
    export: bool
    decl: InterfaceDecl


@dataclass
class AmbientElement:
    loc: Located
    export: bool
    decl: AmbientDecl


DeclarationElement = Union[InterfaceElement, AmbientElement, ImportDecl, ExportDecl]


@dataclass
class DeclarationSourceFile:
    elements: List[DeclarationElement]
