from __future__ import annotations

import ast
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree

from .ast import (
    AmbientClassDecl,
    AmbientDecl,
    AmbientElement,
    AmbientEnumDecl,
    AmbientFunctionDecl,
    AmbientInterfaceDecl,
    AmbientModuleDecl,
    AmbientVarDecl,
    AnyParam,
    ArrayType,
    CallSignature,
    CallSignatureMember,
    ClassMember,
    ConstructorDecl,
    ConstructorType,
    ConstructSignature,
    DeclarationElement,
    DeclarationSourceFile,
    EnumMember,
    ExportAssignment,
    ExportDefault,
    ExportList,
    ExternalImportDecl,
    FunctionType,
    ImportAliasDecl,
    ImportBinding,
    IndexMember,
    IndexSignature,
    InterfaceDecl,
    InterfaceElement,
    Located,
    MemberFunction,
    MemberVariable,
    MethodSignature,
    ModuleElement,
    ModuleImportDecl,
    ObjectType,
    Param,
    PredefinedType,
    PropertySignature,
    RestParam,
    TypeMember,
    TypeNode,
    TypeParam,
    TypeQuery,
    TypeReference,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class AstBuildError(ValueError):
    """
    Error raised by the AST builder for input the grammar accepts but the
    declaration AST cannot represent (e.g. an undecodable string literal).

    It carries a best-effort location so the driver can report it as a parser
    diagnostic instead of a raw Python exception.
    """

    def __init__(self, message: str, loc: Optional[Located] = None) -> None:
        super().__init__(message)
        self.loc = loc


_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    start="start",
    propagate_positions=True,
    maybe_placeholders=False,
)

_TYPE_NODES = {
    "predefined_type",
    "type_reference",
    "type_query",
    "object_type",
    "array_type",
    "function_type",
    "constructor_type",
}

_AMBIENT_NODES = {
    "ambient_var",
    "ambient_function",
    "ambient_class",
    "ambient_interface",
    "ambient_enum",
    "ambient_module",
}


def parse_declarations(source: str) -> DeclarationSourceFile:
    """Parse declaration-file source text into a `DeclarationSourceFile`.

    Raises `lark.exceptions.UnexpectedInput` for syntax errors and
    `AstBuildError` for constructs the AST cannot hold.
    """
    tree = _PARSER.parse(source)
    return _build_source_file(tree)


def _build_source_file(tree: Tree) -> DeclarationSourceFile:
    elements: List[DeclarationElement] = []
    for child in tree.children:
        if not isinstance(child, Tree):
            continue
        element = _build_declaration_element(child)
        if element is not None:
            elements.append(element)
    return DeclarationSourceFile(elements=elements)


def _build_declaration_element(tree: Tree) -> Optional[DeclarationElement]:
    kind = _name(tree)
    if kind == "interface_element":
        decl_node = _child_tree(tree, "interface_declaration")
        return InterfaceElement(loc=_loc(tree), export=_has_token(tree, "EXPORT"), decl=_build_interface(decl_node))
    if kind == "ambient_element":
        body = next(child for child in tree.children if isinstance(child, Tree))
        return AmbientElement(loc=_loc(tree), export=_has_token(tree, "EXPORT"), decl=_build_ambient(body))
    return _build_import_export(tree)


def _build_import_export(tree: Tree):
    kind = _name(tree)
    loc = _loc(tree)
    if kind == "import_alias":
        alias = _first_token(tree, "NAME")
        entity = _build_entity_name(_child_tree(tree, "entity_name"))
        return ImportAliasDecl(loc=loc, alias=alias.value, entity=entity, export=_has_token(tree, "EXPORT"))
    if kind == "external_import":
        alias = _first_token(tree, "NAME")
        module = _string_value(_first_token(tree, "STRING"))
        return ExternalImportDecl(loc=loc, alias=alias.value, module=module, export=_has_token(tree, "EXPORT"))
    if kind == "es_import":
        return _build_module_import(tree)
    if kind == "export_assignment":
        return ExportAssignment(loc=loc, entity=_build_entity_name(_child_tree(tree, "entity_name")))
    if kind == "export_default":
        return ExportDefault(loc=loc, entity=_build_entity_name(_child_tree(tree, "entity_name")))
    if kind == "export_list":
        bindings = _build_named_bindings(_child_tree(tree, "es_named_bindings"))
        module_token = _first_token(tree, "STRING", required=False)
        module = _string_value(module_token) if module_token is not None else None
        return ExportList(loc=loc, bindings=bindings, module=module)
    return None


def _build_module_import(tree: Tree) -> ModuleImportDecl:
    module = _string_value(_first_token(tree, "STRING"))
    decl = ModuleImportDecl(loc=_loc(tree), module=module)
    stack = [child for child in tree.children if isinstance(child, Tree)]
    while stack:
        node = stack.pop(0)
        kind = _name(node)
        if kind == "es_import_clause":
            stack = [child for child in node.children if isinstance(child, Tree)] + stack
        elif kind == "es_default_binding":
            decl.default = _first_token(node, "NAME").value
        elif kind == "es_namespace_binding":
            decl.namespace = _first_token(node, "NAME").value
        elif kind == "es_named_bindings":
            decl.bindings = _build_named_bindings(node)
    return decl


def _build_named_bindings(tree: Tree) -> List[ImportBinding]:
    bindings: List[ImportBinding] = []
    for spec in tree.children:
        if not isinstance(spec, Tree) or _name(spec) != "es_specifier":
            continue
        names = [tok.value for tok in spec.children if isinstance(tok, Token) and tok.type == "NAME"]
        alias = names[1] if len(names) > 1 else None
        bindings.append(ImportBinding(name=names[0], alias=alias))
    return bindings


# ---------------------------------------------------------------------------
# Ambient declarations
# ---------------------------------------------------------------------------


def _build_ambient(tree: Tree) -> AmbientDecl:
    kind = _name(tree)
    loc = _loc(tree)
    if kind == "ambient_var":
        name = _first_token(tree, "NAME")
        return AmbientVarDecl(loc=loc, name=name.value, type_ann=_build_type_annotation(tree))
    if kind == "ambient_function":
        name = _first_token(tree, "NAME")
        signature = _build_call_signature(_child_tree(tree, "call_signature"))
        return AmbientFunctionDecl(loc=loc, name=name.value, signature=signature)
    if kind == "ambient_class":
        return _build_ambient_class(tree)
    if kind == "ambient_interface":
        return AmbientInterfaceDecl(loc=loc, interface=_build_interface(_child_tree(tree, "interface_declaration")))
    if kind == "ambient_enum":
        return _build_ambient_enum(tree)
    if kind == "ambient_module":
        return _build_ambient_module(tree)
    raise AstBuildError(f"unsupported ambient declaration: {kind}", loc)


def _build_ambient_class(tree: Tree) -> AmbientClassDecl:
    name = _first_token(tree, "NAME")
    type_params: List[TypeParam] = []
    extends: Optional[TypeReference] = None
    implements: List[TypeReference] = []
    members: List[ClassMember] = []
    for child in tree.children:
        if not isinstance(child, Tree):
            continue
        kind = _name(child)
        if kind == "type_parameters":
            type_params = _build_type_params(child)
        elif kind == "class_extends":
            extends = _build_type(_child_tree(child, "type_reference"))
        elif kind == "class_implements":
            implements = [_build_type(ref) for ref in child.children if isinstance(ref, Tree)]
        else:
            members.append(_build_class_member(child))
    return AmbientClassDecl(
        loc=_loc(tree),
        name=name.value,
        type_params=type_params,
        extends=extends,
        implements=implements,
        members=members,
    )


def _build_class_member(tree: Tree) -> ClassMember:
    kind = _name(tree)
    loc = _loc(tree)
    accessibility = _build_accessibility(tree)
    if kind == "constructor_declaration":
        params_node = _child_tree(tree, "parameter_list", required=False)
        return ConstructorDecl(loc=loc, params=_build_params(params_node), accessibility=accessibility)
    if kind == "member_function":
        return MemberFunction(
            loc=loc,
            name=_property_name(tree),
            signature=_build_call_signature(_child_tree(tree, "call_signature")),
            optional=_has_token(tree, "QMARK"),
            static=_has_token(tree, "STATIC"),
            accessibility=accessibility,
        )
    if kind == "member_variable":
        return MemberVariable(
            loc=loc,
            name=_property_name(tree),
            type_ann=_build_type_annotation(tree),
            optional=_has_token(tree, "QMARK"),
            static=_has_token(tree, "STATIC"),
            accessibility=accessibility,
        )
    if kind == "index_member":
        return IndexMember(loc=loc, signature=_build_index_signature(_child_tree(tree, "index_signature")))
    raise AstBuildError(f"unsupported class member: {kind}", loc)


def _build_ambient_enum(tree: Tree) -> AmbientEnumDecl:
    name = _first_token(tree, "NAME")
    members: List[EnumMember] = []
    for child in tree.children:
        if isinstance(child, Tree) and _name(child) == "enum_member":
            tokens = [tok for tok in child.children if isinstance(tok, Token)]
            value = tokens[1].value if len(tokens) > 1 else None
            members.append(EnumMember(name=_member_name(tokens[0]), value=value))
    return AmbientEnumDecl(loc=_loc(tree), name=name.value, members=members, const=_has_token(tree, "CONST"))


def _build_ambient_module(tree: Tree) -> AmbientModuleDecl:
    name_node = _child_tree(tree, "module_name")
    path: List[str] = []
    for tok in name_node.children:
        if not isinstance(tok, Token):
            continue
        if tok.type == "STRING":
            path.append(_string_value(tok))
        elif tok.type == "NAME":
            path.append(tok.value)
    elements: List[ModuleElement] = []
    for child in tree.children:
        if not isinstance(child, Tree) or child is name_node:
            continue
        if _name(child) == "module_ambient_element":
            body = next(grand for grand in child.children if isinstance(grand, Tree))
            elements.append(ModuleElement(export=_has_token(child, "EXPORT"), decl=_build_ambient(body)))
            continue
        decl = _build_import_export(child)
        if decl is None:
            raise AstBuildError(f"unsupported module element: {_name(child)}", _loc(child))
        elements.append(ModuleElement(export=getattr(decl, "export", False), decl=decl))
    return AmbientModuleDecl(loc=_loc(tree), path=path, elements=elements)


# ---------------------------------------------------------------------------
# Interfaces and signatures
# ---------------------------------------------------------------------------


def _build_interface(tree: Tree) -> InterfaceDecl:
    name = _first_token(tree, "NAME")
    type_params: List[TypeParam] = []
    extends: List[TypeReference] = []
    members: List[TypeMember] = []
    for child in tree.children:
        if not isinstance(child, Tree):
            continue
        kind = _name(child)
        if kind == "type_parameters":
            type_params = _build_type_params(child)
        elif kind == "interface_extends":
            extends = [_build_type(ref) for ref in child.children if isinstance(ref, Tree)]
        elif kind == "object_type":
            members = _build_type_members(child)
    return InterfaceDecl(loc=_loc(tree), name=name.value, type_params=type_params, extends=extends, members=members)


def _build_type_members(tree: Tree) -> List[TypeMember]:
    members: List[TypeMember] = []
    for child in tree.children:
        if isinstance(child, Tree):
            members.append(_build_type_member(child))
    return members


def _build_type_member(tree: Tree) -> TypeMember:
    kind = _name(tree)
    loc = _loc(tree)
    if kind == "property_signature":
        return PropertySignature(
            loc=loc,
            name=_property_name(tree),
            type_ann=_build_type_annotation(tree),
            optional=_has_token(tree, "QMARK"),
        )
    if kind == "method_signature":
        return MethodSignature(
            loc=loc,
            name=_property_name(tree),
            signature=_build_call_signature(_child_tree(tree, "call_signature")),
            optional=_has_token(tree, "QMARK"),
        )
    if kind == "call_signature":
        return CallSignatureMember(loc=loc, signature=_build_call_signature(tree))
    if kind == "construct_signature":
        return ConstructSignature(loc=loc, signature=_build_call_signature(tree))
    if kind == "index_signature":
        return _build_index_signature(tree)
    raise AstBuildError(f"unsupported type member: {kind}", loc)


def _build_index_signature(tree: Tree) -> IndexSignature:
    key = _first_token(tree, "NAME")
    key_type_node = next(child for child in tree.children if isinstance(child, Tree) and _name(child) in _TYPE_NODES)
    value_type = _build_type_annotation(tree)
    if value_type is None:
        raise AstBuildError("index signature missing value type", _loc(tree))
    return IndexSignature(loc=_loc(tree), key_name=key.value, key_type=_build_type(key_type_node), value_type=value_type)


def _build_call_signature(tree: Tree) -> CallSignature:
    """Shared by call signatures, construct signatures and member functions."""
    type_params: List[TypeParam] = []
    params: List[AnyParam] = []
    for child in tree.children:
        if not isinstance(child, Tree):
            continue
        kind = _name(child)
        if kind == "type_parameters":
            type_params = _build_type_params(child)
        elif kind == "parameter_list":
            params = _build_params(child)
    return CallSignature(type_params=type_params, params=params, return_type=_build_type_annotation(tree))


def _build_params(tree: Optional[Tree]) -> List[AnyParam]:
    if tree is None:
        return []
    params: List[AnyParam] = []
    for child in tree.children:
        if not isinstance(child, Tree):
            continue
        name = _first_token(child, "NAME")
        if _name(child) == "rest_parameter":
            params.append(RestParam(loc=_loc(child), name=name.value, type_ann=_build_type_annotation(child)))
        else:
            params.append(
                Param(
                    loc=_loc(child),
                    name=name.value,
                    type_ann=_build_type_annotation(child),
                    optional=_has_token(child, "QMARK"),
                    accessibility=_build_accessibility(child),
                )
            )
    return params


def _build_type_params(tree: Tree) -> List[TypeParam]:
    params: List[TypeParam] = []
    for child in tree.children:
        if not isinstance(child, Tree) or _name(child) != "type_parameter":
            continue
        name = _first_token(child, "NAME")
        constraint_node = next((grand for grand in child.children if isinstance(grand, Tree)), None)
        constraint = _build_type(constraint_node) if constraint_node is not None else None
        params.append(TypeParam(name=name.value, constraint=constraint))
    return params


def _build_accessibility(tree: Tree) -> Optional[str]:
    node = _child_tree(tree, "accessibility", required=False)
    if node is None:
        return None
    return node.children[0].value


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def _build_type_annotation(tree: Tree) -> Optional[TypeNode]:
    node = _child_tree(tree, "type_annotation", required=False)
    if node is None:
        return None
    type_node = next(child for child in node.children if isinstance(child, Tree))
    return _build_type(type_node)


def _build_type(tree: Tree) -> TypeNode:
    kind = _name(tree)
    loc = _loc(tree)
    if kind == "predefined_type":
        return PredefinedType(loc=loc, name=tree.children[0].value)
    if kind == "type_reference":
        name = _build_entity_name(_child_tree(tree, "entity_name"))
        args_node = _child_tree(tree, "type_arguments", required=False)
        args: List[TypeNode] = []
        if args_node is not None:
            args = [_build_type(arg) for arg in args_node.children if isinstance(arg, Tree)]
        return TypeReference(loc=loc, name=name, args=args)
    if kind == "type_query":
        return TypeQuery(loc=loc, name=_build_entity_name(_child_tree(tree, "entity_name")))
    if kind == "object_type":
        return ObjectType(loc=loc, members=_build_type_members(tree))
    if kind == "array_type":
        element = next(child for child in tree.children if isinstance(child, Tree))
        return ArrayType(loc=loc, element=_build_type(element))
    if kind in {"function_type", "constructor_type"}:
        type_params: List[TypeParam] = []
        params: List[AnyParam] = []
        return_node = None
        for child in tree.children:
            if not isinstance(child, Tree):
                continue
            child_kind = _name(child)
            if child_kind == "type_parameters":
                type_params = _build_type_params(child)
            elif child_kind == "parameter_list":
                params = _build_params(child)
            else:
                return_node = child
        if return_node is None:
            raise AstBuildError(f"{kind} missing return type", loc)
        node_cls = FunctionType if kind == "function_type" else ConstructorType
        return node_cls(loc=loc, type_params=type_params, params=params, return_type=_build_type(return_node))
    raise AstBuildError(f"unsupported type node: {kind}", loc)


def _build_entity_name(tree: Tree) -> str:
    return ".".join(tok.value for tok in tree.children if isinstance(tok, Token) and tok.type == "NAME")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _property_name(tree: Tree) -> str:
    token = next(
        tok for tok in tree.children if isinstance(tok, Token) and tok.type in {"NAME", "STRING", "NUMERIC_LITERAL"}
    )
    return _member_name(token)


def _member_name(token: Token) -> str:
    if token.type == "STRING":
        return _string_value(token)
    return token.value


def _string_value(token: Token) -> str:
    try:
        value = ast.literal_eval(token.value)
    except (SyntaxError, ValueError) as err:
        raise AstBuildError(f"invalid string literal {token.value}: {err}", _loc_from_token(token)) from err
    if not isinstance(value, str):
        raise AstBuildError(f"invalid string literal {token.value}", _loc_from_token(token))
    return value


def _child_tree(tree: Tree, kind: str, required: bool = True) -> Optional[Tree]:
    node = next((child for child in tree.children if isinstance(child, Tree) and _name(child) == kind), None)
    if node is None and required:
        raise AstBuildError(f"{_name(tree)} missing {kind}", _loc(tree))
    return node


def _first_token(tree: Tree, token_type: str, required: bool = True) -> Optional[Token]:
    token = next((child for child in tree.children if isinstance(child, Token) and child.type == token_type), None)
    if token is None and required:
        raise AstBuildError(f"{_name(tree)} missing {token_type}", _loc(tree))
    return token


def _has_token(tree: Tree, token_type: str) -> bool:
    return any(isinstance(child, Token) and child.type == token_type for child in tree.children)


def _loc(tree: Tree) -> Located:
    meta = tree.meta
    return Located(line=getattr(meta, "line", 0), column=getattr(meta, "column", 0))


def _loc_from_token(token: Token) -> Located:
    return Located(line=token.line, column=token.column)


def _name(node: Tree | Token) -> str:
    if isinstance(node, Tree):
        data = node.data
        if isinstance(data, Token):
            return data.value
        return data
    if isinstance(node, Token):
        return node.type
    return str(node)
