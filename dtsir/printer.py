from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from . import ir
from .parser import ast


def format_type(node: Optional[ast.TypeNode]) -> str:
    if node is None:
        return "<none>"
    if isinstance(node, ast.PredefinedType):
        return node.name
    if isinstance(node, ast.TypeReference):
        if not node.args:
            return node.name
        return f"{node.name}<{', '.join(format_type(a) for a in node.args)}>"
    if isinstance(node, ast.TypeQuery):
        return f"typeof {node.name}"
    if isinstance(node, ast.ObjectType):
        members = "; ".join(format_member(m) for m in node.members)
        return f"{{ {members} }}" if members else "{}"
    if isinstance(node, ast.ArrayType):
        return f"{format_type(node.element)}[]"
    if isinstance(node, ast.FunctionType):
        return f"{format_type_params(node.type_params)}({format_params(node.params)}) => {format_type(node.return_type)}"
    if isinstance(node, ast.ConstructorType):
        return f"new {format_type_params(node.type_params)}({format_params(node.params)}) => {format_type(node.return_type)}"
    return "<invalid type>"


def format_type_params(params: Sequence[ast.TypeParam]) -> str:
    if not params:
        return ""
    parts = []
    for p in params:
        parts.append(f"{p.name} extends {format_type(p.constraint)}" if p.constraint is not None else p.name)
    return f"<{', '.join(parts)}>"


def format_param(param: ast.AnyParam) -> str:
    ann = f": {format_type(param.type_ann)}" if param.type_ann is not None else ""
    if isinstance(param, ast.RestParam):
        return f"...{param.name}{ann}"
    prefix = f"{param.accessibility} " if param.accessibility else ""
    marker = "?" if param.optional else ""
    return f"{prefix}{param.name}{marker}{ann}"


def format_params(params: Iterable[ast.AnyParam]) -> str:
    return ", ".join(format_param(p) for p in params)


def format_signature(sig: ast.CallSignature) -> str:
    ret = f": {format_type(sig.return_type)}" if sig.return_type is not None else ""
    return f"{format_type_params(sig.type_params)}({format_params(sig.params)}){ret}"


def format_member(member: ast.TypeMember) -> str:
    if isinstance(member, ast.PropertySignature):
        marker = "?" if member.optional else ""
        ann = f": {format_type(member.type_ann)}" if member.type_ann is not None else ""
        return f"{member.name}{marker}{ann}"
    if isinstance(member, ast.MethodSignature):
        marker = "?" if member.optional else ""
        return f"{member.name}{marker}{format_signature(member.signature)}"
    if isinstance(member, ast.CallSignatureMember):
        return format_signature(member.signature)
    if isinstance(member, ast.ConstructSignature):
        return f"new {format_signature(member.signature)}"
    if isinstance(member, ast.IndexSignature):
        return f"[{member.key_name}: {format_type(member.key_type)}]: {format_type(member.value_type)}"
    return "<invalid member>"


def format_class_member(member: ast.ClassMember) -> str:
    prefix = ""
    if getattr(member, "accessibility", None):
        prefix += f"{member.accessibility} "
    if getattr(member, "static", False):
        prefix += "static "
    if isinstance(member, ast.ConstructorDecl):
        return f"{prefix}constructor({format_params(member.params)})"
    if isinstance(member, ast.MemberFunction):
        marker = "?" if member.optional else ""
        return f"{prefix}{member.name}{marker}{format_signature(member.signature)}"
    if isinstance(member, ast.MemberVariable):
        marker = "?" if member.optional else ""
        ann = f": {format_type(member.type_ann)}" if member.type_ann is not None else ""
        return f"{prefix}{member.name}{marker}{ann}"
    if isinstance(member, ast.IndexMember):
        return format_member(member.signature)
    return "<invalid member>"


def _format_interface(decl: ast.InterfaceDecl, indent: str) -> List[str]:
    heading = f"{indent}interface {decl.name}{format_type_params(decl.type_params)}"
    if decl.extends:
        heading += " extends " + ", ".join(format_type(ref) for ref in decl.extends)
    lines = [heading]
    lines.extend(f"{indent}  {format_member(m)}" for m in decl.members)
    return lines


def _format_ambient(decl: ast.AmbientDecl, indent: str, export: bool) -> List[str]:
    prefix = f"{indent}{'export ' if export else ''}declare "
    if isinstance(decl, ast.AmbientVarDecl):
        ann = f": {format_type(decl.type_ann)}" if decl.type_ann is not None else ""
        return [f"{prefix}var {decl.name}{ann}"]
    if isinstance(decl, ast.AmbientFunctionDecl):
        return [f"{prefix}function {decl.name}{format_signature(decl.signature)}"]
    if isinstance(decl, ast.AmbientClassDecl):
        heading = f"{prefix}class {decl.name}{format_type_params(decl.type_params)}"
        if decl.extends is not None:
            heading += f" extends {format_type(decl.extends)}"
        if decl.implements:
            heading += " implements " + ", ".join(format_type(ref) for ref in decl.implements)
        lines = [heading]
        lines.extend(f"{indent}  {format_class_member(m)}" for m in decl.members)
        return lines
    if isinstance(decl, ast.AmbientInterfaceDecl):
        lines = _format_interface(decl.interface, indent)
        lines[0] = prefix + lines[0].lstrip()
        return lines
    if isinstance(decl, ast.AmbientEnumDecl):
        members = ", ".join(m.name if m.value is None else f"{m.name} = {m.value}" for m in decl.members)
        const = "const " if decl.const else ""
        return [f"{prefix}{const}enum {decl.name} {{ {members} }}"]
    if isinstance(decl, ast.AmbientModuleDecl):
        lines = [f"{prefix}module {'.'.join(decl.path)}"]
        for element in decl.elements:
            lines.extend(_format_element(element.decl, indent + "  ", element.export))
        return lines
    return [f"{indent}<invalid ambient declaration>"]


def _format_element(decl: object, indent: str, export: bool = False) -> List[str]:
    if isinstance(decl, ast.InterfaceElement):
        lines = _format_interface(decl.decl, indent)
        if decl.export:
            lines[0] = f"{indent}export {lines[0].lstrip()}"
        return lines
    if isinstance(decl, ast.AmbientElement):
        return _format_ambient(decl.decl, indent, decl.export)
    if isinstance(decl, ast.AmbientDecl):
        return _format_ambient(decl, indent, export)
    if isinstance(decl, ast.ImportAliasDecl):
        return [f"{indent}import {decl.alias} = {decl.entity}"]
    if isinstance(decl, ast.ExternalImportDecl):
        return [f"{indent}import {decl.alias} = require({decl.module!r})"]
    if isinstance(decl, ast.ModuleImportDecl):
        return [f"{indent}import from {decl.module!r}"]
    if isinstance(decl, ast.ExportAssignment):
        return [f"{indent}export = {decl.entity}"]
    if isinstance(decl, ast.ExportDefault):
        return [f"{indent}export default {decl.entity}"]
    if isinstance(decl, ast.ExportList):
        names = ", ".join(b.name if b.alias is None else f"{b.name} as {b.alias}" for b in decl.bindings)
        return [f"{indent}export {{ {names} }}"]
    return [f"{indent}<invalid declaration>"]


def format_source_file(source_file: ast.DeclarationSourceFile) -> str:
    lines: List[str] = []
    for element in source_file.elements:
        lines.extend(_format_element(element, ""))
    return "\n".join(lines)


def format_classes(classes: Iterable[ir.Class]) -> str:
    return "\n".join(str(cls) for cls in classes)
