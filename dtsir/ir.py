"""
Intermediate representation handed to downstream code generators.

Pure value types: a `Class` owns its `Method`s, a `Method` owns its parameter
`Type`s and a `Type` owns its argument `Type`s. Nothing is shared and nothing
is resolved; type names are kept as written.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Type:
    name: str
    args: Tuple["Type", ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        inner = ", ".join(str(a) for a in self.args)
        return f"{self.name}<{inner}>"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "args": [a.to_dict() for a in self.args]}


ANY = Type("any")
NUMBER = Type("number")
BOOLEAN = Type("boolean")
STRING = Type("string")
OBJECT = Type("object")

# Substituted for parameters without a (representable) type annotation.
DEFAULT_PARAM_TYPE = STRING

CONSTRUCTOR_NAME = "constructor"


def array_of(inner: Optional[Type]) -> Type:
    if inner is None:
        return Type("Array")
    return Type("Array", (inner,))


@dataclass(frozen=True)
class Method:
    name: str
    params: Tuple[Tuple[str, Type], ...] = ()
    rest: Optional[Tuple[str, Type]] = None
    return_type: Optional[Type] = None

    def __str__(self) -> str:
        parts = [f"{name}: {ty}" for name, ty in self.params]
        if self.rest is not None:
            parts.append(f"...{self.rest[0]}: {self.rest[1]}")
        sig = f"{self.name}({', '.join(parts)})"
        if self.return_type is not None:
            sig += f": {self.return_type}"
        return sig

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "params": [{"name": name, "type": ty.to_dict()} for name, ty in self.params],
            "rest": {"name": self.rest[0], "type": self.rest[1].to_dict()} if self.rest is not None else None,
            "return_type": self.return_type.to_dict() if self.return_type is not None else None,
        }


class ClassTag(Enum):
    INTERFACE = "interface"
    CLASS = "class"


@dataclass(frozen=True)
class Class:
    name: str
    module_name: Optional[str] = None
    exported: bool = False
    methods: Tuple[Method, ...] = ()
    constructor: Optional[Method] = None
    tag: ClassTag = ClassTag.CLASS

    def __post_init__(self) -> None:
        if self.tag is ClassTag.INTERFACE and self.constructor is not None:
            raise ValueError(f"interface '{self.name}' cannot carry a constructor")

    @property
    def qualified_name(self) -> str:
        if self.module_name:
            return f"{self.module_name}.{self.name}"
        return self.name

    def __str__(self) -> str:
        prefix = "export " if self.exported else ""
        lines = [f"{prefix}{self.tag.value} {self.qualified_name}"]
        if self.constructor is not None:
            lines.append(f"  {self.constructor}")
        lines.extend(f"  {method}" for method in self.methods)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "module_name": self.module_name,
            "exported": self.exported,
            "tag": self.tag.value,
            "constructor": self.constructor.to_dict() if self.constructor is not None else None,
            "methods": [m.to_dict() for m in self.methods],
        }


__all__ = [
    "ANY",
    "BOOLEAN",
    "CONSTRUCTOR_NAME",
    "Class",
    "ClassTag",
    "DEFAULT_PARAM_TYPE",
    "Method",
    "NUMBER",
    "OBJECT",
    "STRING",
    "Type",
    "array_of",
]
