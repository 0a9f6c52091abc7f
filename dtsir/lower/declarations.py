from __future__ import annotations

from typing import List, Optional

from dtsir.ir import Class
from dtsir.options import ConvertOptions
from dtsir.parser.ast import AmbientElement, DeclarationSourceFile, InterfaceElement

from .ambient import ConvertResult, convert_ambient
from .interfaces import convert_interface


def convert_declarations(source_file: DeclarationSourceFile, options: Optional[ConvertOptions] = None) -> ConvertResult:
    """
    Convert every interface and ambient declaration of a source file.

    Imports and exports are dropped. Warnings and classes are concatenated in
    declaration order. `options` is accepted for the driver's benefit only.
    """
    warnings: List[str] = []
    classes: List[Class] = []
    for element in source_file.elements:
        if isinstance(element, InterfaceElement):
            classes.append(convert_interface(element.decl, element.export))
        elif isinstance(element, AmbientElement):
            result = convert_ambient(element.decl, element.export)
            if result is None:
                continue
            element_warnings, element_classes = result
            warnings.extend(element_warnings)
            classes.extend(element_classes)
    return warnings, classes
