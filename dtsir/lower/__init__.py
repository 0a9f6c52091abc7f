"""
Declaration AST -> IR lowering.

Layered leaves first: type_convert <- signatures <- interfaces <- ambient <-
declarations. Every function here is pure; the only non-fatal anomaly is the
"Too many constructors" warning returned alongside the classes.
"""

from .ambient import TOO_MANY_CONSTRUCTORS, convert_ambient, convert_ambient_class, convert_ambient_module
from .declarations import convert_declarations
from .interfaces import convert_interface
from .signatures import extract_method, param_type, split_params
from .type_convert import convert_maybe_type, convert_type

__all__ = [
    "TOO_MANY_CONSTRUCTORS",
    "convert_ambient",
    "convert_ambient_class",
    "convert_ambient_module",
    "convert_declarations",
    "convert_interface",
    "convert_maybe_type",
    "convert_type",
    "extract_method",
    "param_type",
    "split_params",
]
