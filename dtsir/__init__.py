"""dtsir: TypeScript declaration files (.d.ts) to a small class/method IR."""

from .driver import convert_file, convert_source
from .ir import Class, ClassTag, Method, Type
from .options import ConvertOptions

__all__ = ["Class", "ClassTag", "ConvertOptions", "Method", "Type", "convert_file", "convert_source"]
