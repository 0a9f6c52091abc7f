from __future__ import annotations

from dtsir.ir import ClassTag
from dtsir.lower import TOO_MANY_CONSTRUCTORS, convert_declarations
from dtsir.options import ConvertOptions
from dtsir.parser import parse_declarations


def test_imports_and_exports_are_discarded():
    source_file = parse_declarations(
        """
import fs = require("fs");
import Alias = Some.Namespace;
import { a } from "pkg";
export = Alias;
export default Alias;
export { a };
"""
    )
    assert convert_declarations(source_file, ConvertOptions()) == ([], [])


def test_order_and_export_flags_are_preserved():
    source_file = parse_declarations(
        """
export interface First { a(): void }
declare class Second { constructor(); constructor(x); }
import skipped = require("skipped");
interface Third {}
export declare module Fourth { class Inner {} }
declare var dropped: number;
"""
    )
    warnings, classes = convert_declarations(source_file)
    assert warnings == [TOO_MANY_CONSTRUCTORS]
    assert [(c.name, c.tag, c.exported, c.module_name) for c in classes] == [
        ("First", ClassTag.INTERFACE, True, None),
        ("Second", ClassTag.CLASS, True, None),
        ("Third", ClassTag.INTERFACE, False, None),
        ("Inner", ClassTag.CLASS, True, "Fourth"),
    ]


def test_empty_source_file():
    assert convert_declarations(parse_declarations("")) == ([], [])
