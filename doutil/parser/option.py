"""Options controlling a source parser run."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TextIO


class Op(str, Enum):
    """An operation the parser is run for."""

    REPLACE = "replace"
    MOCK = "mock"
    IMPL = "impl"
    INTERFACE = "interface"
    CALLGRAPH = "callgraph"
    GEN_PROJECT = "genproject"
    GEN_PROXY = "genproxy"
    FIND = "find"
    GEN_STRUCT_FROM_SQL = "sql2struct"
    GEN_DATA_FOR_TABLE = "gendata"
    GEN_STRUCT_FROM_JSON = "json2struct"


@dataclass
class Option:
    """Settings for a parser run."""

    op: Op | None = None
    file_filter: Callable[[Any], bool] | None = None
    use_source_importer: bool = False
    replace_import_path: bool = False
    from_path: str = ""
    to_path: str = ""
    output: TextIO | None = None
    need_call: bool = False  # record which functions and methods are called
    replace_call_expr: bool = False