"""Records describing parsed source code: functions, structs and walk results."""

import copy
from dataclasses import dataclass, field, replace

from doutil.parser.import_path import ImportPath

INDENT = "\t"


def ucfirst(text: str) -> str:
    """Return text with its first character upper-cased."""
    return text[:1].upper() + text[1:]


def lcfirst(text: str) -> str:
    """Return text with its first character lower-cased."""
    return text[:1].lower() + text[1:]


def indent_marker(level: int) -> str:
    """Return the prefix of a call-graph line at the given depth."""
    if level <= 0:
        return ""
    return INDENT * (level - 1) + "   " + str(level)


@dataclass
class Param:
    """A parameter or result: its name (may be empty), type and type's package."""

    name: str = ""
    type: str = ""
    pkg_path: str = ""


@dataclass
class Field:
    """A struct field or interface method entry."""

    id: str = ""
    name: str = ""
    anonymous: bool = False
    type: str = ""
    tag: str = ""
    doc: str = ""
    comment: str = ""


def _tuple_text(params: list[Param], variadic: bool = False) -> str:
    last = len(params) - 1
    parts = []
    for i, param in enumerate(params):
        type_text = ("..." if variadic and i == last else "") + param.type
        parts.append(f"{param.name} {type_text}" if param.name else type_text)
    return "(" + ", ".join(parts) + ")"


def _results_text(results: list[Param]) -> str:
    if not results:
        return ""
    if len(results) == 1 and not results[0].name:
        return " " + results[0].type
    return " " + _tuple_text(results)


def _method_suffix(func: "Func") -> str:
    return _tuple_text(func.params, func.variadic) + _results_text(func.results)


def _call_key(func: "Func") -> str:
    return f"{func.recv}.{func.name}" if func.recv else func.name


@dataclass
class Func:
    """A function or method and the calls made from its body.

    For a variadic function the last parameter's type is the element type.
    The signature is derived from the parameters when not given.
    """

    name: str = ""
    pkg_path: str = ""
    recv: str = ""
    params: list[Param] = field(default_factory=list)
    results: list[Param] = field(default_factory=list)
    variadic: bool = False
    signature: str = ""
    calls: list["Func"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.signature:
            self.signature = "func" + _method_suffix(self)

    def is_exported(self) -> bool:
        """Report whether the name starts with an upper-case letter."""
        return self.name[:1].isupper()

    def resolve_calls(self, func_map: dict[str, "Func"], depth: int) -> None:
        """Fill empty call lists from func_map, keyed "Recv.Name" or "Name", depth levels down."""
        _set_lower_calls(self.calls, func_map, 1, depth)

    def call_graph_lines(self, ignore=(), depth: int = 1) -> list[str]:
        """Return the root line and one line per call down to depth, skipping ignored packages."""
        lines = [f"root: {self.name}({self.pkg_path})"]
        _collect_call_lines(self.calls, set(ignore), 1, depth, lines)
        return lines

    def print_call_graph(self, ignore=(), depth: int = 1) -> None:
        """Print the working directory's import path and the call graph."""
        current = ImportPath().get_by_current_dir()
        print(f"root module path: {current}")
        for line in self.call_graph_lines(ignore, depth):
            print(line)


Method = Func


def _set_lower_calls(calls: list[Func], func_map: dict[str, Func], level: int, depth: int) -> None:
    if level > depth:
        return
    for i, call in enumerate(calls):
        if call.calls:
            continue
        known = func_map.get(_call_key(call))
        lower = [copy.copy(c) for c in known.calls] if known is not None else []
        calls[i] = replace(call, calls=lower)
        _set_lower_calls(lower, func_map, level + 1, depth)


def _collect_call_lines(
    calls: list[Func], ignore: set[str], level: int, depth: int, lines: list[str]
) -> None:
    if level > depth:
        return
    for call in calls:
        if call.pkg_path and call.pkg_path in ignore:
            continue
        lines.append(f"{indent_marker(level)} -> {call.name}({call.pkg_path})")
        if call.calls:
            _collect_call_lines(call.calls, ignore, level + 1, depth, lines)


@dataclass
class Struct:
    """A named type with its fields and methods."""

    name: str = ""
    pkg_path: str = ""
    pkg_name: str = ""
    id: str = ""
    type: str = ""
    doc: str = ""
    comment: str = ""
    fields: list[Field] = field(default_factory=list)
    methods: list[Func] = field(default_factory=list)

    def interface_name(self) -> str:
        """Return "I" + the capitalised name, cut before any "Impl"."""
        name = ucfirst(self.name)
        cut = name.find("Impl")
        if cut != -1:
            name = name[:cut]
        return "I" + name

    def make_interface(self) -> str:
        """Return an interface declaration of the exported methods, or "" if none."""
        exported = sorted((m for m in self.methods if m.is_exported()), key=lambda m: m.name)
        if not exported:
            return ""
        body = "; ".join(m.name + _method_suffix(m) for m in exported)
        return f"type {self.interface_name()} interface{{{body}}}"


@dataclass
class ExprResult:
    """What walking an expression found."""

    fields: list[Field] = field(default_factory=list)
    pkg_path: str = ""
    func_map: dict[str, Func] = field(default_factory=dict)

    def merge(self, other: "ExprResult") -> "ExprResult":
        """Return both results combined; the first non-empty package path wins."""
        return ExprResult(
            fields=[*self.fields, *other.fields],
            pkg_path=self.pkg_path or other.pkg_path,
            func_map={**self.func_map, **other.func_map},
        )


@dataclass
class StmtResult:
    """What walking a statement found."""

    pkg_path: str = ""
    func_map: dict[str, Func] = field(default_factory=dict)

    def merge(self, other: "StmtResult") -> "StmtResult":
        """Return both results combined; the first non-empty package path wins."""
        return StmtResult(
            pkg_path=self.pkg_path or other.pkg_path,
            func_map={**self.func_map, **other.func_map},
        )

    def merge_expr_result(self, other: ExprResult) -> "StmtResult":
        """Return this result combined with an expression's result."""
        return StmtResult(
            pkg_path=self.pkg_path or other.pkg_path,
            func_map={**self.func_map, **other.func_map},
        )


@dataclass(frozen=True)
class PkgInfo:
    """Directory and name of a parsed package."""

    dir: str = ""
    pkg_name: str = ""