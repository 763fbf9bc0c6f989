"""Generate interface declarations and proxy mocks for parsed packages."""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from doutil.parser.model import Func, Param, Struct, lcfirst

logger = logging.getLogger(__name__)

OFFSITE = "offsite"

_METHOD_ENTRY = re.compile(r"^[A-Za-z_]\w*\s*\(")


def _split_top_level(text: str, separators: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(text):
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif ch in separators and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts


def type_of_type_param(constraint: str) -> str:
    """Pick a concrete type satisfying a type-parameter constraint.

    "comparable" gives "int"; a union gives its last term; an interface gives
    the pick for its first non-method element; anything else is returned as is.
    """
    text = constraint.strip()
    if text == "comparable":
        return "int"

    if text.startswith("interface") and text.endswith("}"):
        body = text[len("interface"):].strip()
        if body.startswith("{"):
            for entry in _split_top_level(body[1:-1], ";\n"):
                entry = entry.strip()
                if not entry or _METHOD_ENTRY.match(entry):
                    continue
                picked = type_of_type_param(entry)
                if picked:
                    return picked
            return text

    terms = _split_top_level(text, "|")
    if len(terms) > 1:
        return terms[-1].strip()
    return text


@dataclass
class _Arg:
    name: str
    type: str
    variadic: bool = False


@dataclass
class _Processed:
    field_name: str
    field_type: str
    method_sig: str
    return_stmt: str
    call: str
    args: list[_Arg]
    reses: list[_Arg]
    imports: set[str]


def _params_block(args: list[_Arg]) -> str:
    lines = "".join(
        f"\n\t_gen_params = append(_gen_params, {arg.name.split('...', 1)[0]})" for arg in args
    )
    return f"\n\t{lines}\n\t"


def _results_block(reses: list[_Arg]) -> str:
    lines = "".join(f"\n\t var _gen_r{i} {res.type}" for i, res in enumerate(reses))
    return f"\n\t {lines}\n\t"


def _assert_block(reses: list[_Arg]) -> str:
    lines = "".join(
        f"\n\t\t\t_gen_tmpr{i}, _gen_exist := _gen_res[{i}].({res.type})"
        f"\n\t\t\tif _gen_exist {{\n\t\t\t\t_gen_r{i} = _gen_tmpr{i}\n\t\t\t}}"
        for i, res in enumerate(reses)
    )
    return f"\n\t{lines}\n\t"


def _proxy_method(mock_type: str, method: Func, processed: _Processed) -> str:
    result_list = ", ".join(f"_gen_r{i}" for i in range(len(processed.reses)))
    arg_names = ", ".join(arg.name for arg in processed.args)
    without_vari = arg_names.replace("...", "")
    trace_args = f", {without_vari} " if without_vari else ""
    res_assign = " _gen_res := " if result_list else "  "
    base_assign = f" {result_list} = " if result_list else "  "
    return_line = f" return {result_list} " if result_list else "  "
    signature = processed.method_sig.replace(method.name, "func", 1)
    return f"""
	{processed.field_name}: {signature} {{
		var _gen_ctx = {mock_type}{method.name}ProxyContext

		{_results_block(processed.reses)}

		_gen_stop := do.ProxyTraceBegin(_gen_ctx{trace_args})
		defer func() {{
			_gen_stop({result_list})
		}}()
		
		var _gen_actual_cf do.ProxyCtxFunc

		_gen_inner_cf, _gen_inner_ok := _gen_innerCtxMap.Lookup(_gen_ctx, _gen_typeParams...)
		_gen_cf, _gen_ok := do.GlobalProxyCtxMap().Lookup(_gen_ctx, _gen_typeParams...)
		if _gen_inner_ok {{
			_gen_actual_cf = _gen_inner_cf
		}} else if _gen_ok {{
			_gen_actual_cf = _gen_cf
		}}

		if _gen_actual_cf != nil {{
			_gen_params := []any{{}}
			{_params_block(processed.args)}
			{res_assign} _gen_actual_cf(_gen_ctx, _gen_base.{method.name}, _gen_params)
			{_assert_block(processed.reses)}
		}} else {{
			{base_assign} _gen_base.{method.name}({arg_names})
		}}

		{return_line}
	}},
	"""


def _mock_struct_prefix(name: str, body: str) -> str:
    return f"\n\t// ===== {name} =====\n\n\ttype {name} struct{{ {body}}}\n"


@dataclass
class Interface:
    """An interface type: its methods and (name, constraint) type parameters."""

    name: str
    pkg_path: str = ""
    pkg_name: str = ""
    type_params: list[tuple[str, str]] = field(default_factory=list)
    methods: list[Func] = field(default_factory=list)
    is_method_set: bool = True

    def mock_name(self) -> str:
        return self.name + "Mock"

    def proxy_func_name(self) -> str:
        return "Get" + self.name + "Proxy"

    def remove_first(self, c: str) -> str:
        """Return the name without its first character if it starts with c."""
        if self.name.find(c) == 0:
            return self.name[1:]
        return self.name

    def type_params_text(self) -> tuple[str, str, str]:
        """Return the declaration, reference and instantiation of the type parameters."""
        if not self.type_params:
            return "", "", ""
        full = ", ".join(f"{name} {constraint}" for name, constraint in self.type_params)
        part = ", ".join(name for name, _ in self.type_params)
        instance = ", ".join(type_of_type_param(c) for _, c in self.type_params)
        return f"[{full}]", f"[{part}]", f"[{instance}]"

    def _process(self, mode: str, method: Func) -> _Processed:
        imports: set[str] = set()
        field_name = method.name + "Func"
        last = len(method.params) - 1

        sig_parts: list[str] = []
        call_parts: list[str] = []
        args: list[_Arg] = []
        for i, param in enumerate(method.params):
            name = param.name or f"p{i}"
            if param.pkg_path:
                imports.add(param.pkg_path)
            variadic = method.variadic and i == last
            prefix = "..." if variadic else ""
            sig_parts.append(f"{name} {prefix}{param.type}")
            call_parts.append(name + prefix)
            args.append(_Arg(name + prefix, param.type, variadic))
        method_sig = f"{method.name}({', '.join(sig_parts)})"

        reses: list[_Arg] = []
        res_parts: list[str] = []
        for result in method.results:
            if result.pkg_path:
                imports.add(result.pkg_path)
            res_parts.append(f"{result.name} {result.type}" if result.name else result.type)
            reses.append(_Arg(result.name, result.type))
        res_text = ", ".join(res_parts)
        if len(method.results) > 1 or any(r.name for r in method.results):
            res_text = f"({res_text})"
        method_sig = f"{method_sig} {res_text}"

        field_type = method.signature
        if mode == OFFSITE:
            field_type = "func" + method_sig[method_sig.index("("):]

        return _Processed(
            field_name=field_name,
            field_type=field_type,
            method_sig=method_sig,
            return_stmt="return" if method.results else " ",
            call=f"{field_name}({', '.join(call_parts)})",
            args=args,
            reses=reses,
            imports=imports,
        )

    def make_mock(self, mode: str = "") -> tuple[str, str, set[str]]:
        """Return (mock type, mock source, imported package paths).

        In offsite mode an unexported interface gives ("", "", set()).
        """
        if mode == OFFSITE and not self.name[:1].isupper():
            return "", "", set()

        full, part, instance = self.type_params_text()
        mock_type = self.mock_name()
        recv = "mockRecv"
        proxy_name = self.proxy_func_name()
        origin = f"{self.pkg_name}.{self.name}" if mode == OFFSITE else self.name

        proxy_func = (
            f"\n\t// {proxy_name} returns a proxy of the interface; pass typeParams as the "
            "string literals of the type arguments when generics are used; use "
            "RegisterProxyMethod to change method behaviour globally, or the second "
            "result to change it for this instance only\n"
            f"\tfunc {proxy_name}{full}(_gen_base {origin}{part}, _gen_typeParams ...string) "
            f"({origin}{part},  *do.ProxyCtxFuncStore) {{"
            "if _gen_base == nil {\n"
            '\t\tpanic(fmt.Errorf("_gen_base cannot be nil"))\n'
            "\t}\n"
            "\t_gen_innerCtxMap := do.NewProxyCtxMap()\n"
            f"\treturn &{mock_type}{part}{{"
        )
        common = lcfirst(mock_type) + "CommonProxyContext"

        fields_text = ""
        contexts = ""
        all_contexts = f"{mock_type}ProxyContextAll = []do.ProxyContext{{"
        methods_text = ""
        proxy_methods = ""
        imports: set[str] = set()
        for method in self.methods:
            processed = self._process(mode, method)
            imports |= processed.imports

            fields_text += f"\n{processed.field_name} {processed.field_type}\n"
            context_name = f"{mock_type}{method.name}ProxyContext"
            all_contexts += f"\n\t\t{context_name},"
            contexts += f"""
		// represent {self.name}.{method.name}: {processed.field_type}
		{context_name} = func() (pctx do.ProxyContext) {{ 
			pctx = {common}
			pctx.MethodName = "{method.name}"
			return
		}} () 
		"""
            methods_text += (
                f"\nfunc ({recv} *{mock_type}{part}) {processed.method_sig} {{\n"
                f" {processed.return_stmt} {recv}.{processed.call} \n}}\n"
            )
            proxy_methods += _proxy_method(mock_type, method, processed)

        proxy_func += proxy_methods + "}, _gen_innerCtxMap}"
        source = _mock_struct_prefix(mock_type + full, fields_text)
        source += "var ("
        source += (
            f"{common} = do.ProxyContext {{\n"
            f'\t\tPkgPath: "{self.pkg_path}",\n'
            f'\t\tInterfaceName: "{self.name}",\n'
            "\t}\n\t"
        )
        source += contexts + "\n" + all_contexts + "\n}\n" + ")"
        source += "\n\n\n" + proxy_func + "\n"
        source += methods_text
        return mock_type + instance, source, imports


def _all_mocks_block(mock_types: list[str]) -> str:
    entries = "".join(f"&{t}{{}},\n\t\t\t" for t in mock_types)
    return f"\n\tvar (\n\t\tGenAllMocks = []any{{\n\t\t\t{entries}\n\t\t}}\n\t)\n\t"


@dataclass
class Package:
    """A parsed package with its module location."""

    name: str
    pkg_path: str = ""
    module_path: str | None = None
    module_dir: str = ""
    funcs: list[Func] = field(default_factory=list)
    structs: list[Struct] = field(default_factory=list)
    interfaces: list[Interface] = field(default_factory=list)

    def new_go_file_with_suffix(self, mode: str, directory: str, suffix: str) -> str:
        """Return the path of a file named suffix + ".go" for this package."""
        if self.module_path is None:
            raise ValueError(f"package {self.pkg_path!r} has no module")
        if mode == OFFSITE:
            target_dir = directory
        else:
            rel = self.pkg_path.replace(self.module_path, "")
            parts = [p for p in rel.split("/") if p]
            target_dir = os.path.join(self.module_dir, *parts)
        return os.path.join(target_dir, suffix + ".go")

    def interface_source(self) -> str:
        """Return a source file declaring an interface per struct, or "" if none."""
        content = "".join(
            text + "\n\n" for text in (s.make_interface() for s in self.structs) if text
        )
        if not content:
            return ""
        return f"package {self.name}\n{content}"

    def mock_source(self, mode: str = "", directory: str = "") -> str:
        """Return a source file of mocks for the package's interfaces, or "" if none."""
        pkg_name = os.path.basename(directory) if mode == OFFSITE else self.name

        imports: set[str] = set()
        content = ""
        mock_types: list[str] = []
        for inter in self.interfaces:
            if not inter.is_method_set:
                logger.info("have type set: %s", inter.name)
                continue
            mock_type, mock, imps = inter.make_mock(mode)
            if mock_type:
                mock_types.append(mock_type)
            imports |= imps
            content += mock + "\n\n"
        if not content:
            return ""

        import_lines = "".join(f'"{imp}"\n' for imp in sorted(imports) if imp)
        import_block = f"import (\n{import_lines})\n" if import_lines else ""
        return f"package {pkg_name}\n{import_block}{_all_mocks_block(mock_types)}{content}"

    def save_interface(self, file: str = "") -> str | None:
        """Write interface_source to file; return the path, or None if nothing was written."""
        source = self.interface_source()
        if not source:
            return None
        file = file or self.new_go_file_with_suffix("", "", "interface")
        Path(file).write_text(source, encoding="utf-8")
        return file

    def save_mock(self, mode: str = "", directory: str = "", file: str = "") -> str | None:
        """Write mock_source to file; return the path, or None if nothing was written."""
        source = self.mock_source(mode, directory)
        if not source:
            return None
        file = file or self.new_go_file_with_suffix(mode, directory, "mock")
        Path(file).write_text(source, encoding="utf-8")
        return file


@dataclass
class Packages:
    """The packages loaded for a set of patterns."""

    patterns: list[str] = field(default_factory=list)
    pkgs: list[Package] = field(default_factory=list)

    def lookup_pkg(self, name: str) -> Package | None:
        """Return the first package called name, or None."""
        return next((pkg for pkg in self.pkgs if pkg.name == name), None)


__all__ = [
    "Interface",
    "Package",
    "Packages",
    "Param",
    "type_of_type_param",
]