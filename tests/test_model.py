import pytest

from doutil.parser.model import (
    ExprResult,
    Field,
    Func,
    Param,
    StmtResult,
    Struct,
    indent_marker,
    lcfirst,
    ucfirst,
)


@pytest.mark.parametrize("text", ["abc", "Hello", "x", "mockType"])
def test_ucfirst_lcfirst(text):
    up = ucfirst(text)
    down = lcfirst(text)
    assert up[1:] == text[1:]
    assert up[0].isupper()
    assert down[0].islower()
    assert ucfirst(down) == up


def test_case_helpers_on_empty():
    assert ucfirst("") == ""
    assert lcfirst("") == ""


@pytest.mark.parametrize("level", [1, 2, 3, 4])
def test_indent_marker(level):
    marker = indent_marker(level)
    assert marker.endswith(str(level))
    assert marker.count("\t") == level - 1


def test_indent_marker_zero():
    assert indent_marker(0) == ""


def test_func_signature_variadic():
    f = Func(
        name="Do",
        params=[Param("ctx", "context.Context"), Param("args", "string")],
        results=[Param("", "error")],
        variadic=True,
    )
    assert f.signature.startswith("func(ctx context.Context, ")
    assert "args ...string" in f.signature
    assert f.signature.endswith(") error")


def test_func_signature_multiple_results():
    f = Func(name="Get", results=[Param("", "int"), Param("", "error")])
    assert f.signature.endswith("(int, error)")
    assert f.signature.startswith("func()")


def test_explicit_signature_kept():
    f = Func(name="Get", signature="func() bool", results=[Param("", "int")])
    assert f.signature == "func() bool"


def test_is_exported():
    assert Func(name="Run").is_exported() is True
    assert Func(name="run").is_exported() is False
    assert Func(name="").is_exported() is False


def test_interface_name():
    assert Struct(name="fileImpl").interface_name() == "IFile"
    assert Struct(name="user").interface_name() == "I" + ucfirst("user")


def test_make_interface_without_exported_methods():
    s = Struct(name="thing", methods=[Func(name="hidden")])
    assert s.make_interface() == ""


def test_make_interface():
    s = Struct(
        name="serviceImpl",
        methods=[
            Func(name="Beta"),
            Func(name="Alpha", params=[Param("x", "int")], results=[Param("", "error")]),
            Func(name="hidden"),
        ],
    )
    text = s.make_interface()
    assert text.startswith(f"type {s.interface_name()} interface{{")
    assert text.endswith("}")
    assert "Alpha(x int) error" in text
    assert text.index("Alpha(") < text.index("Beta(")
    assert "hidden" not in text


def _func_map():
    return {
        "a": Func(name="a", calls=[Func(name="b")]),
        "b": Func(name="b", calls=[Func(name="c")]),
        "S.m": Func(name="m", recv="S", calls=[Func(name="d")]),
    }


def test_resolve_calls():
    func_map = _func_map()
    root = Func(name="root", calls=[Func(name="a"), Func(name="m", recv="S")])
    root.resolve_calls(func_map, 2)
    assert [c.name for c in root.calls[0].calls] == ["b"]
    assert [c.name for c in root.calls[0].calls[0].calls] == ["c"]
    assert [c.name for c in root.calls[1].calls] == ["d"]
    assert func_map["a"].calls[0].calls == []


def test_resolve_calls_respects_depth():
    root = Func(name="root", calls=[Func(name="a"), Func(name="unknown")])
    root.resolve_calls(_func_map(), 1)
    assert [c.name for c in root.calls[0].calls] == ["b"]
    assert root.calls[0].calls[0].calls == []
    assert root.calls[1].calls == []


def test_call_graph_lines():
    root = Func(
        name="main",
        pkg_path="app",
        calls=[
            Func(name="a", pkg_path="x/y", calls=[Func(name="b")]),
            Func(name="c", pkg_path="skip"),
            Func(name="e"),
        ],
    )
    lines = root.call_graph_lines(["skip", ""], 2)
    assert lines[0] == f"root: {root.name}({root.pkg_path})"
    assert lines[1] == f"{indent_marker(1)} -> a(x/y)"
    assert lines[2] == f"{indent_marker(2)} -> b()"
    assert not any("c(skip)" in line for line in lines)
    assert len(lines) == 4
    assert len(root.call_graph_lines(["skip"], 1)) == 3


def test_print_call_graph(tmp_path, monkeypatch, capsys):
    (tmp_path / "go.mod").write_text("module example.com/demo\n")
    monkeypatch.chdir(tmp_path)
    Func(name="main", pkg_path="example.com/demo", calls=[Func(name="run")]).print_call_graph([], 1)
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "root module path: example.com/demo"
    assert out[1] == "root: main(example.com/demo)"
    assert len(out) == 3


def test_print_call_graph_without_module(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        Func(name="main").print_call_graph([], 1)


def test_expr_result_merge():
    a = ExprResult(fields=[Field(name="x")], func_map={"f": Func(name="f")})
    b = ExprResult(fields=[Field(name="y")], pkg_path="p", func_map={"g": Func(name="g")})
    merged = a.merge(b)
    assert [f.name for f in merged.fields] == ["x", "y"]
    assert merged.pkg_path == "p"
    assert set(merged.func_map) == {"f", "g"}
    assert set(a.func_map) == {"f"}
    assert ExprResult(pkg_path="q").merge(b).pkg_path == "q"


def test_stmt_result_merge():
    a = StmtResult(func_map={"f": Func(name="f")})
    b = StmtResult(pkg_path="p", func_map={"g": Func(name="g")})
    merged = a.merge(b)
    assert merged.pkg_path == "p"
    assert set(merged.func_map) == {"f", "g"}
    assert StmtResult(pkg_path="q").merge(b).pkg_path == "q"


def test_stmt_result_merge_expr_result():
    stmt = StmtResult(pkg_path="s", func_map={"f": Func(name="f")})
    expr = ExprResult(fields=[Field(name="x")], pkg_path="e", func_map={"g": Func(name="g")})
    merged = stmt.merge_expr_result(expr)
    assert merged.pkg_path == "s"
    assert set(merged.func_map) == {"f", "g"}
    assert StmtResult().merge_expr_result(expr).pkg_path == "e"