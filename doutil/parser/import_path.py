"""Locate go.mod files and derive package import paths from them."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

GOMOD_FILE_NAME = "go.mod"

_MODULE = "module"


def _unquote(text: str) -> str:
    if text[0] == "`":
        if len(text) >= 2 and text.endswith("`") and "`" not in text[1:-1]:
            return text[1:-1]
        return ""
    try:
        value = json.loads(text)
    except ValueError:
        return ""
    return value if isinstance(value, str) else ""


def module_path(content: str | bytes) -> str:
    """Return the module path declared in go.mod content, or "" if there is none."""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    for line in content.split("\n"):
        line = line.split("//", 1)[0].strip()
        if not line.startswith(_MODULE):
            continue
        rest = line[len(_MODULE):]
        stripped = rest.strip()
        if len(stripped) == len(rest) or not stripped:
            continue
        if stripped[0] in "\"`":
            return _unquote(stripped)
        return stripped
    return ""


@dataclass
class Module:
    """A module found on disk: its path and the directory holding its go.mod."""

    path: str
    rel_dir: str


def _find_mod_file(directory: str) -> tuple[str, str]:
    current = os.path.abspath(directory)
    while True:
        candidate = os.path.join(current, GOMOD_FILE_NAME)
        try:
            os.stat(candidate)
        except FileNotFoundError:
            parent = os.path.dirname(current)
            if parent == current:
                raise FileNotFoundError("can't find go mod file") from None
            current = parent
            continue
        return current, candidate


def _walk_mod_files(root: str) -> Iterator[str]:
    if not os.path.isdir(root):
        os.lstat(root)
        if os.path.basename(root) == GOMOD_FILE_NAME:
            yield root
        return
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except PermissionError:
        return
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_mod_files(entry.path)
        elif entry.name == GOMOD_FILE_NAME:
            yield entry.path


class ImportPath:
    """Import path lookups based on go.mod files."""

    def get_current_dir_mod_file_path(self) -> tuple[str, str]:
        """Return (directory, file) of the go.mod governing the working directory."""
        return _find_mod_file(os.getcwd())

    def get_mod_file_path(self, directory: str) -> tuple[str, str]:
        """Return (directory, file) of the nearest go.mod at or above directory.

        Raises FileNotFoundError when no go.mod is found.
        """
        return _find_mod_file(directory)

    def get_by_current_dir(self) -> str:
        """Return the import path of the package in the working directory."""
        directory = os.getcwd()
        mod_dir, mod_file = _find_mod_file(directory)
        mod = module_path(Path(mod_file).read_bytes())
        rel = directory.replace(mod_dir, "")
        parts = [part for part in rel.replace(os.sep, "/").split("/") if part]
        return "/".join(part for part in (mod, *parts) if part)

    def split_import_path_with_type(self, import_path_with_type: str) -> tuple[str, str]:
        """Split "import/path.Type" at its last dot into (import path, type name)."""
        dot = import_path_with_type.rfind(".")
        if dot in (-1, 0, len(import_path_with_type) - 1):
            raise ValueError(f"bad import path with type: {import_path_with_type}")
        return import_path_with_type[:dot], import_path_with_type[dot + 1:]

    def find_all_module(self, directory: str) -> list[Module]:
        """Return every module under directory in lexical walk order.

        Unreadable directories are skipped; a go.mod without a module line
        raises ValueError.
        """
        modules = []
        for mod_file in _walk_mod_files(directory):
            path = module_path(Path(mod_file).read_bytes())
            if not path:
                raise ValueError(f"{mod_file}: no module directive")
            modules.append(Module(path=path, rel_dir=os.path.dirname(mod_file)))
        return modules