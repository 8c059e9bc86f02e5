"""
A generated Python module built from AST nodes.

Imports are registered separately from statements and assembled at render
time: `__future__` first, then standard library, third party and relative
imports, then a `TYPE_CHECKING` block for imports only needed by type
checkers.
"""

from __future__ import annotations

import ast
import collections
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, order=True)
class ImportSpec:
    """`from <module> import <name>` or `import <module>` when name is None."""

    module: str
    name: str | None = None
    level: int = 0
    type_only: bool = False


class SourceFile:
    """One source unit of the output tree."""

    def __init__(self, path: Path, header: str = ""):
        self.path = path
        self.header = header
        self.imports: set[ImportSpec] = set()
        self.statements: list[ast.stmt] = []

    def add_import(self, module: str, name: str | None = None, *, level: int = 0, type_only: bool = False) -> None:
        """Register an import.

        Args:
            module: Module path, relative to the package `level` levels up when level > 0
            name: Imported name, None for a plain `import module`
            level: Number of leading dots of a relative import
            type_only: Only import under `if TYPE_CHECKING:`
        """
        spec = ImportSpec(module=module, name=name, level=level, type_only=type_only)
        if type_only and ImportSpec(module, name, level, False) in self.imports:
            return
        if not type_only:
            self.imports.discard(ImportSpec(module, name, level, True))
        self.imports.add(spec)

    def add_statement(self, statement: ast.stmt | str) -> None:
        """Append a statement, given as an AST node or as source code."""
        if isinstance(statement, str):
            self.statements.extend(ast.parse(statement).body)
        else:
            self.statements.append(statement)

    def add_statements(self, statements: list[ast.stmt | str]) -> None:
        for statement in statements:
            self.add_statement(statement)

    def render(self) -> str:
        """Render the unit to formatted source text."""
        import_nodes, type_checking_nodes = self._generate_imports()

        sections = []
        if import_nodes:
            sections.append(_unparse(import_nodes))
        if type_checking_nodes:
            block = ast.If(
                test=ast.Name(id="TYPE_CHECKING", ctx=ast.Load()),
                body=type_checking_nodes,
                orelse=[],
            )
            sections.append(_unparse([block]))
        if self.statements:
            sections.append(_unparse(self.statements))

        code = "\n\n".join(sections)
        return self._post_process_code(code)

    def _generate_imports(self) -> tuple[list[ast.stmt], list[ast.stmt]]:
        """Generate import statements as AST nodes."""
        eager = [spec for spec in self.imports if not spec.type_only]
        deferred = [spec for spec in self.imports if spec.type_only]
        if deferred:
            eager.append(ImportSpec("typing", "TYPE_CHECKING"))

        nodes: list[ast.stmt] = []

        future = [spec for spec in eager if spec.module == "__future__"]
        if future:
            nodes.extend(_import_nodes(future))

        stdlib = [spec for spec in eager if spec.level == 0 and spec.module != "__future__" and _is_stdlib(spec.module)]
        third_party = [spec for spec in eager if spec.level == 0 and not _is_stdlib(spec.module) and spec.module != "__future__"]
        relative = [spec for spec in eager if spec.level > 0]

        nodes.extend(_import_nodes(stdlib))
        nodes.extend(_import_nodes(third_party))
        nodes.extend(_import_nodes(relative))

        return nodes, _import_nodes(deferred)

    def _post_process_code(self, code: str) -> str:
        """Post-process the generated code for formatting."""
        result: list[str] = []

        for line in code.split("\n"):
            stripped = line.lstrip()
            starts_definition = stripped.startswith(("class ", "def ", "async def ", "@"))

            # Blank lines before definitions, none between decorators and their target
            if starts_definition and result and not result[-1].lstrip().startswith("@"):
                while result and result[-1] == "":
                    result.pop()
                if result and not result[-1].endswith(":"):
                    indent = len(line) - len(stripped)
                    result.extend([""] * (2 if indent == 0 else 1))

            result.append(line)

        if self.header:
            result = [self.header, ""] + result

        if result and result[-1] != "":
            result.append("")

        return "\n".join(result)


def _is_stdlib(module: str) -> bool:
    return module.split(".")[0] in sys.stdlib_module_names


def _import_nodes(specs: list[ImportSpec]) -> list[ast.stmt]:
    """Group specs per module: one `from` import per module, sorted names."""
    plain_modules = sorted({spec.module for spec in specs if spec.name is None and spec.level == 0})
    grouped: dict[tuple[int, str], set[str]] = collections.defaultdict(set)
    for spec in specs:
        if spec.name is not None:
            grouped[(spec.level, spec.module)].add(spec.name)

    nodes: list[ast.stmt] = [ast.Import(names=[ast.alias(name=module)]) for module in plain_modules]
    for level, module in sorted(grouped, key=lambda key: (-key[0], key[1])):
        names = sorted(grouped[(level, module)])
        nodes.append(
            ast.ImportFrom(
                module=module or None,
                names=[ast.alias(name=n) for n in names],
                level=level,
            )
        )
    return nodes


def _unparse(body: list[ast.stmt]) -> str:
    module = ast.Module(body=body, type_ignores=[])
    ast.fix_missing_locations(module)
    return ast.unparse(module)
