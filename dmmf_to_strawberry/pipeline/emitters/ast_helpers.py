"""
Small builders for the AST nodes shared by the emitters.
"""

from __future__ import annotations

import ast
from typing import Any


def parse_expr(expr_str: str) -> ast.expr:
    """Parse an expression string into an AST expression."""
    return ast.parse(expr_str, mode="eval").body


def to_expr(value: Any) -> ast.expr:
    if isinstance(value, ast.expr):
        return value
    return ast.Constant(value=value)


def call(func: str, *args: Any, **kwargs: Any) -> ast.Call:
    """`func(*args, **kwargs)`; None keyword values are dropped."""
    return ast.Call(
        func=parse_expr(func),
        args=[to_expr(arg) for arg in args],
        keywords=[ast.keyword(arg=key, value=to_expr(value)) for key, value in kwargs.items() if value is not None],
    )


def ann_assign(name: str, annotation: str, value: ast.expr | None = None) -> ast.AnnAssign:
    return ast.AnnAssign(
        target=ast.Name(id=name, ctx=ast.Store()),
        annotation=parse_expr(annotation),
        value=value,
        simple=1,
    )


def assign(name: str, value: ast.expr) -> ast.Assign:
    return ast.Assign(targets=[ast.Name(id=name, ctx=ast.Store())], value=value)


def class_def(
    name: str,
    body: list[ast.stmt],
    decorators: list[ast.expr] | None = None,
    bases: list[str] | None = None,
) -> ast.ClassDef:
    return ast.ClassDef(
        name=name,
        bases=[parse_expr(base) for base in bases or []],
        keywords=[],
        body=body or [ast.Pass()],
        decorator_list=decorators or [],
    )


def all_assign(names: list[str]) -> ast.Assign:
    """`__all__ = [...]`."""
    return assign("__all__", ast.List(elts=[ast.Constant(value=n) for n in names], ctx=ast.Load()))


def tuple_of_names(names: list[str]) -> ast.Tuple:
    return ast.Tuple(elts=[ast.Name(id=n, ctx=ast.Load()) for n in names], ctx=ast.Load())


def explicit_name(python_name: str, graphql_name: str) -> str | None:
    """GraphQL name to pass explicitly, None when strawberry derives it unchanged.

    Strawberry camel cases python names, which only alters names holding
    underscores.
    """
    if python_name != graphql_name or "_" in graphql_name:
        return graphql_name
    return None


def literal(value: Any) -> ast.expr:
    """AST of a literal made of dicts, lists, strings, numbers and booleans."""
    return parse_expr(repr(value))
