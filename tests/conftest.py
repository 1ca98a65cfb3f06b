"""Shared fixtures: parse snippets and lay out small component projects on disk."""
from pathlib import Path
from textwrap import dedent

import pytest

from tailwind_hierarchy.analyzer.parser import LanguageParser
from tailwind_hierarchy.analyzer.resolver import ImportResolver


def _find(node, node_type):
    """First node of the given type, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == node_type:
            return current
        stack.extend(reversed(current.children))
    return None


@pytest.fixture
def parse_tsx():
    """Parse TSX source and return the root node."""
    parser = LanguageParser('tsx')

    def _parse(code: str):
        return parser.parse_source(dedent(code)).root_node

    return _parse


@pytest.fixture
def expression(parse_tsx):
    """Parse ``const value = <code>;`` and return the initializer node."""

    def _expression(code: str):
        root = parse_tsx(f"const value = {code};")
        declarator = _find(root, 'variable_declarator')
        return declarator.child_by_field_name('value')

    return _expression


@pytest.fixture
def first_node():
    return _find


@pytest.fixture
def make_project(tmp_path):
    """Write {relative path: source} into a temporary project root."""

    def _make(files: dict) -> Path:
        for relative, source in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dedent(source), encoding='utf-8')
        return tmp_path.resolve()

    return _make


@pytest.fixture
def resolver_for():
    def _resolver(project_root: Path) -> ImportResolver:
        return ImportResolver(project_root)

    return _resolver
