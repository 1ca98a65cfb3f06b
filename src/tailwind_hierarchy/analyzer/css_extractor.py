"""CSS property and custom-property extraction from inline styles and CSS-in-JS."""
import re
from dataclasses import dataclass, field
from typing import Set
from tree_sitter import Node

from .syntax import (
    CALL, IDENTIFIER, JSX_ATTRIBUTE, MEMBER, OBJECT, STRING, STYLE_ATTRIBUTE, TEMPLATE,
    attribute_name, expression_children, node_text, object_key, string_value,
    template_segments, unwrap,
)

CUSTOM_PROPERTY = re.compile(r'--[a-zA-Z0-9-_]+')
VAR_REFERENCE = re.compile(r'var\(\s*(--[a-zA-Z0-9-_]+)')
DECLARATION = re.compile(r'([a-zA-Z-]+)\s*:')

# Template tags that mark their literal as a CSS block
STYLE_TAGS = frozenset({'css', 'keyframes', 'createGlobalStyle', 'injectGlobal'})
STYLED_ROOT = 'styled'


@dataclass
class CSSAnalysis:
    properties: Set[str] = field(default_factory=set)
    variables: Set[str] = field(default_factory=set)


def camel_to_kebab(name: str) -> str:
    """backgroundColor -> background-color, WebkitTransition -> -webkit-transition"""
    return re.sub(r'([A-Z])', r'-\1', name).lower()


def extract_css_variables(text: str, variables: Set[str]) -> None:
    """Add ``var(--x)`` references and bare ``--x`` names found in text."""
    variables.update(match.group(1) for match in VAR_REFERENCE.finditer(text))
    variables.update(CUSTOM_PROPERTY.findall(text))


def extract_css_from_string(text: str, properties: Set[str], variables: Set[str]) -> None:
    """Add custom properties, var() references and ``name:`` declarations found in text."""
    extract_css_variables(text, variables)
    for match in DECLARATION.finditer(text):
        prop = match.group(1).strip()
        if prop and not prop.startswith('--'):
            properties.add(prop)


def is_style_tag(tag: Node) -> bool:
    """Recognize styled-components / emotion template tags.

    Matches ``css``, ``keyframes``, ``styled.div``, ``styled(Button)`` and
    ``styled.div.attrs(...)``.
    """
    tag = unwrap(tag)
    if tag is None:
        return False
    if tag.type == IDENTIFIER:
        return node_text(tag) in STYLE_TAGS
    if tag.type == MEMBER:
        return _member_root(tag) == STYLED_ROOT
    if tag.type == CALL:
        function = unwrap(tag.child_by_field_name('function'))
        if function is None:
            return False
        if function.type == IDENTIFIER:
            return node_text(function) == STYLED_ROOT
        if function.type == MEMBER:
            return _member_root(function) == STYLED_ROOT
    return False


def _member_root(node: Node) -> str:
    while node is not None and node.type in (MEMBER, CALL):
        node = node.child_by_field_name('object' if node.type == MEMBER else 'function')
    return node_text(node) if node is not None and node.type == IDENTIFIER else ''


def is_style_template(node: Node) -> bool:
    """A tagged template literal whose tag is a known styling tag."""
    if node.type != CALL:
        return False
    arguments = node.child_by_field_name('arguments')
    return arguments is not None and arguments.type == TEMPLATE and is_style_tag(node.child_by_field_name('function'))


def extract_css(root: Node) -> CSSAnalysis:
    """Collect CSS property names and custom properties used in a file.

    Literals count when nested in a ``style`` attribute or a styling template.
    """
    result = CSSAnalysis()
    stack = [(root, False)]

    while stack:
        node, in_style = stack.pop()

        if node.type == JSX_ATTRIBUTE and attribute_name(node) == STYLE_ATTRIBUTE:
            in_style = True
        elif is_style_template(node):
            in_style = True

        if in_style:
            if node.type == STRING:
                extract_css_from_string(string_value(node), result.properties, result.variables)
            elif node.type == TEMPLATE:
                for segment in template_segments(node):
                    extract_css_from_string(segment, result.properties, result.variables)
            elif node.type == OBJECT:
                _extract_style_object(node, result)

        stack.extend((child, in_style) for child in node.named_children)

    return result


def _extract_style_object(node: Node, result: CSSAnalysis) -> None:
    for member in expression_children(node):
        key = object_key(member)
        if key and key.startswith('--'):
            # Custom property declared inline: style={{ '--accent': color }}
            result.variables.add(key)
        elif key:
            result.properties.add(camel_to_kebab(key))
        if member.type == 'pair':
            value = member.child_by_field_name('value')
            if value is not None and value.type == STRING:
                extract_css_variables(string_value(value), result.variables)
