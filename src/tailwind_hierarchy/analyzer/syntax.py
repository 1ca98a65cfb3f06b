"""Helpers for reading tree-sitter JavaScript/TypeScript/TSX nodes.

The grammars expose markup and expressions as a closed set of node types; the
constants below name the ones the analyzers dispatch on.
"""
from typing import Iterator, List, Optional
from tree_sitter import Node

STRING = 'string'
TEMPLATE = 'template_string'
TEMPLATE_SUBSTITUTION = 'template_substitution'
TERNARY = 'ternary_expression'
BINARY = 'binary_expression'
PARENTHESIZED = 'parenthesized_expression'
ARRAY = 'array'
OBJECT = 'object'
CALL = 'call_expression'
MEMBER = 'member_expression'
IDENTIFIER = 'identifier'

JSX_ELEMENT = 'jsx_element'
JSX_SELF_CLOSING = 'jsx_self_closing_element'
# Older grammar releases emit a dedicated fragment node
JSX_FRAGMENT = 'jsx_fragment'
JSX_EXPRESSION = 'jsx_expression'
JSX_ATTRIBUTE = 'jsx_attribute'

MARKUP_TYPES = frozenset({JSX_ELEMENT, JSX_SELF_CLOSING, JSX_FRAGMENT})
FUNCTION_TYPES = frozenset({'arrow_function', 'function_expression', 'function'})

# Functions that merge/condition class lists
CLASS_MERGE_FUNCTIONS = frozenset({'cn', 'clsx', 'classNames', 'cx', 'twMerge', 'cva'})

CLASS_ATTRIBUTES = frozenset({'className', 'class'})
STYLE_ATTRIBUTE = 'style'


def node_text(node: Node) -> str:
    return node.text.decode('utf-8', errors='replace')


def expression_children(node: Node) -> List[Node]:
    """Named children minus comments."""
    return [child for child in node.named_children if child.type != 'comment']


def first_expression(node: Node) -> Optional[Node]:
    children = expression_children(node)
    return children[0] if children else None


def unwrap(node: Optional[Node]) -> Optional[Node]:
    """Strip any number of enclosing parentheses."""
    while node is not None and node.type == PARENTHESIZED:
        node = first_expression(node)
    return node


def string_value(node: Node) -> str:
    """Contents of a string literal without its quotes."""
    text = node_text(node)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in '"\'':
        return text[1:-1]
    return text


def template_parts(node: Node) -> Iterator[tuple]:
    """Yield ('text', str) and ('expr', Node) parts of a template in source order."""
    start = node.start_byte + 1
    raw = node.text
    for child in node.children:
        if child.type != TEMPLATE_SUBSTITUTION:
            continue
        yield ('text', raw[start - node.start_byte:child.start_byte - node.start_byte].decode('utf-8', errors='replace'))
        expression = first_expression(child)
        if expression is not None:
            yield ('expr', expression)
        start = child.end_byte
    yield ('text', raw[start - node.start_byte:len(raw) - 1].decode('utf-8', errors='replace'))


def template_segments(node: Node) -> List[str]:
    """Static text segments of a template literal."""
    return [part for kind, part in template_parts(node) if kind == 'text']


def binary_operator(node: Node) -> str:
    operator = node.child_by_field_name('operator')
    return operator.type if operator is not None else ''


def call_arguments(node: Node) -> List[Node]:
    arguments = node.child_by_field_name('arguments')
    if arguments is None or arguments.type != 'arguments':
        return []
    return expression_children(arguments)


def callee_name(node: Node) -> Optional[str]:
    """Name a call is made through: ``cn(...)`` -> 'cn', ``utils.cn(...)`` -> 'cn'."""
    function = unwrap(node.child_by_field_name('function'))
    if function is None:
        return None
    if function.type == IDENTIFIER:
        return node_text(function)
    if function.type == MEMBER:
        prop = function.child_by_field_name('property')
        if prop is not None:
            return node_text(prop)
    return None


def is_class_merge_call(node: Node) -> bool:
    return node.type == CALL and callee_name(node) in CLASS_MERGE_FUNCTIONS


def object_key(pair_or_shorthand: Node) -> Optional[str]:
    """String or identifier key of an object member; None for computed keys."""
    if pair_or_shorthand.type == 'shorthand_property_identifier':
        return node_text(pair_or_shorthand)
    if pair_or_shorthand.type != 'pair':
        return None
    key = pair_or_shorthand.child_by_field_name('key')
    if key is None:
        return None
    if key.type == STRING:
        return string_value(key)
    if key.type in ('property_identifier', IDENTIFIER):
        return node_text(key)
    return None


# --- JSX -------------------------------------------------------------------

def is_markup(node: Optional[Node]) -> bool:
    return node is not None and node.type in MARKUP_TYPES


def opening_tag(element: Node) -> Optional[Node]:
    """Node holding an element's name and attributes."""
    if element.type == JSX_SELF_CLOSING:
        return element
    if element.type == JSX_ELEMENT:
        return element.child_by_field_name('open_tag')
    return None


def element_name(element: Node) -> Optional[str]:
    """Tag name (``Card``, ``Card.Header``); None for fragments."""
    tag = opening_tag(element)
    if tag is None:
        return None
    name = tag.child_by_field_name('name')
    return node_text(name) if name is not None else None


def element_attributes(element: Node) -> Iterator[tuple[str, Optional[Node]]]:
    """Yield (attribute name, value node) for every plain attribute."""
    tag = opening_tag(element)
    if tag is None:
        return
    for attribute in tag.named_children:
        if attribute.type != JSX_ATTRIBUTE:
            continue
        parts = expression_children(attribute)
        if not parts:
            continue
        value = parts[1] if len(parts) > 1 else None
        yield node_text(parts[0]), value


def element_children(element: Node) -> List[Node]:
    """Child nodes between the opening and closing tags."""
    if element.type == JSX_SELF_CLOSING:
        return []
    tags = {'jsx_opening_element', 'jsx_closing_element'}
    return [child for child in expression_children(element) if child.type not in tags]


def attribute_name(attribute: Node) -> Optional[str]:
    parts = expression_children(attribute)
    return node_text(parts[0]) if parts else None
