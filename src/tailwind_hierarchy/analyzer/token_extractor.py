"""Recover utility class tokens from class-list expressions.

Only what can be read statically is extracted: literal text, both sides of
anything that may become the value, and keys of ``{ 'class': condition }``
maps. Values computed at runtime are ignored.
"""
from typing import List, Optional, Set
from tree_sitter import Node

from .classifier import is_utility_token
from .syntax import (
    ARRAY, BINARY, CALL, CLASS_ATTRIBUTES, JSX_ATTRIBUTE, JSX_EXPRESSION, OBJECT, STRING,
    TEMPLATE, TERNARY, attribute_name, binary_operator, call_arguments, element_attributes,
    expression_children, first_expression, is_class_merge_call, object_key, string_value,
    template_parts, template_segments, unwrap,
)


def split_class_list(text: str) -> List[str]:
    """Whitespace-split a class list, keeping utility tokens only."""
    return [token for token in text.split() if is_utility_token(token)]


def extract_tokens(node: Optional[Node]) -> List[str]:
    """Tokens an expression can statically evaluate to, in discovery order.

    May contain duplicates; callers collect into sets.
    """
    node = unwrap(node)
    if node is None:
        return []

    if node.type == STRING:
        return split_class_list(string_value(node))

    if node.type == TEMPLATE:
        tokens = []
        for kind, part in template_parts(node):
            if kind == 'text':
                tokens.extend(split_class_list(part))
            else:
                tokens.extend(extract_tokens(part))
        return tokens

    if node.type == TERNARY:
        # Either branch may run
        return (extract_tokens(node.child_by_field_name('consequence'))
                + extract_tokens(node.child_by_field_name('alternative')))

    if node.type == BINARY:
        operator = binary_operator(node)
        if operator == '&&':
            # Left side is the guard, only the right side can be the value
            return extract_tokens(node.child_by_field_name('right'))
        if operator in ('||', '??'):
            return (extract_tokens(node.child_by_field_name('left'))
                    + extract_tokens(node.child_by_field_name('right')))
        return []

    if node.type == ARRAY:
        tokens = []
        for element in expression_children(node):
            tokens.extend(extract_tokens(element))
        return tokens

    if node.type == OBJECT:
        tokens = []
        for member in expression_children(node):
            key = object_key(member)
            if key is not None:
                tokens.extend(split_class_list(key))
        return tokens

    if is_class_merge_call(node):
        tokens = []
        for argument in call_arguments(node):
            tokens.extend(extract_tokens(argument))
        return tokens

    return []


def class_attribute_tokens(value: Optional[Node]) -> List[str]:
    """Tokens of a class-list attribute value (``"..."`` or ``{expr}``)."""
    if value is None:
        return []
    if value.type == JSX_EXPRESSION:
        return extract_tokens(first_expression(value))
    return extract_tokens(value)


def element_class_tokens(element: Node) -> List[str]:
    """Tokens applied to one element through its class-list attributes."""
    tokens = []
    for name, value in element_attributes(element):
        if name in CLASS_ATTRIBUTES:
            tokens.extend(class_attribute_tokens(value))
    return tokens


def scan_utility_tokens(root: Node) -> Set[str]:
    """File-wide scan for utility tokens in styling context.

    A literal is in styling context when a class-list attribute or a
    class-merging call (``cn``, ``clsx``, ...) is among its ancestors. This
    also catches class lists built outside markup, e.g.
    ``const button = cva('px-4 py-2', ...)``.
    """
    tokens: Set[str] = set()
    stack = [(root, False)]

    while stack:
        node, in_context = stack.pop()

        if node.type == JSX_ATTRIBUTE and attribute_name(node) in CLASS_ATTRIBUTES:
            in_context = True
        elif node.type == CALL and is_class_merge_call(node):
            in_context = True

        if in_context:
            if node.type == STRING:
                tokens.update(split_class_list(string_value(node)))
            elif node.type == TEMPLATE:
                for segment in template_segments(node):
                    tokens.update(split_class_list(segment))
            elif node.type in ('pair', 'shorthand_property_identifier'):
                key = object_key(node)
                if key is not None:
                    tokens.update(split_class_list(key))

        stack.extend((child, in_context) for child in node.named_children)

    return tokens
