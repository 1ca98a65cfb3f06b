"""Element-level influence analysis.

For every markup element whose own classes include contextual ones, find
which imported components are rendered inside it. Those components inherit
the element's layout, color or stacking context.
"""
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Set
from tree_sitter import Node

from .classifier import is_contextual_token
from .syntax import (
    ARRAY, BINARY, CALL, FUNCTION_TYPES, JSX_ELEMENT, JSX_EXPRESSION, JSX_FRAGMENT,
    JSX_SELF_CLOSING, TERNARY, binary_operator, call_arguments, element_children,
    element_name, expression_children, first_expression, is_markup, unwrap,
)
from .token_extractor import element_class_tokens


class InfluenceKey(NamedTuple):
    """An imported component as rendered in a file: display name + import path."""
    component: str
    import_path: str

    def __str__(self) -> str:
        return f"{self.component} ({self.import_path})"


@dataclass
class StructureResult:
    utility_tokens: Set[str] = field(default_factory=set)
    influences: Dict[InfluenceKey, Set[str]] = field(default_factory=dict)


def analyze_structure(root: Node, bindings: Dict[str, str]) -> StructureResult:
    """Walk every element in the file.

    Args:
        root: Parsed program node
        bindings: Local component name -> import path (see collect_component_bindings)

    Returns:
        All utility tokens applied through class-list attributes, and the
        contextual tokens influencing each imported component.
    """
    result = StructureResult()
    stack = [root]

    while stack:
        node = stack.pop()

        if node.type in (JSX_ELEMENT, JSX_SELF_CLOSING):
            tokens = element_class_tokens(node)
            result.utility_tokens.update(tokens)

            contextual = [token for token in dict.fromkeys(tokens) if is_contextual_token(token)]
            if contextual and bindings:
                for name, import_path in find_component_influences(node, bindings).items():
                    result.influences.setdefault(InfluenceKey(name, import_path), set()).update(contextual)

        stack.extend(reversed(node.named_children))

    return result


def find_component_influences(element: Node, bindings: Dict[str, str]) -> Dict[str, str]:
    """Imported components rendered anywhere inside ``element``.

    Follows nested elements and fragments, both branches of ternaries, the
    value side of ``&&``/``||``/``??``, markup passed to calls or returned from
    callbacks (``items.map(item => <Card />)``), and arrays of markup.

    Returns:
        Component name -> import path, in discovery order
    """
    found: Dict[str, str] = {}

    def visit(node: Node):
        if node.type in (JSX_ELEMENT, JSX_SELF_CLOSING):
            name = element_name(node)
            if name is not None and name in bindings:
                found.setdefault(name, bindings[name])
            for child in element_children(node):
                visit(child)
        elif node.type == JSX_FRAGMENT:
            for child in element_children(node):
                visit(child)
        elif node.type == JSX_EXPRESSION:
            visit_expression(first_expression(node))

    def visit_expression(expression: Optional[Node]):
        expression = unwrap(expression)
        if expression is None:
            return

        if expression.type == TERNARY:
            visit_expression(expression.child_by_field_name('consequence'))
            visit_expression(expression.child_by_field_name('alternative'))
        elif expression.type == BINARY:
            operator = binary_operator(expression)
            if operator == '&&':
                visit_expression(expression.child_by_field_name('right'))
            elif operator in ('||', '??'):
                visit_expression(expression.child_by_field_name('left'))
                visit_expression(expression.child_by_field_name('right'))
        elif is_markup(expression):
            visit(expression)
        elif expression.type == CALL:
            for argument in call_arguments(expression):
                argument = unwrap(argument)
                if is_markup(argument):
                    visit(argument)
                elif argument is not None and argument.type in FUNCTION_TYPES:
                    for returned in _returned_markup(argument):
                        visit(returned)
        elif expression.type == ARRAY:
            for item in expression_children(expression):
                item = unwrap(item)
                if is_markup(item):
                    visit(item)

    for child in element_children(element):
        visit(child)

    return found


def _returned_markup(function: Node) -> List[Node]:
    """Markup a callback returns directly or from a top-level return statement."""
    body = function.child_by_field_name('body')
    if body is None:
        return []

    if body.type == 'statement_block':
        returned = []
        for statement in expression_children(body):
            if statement.type == 'return_statement':
                value = unwrap(first_expression(statement))
                if is_markup(value):
                    returned.append(value)
        return returned

    body = unwrap(body)
    return [body] if is_markup(body) else []
