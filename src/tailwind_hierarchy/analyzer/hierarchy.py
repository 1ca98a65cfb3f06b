"""Recursive style hierarchy over the component dependency graph.

Two traversals with different bookkeeping live here:

* ``build_style_hierarchy`` tracks only the ancestors of the current branch.
  A component reached through two different paths is expanded twice, and a
  component that is its own ancestor becomes a cycle leaf.
* ``aggregate_descendants`` keeps a single visited set for the whole call, so
  every reachable component is counted once.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence
import networkx as nx

from .registry import ComponentRegistry

# Hard ceiling on hierarchy depth, independent of the graph
MAX_DEPTH = 10


@dataclass
class StyleHierarchyNode:
    """One component in a hierarchy traversal."""
    component: str
    identity: str
    classes: List[str]
    contextual_classes: List[str]
    children: List['StyleHierarchyNode'] = field(default_factory=list)
    depth: int = 0
    has_circular_reference: bool = False
    circular_components: List[str] = field(default_factory=list)

    def walk(self) -> Iterator['StyleHierarchyNode']:
        """Pre-order iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def max_depth(self) -> int:
        return max(node.depth for node in self.walk())

    def to_dict(self) -> dict:
        return {
            'component': self.component,
            'classes': self.classes,
            'contextual_classes': self.contextual_classes,
            'children': [child.to_dict() for child in self.children],
            'depth': self.depth,
            'has_circular_reference': self.has_circular_reference,
            'circular_components': self.circular_components,
        }


@dataclass
class DescendantStyles:
    utility_tokens: set = field(default_factory=set)
    css_properties: set = field(default_factory=set)
    css_variables: set = field(default_factory=set)


@dataclass
class ComponentHierarchyInfo:
    """Hierarchy node enriched with direct and aggregated descendant data."""
    component: str
    direct_classes: List[str]
    contextual_classes: List[str]
    direct_css_properties: List[str]
    direct_css_variables: List[str]
    all_child_classes: List[str]
    all_child_css_properties: List[str]
    all_child_css_variables: List[str]
    has_circular_reference: bool
    circular_components: List[str]
    children: List['ComponentHierarchyInfo']


def _dependencies(graph: nx.DiGraph, identity: str) -> List[str]:
    return list(graph.successors(identity)) if identity in graph else []


def build_style_hierarchy(identity: str, registry: ComponentRegistry, graph: nx.DiGraph,
                          depth: int = 0,
                          path_stack: Sequence[str] = ()) -> Optional[StyleHierarchyNode]:
    """Build the hierarchy rooted at ``identity``.

    Args:
        identity: Canonical path of the root component
        registry: Analyzed components
        graph: Dependency graph built from the registry
        depth: Depth of ``identity`` in the traversal
        path_stack: Ancestors of ``identity`` on the current branch

    Returns:
        The node, or None when the depth ceiling is exceeded or the component
        was never analyzed. A component already on ``path_stack`` yields a
        childless node with ``has_circular_reference`` set and the cycle
        (ancestors + repeated component) in ``circular_components``.
    """
    if depth > MAX_DEPTH:
        return None

    record = registry.get(identity)
    if record is None:
        return None

    is_cycle = identity in path_stack
    children = []
    if not is_cycle:
        branch = (*path_stack, identity)
        for dependency in _dependencies(graph, identity):
            child = build_style_hierarchy(dependency, registry, graph, depth + 1, branch)
            if child is not None:
                children.append(child)

    return StyleHierarchyNode(
        component=registry.display_path(identity),
        identity=identity,
        classes=sorted(record.utility_tokens),
        contextual_classes=record.contextual_tokens(),
        children=children,
        depth=depth,
        has_circular_reference=is_cycle,
        circular_components=[*path_stack, identity] if is_cycle else [],
    )


def aggregate_descendants(identity: str, registry: ComponentRegistry,
                          graph: nx.DiGraph) -> DescendantStyles:
    """Union of utility tokens and CSS data over every component reachable from ``identity``.

    The visited set spans the whole call, so shared and cyclic dependencies
    are expanded once.
    """
    result = DescendantStyles()
    visited = {identity}
    stack = [identity]

    while stack:
        current = stack.pop()
        for dependency in _dependencies(graph, current):
            record = registry.get(dependency)
            if record is None:
                continue
            result.utility_tokens.update(record.utility_tokens)
            result.css_properties.update(record.css_properties)
            result.css_variables.update(record.css_variables)
            if dependency not in visited:
                visited.add(dependency)
                stack.append(dependency)

    return result


def build_hierarchy_info(node: StyleHierarchyNode, registry: ComponentRegistry,
                         graph: nx.DiGraph,
                         _cache: Optional[Dict[str, DescendantStyles]] = None) -> ComponentHierarchyInfo:
    """Attach direct CSS data and aggregated descendant data to every node."""
    if _cache is None:
        _cache = {}
    if node.identity not in _cache:
        _cache[node.identity] = aggregate_descendants(node.identity, registry, graph)
    descendants = _cache[node.identity]
    record = registry[node.identity]

    return ComponentHierarchyInfo(
        component=node.component,
        direct_classes=node.classes,
        contextual_classes=node.contextual_classes,
        direct_css_properties=sorted(record.css_properties),
        direct_css_variables=sorted(record.css_variables),
        all_child_classes=sorted(descendants.utility_tokens),
        all_child_css_properties=sorted(descendants.css_properties),
        all_child_css_variables=sorted(descendants.css_variables),
        has_circular_reference=node.has_circular_reference,
        circular_components=[registry.display_path(p) for p in node.circular_components],
        children=[build_hierarchy_info(child, registry, graph, _cache) for child in node.children],
    )
