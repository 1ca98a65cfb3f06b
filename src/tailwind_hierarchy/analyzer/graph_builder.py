"""Component dependency graph using NetworkX."""
from typing import List
import networkx as nx

from .registry import ComponentRegistry


def build_dependency_graph(registry: ComponentRegistry) -> nx.DiGraph:
    """Build the directed import graph for a registry.

    Edge (A, B) means "component A imports component B". Edges are added in
    import order, so ``graph.successors(A)`` follows the source file. Imported
    files that are not in the registry still appear as nodes (without the
    ``record`` attribute).

    Returns:
        NetworkX DiGraph keyed by canonical file path
    """
    graph = nx.DiGraph()

    for identity, record in registry.items():
        graph.add_node(identity, record=record)

    for identity, record in registry.items():
        for target in record.imports:
            graph.add_edge(identity, target)

    return graph


def find_cycles(graph: nx.DiGraph) -> List[List[str]]:
    """All elementary import cycles, each rotated to start at its smallest path."""
    cycles = []
    for cycle in nx.simple_cycles(graph):
        start = cycle.index(min(cycle))
        cycles.append(cycle[start:] + cycle[:start])
    return sorted(cycles)
