from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from tree_sitter import Node

from .syntax import node_text, string_value


@dataclass
class ImportInfo:
    source_module: str
    original_name: Optional[str] = None
    is_namespace: bool = False


class ImportTracker:
    def analyze_imports(self, root_node: Node) -> Dict[str, ImportInfo]:
        """
        Maps every local binding introduced by an ESM import statement to its source.
        """
        imports: Dict[str, ImportInfo] = {}

        for statement in self.import_statements(root_node):
            source_node = statement.child_by_field_name('source')
            if source_node is None:
                continue
            module_name = string_value(source_node)

            # import x, { y as z } from 'mod' / import * as ns from 'mod'
            for clause in statement.named_children:
                if clause.type != 'import_clause':
                    continue

                for child in clause.named_children:
                    # Default import: the identifier sits directly in the clause
                    if child.type == 'identifier':
                        imports[node_text(child)] = ImportInfo(module_name, 'default')

                    elif child.type == 'namespace_import':
                        for ns_child in child.named_children:
                            if ns_child.type == 'identifier':
                                imports[node_text(ns_child)] = ImportInfo(module_name, None, is_namespace=True)

                    elif child.type == 'named_imports':
                        for specifier in child.named_children:
                            if specifier.type != 'import_specifier':
                                continue
                            name_node = specifier.child_by_field_name('name')
                            alias_node = specifier.child_by_field_name('alias')
                            if name_node is None:
                                continue
                            original = node_text(name_node)
                            local_name = node_text(alias_node) if alias_node else original
                            imports[local_name] = ImportInfo(module_name, original)

        return imports

    def import_sources(self, root_node: Node) -> List[str]:
        """Import specifiers in source order, including side-effect imports."""
        sources = []
        for statement in self.import_statements(root_node):
            source_node = statement.child_by_field_name('source')
            if source_node is not None:
                sources.append(string_value(source_node))
        return sources

    @staticmethod
    def import_statements(root_node: Node) -> List[Node]:
        # ESM imports are only legal at the top level
        return [child for child in root_node.named_children if child.type == 'import_statement']


def collect_component_bindings(root_node: Node, is_local: Callable[[str], bool]) -> Dict[str, str]:
    """Local binding name -> import path for first-party default and named imports.

    Namespace imports and imports from external packages are skipped.
    """
    bindings = {}
    for local_name, info in ImportTracker().analyze_imports(root_node).items():
        if info.is_namespace or not is_local(info.source_module):
            continue
        bindings[local_name] = info.source_module
    return bindings
