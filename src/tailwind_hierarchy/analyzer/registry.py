"""Per-file analysis and the component registry built from it.

A registry is an immutable snapshot: every call to ``run_analysis`` builds a
new one from scratch, nothing is updated incrementally.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from ..errors import AnalysisError
from .css_extractor import extract_css
from .discovery import get_component_display_name, relative_display_path
from .import_tracker import ImportTracker, collect_component_bindings
from .parser import LanguageParser, read_source
from .resolver import ImportResolver
from .structure import InfluenceKey, analyze_structure
from .token_extractor import scan_utility_tokens

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ComponentRecord:
    """Everything known about one analyzed component file."""
    file_path: str
    utility_tokens: FrozenSet[str] = frozenset()
    css_properties: FrozenSet[str] = frozenset()
    css_variables: FrozenSet[str] = frozenset()
    imports: Tuple[str, ...] = ()
    influences: Mapping = field(default_factory=lambda: MappingProxyType({}))
    # Import string as written -> canonical path, for imports that resolved
    import_sources: Mapping = field(default_factory=lambda: MappingProxyType({}))

    @property
    def display_name(self) -> str:
        return get_component_display_name(self.file_path)

    def contextual_tokens(self) -> List[str]:
        """Union of the contextual tokens over every influenced component."""
        tokens: Dict[str, None] = {}
        for classes in self.influences.values():
            tokens.update(dict.fromkeys(sorted(classes)))
        return list(tokens)

    def influences_for(self, component: str) -> FrozenSet[str]:
        """Contextual tokens influencing the imported component with this name."""
        tokens = set()
        for key, classes in self.influences.items():
            if key.component == component:
                tokens.update(classes)
        return frozenset(tokens)


@dataclass(frozen=True)
class Diagnostic:
    """A file that was skipped, and why."""
    file_path: str
    kind: str
    message: str


class ComponentRegistry(Mapping):
    """Read-only mapping of canonical file path -> ComponentRecord."""

    def __init__(self, records: Dict[str, ComponentRecord],
                 diagnostics: Iterable[Diagnostic] = (),
                 project_root: Optional[Path] = None):
        self._records = dict(records)
        self.diagnostics: Tuple[Diagnostic, ...] = tuple(diagnostics)
        self.project_root = Path(project_root).resolve() if project_root else Path.cwd().resolve()

    def __getitem__(self, identity: str) -> ComponentRecord:
        return self._records[identity]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ComponentRegistry({len(self)} components, {len(self.diagnostics)} diagnostics)"

    def display_path(self, identity: str) -> str:
        return relative_display_path(identity, self.project_root)

    def lookup(self, reference: str | Path) -> Optional[str]:
        """Find a component identity by path (absolute or project-relative) or display name."""
        candidate = Path(reference)
        for path in (candidate, self.project_root / candidate):
            identity = str(path.resolve())
            if identity in self._records:
                return identity

        matches = [identity for identity, record in self._records.items()
                   if record.display_name == str(reference)]
        return matches[0] if len(matches) == 1 else None


def analyze_source(source_code: bytes | str, file_path: str | Path,
                   resolver: ImportResolver) -> ComponentRecord:
    """Parse one file once and run every per-file pass over the tree.

    Raises:
        UnsupportedFileError: Unknown extension
        SourceParseError: Source has syntax errors
    """
    file_path = Path(file_path)
    tree = LanguageParser.for_file(file_path).parse_source(source_code, file_path)
    root = tree.root_node

    # Pass 1: which local names are first-party components
    bindings = collect_component_bindings(root, resolver.is_local_import)
    # Pass 2: element classes and contextual influence
    structure = analyze_structure(root, bindings)
    css = extract_css(root)

    imports: Dict[str, None] = {}
    import_sources: Dict[str, str] = {}
    for import_string in ImportTracker().import_sources(root):
        resolved = resolver.resolve(file_path, import_string)
        if resolved is not None:
            imports[str(resolved)] = None
            import_sources[import_string] = str(resolved)

    return ComponentRecord(
        file_path=str(file_path),
        utility_tokens=frozenset(structure.utility_tokens | scan_utility_tokens(root)),
        css_properties=frozenset(css.properties),
        css_variables=frozenset(css.variables),
        imports=tuple(imports),
        import_sources=MappingProxyType(import_sources),
        influences=MappingProxyType({
            key: frozenset(classes) for key, classes in structure.influences.items()
        }),
    )


def analyze_file(file_path: str | Path, resolver: ImportResolver) -> ComponentRecord:
    """Read and analyze one file under its canonical path.

    Raises:
        AnalysisError: Any read, grammar or parse failure
    """
    canonical = Path(file_path).resolve()
    return analyze_source(read_source(canonical), canonical, resolver)


def run_analysis(files: Iterable[str | Path], resolver: ImportResolver,
                 on_file: Optional[Callable[[Path], None]] = None) -> ComponentRegistry:
    """Analyze every file and return a fresh registry.

    Files that cannot be read or parsed are logged, recorded in
    ``registry.diagnostics`` and left out; the run itself never fails on them.

    Args:
        files: Candidate source files
        resolver: Resolves first-party imports to canonical paths
        on_file: Called after each file, e.g. to advance a progress bar
    """
    records: Dict[str, ComponentRecord] = {}
    diagnostics: List[Diagnostic] = []

    for file_path in files:
        canonical = Path(file_path).resolve()
        try:
            record = analyze_file(canonical, resolver)
        except AnalysisError as e:
            logger.warning("Skipping %s: %s", canonical, e.message)
            diagnostics.append(Diagnostic(str(canonical), e.kind, e.message))
        else:
            # Two spellings of the same file collapse onto one entry
            records[record.file_path] = record
        if on_file is not None:
            on_file(canonical)

    logger.info("Analyzed %d component(s), skipped %d", len(records), len(diagnostics))
    return ComponentRegistry(records, diagnostics, resolver.root)
