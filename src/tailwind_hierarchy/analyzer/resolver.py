import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_ALIASES = {'@/': 'src/'}


class ImportResolver:
    """
    Resolves component import strings to canonical file paths on disk.

    Only first-party imports are resolved: relative specifiers ('./x',
    '../x') and specifiers starting with a configured alias prefix
    ('@/components/Card' with alias '@/' -> 'src/'). Package imports are
    never resolved.
    """

    EXTENSIONS = ['.tsx', '.ts', '.jsx', '.js']

    def __init__(self, project_root: Path, aliases: Optional[Dict[str, str]] = None):
        self.root = Path(project_root).resolve()
        aliases = DEFAULT_ALIASES if aliases is None else aliases
        # Longest prefix first so '@/components/' beats '@/'
        self.aliases = dict(sorted(aliases.items(), key=lambda item: len(item[0]), reverse=True))

    @classmethod
    def from_project(cls, project_root: Path, aliases: Optional[Dict[str, str]] = None) -> 'ImportResolver':
        """Build a resolver from configured aliases plus tsconfig.json paths."""
        merged = dict(DEFAULT_ALIASES if aliases is None else aliases)
        for alias, target in load_tsconfig_aliases(Path(project_root)).items():
            merged.setdefault(alias, target)
        return cls(project_root, merged)

    def is_local_import(self, import_string: str) -> bool:
        """True for relative imports and imports through a local alias."""
        if import_string.startswith('./') or import_string.startswith('../'):
            return True
        return any(import_string.startswith(alias) for alias in self.aliases)

    def resolve(self, current_file: Path, import_string: str) -> Optional[Path]:
        """
        Determines the canonical path of an imported component file.

        Args:
            current_file: The absolute path of the file containing the import.
            import_string: The string used in the import statement.

        Returns:
            Resolved absolute path, or None for external or missing modules.
        """
        if not import_string or not self.is_local_import(import_string):
            return None

        if import_string.startswith('.'):
            candidate = Path(current_file).parent / import_string
        else:
            alias = next(a for a in self.aliases if import_string.startswith(a))
            remainder = import_string[len(alias):].lstrip('/')
            candidate = self.root / self.aliases[alias] / remainder

        resolved = self._probe_js_path(candidate)
        if resolved is None:
            logger.debug("Unresolved import '%s' in %s", import_string, current_file)
            return None
        return resolved.resolve()

    def _probe_js_path(self, path: Path) -> Optional[Path]:
        """
        Probes for file existence using JS resolution rules:
        1. Exact match
        2. Extensions (.tsx, .ts, .jsx, .js)
        3. Directory index files
        """
        if path.suffix in self.EXTENSIONS and path.is_file():
            return path

        for ext in self.EXTENSIONS:
            candidate = path.with_name(path.name + ext)
            if candidate.is_file():
                return candidate

        if path.is_dir():
            for ext in self.EXTENSIONS:
                index_file = path / f"index{ext}"
                if index_file.is_file():
                    return index_file

        return None


def load_tsconfig_aliases(project_root: Path) -> Dict[str, str]:
    """Read compilerOptions.paths from tsconfig.json as prefix aliases.

    ``{"@ui/*": ["src/ui/*"]}`` becomes ``{"@ui/": "src/ui/"}``. Only the first
    target of each mapping is used. Missing or malformed files yield {}.
    """
    tsconfig = Path(project_root) / 'tsconfig.json'
    if not tsconfig.is_file():
        return {}

    try:
        content = tsconfig.read_text(encoding='utf-8')
        # tsconfig allows comments
        content = re.sub(r'^\s*//.*?$', '', content, flags=re.MULTILINE)
        content = re.sub(r'/\*.*?\*/', '', content, flags=re.DOTALL)
        data = json.loads(content)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable %s: %s", tsconfig, e)
        return {}

    compiler_options = data.get('compilerOptions') or {}
    base_url = _strip_dot_slash((compiler_options.get('baseUrl') or '.').rstrip('/'))
    paths: Dict[str, List[str]] = compiler_options.get('paths') or {}

    aliases = {}
    for alias, targets in paths.items():
        if not alias.endswith('/*') or not targets or not targets[0].endswith('/*'):
            continue
        # Keep the trailing slash: '@ui/' -> 'src/ui/'
        target = _strip_dot_slash(targets[0][:-1])
        if base_url not in ('', '.'):
            target = f"{base_url}/{target}"
        aliases[alias[:-1]] = target
    return aliases


def _strip_dot_slash(path: str) -> str:
    return path[2:] if path.startswith('./') else path
