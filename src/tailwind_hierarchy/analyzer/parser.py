"""Tree-sitter parser for JavaScript/TypeScript component sources."""
from pathlib import Path
from typing import Optional
from tree_sitter import Language, Node, Parser, Tree
import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript

from ..errors import SourceParseError, SourceReadError, UnsupportedFileError


class LanguageParser:
    """Grammar-aware parser using the tree-sitter v0.22+ API."""

    SUPPORTED_LANGUAGES = {
        '.js': 'javascript',
        '.jsx': 'javascript',
        '.mjs': 'javascript',
        '.cjs': 'javascript',
        '.ts': 'typescript',
        '.tsx': 'tsx',
    }

    _languages: dict = {}

    def __init__(self, language: str):
        """Initialize parser for given language.

        Args:
            language: One of 'javascript', 'typescript', 'tsx'

        Raises:
            ValueError: If language is not supported
        """
        self.language = language
        self.parser = Parser(self._load_language(language))

    @classmethod
    def _load_language(cls, language: str) -> Language:
        """Load (once) the grammar capsule for a language."""
        if language not in cls._languages:
            if language == 'javascript':
                # The JavaScript grammar understands JSX natively
                capsule = tsjavascript.language()
            elif language == 'typescript':
                capsule = tstypescript.language_typescript()
            elif language == 'tsx':
                capsule = tstypescript.language_tsx()
            else:
                raise ValueError(f"Unsupported language: {language}")
            cls._languages[language] = Language(capsule)
        return cls._languages[language]

    def parse_source(self, source_code: bytes | str, file_path: str | Path = '<source>') -> Tree:
        """Parse source text and return its tree.

        Tree-sitter always produces a tree; a tree containing ERROR or MISSING
        nodes is treated as a failed parse.

        Raises:
            SourceParseError: If the source has syntax errors
        """
        if isinstance(source_code, str):
            source_code = source_code.encode('utf-8')

        tree = self.parser.parse(source_code)
        if tree.root_node.has_error:
            line = _first_error_line(tree.root_node)
            where = f" near line {line}" if line else ""
            raise SourceParseError(file_path, f"syntax error{where}")
        return tree

    @classmethod
    def from_file_extension(cls, file_path: str | Path) -> Optional['LanguageParser']:
        """Create parser based on file extension.

        Returns:
            LanguageParser instance, or None if extension not supported
        """
        language = cls.SUPPORTED_LANGUAGES.get(Path(file_path).suffix.lower())
        if language:
            return cls(language)
        return None

    @classmethod
    def for_file(cls, file_path: str | Path) -> 'LanguageParser':
        """Like from_file_extension, but raise for unknown extensions."""
        parser = cls.from_file_extension(file_path)
        if parser is None:
            raise UnsupportedFileError(file_path, f"no grammar for '{Path(file_path).suffix}' files")
        return parser


def read_source(file_path: str | Path) -> bytes:
    """Return file contents as UTF-8 validated bytes.

    Raises:
        SourceReadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        with open(file_path, 'rb') as f:
            source_code = f.read()
        source_code.decode('utf-8')
    except UnicodeDecodeError:
        raise SourceReadError(file_path, "file is not valid UTF-8")
    except OSError as e:
        raise SourceReadError(file_path, e.strerror or str(e))
    return source_code


def _first_error_line(node: Node) -> Optional[int]:
    """1-based line of the first ERROR/MISSING node, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == 'ERROR' or current.is_missing:
            return current.start_point[0] + 1
        if current.has_error:
            stack.extend(reversed(current.children))
    return None
