"""Component source file discovery."""
from pathlib import Path
from typing import Iterable, List

COMPONENT_EXTENSIONS = ('.tsx', '.ts', '.jsx', '.js')

# Vendored code, build output and tool caches never hold first-party components
EXCLUDED_DIRS = {
    'node_modules', 'vendor', 'dist', 'build', 'coverage',
    '__pycache__', 'venv', '.venv',
}


def is_test_file(file_path: Path) -> bool:
    """Match Button.test.tsx, Button.spec.ts, ..."""
    return '.test.' in file_path.name or '.spec.' in file_path.name


def find_component_files(directory: str | Path,
                         extensions: Iterable[str] = COMPONENT_EXTENSIONS) -> List[Path]:
    """Recursively list candidate component files below ``directory``.

    Hidden directories, excluded directories and test files are skipped.

    Returns:
        Sorted absolute paths (empty if the directory does not exist)
    """
    directory = Path(directory).resolve()
    if not directory.is_dir():
        return []

    extensions = tuple(extensions)
    files = []
    for file_path in directory.rglob('*'):
        relative_parts = file_path.relative_to(directory).parts[:-1]
        if any(part.startswith('.') or part in EXCLUDED_DIRS for part in relative_parts):
            continue
        if not file_path.is_file() or file_path.suffix not in extensions:
            continue
        if file_path.name.endswith('.d.ts') or is_test_file(file_path):
            continue
        files.append(file_path)

    return sorted(files)


def get_component_display_name(component_path: str | Path) -> str:
    """Component name for a file: its stem, or the directory name for index files."""
    component_path = Path(component_path)
    if component_path.stem == 'index':
        return component_path.parent.name
    return component_path.stem


def relative_display_path(component_path: str | Path, project_root: str | Path) -> str:
    """Path relative to the project root (POSIX separators), or as-is if outside it."""
    try:
        return Path(component_path).relative_to(project_root).as_posix()
    except ValueError:
        return Path(component_path).as_posix()
