"""Tests for the markdown report."""
from datetime import datetime, timezone

import pytest

from tailwind_hierarchy.analyzer.discovery import find_component_files
from tailwind_hierarchy.analyzer.registry import run_analysis
from tailwind_hierarchy.report import REPORT_HEADER, influence_groups, render_markdown, write_report

FILES = {
    'src/Page.tsx': '''
        import Card from "./Card";
        import Footer from "./Footer";

        export default function Page() {
          return (
            <div className="flex bg-gray-100 p-4">
              <Card />
            </div>
          );
        }
    ''',
    'src/Card.tsx': '''
        export default function Card() {
          return <div className="rounded" style={{ color: "var(--fg)" }} />;
        }
    ''',
    'src/Footer.tsx': 'export default function Footer() { return null; }\n',
}


@pytest.fixture
def registry(make_project, resolver_for):
    root = make_project(FILES)
    return run_analysis(find_component_files(root / 'src'), resolver_for(root))


def test_influence_groups(registry):
    page = registry[registry.lookup('Page')]
    assert influence_groups(page) == {'bg-gray-100 flex': ['Card'], 'none': ['Footer']}


def test_aliased_import_is_not_listed_as_uninfluenced(make_project, resolver_for):
    root = make_project({
        'src/Shelf.tsx': '''
            import Pill from "./Badge";

            export default function Shelf() {
              return <div className="flex"><Pill /></div>;
            }
        ''',
        'src/Badge.tsx': 'export default function Badge() { return null; }\n',
    })
    registry = run_analysis(find_component_files(root / 'src'), resolver_for(root))
    shelf = registry[registry.lookup('Shelf')]

    assert shelf.import_sources == {'./Badge': str(root / 'src/Badge.tsx')}
    assert influence_groups(shelf) == {'flex': ['Pill']}


def test_render_markdown(registry):
    generated_at = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    text = render_markdown(registry, generated_at)

    assert text.startswith("# Tailwind Component Analysis\n\nGenerated: 2024-01-02T03:04:05+00:00")
    assert REPORT_HEADER in text
    assert "## Page\nPath: src/Page.tsx\nInfluences:\n" in text
    assert '- "bg-gray-100 flex": Card' in text
    assert "- None: Footer" in text
    assert "Classes: bg-gray-100 flex p-4" in text
    assert "CSS Props: color" in text
    assert "CSS Vars: --fg" in text
    # Most styled first; Footer has nothing to report
    assert text.index("## Page") < text.index("## Card")
    assert "## Footer" not in text


def test_write_report_creates_directories(registry, tmp_path):
    output = write_report(registry, tmp_path / 'gen' / 'nested' / 'report.md')
    assert output.is_file()
    assert "## Card" in output.read_text(encoding='utf-8')
