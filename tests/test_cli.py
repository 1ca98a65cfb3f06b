"""End-to-end tests for the command line interface."""
import pytest
from typer.testing import CliRunner

from tailwind_hierarchy.config import DEFAULT_OUTPUT_PATH, __version__, reset_config
from tailwind_hierarchy.main import app

runner = CliRunner()

PROJECT = {
    'src/App.tsx': '''
        import Layout from "./Layout";

        export default function App() {
          return <Layout />;
        }
    ''',
    'src/Layout.tsx': '''
        import Card from "@/components/Card";

        export default function Layout() {
          return <main className="grid gap-4"><Card /></main>;
        }
    ''',
    'src/components/Card.tsx': '''
        export default function Card() {
          return <div className="rounded shadow" />;
        }
    ''',
    'src/Broken.tsx': 'export const Broken = () => <div className="flex"',
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ('HIERARCHY_SOURCE_DIR', 'HIERARCHY_OUTPUT_PATH', 'HIERARCHY_ALIASES', 'HIERARCHY_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def project(make_project):
    return make_project(PROJECT)


def test_version():
    result = runner.invoke(app, ['--version'])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestAnalyzeCommand:
    def test_writes_report(self, project):
        result = runner.invoke(app, ['analyze', str(project), '--no-progress'])

        assert result.exit_code == 0, result.output
        assert 'Analyzed 3 component(s)' in result.output
        assert '1 skipped' in result.output

        report = (project / DEFAULT_OUTPUT_PATH).read_text(encoding='utf-8')
        assert '## Layout' in report
        assert '- "gap-4 grid": Card' in report

    def test_custom_output_and_source_dir(self, project):
        (project / 'app').mkdir()
        (project / 'app' / 'Only.tsx').write_text('export default () => <p className="flex" />;\n',
                                                 encoding='utf-8')
        result = runner.invoke(app, ['analyze', str(project), '-s', 'app', '-o', 'out/report.md',
                                     '--no-progress'])

        assert result.exit_code == 0, result.output
        report = (project / 'out' / 'report.md').read_text(encoding='utf-8')
        assert '## Only' in report
        assert '## Layout' not in report

    def test_reports_cycles(self, make_project):
        root = make_project({
            'src/A.tsx': 'import B from "./B";\nexport default () => <B />;\n',
            'src/B.tsx': 'import A from "./A";\nexport default () => <A />;\n',
        })
        result = runner.invoke(app, ['analyze', str(root), '--no-progress'])
        assert result.exit_code == 0, result.output
        assert 'import cycle' in result.output

    def test_missing_project(self, tmp_path):
        result = runner.invoke(app, ['analyze', str(tmp_path / 'nope'), '--no-progress'])
        assert result.exit_code == 1
        assert 'does not exist' in result.output


class TestHierarchyCommand:
    def test_tree_output(self, project):
        result = runner.invoke(app, ['hierarchy', 'App', str(project)])

        assert result.exit_code == 0, result.output
        assert 'src/App.tsx' in result.output
        assert 'src/Layout.tsx' in result.output
        assert 'src/components/Card.tsx' in result.output
        assert 'rounded' in result.output

    def test_unknown_component(self, project):
        result = runner.invoke(app, ['hierarchy', 'Nope', str(project)])
        assert result.exit_code == 1
        assert 'not found' in result.output


def test_classify():
    result = runner.invoke(app, ['classify', 'md:flex', 'card'])
    assert result.exit_code == 0
    assert 'md:flex' in result.output
    assert 'variant' in result.output
    assert 'card' in result.output
