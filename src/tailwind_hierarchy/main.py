"""Tailwind Hierarchy CLI - contextual styling analysis for React components."""
from contextlib import nullcontext
from pathlib import Path
from typing import List

import networkx as nx
import typer
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table
from rich.tree import Tree

from .analyzer.classifier import classify_token
from .analyzer.discovery import find_component_files
from .analyzer.graph_builder import build_dependency_graph, find_cycles
from .analyzer.hierarchy import StyleHierarchyNode, aggregate_descendants, build_style_hierarchy
from .analyzer.registry import ComponentRegistry, run_analysis
from .analyzer.resolver import ImportResolver
from .config import __version__, get_config
from .report import write_report
from .utils.logger import configure_logging
from .utils.safe_console import SafeConsole

app = typer.Typer(
    name="tailwind-hierarchy",
    help="Map Tailwind classes and their contextual influence across React components",
    add_completion=False,
)
console = SafeConsole()


def _version_callback(value: bool):
    if value:
        console.print(f"tailwind-hierarchy {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True,
                                 help="Show version and exit"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress and skipped imports"),
):
    """Static Tailwind class analysis for React component trees."""
    configure_logging("DEBUG" if verbose else get_config().log_level)


def _require_project(project_path: str) -> Path:
    path = Path(project_path).resolve()
    if not path.is_dir():
        console.print(f"[bold red]Error:[/bold red] Project path does not exist: {escape(str(path))}")
        raise typer.Exit(1)
    return path


def analyze_project(project_path: Path, source_dir: str,
                    show_progress: bool = True) -> tuple[ComponentRegistry, nx.DiGraph]:
    """Discover, analyze and link every component below project_path/source_dir."""
    files = find_component_files(project_path / source_dir)
    resolver = ImportResolver.from_project(project_path, get_config().aliases)

    if show_progress:
        progress_ctx = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        )
    else:
        progress_ctx = nullcontext()

    with progress_ctx as progress:
        on_file = None
        if show_progress:
            task = progress.add_task("[cyan]Analyzing components...", total=len(files))
            on_file = lambda _path: progress.advance(task)
        registry = run_analysis(files, resolver, on_file=on_file)

    return registry, build_dependency_graph(registry)


def _print_diagnostics(registry: ComponentRegistry):
    if not registry.diagnostics:
        return
    table = Table(title="Skipped Files", title_style="bold yellow")
    table.add_column("File", style="cyan", no_wrap=False)
    table.add_column("Reason", style="magenta")
    for diagnostic in registry.diagnostics:
        table.add_row(escape(registry.display_path(diagnostic.file_path)),
                      escape(f"{diagnostic.kind}: {diagnostic.message}"))
    console.print(table)


@app.command()
def analyze(
    project_path: str = typer.Argument(".", help="Project root path"),
    source_dir: str = typer.Option(None, "--source-dir", "-s", help="Component directory below the project root (default: src)"),
    output: str = typer.Option(None, "--output", "-o", help="Report path (default: gen/tailwind-component-analysis.gen.md)"),
    no_progress: bool = typer.Option(False, "--no-progress", help="Disable the progress bar"),
):
    """Analyze all components and write the markdown report."""
    config = get_config()
    project = _require_project(project_path)
    source_dir = source_dir or config.source_dir

    console.print(f"[bold blue]Analyzing components in:[/bold blue] {escape(str(project / source_dir))}")
    registry, graph = analyze_project(project, source_dir, show_progress=not no_progress)

    summary = Table(title="Component Summary")
    summary.add_column("Component", style="cyan", no_wrap=False)
    summary.add_column("Classes", justify="right", style="yellow")
    summary.add_column("Contextual", justify="right", style="green")
    summary.add_column("Imports", justify="right", style="magenta")
    for identity, record in sorted(registry.items(), key=lambda item: -len(item[1].utility_tokens)):
        summary.add_row(escape(registry.display_path(identity)), str(len(record.utility_tokens)),
                        str(len(record.contextual_tokens())), str(len(record.imports)))
    if len(registry):
        console.print(summary)

    cycles = find_cycles(graph)
    if cycles:
        console.print(f"\n[bold yellow]⚠ {len(cycles)} import cycle(s):[/bold yellow]")
        for cycle in cycles:
            chain = " → ".join(registry.display_path(p) for p in cycle + cycle[:1])
            console.print(f"  ↻ {escape(chain)}")

    _print_diagnostics(registry)

    report_path = write_report(registry, project / (output or config.output_path))
    console.print(f"\n[bold green]✓ Analyzed {len(registry)} component(s)[/bold green]"
                  f" [dim]({len(registry.diagnostics)} skipped)[/dim]")
    console.print(f"[dim]Report written to {escape(str(report_path))}[/dim]")


def _render_tree(node: StyleHierarchyNode, registry: ComponentRegistry, tree: Tree = None) -> Tree:
    label = f"[bold cyan]{escape(node.component)}[/bold cyan]"
    if node.has_circular_reference:
        chain = " → ".join(registry.display_path(p) for p in node.circular_components)
        label += f" [red]↻ cycle: {escape(chain)}[/red]"
    elif node.contextual_classes:
        label += f" [green]{escape(' '.join(node.contextual_classes))}[/green]"

    branch = tree.add(label) if tree is not None else Tree(label)
    for child in node.children:
        _render_tree(child, registry, branch)
    return branch


@app.command()
def hierarchy(
    component: str = typer.Argument(..., help="Component name or file path"),
    project_path: str = typer.Argument(".", help="Project root path"),
    source_dir: str = typer.Option(None, "--source-dir", "-s", help="Component directory below the project root (default: src)"),
):
    """Show the style hierarchy rooted at one component."""
    project = _require_project(project_path)
    registry, graph = analyze_project(project, source_dir or get_config().source_dir, show_progress=False)

    identity = registry.lookup(component)
    if identity is None:
        console.print(f"[bold red]Error:[/bold red] Component not found or ambiguous: {escape(component)}")
        raise typer.Exit(1)

    root = build_style_hierarchy(identity, registry, graph)
    console.print(_render_tree(root, registry))

    descendants = aggregate_descendants(identity, registry, graph)
    table = Table(title="Descendant Styling", show_header=False, box=None)
    table.add_column("Kind", style="bold yellow")
    table.add_column("Values", no_wrap=False)
    table.add_row("Classes", escape(' '.join(sorted(descendants.utility_tokens))) or "-")
    table.add_row("CSS Props", escape(', '.join(sorted(descendants.css_properties))) or "-")
    table.add_row("CSS Vars", escape(', '.join(sorted(descendants.css_variables))) or "-")
    console.print(table)


@app.command()
def classify(
    tokens: List[str] = typer.Argument(..., help="Class tokens to classify"),
):
    """Classify class tokens as utility and/or contextual."""
    table = Table(title="Token Classification")
    table.add_column("Token", style="cyan")
    table.add_column("Utility", justify="center")
    table.add_column("Category", style="magenta")
    table.add_column("Contextual", justify="center")
    for token in tokens:
        result = classify_token(token)
        table.add_row(
            escape(result.token),
            "[green]yes[/green]" if result.is_utility else "[dim]no[/dim]",
            result.category or "-",
            "[green]yes[/green]" if result.is_contextual else "[dim]no[/dim]",
        )
    console.print(table)


if __name__ == "__main__":
    app()
