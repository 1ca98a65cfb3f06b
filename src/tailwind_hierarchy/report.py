"""Markdown report of component styling and contextual influences."""
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from .analyzer.discovery import get_component_display_name
from .analyzer.registry import ComponentRecord, ComponentRegistry

logger = logging.getLogger(__name__)

REPORT_HEADER = """\
<file_summary>
This file contains an analysis of Tailwind CSS usage across React components.

<purpose>
It maps each component to its utility classes, including contextual influences
where a parent element affects child component styling through layout,
positioning or inherited properties.
</purpose>

<file_format>
Each component entry contains:
- Component name and file path
- "Influences": child components grouped by the contextual classes that affect them
- "Classes": utility classes applied directly in the component
- "CSS Props" / "CSS Vars": inline or CSS-in-JS properties and custom properties

Influence format: "contextual-classes": ComponentA, ComponentB
- "None" lists imported components rendered without contextual influence
</file_format>

<notes>
- Only components with classes, influences or local imports are listed
- Analysis is static: class names computed at runtime are not captured
- File paths are relative to the project root
- Components are sorted by class count, most styled first
</notes>
</file_summary>"""


def influence_groups(record: ComponentRecord) -> Dict[str, List[str]]:
    """Group influenced components by their contextual classes.

    Influenced components appear under their local binding name. Imported
    files that no contextual class reaches land in the 'none' group under
    their display name; an aliased import is matched by the file it resolves
    to, not by name.
    """
    groups: Dict[str, set] = {}
    for key, classes in record.influences.items():
        influence = ' '.join(sorted(classes)) if classes else 'none'
        groups.setdefault(influence, set()).add(key.component)

    influenced = {record.import_sources.get(key.import_path) for key in record.influences}
    for import_path in record.imports:
        if import_path not in influenced:
            groups.setdefault('none', set()).add(get_component_display_name(import_path))

    return {influence: sorted(names) for influence, names in groups.items()}


def render_component(identity: str, record: ComponentRecord, registry: ComponentRegistry) -> List[str]:
    lines = [f"## {record.display_name}", f"Path: {registry.display_path(identity)}"]

    groups = influence_groups(record)
    if groups:
        lines.append("Influences:")
        for influence, names in groups.items():
            label = "None" if influence == 'none' else f'"{influence}"'
            lines.append(f"- {label}: {', '.join(names)}")

    if record.utility_tokens:
        lines.append(f"Classes: {' '.join(sorted(record.utility_tokens))}")
    if record.css_properties:
        lines.append(f"CSS Props: {', '.join(sorted(record.css_properties))}")
    if record.css_variables:
        lines.append(f"CSS Vars: {', '.join(sorted(record.css_variables))}")

    lines.append("")
    return lines


def render_markdown(registry: ComponentRegistry, generated_at: Optional[datetime] = None) -> str:
    """Render the whole registry as a markdown document."""
    generated_at = generated_at or datetime.now(timezone.utc)
    lines = [
        "# Tailwind Component Analysis",
        "",
        f"Generated: {generated_at.isoformat()}",
        "",
        REPORT_HEADER,
        "",
    ]

    relevant = [
        (identity, record) for identity, record in registry.items()
        if record.utility_tokens or record.influences or record.imports
    ]
    # Stable sort: ties keep registry (discovery) order
    relevant.sort(key=lambda item: len(item[1].utility_tokens), reverse=True)

    for identity, record in relevant:
        lines.extend(render_component(identity, record, registry))

    return "\n".join(lines)


def write_report(registry: ComponentRegistry, output_path: str | Path) -> Path:
    """Render the report and write it, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_markdown(registry), encoding='utf-8')
    logger.info("Report written to %s", output_path)
    return output_path
