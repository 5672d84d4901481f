#!/usr/bin/env python3
"""
Terminal Rendering
==================
Rich-based display of generated names and the favorites list.

Usage:
    from rich.console import Console
    from espruar.ui import render_name

    render_name(result, Console())
"""

from typing import Any, Dict, Iterable, List, Optional

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import FINAL_VOWELS, get_species_defaults
from .generators import phonetics
from .generators.base_generator import GeneratedName


SPECIES_COLORS = {
    'elven': 'green',
    'dwarven': 'yellow',
    'gnomish': 'magenta',
    'halfling': 'cyan',
    'orc': 'red',
}


def _role_rows(breakdown: Dict[str, Any]) -> List[tuple]:
    """Flatten a breakdown into (role, text, meaning) rows."""
    rows = []
    for role, part in breakdown.items():
        if part is None:
            continue
        if isinstance(part, GeneratedName):
            nested = _role_rows(part.breakdown)
            if nested:
                rows.extend((f"{role} / {r}", t, m) for r, t, m in nested)
            else:
                rows.append((role, part.name, part.meaning))
            continue

        if role == 'prefix':
            text, meaning = part.prefix_form(), part.prefix_gloss()
        elif role == 'suffix':
            text, meaning = part.suffix_form(), part.suffix_gloss()
        else:
            text = getattr(part, 'text', None) or getattr(part, 'prefix_text', None) or getattr(part, 'root', '')
            meaning = getattr(part, 'meaning', None) or getattr(part, 'prefix_meaning', None) or ''
        rows.append((role, phonetics.clean_component_text(text), meaning or ''))
    return rows


def _target_syllables(result: GeneratedName) -> Optional[int]:
    if result.generator_type != 'elven':
        return None
    return get_species_defaults('elven')['target_syllables']


def render_name(result: GeneratedName, console: Console = None, target_syllables: int = None):
    """Print a panel with the name, pronunciation, meaning and breakdown."""
    console = console or Console()
    color = SPECIES_COLORS.get(result.generator_type, 'white')

    header = Text(result.name, style=f"bold {color}")
    lines = [header]
    if result.pronunciation:
        lines.append(Text(f"/{result.pronunciation}/", style="dim"))
    for part in result.meaning.split(' + '):
        if part:
            lines.append(Text(f"  {part}"))

    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))
    table.add_column("Role", style="cyan")
    table.add_column("Text", style="bold")
    table.add_column("Meaning", style="dim")
    for role, text, meaning in _role_rows(result.breakdown):
        table.add_row(role, text, meaning)

    body = [Group(*lines)]
    if table.row_count:
        body.append(table)

    if target_syllables is None:
        target_syllables = _target_syllables(result)
    if (result.generator_type == 'elven' and not result.final_vowel
            and phonetics.should_suggest_final_vowel(result.name, result.syllables, target_syllables)):
        suggestions = ', '.join(f"{result.base_form}{v['vowel']}" for v in FINAL_VOWELS)
        body.append(Text(f"Try a final vowel: {suggestions}", style="italic yellow"))

    subtitle = f"{result.syllables} syllable{'s' if result.syllables != 1 else ''}"
    if result.subrace:
        subtitle = f"{result.subrace} · {subtitle}"

    console.print(Panel(
        Group(*body),
        title=f"[bold]{result.generator_type.title() or 'Name'}[/bold]",
        subtitle=subtitle,
        border_style=color,
        box=box.ROUNDED,
    ))


def render_favorites(records: Iterable[Any], console: Console = None):
    """Print favorites as a table."""
    console = console or Console()
    records = list(records)
    if not records:
        console.print("[dim]No favorites saved yet.[/dim]")
        return

    table = Table(title=f"Favorites ({len(records)})", box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Species")
    table.add_column("Meaning")
    table.add_column("Syl", justify="right")
    table.add_column("Saved", style="dim")

    for i, fav in enumerate(records, 1):
        data = fav.to_dict() if hasattr(fav, 'to_dict') else dict(fav)
        species = data.get('generator_type', '')
        table.add_row(
            str(i),
            data.get('name', ''),
            f"[{SPECIES_COLORS.get(species, 'white')}]{species}[/]",
            data.get('meaning', ''),
            str(data.get('syllables', '')),
            (data.get('created_at') or '')[:16],
        )

    console.print(table)
