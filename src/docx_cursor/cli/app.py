"""
Command-line front end for docx-cursor.

Provides a Typer-based interface for inspecting Word documents and
appending formatted paragraphs to them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..config import get_config_manager, load_config
from ..core.document import Document
from ..core.formatting import Formatting
from ..errors import DocxCursorError

# Initialize Typer app
app = typer.Typer(
    name="docx-cursor",
    help="Inspect and edit Word documents paragraph by paragraph",
    add_completion=False,
    rich_markup_mode="rich"
)

# Global console for rich output
console = Console()


def _setup_logging() -> None:
    config = load_config()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _open_document(file_path: Path) -> Document:
    """Open a document or exit with an error message."""
    if not file_path.exists():
        console.print(f"[red]Error: File not found: {file_path}[/red]")
        raise typer.Exit(1)

    try:
        return Document.load(file_path, load_config())
    except DocxCursorError as e:
        console.print(f"[red]Error opening document: {e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main() -> None:
    _setup_logging()


@app.command()
def show(
    file_path: Path = typer.Argument(..., help="Path to the Word document"),
) -> None:
    """
    Print the document's paragraphs and tables.
    """
    document = _open_document(file_path)

    para_table = Table(title="Paragraphs")
    para_table.add_column("#", style="cyan", justify="right")
    para_table.add_column("Runs", style="magenta", justify="right")
    para_table.add_column("Text", style="green")

    for index, paragraph in enumerate(document.paragraphs()):
        para_table.add_row(str(index), str(paragraph.runs().count()), paragraph.text())

    console.print(para_table)

    for table_index, table in enumerate(document.tables()):
        grid = Table(title=f"Table {table_index}", show_header=False, show_lines=True)
        rows = []
        try:
            for row in table.rows():
                rows.append([cell.text() for cell in row.cells()])
        except DocxCursorError as e:
            console.print(f"[yellow]Table {table_index} is malformed: {e}[/yellow]")
            continue

        for _ in range(max((len(r) for r in rows), default=0)):
            grid.add_column()
        for cells in rows:
            grid.add_row(*cells)
        console.print(grid)


@app.command()
def info(
    file_path: Path = typer.Argument(..., help="Path to the Word document"),
) -> None:
    """
    Show paragraph, run and table counts.
    """
    document = _open_document(file_path)

    paragraphs = document.paragraphs().count()
    runs = sum(p.runs().count() for p in document.paragraphs())
    tables = document.tables().count()
    rows = sum(t.rows().count() for t in document.tables())
    cells = sum(r.cells().count() for t in document.tables() for r in t.rows())

    info_table = Table(title="Document Information", show_header=False)
    info_table.add_column("Property", style="cyan")
    info_table.add_column("Value", style="green")

    info_table.add_row("File", str(file_path))
    info_table.add_row("Paragraphs", str(paragraphs))
    info_table.add_row("Runs", str(runs))
    info_table.add_row("Tables", str(tables))
    info_table.add_row("Rows", str(rows))
    info_table.add_row("Cells", str(cells))

    console.print(info_table)


@app.command()
def append(
    file_path: Path = typer.Argument(..., help="Path to the Word document"),
    text: str = typer.Argument(..., help="Text of the new paragraph"),
    after: Optional[int] = typer.Option(None, "--after", "-a", help="Insert after this paragraph index (default: last)"),
    output_path: Optional[Path] = typer.Option(None, "--output", "-o", help="Output path (default: overwrite original)"),
    bold: bool = typer.Option(False, "--bold", help="Bold text"),
    italic: bool = typer.Option(False, "--italic", help="Italic text"),
    underline: bool = typer.Option(False, "--underline", help="Underlined text"),
    strike: bool = typer.Option(False, "--strike", help="Struck-through text"),
    superscript: bool = typer.Option(False, "--superscript", help="Superscript text"),
    subscript: bool = typer.Option(False, "--subscript", help="Subscript text"),
    small_caps: bool = typer.Option(False, "--small-caps", help="Small caps text"),
    shadow: bool = typer.Option(False, "--shadow", help="Shadowed text"),
) -> None:
    """
    Insert a paragraph and save the document.
    """
    document = _open_document(file_path)

    formatting = Formatting.NONE
    for enabled, flag in (
        (bold, Formatting.BOLD),
        (italic, Formatting.ITALIC),
        (underline, Formatting.UNDERLINE),
        (strike, Formatting.STRIKETHROUGH),
        (superscript, Formatting.SUPERSCRIPT),
        (subscript, Formatting.SUBSCRIPT),
        (small_caps, Formatting.SMALL_CAPS),
        (shadow, Formatting.SHADOW),
    ):
        if enabled:
            formatting |= flag

    anchor = None
    for index, paragraph in enumerate(document.paragraphs()):
        anchor = paragraph
        if after is not None and index == after:
            break
    else:
        if after is not None:
            console.print(f"[red]Error: No paragraph at index {after}[/red]")
            raise typer.Exit(1)

    if anchor is None:
        console.print("[red]Error: Document has no paragraph to insert after[/red]")
        raise typer.Exit(1)

    anchor.insert_paragraph_after(text, formatting)

    try:
        written = document.save(output_path)
    except DocxCursorError as e:
        console.print(f"[red]Error saving document: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Saved {written}[/green]")


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    create_default: bool = typer.Option(False, "--create-default", help="Create default config file"),
) -> None:
    """
    Manage docx-cursor configuration.
    """
    config_manager = get_config_manager()

    if create_default:
        config_manager.create_default_config()
        console.print(f"[green]Created default configuration at {config_manager.config_file}[/green]")
        return

    if show:
        config_info = config_manager.get_config_info()

        config_display = f"""[bold]docx-cursor Configuration[/bold]

[bold cyan]Package:[/bold cyan]
• Content Member: {config_info['content_member']}
• Standalone Declaration: {config_info['standalone']}
• Compression: {config_info['compression']}

[bold yellow]Logging:[/bold yellow]
• Level: {config_info['log_level']}

[bold magenta]Files:[/bold magenta]
• Config File: {config_info['config_file']}
• Exists: {'Yes' if config_info['config_exists'] else 'No'}
• Environment Overrides: {', '.join(config_info['env_overrides']) or 'None'}"""

        console.print(Panel(config_display, border_style="green"))
        return

    console.print("Use [cyan]docx-cursor config --show[/cyan] to see full configuration")
    console.print("Use [cyan]docx-cursor config --create-default[/cyan] to create a default config file")


if __name__ == "__main__":
    app()
