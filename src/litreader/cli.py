"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from litreader.config import ConfigurationStore
from litreader.core.content_provider import FileContentProvider, is_supported
from litreader.core.search_engine import SearchEngine
from litreader.core.toc_generator import TOCGenerator, flatten
from litreader.history.manager import HistoryStore, SearchHistory
from litreader.models.search import SearchQuery
from litreader.models.toc import TableOfContents

app = typer.Typer(
    name="litreader",
    help="Generate tables of contents for books and search their text.",
    add_completion=False,
)

console = Console()

# History subcommand group
history_app = typer.Typer(help="Search history commands")
app.add_typer(history_app, name="history")

ProjectDir = Annotated[
    Path,
    typer.Option(
        "--dir",
        "-d",
        help="Project directory holding litreader.json and history (default: current directory)",
    ),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detection and search logging"),
    ] = False,
) -> None:
    """Generate tables of contents for books and search their text."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _check_supported(book_path: Path) -> None:
    if not is_supported(book_path):
        console.print(f"[red]Unsupported file format: {book_path.suffix}[/]")
        console.print("[dim]Supported formats: .txt, .md, .epub, .pdf[/]")
        raise typer.Exit(1)


def display_toc(toc: TableOfContents, title: str) -> None:
    """Display a table of contents with indentation by level."""
    info_lines = [
        f"[bold]{title}[/]",
        "",
        f"[dim]Chapters:[/] {len(flatten(toc.chapters))}",
        f"[dim]Method:[/] {toc.method.value}",
        f"[dim]Confidence:[/] {toc.confidence:.0%}",
        f"[dim]Generated in:[/] {toc.generation_time:.3f}s",
    ]
    if toc.warnings:
        info_lines.append("")
        for warning in toc.warnings:
            info_lines.append(f"[yellow]! {warning}[/]")

    console.print()
    console.print(Panel("\n".join(info_lines), title="Book Information", border_style="green"))

    table = Table(title="Table of Contents", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Page", justify="right", style="dim")
    table.add_column("Chars", justify="right", style="green")
    table.add_column("Conf.", justify="right")

    for i, chapter in enumerate(flatten(toc.chapters)):
        table.add_row(
            str(i + 1),
            "  " * chapter.indent_level + chapter.title,
            str(chapter.page_number) if chapter.page_number else "-",
            f"{chapter.word_count or 0:,}",
            f"{chapter.confidence:.2f}",
        )

    console.print(table)
    console.print()


@app.command()
def toc(
    book_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the book file (TXT, EPUB or PDF)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    project_dir: ProjectDir = Path("."),
    threshold: Annotated[
        Optional[float],
        typer.Option("--threshold", "-t", help="Minimum chapter confidence", min=0.0, max=1.0),
    ] = None,
    min_length: Annotated[
        Optional[int],
        typer.Option("--min-length", help="Minimum document length in characters", min=0),
    ] = None,
    export: Annotated[
        Optional[Path],
        typer.Option("--export", "-o", help="Write the table of contents as JSON"),
    ] = None,
) -> None:
    """Detect chapters and display the table of contents."""
    _check_supported(book_path)

    try:
        app_config = ConfigurationStore(project_dir.resolve()).load()
        config = app_config.generation
        overrides = {}
        if threshold is not None:
            overrides["confidence_threshold"] = threshold
        if min_length is not None:
            overrides["min_chapter_length"] = min_length
        if overrides:
            config = config.model_copy(update=overrides)

        provider = FileContentProvider([book_path], app_config.search.chars_per_page)
        document = provider.get_document(provider.document_ids[0])

        generator = TOCGenerator(config)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Detecting chapters...", total=1.0)
            result = generator.generate_for_document(
                document,
                on_progress=lambda value: progress.update(task, completed=value),
            )

        display_toc(result, document.title)

        if export is not None:
            export.write_text(generator.export_toc(result))
            console.print(f"[green]Exported to {export}[/]")
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Text or regular expression to find")],
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Files to search",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    project_dir: ProjectDir = Path("."),
    regex: Annotated[bool, typer.Option("--regex", "-r", help="Treat query as a regular expression")] = False,
    case_sensitive: Annotated[bool, typer.Option("--case-sensitive", "-c", help="Match case")] = False,
    whole_words: Annotated[bool, typer.Option("--whole-words", "-w", help="Match whole words only")] = False,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum results to show", min=1)] = 20,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", help="Search documents in parallel", min=1),
    ] = None,
) -> None:
    """Search one or more books and show ranked results."""
    for path in files:
        _check_supported(path)

    try:
        project_dir = project_dir.resolve()
        app_config = ConfigurationStore(project_dir).load()
        defaults = app_config.search

        history = SearchHistory(HistoryStore(project_dir), max_items=defaults.history_size)
        engine = SearchEngine(history=history, max_workers=workers or defaults.max_workers)
        provider = FileContentProvider(files, defaults.chars_per_page)

        search_query = SearchQuery(
            text=query,
            use_regex=regex or defaults.use_regex,
            case_sensitive=case_sensitive or defaults.case_sensitive,
            whole_words=whole_words or defaults.whole_words,
        )
        report = engine.run(search_query, provider.corpus())

        for failure in report.failures:
            console.print(f"[yellow]Skipped {failure.document_id}: {failure.error}[/]")

        if not report.results:
            console.print("[dim]No matches[/]")
            return

        table = Table(
            title=f"{len(report.results)} result(s) for '{query}'",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Document", style="dim")
        table.add_column("Page", justify="right", style="dim")
        table.add_column("Snippet", style="white")
        table.add_column("Score", justify="right", style="green")

        for result in report.results[:limit]:
            table.add_row(
                result.document_id,
                str(result.page) if result.page else "-",
                result.snippet,
                f"{result.relevance:.2f}",
            )

        console.print(table)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


def _open_history(project_dir: Path) -> SearchHistory:
    project_dir = project_dir.resolve()
    app_config = ConfigurationStore(project_dir).load()
    return SearchHistory(HistoryStore(project_dir), max_items=app_config.search.history_size)


@history_app.command("list")
def history_list(project_dir: ProjectDir = Path(".")) -> None:
    """List past queries, newest first."""
    history = _open_history(project_dir)
    entries = history.entries

    if not entries:
        console.print("[dim]No search history[/]")
        return

    table = Table(title="Search History", show_header=True, header_style="bold cyan")
    table.add_column("Query", style="white")
    table.add_column("Results", justify="right", style="green")
    table.add_column("When", style="dim")

    for entry in entries:
        table.add_row(
            entry.query,
            str(entry.result_count),
            entry.timestamp.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@history_app.command("clear")
def history_clear(project_dir: ProjectDir = Path(".")) -> None:
    """Clear all search history."""
    history = _open_history(project_dir)
    count = len(history)
    history.clear()

    if count > 0:
        console.print(f"[green]Cleared {count} search(es)[/]")
    else:
        console.print("[dim]No history to clear[/]")


@history_app.command("suggest")
def history_suggest(
    prefix: Annotated[str, typer.Argument(help="Text to look up in past queries")],
    project_dir: ProjectDir = Path("."),
) -> None:
    """Suggest past queries containing the given text."""
    for suggestion in _open_history(project_dir).suggestions(prefix):
        console.print(suggestion)


@history_app.command("stats")
def history_stats(project_dir: ProjectDir = Path(".")) -> None:
    """Show search history statistics."""
    stats = _open_history(project_dir).statistics()
    console.print(
        Panel(
            f"[dim]Searches:[/] {stats.total_searches}\n"
            f"[dim]Unique queries:[/] {stats.unique_queries}\n"
            f"[dim]Average results:[/] {stats.average_results:.1f}",
            title="Search Statistics",
            border_style="blue",
        )
    )


if __name__ == "__main__":
    app()
