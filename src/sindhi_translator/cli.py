"""
CLI for sindhi-translator.

Provides commands for serving the HTTP API, translating text, extracting
text from documents, exporting records, and checking font assets.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sindhi_translator.config import Settings, create_default_config, load_config
from sindhi_translator.errors import ClientError, ExtractionError, RenderError
from sindhi_translator.logging_setup import configure_logging
from sindhi_translator.models import ExportFormat, ExportRequest, TranslationRecord

app = typer.Typer(
    name="sindhi-translator",
    help="Translate Sindhi text into Urdu and English and export the results.",
    add_completion=False,
)

console = Console()

# Short sample in each script, used to eyeball PDF font rendering
SAMPLE_RECORD = TranslationRecord(
    source="توهان جو نالو ڇا آهي؟",
    translation_a="آپ کا نام کیا ہے؟",
    translation_b="What's your name?",
)


def _display_config(settings: Settings, config_path: Path | None) -> None:
    """Display the configuration being used."""
    config_source = str(config_path) if config_path else "default (config.yaml or built-in)"

    config_table = Table(show_header=False, box=None, padding=(0, 2))
    config_table.add_column("Key", style="cyan")
    config_table.add_column("Value", style="green")

    config_table.add_row("Config file", config_source)
    config_table.add_row("Exports", str(settings.paths.exports_dir))
    config_table.add_row("Fonts", str(settings.paths.fonts_dir))
    config_table.add_row("", "")
    config_table.add_row("Translation Settings", "", style="bold cyan")
    for field in settings.languages.record_fields():
        direction = "RTL" if field.is_rtl else "LTR"
        config_table.add_row(f"  {field.label}", f"{field.language} ({direction})")
    config_table.add_row(
        "  Google API",
        "configured" if settings.translation.api_key else "[red]not set[/red]",
    )

    console.print(
        Panel(config_table, title="[bold blue]sindhi-translator[/bold blue]", border_style="blue")
    )


def get_settings(config_path: Path | None = None) -> Settings:
    """Load settings from config file or defaults."""
    settings = load_config(config_path)
    configure_logging(settings.logging, console)
    return settings


def _record_table(record: TranslationRecord, settings: Settings) -> Table:
    table = Table(title="Translation", show_lines=True)
    table.add_column("Field", style="cyan")
    table.add_column("Text")
    for field in settings.languages.record_fields():
        value = record.get(field.attr)
        table.add_row(field.label, value if value else f"[dim]{field.placeholder}[/dim]")
    return table


@app.command()
def serve(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port"),
) -> None:
    """Run the HTTP API and serve exported files."""
    import uvicorn

    from sindhi_translator.api import create_app

    settings = get_settings(config)
    _display_config(settings, config)

    bind_host = host or settings.server.host
    bind_port = port or settings.server.port
    console.print(f"[green]Server running → http://{bind_host}:{bind_port}[/green]")
    uvicorn.run(
        create_app(settings),
        host=bind_host,
        port=bind_port,
        log_config=None,
        log_level=settings.logging.level.lower(),
    )


@app.command()
def translate(
    text: str = typer.Argument(..., help="Source text to translate"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Translate source text into both target languages."""
    from sindhi_translator.translation import TranslationOrchestrator

    settings = get_settings(config)
    orchestrator = TranslationOrchestrator.from_settings(settings)

    async def run() -> TranslationRecord:
        try:
            return await orchestrator.translate(text)
        finally:
            await orchestrator.aclose()

    try:
        record = asyncio.run(run())
    except ClientError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1) from None

    console.print(_record_table(record, settings))


@app.command()
def extract(
    file: Path = typer.Argument(..., help=".txt or .docx file", exists=True, dir_okay=False),
) -> None:
    """Print the text extracted from a document."""
    from sindhi_translator.ingest import extract_text

    try:
        result = asyncio.run(extract_text(file))
    except (ClientError, ExtractionError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if result.is_empty:
        console.print("[yellow]No text found in document[/yellow]")
        return
    console.print(result.content)


@app.command()
def export(
    fmt: str = typer.Option("txt", "--type", "-t", help="Export format: pdf, xlsx, txt"),
    sindhi: str = typer.Option("", "--sindhi", help="Source (Sindhi) text"),
    urdu: str = typer.Option("", "--urdu", help="Urdu translation"),
    english: str = typer.Option("", "--english", help="English translation"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Export a record to a PDF, XLSX or TXT file."""
    from sindhi_translator.export import ExportPipeline

    settings = get_settings(config)
    pipeline = ExportPipeline.from_settings(settings)
    request = ExportRequest(TranslationRecord.from_values(sindhi, urdu, english), fmt)

    try:
        artifact = asyncio.run(pipeline.export(request))
    except ClientError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1) from None
    except RenderError as e:
        console.print(f"[red]Export failed: {e}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]Created {artifact.format.value} export: {artifact.path}[/green]")


@app.command()
def fonts(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
    sample: Path | None = typer.Option(
        None, "--sample", "-s", help="Also render a sample PDF to this path"
    ),
) -> None:
    """Check right-to-left font assets used by PDF exports."""
    from sindhi_translator.export import PdfRenderer
    from sindhi_translator.styling import FontResolver

    settings = get_settings(config)
    fields = settings.languages.record_fields()
    renderer = PdfRenderer(
        fields,
        font_resolver=FontResolver(settings.paths.fonts_dir, settings.fonts.files),
        title=settings.export.title,
        page_size=settings.export.page_size,
    )

    table = Table(title="PDF Fonts")
    table.add_column("Script", style="cyan")
    table.add_column("Font file")
    table.add_column("Status")
    capabilities = renderer.resolve_fonts()
    for script, capability in capabilities.items():
        expected = renderer.font_resolver.asset_path(script) if renderer.font_resolver else None
        status = "[green]found[/green]" if capability.available else "[red]missing[/red]"
        table.add_row(script.value, str(expected or "-"), status)
    if not capabilities:
        table.add_row("-", "-", "[dim]no right-to-left fields[/dim]")
    console.print(table)

    if sample is not None:
        try:
            renderer.render(SAMPLE_RECORD, sample)
        except RenderError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1) from None
        console.print(f"[green]Created sample PDF: {sample}[/green]")


@app.command()
def init(
    output_path: Path = typer.Option(
        Path("config.yaml"),
        "--output",
        "-o",
        help="Output path for config file",
    ),
) -> None:
    """Generate a default configuration file."""
    if output_path.exists():
        overwrite = typer.confirm(f"{output_path} already exists. Overwrite?")
        if not overwrite:
            raise typer.Abort()

    create_default_config(output_path)
    console.print(f"[green]Created config file: {output_path}[/green]")
    console.print("\nSet GOOGLE_API_KEY, put a font in ./fonts, then run:")
    console.print("  sindhi-translator serve --config config.yaml")


@app.command()
def formats() -> None:
    """List supported export formats."""
    for export_format in ExportFormat:
        console.print(f"{export_format.value}  ({export_format.name.lower()})")


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
