"""
CLI for summarize-docs-ai.

Provides commands for summarizing, grammar checking, text extraction,
history, provider settings and running the HTTP API.
"""

from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from summarize_docs_ai.config import Settings, api_key_from_env, create_default_config, load_config
from summarize_docs_ai.errors import SummarizerError
from summarize_docs_ai.extract import extract_text
from summarize_docs_ai.history import ApiSettingsRecord, History
from summarize_docs_ai.llm import available_providers, get_adapter_class
from summarize_docs_ai.logging_setup import setup_logging
from summarize_docs_ai.models import (
    Mode,
    ProviderCredentials,
    ProviderType,
    SummarizationRequest,
    TextStats,
    mask_secret,
)
from summarize_docs_ai.prompts import apply_quick_action, length_factor_from_slider, length_label
from summarize_docs_ai.router import ProviderRouter
from summarize_docs_ai.service import SummarizerService

app = typer.Typer(
    name="summarize-docs",
    help="Summarize and grammar-check documents with OpenAI, Mistral or Anthropic.",
    add_completion=False,
)

console = Console()


def get_settings(config_path: Path | None = None) -> Settings:
    """Load settings from config file or defaults."""
    if config_path and config_path.exists():
        settings = load_config(config_path)
    else:
        settings = load_config()
    setup_logging(settings.logging)
    return settings


def resolve_credentials(
    settings: Settings,
    provider: str | None,
    api_key: str | None,
) -> ProviderCredentials:
    """
    Work out provider and API key for a command.

    Precedence: command-line option, then environment, then the saved API
    settings record, then the configured default provider.
    """
    record = ApiSettingsRecord.load(settings.history.api_settings_path)
    provider_id = provider or record.provider or settings.providers.default
    key = api_key or api_key_from_env(provider_id)
    if not key and provider_id == record.provider:
        key = record.api_key
    return ProviderCredentials(provider=provider_id, api_key=key or "")


def _read_input(file: Path | None, text: str | None, settings: Settings) -> str:
    if text:
        return text
    if file is None:
        console.print("[red]Provide a FILE or --text[/red]")
        raise typer.Exit(1)
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)

    mime_type, _ = mimetypes.guess_type(file.name)
    result = asyncio.run(
        extract_text(
            file.read_bytes(),
            file.name,
            mime_type,
            max_bytes=settings.extraction.max_upload_bytes,
        )
    )
    return result.text


def _run_request(
    settings: Settings,
    request: SummarizationRequest,
    credentials: ProviderCredentials,
    timeout: float | None,
):
    async def run():
        async with ProviderRouter(settings) as router:
            service = SummarizerService(router)
            return await service.summarize(request, credentials, timeout=timeout)

    with console.status(
        "Checking..." if request.resolved_mode is Mode.GRAMMAR else "Summarizing...",
        spinner="dots",
    ):
        return asyncio.run(run())


def _show_result(title: str, input_text: str, output_text: str, subtitle: str) -> None:
    stats = TextStats.of(input_text)
    console.print(Panel(output_text, title=f"[bold blue]{title}[/bold blue]", subtitle=subtitle))
    console.print(f"[dim]Input: {stats.sentences} sentences • {stats.words} words[/dim]")


def _record_history(settings: Settings, input_text: str, output_text: str, mode: Mode) -> None:
    history = History.load(settings.history.path, max_items=settings.history.max_items)
    history.record(input_text, output_text, mode.value)
    history.save(settings.history.path)


@app.command()
def summarize(
    file: Path | None = typer.Argument(None, help="Document to summarize (.txt, .pdf, .docx)"),
    text: str | None = typer.Option(None, "--text", "-t", help="Text to summarize"),
    mode: Mode = typer.Option(Mode.PARAGRAPH, "--mode", "-m", help="Summary style"),
    length: int = typer.Option(
        1, "--length", "-l", min=0, max=3, help="0=Very Brief, 1=Brief, 2=Detailed, 3=Very Detailed"
    ),
    instructions: str | None = typer.Option(
        None, "--instructions", "-i", help="Custom instructions (custom mode)"
    ),
    quick_action: str | None = typer.Option(
        None, "--quick-action", "-q", help="Preset instructions: conclusion, academic, title"
    ),
    provider: str | None = typer.Option(None, "--provider", "-p", help="openai, mistral or anthropic"),
    api_key: str | None = typer.Option(None, "--api-key", "-k", help="Provider API key"),
    timeout: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds"),
    no_history: bool = typer.Option(False, "--no-history", help="Do not record in history"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Summarize a document or text."""
    settings = get_settings(config)

    try:
        input_text = _read_input(file, text, settings)
        mode, instructions = apply_quick_action(mode, instructions, quick_action)

        request = SummarizationRequest(
            text=input_text,
            mode=mode,
            length_factor=length_factor_from_slider(length),
            custom_instructions=instructions if mode is Mode.CUSTOM else None,
        )
        credentials = resolve_credentials(settings, provider, api_key)
        result = _run_request(settings, request, credentials, timeout)
    except SummarizerError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1) from None

    subtitle = f"{result.provider} • {result.model}"
    if mode is not Mode.GRAMMAR:
        subtitle += f" • {length_label(length)}"
    _show_result(mode.value.capitalize(), input_text, result.text, subtitle)

    if not no_history:
        _record_history(settings, input_text, result.text, mode)


@app.command()
def grammar(
    file: Path | None = typer.Argument(None, help="Document to check (.txt, .pdf, .docx)"),
    text: str | None = typer.Option(None, "--text", "-t", help="Text to check"),
    provider: str | None = typer.Option(None, "--provider", "-p", help="openai, mistral or anthropic"),
    api_key: str | None = typer.Option(None, "--api-key", "-k", help="Provider API key"),
    timeout: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds"),
    no_history: bool = typer.Option(False, "--no-history", help="Do not record in history"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Check grammar, spelling and style."""
    summarize(
        file=file,
        text=text,
        mode=Mode.GRAMMAR,
        length=1,
        instructions=None,
        quick_action=None,
        provider=provider,
        api_key=api_key,
        timeout=timeout,
        no_history=no_history,
        config=config,
    )


@app.command()
def extract(
    file: Path = typer.Argument(..., help="Document to extract text from"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write text to this file"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Extract plain text from a document."""
    settings = get_settings(config)

    try:
        text = _read_input(file, None, settings)
    except SummarizerError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1) from None

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Wrote {len(text)} characters to {output}[/green]")
        return

    console.print(text, markup=False, highlight=False)


@app.command()
def history(
    limit: int = typer.Option(10, "--limit", "-n", help="Max entries to show"),
    clear: bool = typer.Option(False, "--clear", help="Delete all history"),
    show: str | None = typer.Option(None, "--show", "-s", help="Show one entry in full by ID"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """View recent results."""
    settings = get_settings(config)
    entries = History.load(settings.history.path, max_items=settings.history.max_items)

    if clear:
        entries.clear()
        entries.save(settings.history.path)
        console.print("[green]History cleared[/green]")
        return

    if show:
        entry = entries.get(show)
        if entry is None:
            console.print(f"[red]History entry {show} not found[/red]")
            raise typer.Exit(1)
        console.print(Panel(entry.input_text, title="Input"))
        console.print(Panel(entry.output_text, title=entry.mode.capitalize()))
        return

    if not len(entries):
        console.print("[yellow]No history yet[/yellow]")
        return

    table = Table(title="History")
    table.add_column("ID", style="dim")
    table.add_column("Mode", style="cyan")
    table.add_column("Input")
    table.add_column("Output")

    for entry in entries.entries[:limit]:
        table.add_row(
            entry.id,
            entry.mode.capitalize(),
            entry.input_text[:40].replace("\n", " "),
            entry.output_text[:60].replace("\n", " "),
        )

    console.print(table)


@app.command()
def providers(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """List supported providers and the configured models."""
    settings = get_settings(config)
    record = ApiSettingsRecord.load(settings.history.api_settings_path)

    table = Table(title="Providers")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Model", style="magenta")
    table.add_column("Endpoint", style="dim")
    table.add_column("API key")

    for provider_id in available_providers():
        vendor = settings.providers.for_provider(provider_id)
        adapter_cls = get_adapter_class(provider_id)
        key = api_key_from_env(provider_id) or (
            record.api_key if record.provider == provider_id else ""
        )
        table.add_row(
            provider_id,
            vendor.model if vendor else adapter_cls.DEFAULT_MODEL,
            vendor.base_url if vendor else adapter_cls.DEFAULT_URL,
            "configured" if key else "[red]not set[/red]",
        )

    console.print(table)


@app.command()
def configure(
    provider: str = typer.Option(..., "--provider", "-p", help="openai, mistral or anthropic"),
    api_key: str = typer.Option(
        ..., "--api-key", "-k", prompt=True, hide_input=True, help="Provider API key"
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Save the provider and API key used by default."""
    settings = get_settings(config)

    try:
        provider_id = ProviderType.parse(provider).value
    except SummarizerError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1) from None

    record = ApiSettingsRecord(provider=provider_id, api_key=api_key.strip())
    record.save(settings.history.api_settings_path)
    console.print(
        f"[green]Saved {provider_id} settings (key {mask_secret(record.api_key)}) "
        f"to {settings.history.api_settings_path}[/green]"
    )


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Bind port"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Run the HTTP API."""
    settings = get_settings(config)

    from summarize_docs_ai.server import serve as run_server

    console.print(
        f"[cyan]Serving on http://{host or settings.server.host}:{port or settings.server.port}[/cyan]"
    )
    run_server(settings, host=host, port=port)


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
    console.print("\nSet your API key, then run:")
    console.print("  summarize-docs configure --provider mistral")
    console.print("  summarize-docs summarize ./document.pdf --mode bullet")


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
