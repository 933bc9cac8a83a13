"""Main CLI application using Typer."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from langsift import __version__
from langsift.core.detection.builder import LanguageDetectorBuilder
from langsift.core.interfaces import LangSiftError
from langsift.models.config import LangSiftConfig
from langsift.models.language import Language

console = Console()
app = typer.Typer(
    name="langsift",
    help="LangSift - statistical n-gram language identification",
    add_completion=False,
)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"LangSift version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version and exit")
    ] = None,
):
    """LangSift - identify the language of short texts.

    Scores text against per-language n-gram frequency models of English,
    French, German, Italian, Latin, Portuguese and Spanish.
    """
    pass


@app.command()
def detect(
    text: Annotated[
        str,
        typer.Argument(help="Text to identify")
    ],
    languages: Annotated[
        Optional[str],
        typer.Option("--languages", "-l", help="Comma-separated ISO 639-1 codes to choose from")
    ] = None,
    exclude: Annotated[
        Optional[str],
        typer.Option("--exclude", "-x", help="Comma-separated ISO 639-1 codes to leave out")
    ] = None,
    spoken: Annotated[
        bool,
        typer.Option("--spoken", help="Only consider languages that are still spoken")
    ] = False,
    confidence: Annotated[
        bool,
        typer.Option("--confidence", help="Show the confidence of every language")
    ] = False,
    models_dir: Annotated[
        Optional[Path],
        typer.Option("--models-dir", "-m", help="Directory holding the language models")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path", exists=True)
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose output")
    ] = False,
):
    """Detect the language of a text.

    Examples:

      # Choose among every built-in language
      langsift detect "Das ist ein kleiner Test"

      # Restrict the candidates and show all confidences
      langsift detect "ceci est un test" --languages fr,it,es --confidence
    """
    if languages and (exclude or spoken):
        console.print("❌ Error: --languages cannot be combined with --exclude or --spoken", style="red")
        raise typer.Exit(1)

    try:
        app_config = LangSiftConfig.discover(config)
    except LangSiftError as e:
        console.print(f"❌ Error loading configuration: {e}", style="red")
        raise typer.Exit(1)

    if models_dir:
        app_config.models.models_dir = str(models_dir)

    _setup_logging(logging.DEBUG if verbose else app_config.logging.level, verbose)

    try:
        builder = _make_builder(languages, exclude, spoken)
        detector = builder.with_config(app_config).build()
        result = detector.detect_with_details(text)
    except LangSiftError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1)

    if result.is_unknown:
        console.print("🤷 Language could not be determined reliably", style="yellow")
    else:
        console.print(f"✅ {result.summary()}", style="green")

    if confidence:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Language", style="cyan", no_wrap=True)
        table.add_column("Code", style="white")
        table.add_column("Confidence", style="white", justify="right")
        for language, value in result.confidence_values().items():
            table.add_row(language.name, language.iso_code_639_1, f"{value:.4f}")
        console.print(table)


@app.command("languages")
def list_languages():
    """List the built-in languages."""
    table = Table(title="Built-in Languages")
    table.add_column("Language", style="cyan", no_wrap=True)
    table.add_column("Code", style="magenta")
    table.add_column("Spoken", style="white")
    table.add_column("Alphabets", style="white")

    for language in sorted(Language.all(), key=lambda language: language.sort_key):
        table.add_row(
            language.name,
            language.iso_code_639_1,
            "yes" if language.is_spoken else "no",
            ", ".join(sorted(alphabet.name for alphabet in language.alphabets)),
        )

    console.print(table)


@app.command()
def config(
    init: Annotated[
        bool,
        typer.Option("--init", help="Initialize a new configuration file")
    ] = False,
    path: Annotated[
        Path,
        typer.Option("--path", "-p", help="Configuration file path")
    ] = Path("langsift.toml"),
    show: Annotated[
        bool,
        typer.Option("--show", help="Show current configuration")
    ] = False,
):
    """Manage LangSift configuration.

    Examples:

      # Create a new configuration file
      langsift config --init

      # Show current configuration
      langsift config --show
    """
    if init:
        if path.exists():
            if not typer.confirm(f"Configuration file {path} already exists. Overwrite?"):
                console.print("❌ Operation cancelled", style="red")
                raise typer.Exit(1)

        LangSiftConfig().to_file(path)

        console.print(f"✅ Configuration file created at: {path}", style="green")
        console.print("Edit the file to customize settings for your needs.")

    elif show:
        try:
            loaded_config = LangSiftConfig.discover(path if path.exists() else None)
        except LangSiftError as e:
            console.print(f"❌ {e}", style="red")
            raise typer.Exit(1)

        table = Table(title="LangSift Configuration")
        table.add_column("Setting", style="cyan", no_wrap=True)
        table.add_column("Value", style="magenta")

        detection = loaded_config.detection
        table.add_row("N-gram Orders", ", ".join(str(order) for order in detection.active_orders()))
        table.add_row("Minimum Relative Distance", str(detection.minimum_relative_distance))
        table.add_row("Smoothing Constant", str(detection.smoothing_constant))
        table.add_row("Alphabet Filter", str(detection.alphabet_filter))
        table.add_row("Models Directory", str(loaded_config.models.resolve_models_dir()))
        table.add_row("Log Level", loaded_config.logging.level)

        console.print(table)

    else:
        console.print("❌ Please specify an action: --init, --show", style="red")
        raise typer.Exit(1)


@app.command()
def validate(
    config_file: Annotated[
        Path,
        typer.Argument(help="Configuration file to validate")
    ],
):
    """Validate a LangSift configuration file."""
    if not config_file.exists():
        console.print(f"❌ Configuration file not found: {config_file}", style="red")
        raise typer.Exit(1)

    try:
        loaded_config = LangSiftConfig.from_file(config_file)
    except LangSiftError as e:
        console.print(f"❌ Configuration validation failed: {e}", style="red")
        raise typer.Exit(1)

    console.print(f"✅ Configuration file is valid: {config_file}", style="green")
    console.print(f"Models directory: {loaded_config.models.resolve_models_dir()}")


def _make_builder(languages: Optional[str], exclude: Optional[str], spoken: bool) -> LanguageDetectorBuilder:
    if languages:
        return LanguageDetectorBuilder.from_iso_codes_639_1(*_split_codes(languages))

    excluded = [_to_language(code) for code in _split_codes(exclude)] if exclude else []
    base = Language.all_spoken() if spoken else Language.all()
    return LanguageDetectorBuilder(base - frozenset(excluded))


def _split_codes(codes: str) -> List[str]:
    return [code.strip() for code in codes.split(",") if code.strip()]


def _to_language(code: str) -> Language:
    try:
        return Language.from_iso_code_639_1(code)
    except ValueError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1)


def _setup_logging(level, verbose: bool) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler() if verbose else logging.NullHandler()
        ]
    )


if __name__ == "__main__":
    app()
