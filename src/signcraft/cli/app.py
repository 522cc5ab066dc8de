"""CLI application entry point for signcraft.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from signcraft import __version__
from signcraft.cli.output import (
    console,
    print_error,
    print_header,
    print_sign_info,
    print_step,
    print_success,
    print_warning,
)
from signcraft.config import (
    ExportConfig,
    LoggingConfig,
    OutputFormat,
    SignDimensions,
    SignSettings,
    TextAlign,
)
from signcraft.core import SignGenerator
from signcraft.domain import FontDescriptor, FontStyle, Sign
from signcraft.exceptions import (
    EmptyInputError,
    FileWriteError,
    FontLoadError,
    InvalidProjectFileError,
    SignError,
)
from signcraft.io import FontToolsOutlineProvider, load_project, save_project
from signcraft.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="signcraft",
    help="Turn text into a printable 3D sign with raised, beveled letters.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Signcraft[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def generate(
    text: Annotated[
        str | None,
        typer.Argument(
            help="Sign text; separate lines with a literal \\n",
            show_default=False,
        ),
    ] = None,
    font: Annotated[
        Path | None,
        typer.Option(
            "--font",
            "-f",
            help="Path to a TTF/OTF font file",
        ),
    ] = None,
    size: Annotated[
        float | None,
        typer.Option(
            "--size",
            "-s",
            help="Font size (default: 36, or the project's size)",
            min=1.0,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: sign.{ext})",
        ),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option(
            "--format",
            help="Output format (stl|3mf); guessed from --output if omitted",
        ),
    ] = None,
    align: Annotated[
        str | None,
        typer.Option(
            "--align",
            "-a",
            help="Line alignment (left|center|right)",
        ),
    ] = None,
    base_height: Annotated[
        float | None,
        typer.Option("--base-height", help="Base plate thickness in mm (default: 2.0)"),
    ] = None,
    base_margin: Annotated[
        float | None,
        typer.Option("--base-margin", help="Plate margin around the text in mm (default: 5.0)"),
    ] = None,
    letter_height: Annotated[
        float | None,
        typer.Option("--letter-height", help="Letter height above the plate in mm (default: 5.0)"),
    ] = None,
    bevel_height: Annotated[
        float | None,
        typer.Option("--bevel-height", help="Bevel band height in mm (default: 0.5)"),
    ] = None,
    multi_part: Annotated[
        bool,
        typer.Option(
            "--multi-part",
            help="3MF only: write base, body and front as separate objects",
        ),
    ] = False,
    colored: Annotated[
        bool,
        typer.Option(
            "--colored",
            help="3MF only: color base, body and front with base materials",
        ),
    ] = False,
    project: Annotated[
        Path | None,
        typer.Option(
            "--project",
            "-p",
            help="Load text, font and dimensions from a sign project file",
        ),
    ] = None,
    save_project_path: Annotated[
        Path | None,
        typer.Option(
            "--save-project",
            help="Save the effective settings as a sign project file",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Generate a sign model from text.

    The sign is a rectangular base plate with the text standing on it as
    raised letters with a chamfered top edge.

    Example:
        signcraft "HELLO\\nWORLD" --font Arial.ttf --align center -o hello.3mf
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if log_level.upper() not in LOG_LEVELS:
        print_error(f"Invalid log level: {log_level}", details="Valid values: " + ", ".join(LOG_LEVELS))
        raise typer.Exit(code=1)

    try:
        sign = load_project(project) if project is not None else None

        sign_text = _resolve_text(text, sign)
        font_path = _resolve_font(font, sign)
        font_size = size if size is not None else (sign.font_size if sign else 36.0)
        alignment = _resolve_alignment(align, sign)
        dimensions = _resolve_dimensions(
            sign, base_height, base_margin, letter_height, bevel_height
        )
        fmt = _resolve_format(output_format, output)
        output_path = output if output is not None else Path(f"sign{fmt.extension}")

        if fmt == OutputFormat.STL and (multi_part or colored) and not quiet:
            print_warning("--multi-part and --colored only apply to 3MF output")

        settings = SignSettings(
            dimensions=dimensions,
            export=ExportConfig(
                output_format=fmt,
                multi_part=multi_part,
                colored=colored,
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level="INFO" if verbose else log_level,
            ),
            alignment=alignment,
        )

        configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )

        if not quiet:
            print_header(__version__)
            print_step("Preparing")
            print_sign_info(
                font_path=str(font_path),
                font_size=font_size,
                line_count=sum(1 for line in sign_text.splitlines() if line.strip()),
                alignment=alignment.value,
                output_format=fmt.value,
            )
            print_step("Generating")

        descriptor = FontDescriptor(
            name=font_path.stem,
            size=font_size,
            style=sign.font_style if sign else FontStyle.PLAIN,
            path=font_path,
        )

        with FontToolsOutlineProvider(settings.geometry.flatten_tolerance) as provider:
            generator = SignGenerator(settings, provider)
            stats = generator.generate(sign_text, descriptor, output_path, output_format=fmt)

        if save_project_path is not None:
            save_project(
                Sign(
                    text=sign_text,
                    font_name=str(font_path),
                    font_size=int(round(font_size)),
                    font_style=descriptor.style,
                    alignment=alignment,
                    base_height=dimensions.base_height,
                    base_margin=dimensions.base_margin,
                    letter_height=dimensions.letter_height,
                    bevel_height=dimensions.bevel_height,
                ),
                save_project_path,
            )

        if not quiet:
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                total_time_s=stats.duration_seconds,
                triangles=stats.triangle_count,
                vertices=stats.vertex_count,
                fallbacks=stats.fallback_count,
                orphan_holes=stats.orphan_hole_count,
                open_edges=stats.open_edge_count,
                dimensions=dimensions,
            )

    except EmptyInputError as e:
        print_error(str(e), details="Enter at least one non-blank line of text.")
        raise typer.Exit(code=1)
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except FileWriteError as e:
        print_error(f"Could not write file: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except InvalidProjectFileError as e:
        print_error(f"Could not read project: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ValidationError as e:
        print_error("Invalid dimensions", details=_validation_summary(e))
        raise typer.Exit(code=1)
    except SignError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _resolve_text(text: str | None, sign: Sign | None) -> str:
    if text is not None:
        return text.replace("\\n", "\n")
    if sign is not None:
        return sign.text
    print_error("No text given", details="Pass the sign text or --project FILE.")
    raise typer.Exit(code=1)


def _resolve_font(font: Path | None, sign: Sign | None) -> Path:
    if font is not None:
        return font
    if sign is not None and Path(sign.font_name).is_file():
        return Path(sign.font_name)
    print_error(
        "No font file given",
        details="Pass --font PATH (project font names are used only when they are file paths).",
    )
    raise typer.Exit(code=1)


def _resolve_alignment(align: str | None, sign: Sign | None) -> TextAlign:
    if align is None:
        return sign.alignment if sign is not None else TextAlign.LEFT
    try:
        return TextAlign(align.upper())
    except ValueError:
        print_error(f"Invalid alignment: {align}", details="Valid values: left, center, right")
        raise typer.Exit(code=1)


def _resolve_format(output_format: str | None, output: Path | None) -> OutputFormat:
    if output_format is not None:
        try:
            return OutputFormat(output_format.lower().lstrip("."))
        except ValueError:
            print_error(f"Invalid format: {output_format}", details="Valid values: stl, 3mf")
            raise typer.Exit(code=1)
    if output is not None:
        guessed = OutputFormat.from_path(output)
        if guessed is not None:
            return guessed
    return OutputFormat.STL


def _resolve_dimensions(
    sign: Sign | None,
    base_height: float | None,
    base_margin: float | None,
    letter_height: float | None,
    bevel_height: float | None,
) -> SignDimensions:
    """Merge project dimensions with CLI overrides.

    Raises:
        pydantic.ValidationError: If the merged values are invalid
    """
    values: dict[str, float] = {}
    if sign is not None:
        values = {
            "base_height": sign.base_height,
            "base_margin": sign.base_margin,
            "letter_height": sign.letter_height,
            "bevel_height": sign.bevel_height,
        }
    overrides = {
        "base_height": base_height,
        "base_margin": base_margin,
        "letter_height": letter_height,
        "bevel_height": bevel_height,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return SignDimensions(**values)


def _validation_summary(error: ValidationError) -> str:
    return "; ".join(err["msg"] for err in error.errors())


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
