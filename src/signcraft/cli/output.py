"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted steps, summaries and error messages.
"""

from rich.console import Console
from rich.text import Text

from signcraft.config import SignDimensions

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_WARN = "!"  # Warning
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Signcraft[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_sign_info(
    font_path: str,
    font_size: float,
    line_count: int,
    alignment: str,
    output_format: str,
) -> None:
    """Print what is about to be generated.

    Args:
        font_path: Path to the font file
        font_size: Font size in outline units
        line_count: Number of non-blank text lines
        alignment: Line alignment name
        output_format: Output format name
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_size:g} pt)")
    console.print(line1)
    plural = "line" if line_count == 1 else "lines"
    console.print(
        f"  {line_count} {plural} {SYM_DOT} {alignment.lower()} aligned {SYM_DOT} "
        f"{output_format.upper()}"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    triangles: int,
    vertices: int,
    fallbacks: int,
    orphan_holes: int,
    open_edges: int,
    dimensions: SignDimensions,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total generation time in seconds
        triangles: Number of triangles written
        vertices: Number of welded vertices
        fallbacks: Number of caps triangulated with the fan fallback
        orphan_holes: Number of holes without an owning outer contour
        open_edges: Number of unmatched edges after welding
        dimensions: Dimensions the sign was built with
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    console.print(f"  {triangles:,} triangles {SYM_DOT} {vertices:,} vertices")

    d = dimensions
    console.print(
        f"  base 0–{d.z_base:g}mm {SYM_DOT} letters {d.z_base:g}–{d.z_top:g}mm "
        f"{SYM_DOT} bevel {d.z_top:g}–{d.z_bevel:g}mm"
    )

    if fallbacks or orphan_holes or open_edges:
        console.print(
            f"  [yellow]{SYM_WARN} {fallbacks} fallback triangulations {SYM_DOT} "
            f"{orphan_holes} orphan holes {SYM_DOT} {open_edges} open edges[/yellow]"
        )


def print_warning(message: str) -> None:
    """Print warning message.

    Args:
        message: Warning text
    """
    console.print(f"[yellow]{SYM_WARN} {message}[/yellow]")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
