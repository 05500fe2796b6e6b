"""Startup banner — mode-aware status output.

Prints a short banner with page count, timing, and the directories in
play.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from folio._types import FolioMode
    from folio.config import FolioConfig


# ---------------------------------------------------------------------------
# ANSI helpers, disabled by NO_COLOR (https://no-color.org) or TERM=dumb
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "build": (_YELLOW, "build"),
    "watch": (_GREEN, "watch"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _display(path: Path, config: FolioConfig) -> str:
    try:
        return str(path.relative_to(config.root))
    except ValueError:
        return str(path)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: FolioConfig,
    page_count: int,
    mode: FolioMode,
    *,
    load_ms: float = 0.0,
    watched: tuple[Path, ...] = (),
    warnings: list[str] | None = None,
) -> None:
    """Print the folio banner to stderr.

    Args:
        config: Resolved FolioConfig.
        page_count: Number of pages built.
        mode: One of ``"build"``, ``"watch"``.
        load_ms: Time spent on the build in milliseconds.
        watched: Directories being watched (watch mode).
        warnings: Optional list of warning messages to display.

    """
    from folio import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}folio{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    pages_label = "page" if page_count == 1 else "pages"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {page_count} {pages_label} built{timing}")
    lines.append(f"  {_DIM}├─{_RESET} layout: {_DIM}{_display(config.layout_path, config)}{_RESET}")
    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{_display(config.output_path, config)}{_RESET}")

    if mode == "watch":
        lines.append("")
        lines.append("[watch] watching directories:")
        lines.extend(f" - {_display(path, config)}" for path in watched)

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def print_error(exc: BaseException) -> None:
    """Print a fatal error line to stderr."""
    print(f"{_RED}error:{_RESET} {exc}", file=sys.stderr)
