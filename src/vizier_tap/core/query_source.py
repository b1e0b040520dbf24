"""Where the ADQL text of a ``query`` invocation comes from.

``-e`` beats a file argument, which beats piped stdin. Surrounding
whitespace is stripped and a source with nothing left is an InputError.
"""

from __future__ import annotations

import sys
from pathlib import Path

from vizier_tap.core.exceptions import InputError


def _read_query_file(file_path: str) -> str:
    try:
        return Path(file_path).read_text(encoding="utf-8")
    except FileNotFoundError:
        msg = (
            f"Query file not found: {file_path}\n"
            "Use -e for inline queries or pipe query via stdin."
        )
        raise InputError(msg) from None
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read query file {file_path}: {e}") from e


def resolve_query_source(inline: str | None, file_path: str | None) -> str:
    if inline is not None:
        text, origin = inline, "-e"
    elif file_path is not None:
        text, origin = _read_query_file(file_path), file_path
    elif not sys.stdin.isatty():
        text, origin = sys.stdin.read(), "stdin"
    else:
        raise InputError("No query provided. Use -e, file path, or pipe to stdin.")

    adql = text.strip()
    if not adql:
        raise InputError(f"Empty ADQL query from {origin}")
    return adql
