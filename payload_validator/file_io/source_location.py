from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional


# Last path segment: "/name" or "[index]"
_LAST_SEGMENT = re.compile(r"(/[^/\[]*|\[\d+\])$")


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def parent_path(path: str) -> Optional[str]:
    """Strip the last segment of a report path; ``None`` once the root is reached."""
    if not path:
        return None
    return _LAST_SEGMENT.sub("", path, count=1)


def lookup_source(
    source_map: Optional[Dict[str, Dict[str, int]]],
    path: Optional[str],
    file_path: Optional[Path] = None,
) -> SourceLocation:
    """Locate ``path`` in the source map.

    Missing values (e.g. a REQUIRED field) resolve to the nearest enclosing node
    that exists in the document; the reported path stays the one requested.
    """
    if not source_map or path is None:
        return SourceLocation(file_path=file_path, path=path)

    candidate: Optional[str] = path
    while candidate is not None:
        entry = source_map.get(candidate)
        if entry:
            return SourceLocation(
                file_path=file_path,
                path=path,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        candidate = parent_path(candidate)

    return SourceLocation(file_path=file_path, path=path)


def _format_file_path(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        file_path = _format_file_path(loc.file_path)
        if loc.line is not None and loc.column is not None:
            parts.append(f"source= {file_path}:{loc.line}:{loc.column} ")
        elif loc.line is not None:
            parts.append(f"source= {file_path}:{loc.line} ")
        else:
            parts.append(f"source= {file_path} ")

    if loc.path:
        parts.append(f"path={loc.path}")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
