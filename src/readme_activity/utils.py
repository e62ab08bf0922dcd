from __future__ import annotations

from pathlib import Path
from typing import List, Sequence


def atomic_write(path: Path, data: str) -> None:
    """Write text atomically to disk."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(data, encoding="utf-8")
    tmp_path.replace(path)


def read_lines(path: Path) -> List[str]:
    return Path(path).read_text(encoding="utf-8").split("\n")


def write_lines(path: Path, lines: Sequence[str]) -> None:
    atomic_write(path, "\n".join(lines))
