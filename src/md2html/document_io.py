from __future__ import annotations

from pathlib import Path


class DocumentReadError(RuntimeError):
    pass


class DocumentWriteError(RuntimeError):
    pass


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def read_document(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise DocumentReadError(f"Could not read file {path}: {_reason(exc)}") from exc


def write_document(path: Path, data: bytes) -> None:
    """Replace the contents of ``path`` in place, keeping its mode and any symlink."""
    try:
        handle = path.open("wb")
    except OSError as exc:
        raise DocumentWriteError(f"Could not open file for writing: {_reason(exc)}") from exc

    try:
        with handle:
            handle.write(data)
    except OSError as exc:
        raise DocumentWriteError(f"Error writing to file: {_reason(exc)}") from exc
