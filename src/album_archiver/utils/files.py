# ABOUTME: Filesystem helpers for write-then-rename output
# ABOUTME: Readers never observe a partially written page or document

import contextlib
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path


@contextlib.contextmanager
def atomic_destination(destination: Path) -> Iterator[Path]:
    """Yield a temporary sibling path that replaces ``destination`` on success.

    The temporary file is removed if the block raises.
    """
    fd, tmp_name = tempfile.mkstemp(
        dir=destination.parent, prefix=f".{destination.stem}.", suffix=f"{destination.suffix}.part"
    )
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        yield tmp_path
        os.replace(tmp_path, destination)
    finally:
        tmp_path.unlink(missing_ok=True)


def write_bytes_atomic(destination: Path, data: bytes) -> None:
    """Write ``data`` to ``destination`` via a temporary file and rename."""
    with atomic_destination(destination) as tmp_path:
        tmp_path.write_bytes(data)
