# src/numkernel/dataio.py
from __future__ import annotations

from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path


def data_path(rel: str) -> Path:
    """
    Resolve a packaged data file: numkernel/data/<rel>.

    Returns a filesystem Path you can open.
    """
    rel = rel.lstrip("/\\")
    ref = pkg_files("numkernel") / "data" / rel
    # materialize to a real path (needed for zip/egg resources)
    with as_file(ref) as real:
        return Path(real)
