"""File discovery: find source files respecting exclusion rules."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

_logger = logging.getLogger(__name__)


def iter_source_files(
    root: Path,
    *,
    extensions: Iterable[str],
    ignore_dirs: Iterable[str],
) -> Iterator[Path]:
    """Yield files under *root* whose suffix is in *extensions*.

    Directories named in *ignore_dirs* are pruned wherever they appear.
    Symlinked directories are not followed.  A directory that cannot be
    listed is logged and skipped; the walk carries on with its siblings.
    """
    exts = frozenset(extensions)
    skip = frozenset(ignore_dirs)

    if not root.is_dir():
        _logger.warning("Source directory does not exist: %s", root)
        return

    def _on_error(exc: OSError) -> None:
        _logger.warning("Cannot traverse directory %s: %s", exc.filename, exc.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        # Prune in place so os.walk never descends into excluded trees.
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for name in sorted(filenames):
            if os.path.splitext(name)[1] not in exts:
                continue
            path = Path(dirpath) / name
            if not path.is_file():
                continue
            yield path
