import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)


def _record(path, exc: OSError, errors: Optional[List[OSError]]) -> None:
    logger.warning("Error counting %s: %s", path, exc)
    if errors is not None:
        errors.append(exc)


def count_dir(path, errors: Optional[List[OSError]] = None) -> float:
    """
    Count the non-directory entries under path, recursing into subdirectories.

    Failing to open path itself raises OSError. A subdirectory that cannot be
    opened, or a listing that breaks off midway, is logged and recorded in
    errors; the count gathered so far is kept and siblings are still counted.
    Symlinks are not followed. Depth is unbounded, so a very deep tree ends in
    RecursionError.
    """
    count = 0.0
    with os.scandir(path) as entries:
        try:
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    # Removed between listing and stat.
                    continue
                if not is_dir:
                    count += 1
                    continue
                try:
                    count += count_dir(entry.path, errors)
                except OSError as exc:
                    _record(entry.path, exc, errors)
        except OSError as exc:
            _record(path, exc, errors)
    return count
