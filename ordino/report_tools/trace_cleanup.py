"""Rename Playwright trace folders to readable names."""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_BROWSER_SUFFIX = re.compile(r"-chromium$|-firefox$|-webkit$", re.IGNORECASE)
_HASH_SEGMENT = re.compile(r"-[a-f0-9]{5}-")
_DASH_RUN = re.compile(r"-+")
_EDGE_DASHES = re.compile(r"^-+|-+$")


def clean_folder_name(folder_name: str) -> str:
    """Strip the browser suffix and hash segments from a trace folder name."""
    cleaned = _BROWSER_SUFFIX.sub("", folder_name)
    cleaned = _HASH_SEGMENT.sub("-", cleaned)
    cleaned = _DASH_RUN.sub("-", cleaned)
    return _EDGE_DASHES.sub("", cleaned)


def rename_trace_folders(trace_dir: Path) -> int:
    """Rename every trace folder in trace_dir to its cleaned name.

    Folders whose cleaned name is unchanged, empty or already taken are left
    alone. Failed renames are logged and skipped.

    Args:
        trace_dir: Directory holding one folder per traced test

    Returns:
        Number of folders renamed

    """
    if not trace_dir.is_dir():
        logger.info(f"No trace directory found at {trace_dir}, skipping cleanup")
        return 0

    renamed = 0
    for folder in sorted(p for p in trace_dir.iterdir() if p.is_dir()):
        clean_name = clean_folder_name(folder.name)
        if not clean_name or clean_name == folder.name:
            continue

        destination = trace_dir / clean_name
        if destination.exists():
            logger.warning(f"Skipped {folder.name} (destination exists)")
            continue

        try:
            folder.rename(destination)
        except OSError as e:
            logger.error(f"Failed to rename {folder.name}: {e}")
            continue

        logger.info(f"Renamed: {folder.name} -> {clean_name}")
        renamed += 1

    return renamed
