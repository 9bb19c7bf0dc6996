# ABOUTME: Detection of sliced 3MF archives
# ABOUTME: Rejects archives that carry printer toolpaths instead of printable geometry

import io
import logging
import zipfile
from typing import List, Optional

# OS metadata entries that never count as payload
IGNORED_ENTRY_MARKERS = ('__MACOSX', '.DS_Store')

# Machine instruction file extensions and the generic marker substring
TOOLPATH_EXTENSIONS = ('.gcode', '.g')
TOOLPATH_MARKER = 'gcode'


def find_toolpath_entries(archive: zipfile.ZipFile) -> List[str]:
    """
    List archive entries that look like machine instructions.

    Directory entries and OS metadata are skipped. Names are matched
    case-insensitively on the full entry path, so nested entries count.
    """
    matches = []
    for info in archive.infolist():
        name = info.filename
        if info.is_dir():
            continue
        if any(marker in name for marker in IGNORED_ENTRY_MARKERS):
            continue

        lower = name.lower()
        if lower.endswith(TOOLPATH_EXTENSIONS) or TOOLPATH_MARKER in lower:
            matches.append(name)
    return matches


def is_sliced_3mf(data: bytes, logger: Optional[logging.Logger] = None) -> bool:
    """
    Check whether a 3MF payload is a sliced print job.

    An archive that cannot be opened is reported as not sliced; the loader
    will fail on it later with a more useful message.

    Args:
        data: Raw 3MF bytes
        logger: Sink for the swallowed failure (defaults to the package logger)

    Returns:
        True if any toolpath entry is present
    """
    logger = logger or logging.getLogger('model_converter')

    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            entries = find_toolpath_entries(archive)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as e:
        logger.warning("Failed to check if 3MF is sliced: %s", e)
        return False

    if entries:
        logger.debug("Sliced 3MF detected, toolpath entries: %s", entries)
    return bool(entries)
