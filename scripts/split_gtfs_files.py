"""
Split oversized GTFS .txt files in the configured source directory.

Takes no arguments; the directory and size limit come from
GTFS_SOURCE_DIR / GTFS_SPLIT_MAX_BYTES (see app/config.py).
"""

from __future__ import annotations

import logging

from app.config import get_log_level
from app.logging_utils import configure_logging
from app.services.file_splitter import GTFSFileSplitter, SourceDirectoryNotFoundError

logger = logging.getLogger("split_gtfs_files")


def main() -> int:
    configure_logging(get_log_level())
    logger.info("Starting split")

    splitter = GTFSFileSplitter()
    try:
        summary = splitter.scan_directory()
    except SourceDirectoryNotFoundError as exc:
        logger.error("Error: %s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Error processing files")
        return 1

    logger.info(
        "Scanned %d files: %d split into %d parts, %d already split, %d below threshold, %d failed",
        summary.files_scanned,
        len(summary.split_results),
        summary.parts_written,
        len(summary.skipped_already_split),
        len(summary.below_threshold),
        len(summary.failed),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
