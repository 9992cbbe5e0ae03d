"""
app/services/file_splitter.py

Splits oversized GTFS text files into numbered, size-bounded parts.

Every part starts with the source header line and holds whole lines only.
A part is written as soon as the next line would push it past the size
limit, unless it holds no data line yet; a single line larger than the
limit therefore gets a part of its own instead of stalling the split.
Parts are named ``{stem}.{ordinal}{suffix}`` next to the source, and names
of that shape are never split again.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from app.config import SplitterSettings, get_splitter_settings
from app.domain.file_split import ScanSummary, SplitPart, SplitResult
from app.logging_utils import log_event

logger = logging.getLogger(__name__)

SPLIT_PART_PATTERN = re.compile(r"\.\d+\.txt$")
_MIB = 1024 * 1024


class SourceDirectoryNotFoundError(FileNotFoundError):
    """
    Raised when the directory to scan does not exist.
    """


class EmptySourceFileError(ValueError):
    """
    Raised when a source file has no content to split.
    """


def is_split_part(filename: str) -> bool:
    """
    Return True for names produced by a previous split, e.g. ``stop_times.3.txt``.
    """

    return SPLIT_PART_PATTERN.search(filename.lower()) is not None


def part_path(source_path: Path, ordinal: int) -> Path:
    return source_path.with_name(f"{source_path.stem}.{ordinal}{source_path.suffix}")


def iter_lines(handle: BinaryIO, chunk_size: int) -> Iterator[bytes]:
    """
    Yield newline-terminated lines from a binary stream read in chunks.

    A partial line at a chunk boundary is carried into the next chunk. A
    trailing fragment without a newline is yielded as the last line.
    """

    leftover = b""
    for chunk in iter(lambda: handle.read(chunk_size), b""):
        lines = (leftover + chunk).split(b"\n")
        leftover = lines.pop()
        for line in lines:
            yield line + b"\n"
    if leftover:
        yield leftover


class _PendingPart:
    """
    Lines collected for the part currently being filled.
    """

    def __init__(self, header: bytes) -> None:
        self.lines: list[bytes] = [header]
        self.size_bytes = len(header)
        self.data_lines = 0

    def accepts(self, line_size: int, max_size_bytes: int) -> bool:
        return self.data_lines == 0 or self.size_bytes + line_size <= max_size_bytes

    def add(self, line: bytes) -> None:
        self.lines.append(line)
        self.size_bytes += len(line)
        self.data_lines += 1


class GTFSFileSplitter:
    """
    Scans a directory and splits every .txt file above the size limit.
    """

    def __init__(self, *, settings: SplitterSettings | None = None) -> None:
        self._settings = settings or get_splitter_settings()

    @property
    def settings(self) -> SplitterSettings:
        return self._settings

    def scan_directory(self, source_dir: Path | None = None) -> ScanSummary:
        """
        Split every oversized .txt file in ``source_dir``.

        Files are visited in name order. An empty or unreadable file is
        logged and skipped; a missing directory aborts the scan.

        Raises:
            SourceDirectoryNotFoundError: if ``source_dir`` does not exist.
        """

        directory = source_dir or self._settings.source_dir
        max_size = self._settings.max_file_size_bytes
        if not directory.is_dir():
            raise SourceDirectoryNotFoundError(f"The directory {directory} was not found.")

        logger.info("Scanning %s for .txt files over %sMB...", directory, round(max_size / _MIB, 2))

        files_scanned = 0
        split_results: list[SplitResult] = []
        skipped_already_split: list[Path] = []
        below_threshold: list[Path] = []
        failed: list[Path] = []

        for entry in sorted(directory.iterdir()):
            if not entry.is_file() or entry.suffix.lower() != ".txt":
                continue
            files_scanned += 1

            if is_split_part(entry.name):
                logger.info("Skipping already split file: %s", entry.name)
                skipped_already_split.append(entry)
                continue

            try:
                size = entry.stat().st_size
                if size <= max_size:
                    logger.info("File %s is %dMB, no splitting needed.", entry.name, round(size / _MIB))
                    below_threshold.append(entry)
                    continue

                logger.info("File %s is %dMB and needs splitting.", entry.name, round(size / _MIB))
                split_results.append(self.split_file(entry))
            except EmptySourceFileError:
                logger.warning("File %s is empty or unreadable.", entry.name)
                failed.append(entry)
            except OSError as exc:
                logger.warning("File %s is empty or unreadable: %s", entry.name, exc)
                failed.append(entry)

        logger.info("Scan complete.")
        return ScanSummary(
            source_dir=directory,
            files_scanned=files_scanned,
            split_results=split_results,
            skipped_already_split=skipped_already_split,
            below_threshold=below_threshold,
            failed=failed,
        )

    def split_file(self, source_path: Path) -> SplitResult:
        """
        Split one file into header-prefixed parts bounded by the size limit.

        Raises:
            EmptySourceFileError: if the file has no content.
            OSError: if the file cannot be read or a part cannot be written.
        """

        max_size = self._settings.max_file_size_bytes
        source_size = source_path.stat().st_size
        parts: list[SplitPart] = []

        logger.info("Splitting %s...", source_path.name)
        with source_path.open("rb") as handle:
            lines = iter_lines(handle, self._settings.chunk_size_bytes)
            header = next(lines, None)
            if header is None:
                raise EmptySourceFileError(f"{source_path} is empty.")

            pending = _PendingPart(header)
            for line in lines:
                if not pending.accepts(len(line), max_size):
                    parts.append(self._write_part(source_path, len(parts), pending))
                    pending = _PendingPart(header)
                pending.add(line)

            if pending.data_lines:
                parts.append(self._write_part(source_path, len(parts), pending))

        if not parts:
            logger.info("File %s has a header but no data lines; nothing written.", source_path.name)

        log_event(
            logger,
            logging.INFO,
            "split_file_finished",
            source=source_path.name,
            source_size_bytes=source_size,
            parts=len(parts),
        )
        return SplitResult(source_path=source_path, source_size_bytes=source_size, parts=parts)

    @staticmethod
    def _write_part(source_path: Path, ordinal: int, pending: _PendingPart) -> SplitPart:
        destination = part_path(source_path, ordinal)
        with destination.open("wb") as handle:
            handle.writelines(pending.lines)

        part = SplitPart(
            ordinal=ordinal,
            path=destination,
            size_bytes=pending.size_bytes,
            data_lines=pending.data_lines,
        )
        log_event(
            logger,
            logging.INFO,
            "split_part_created",
            path=destination.name,
            ordinal=ordinal,
            size_bytes=part.size_bytes,
            data_lines=part.data_lines,
        )
        return part
