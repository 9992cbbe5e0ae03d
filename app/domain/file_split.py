"""
app/domain/file_split.py

Domain models used by the oversized file splitter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class SplitPart:
    """
    One part written to disk.
    """

    ordinal: int
    path: Path
    size_bytes: int
    data_lines: int


@dataclass(frozen=True)
class SplitResult:
    """
    Outcome of splitting one source file.
    """

    source_path: Path
    source_size_bytes: int
    parts: list[SplitPart] = field(default_factory=list)


@dataclass(frozen=True)
class ScanSummary:
    """
    End-of-run summary for one directory scan.
    """

    source_dir: Path
    files_scanned: int
    split_results: list[SplitResult] = field(default_factory=list)
    skipped_already_split: list[Path] = field(default_factory=list)
    below_threshold: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)

    @property
    def parts_written(self) -> int:
        return sum(len(result.parts) for result in self.split_results)
