"""
app/services/route_loader.py

Loads a GTFS routes.txt CSV blob into validated Route records.

Row-level failures are collected as RouteRecordError values and never stop
the batch. Only an unusable source (missing, not text, blank, or not
parseable as CSV) produces an unsuccessful ProcessedRoutes, and even then
nothing is raised past load_routes().
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from app.domain.gtfs_route import ProcessedRoutes, Route, RouteRecordError
from app.validators.route_validator import RouteRowValidator

logger = logging.getLogger(__name__)

RAW_INPUT_PREVIEW_CHARS = 500
DEFAULT_SOURCE_DESCRIPTION = "Embedded routes.txt content"


class CSVFormatError(ValueError):
    """
    Raised when CSV text cannot be parsed into header-keyed records.
    """


def _is_blank_line(fields: list[str]) -> bool:
    return not fields or (len(fields) == 1 and fields[0].strip() == "")


def parse_csv_records(text: str) -> list[tuple[int, dict[str, str]]]:
    """
    Parse comma-delimited CSV text into (row_number, record) pairs.

    The first row is the header. Header names and field values are trimmed,
    including whitespace inside quotes. Blank lines are skipped, and a row
    whose field count differs from the header's is a format error. A row of
    empty fields such as ``,,,`` is still a record. Row numbers are the
    physical line on which the record ends.
    """

    reader = csv.reader(io.StringIO(text.removeprefix("\ufeff"), newline=""), strict=True)
    headers: list[str] | None = None
    records: list[tuple[int, dict[str, str]]] = []

    try:
        for fields in reader:
            if _is_blank_line(fields):
                continue

            values = [value.strip() for value in fields]

            if headers is None:
                headers = values
                continue

            if len(values) != len(headers):
                raise CSVFormatError(
                    f"Invalid record length on line {reader.line_num}: "
                    f"expected {len(headers)} fields, got {len(values)}."
                )
            records.append((reader.line_num, dict(zip(headers, values))))
    except csv.Error as exc:
        raise CSVFormatError(f"Invalid CSV format on line {reader.line_num}: {exc}") from exc

    if headers is None:
        raise CSVFormatError("CSV header row is missing.")
    return records


class RouteLoader:
    """
    Coordinates CSV parsing and per-row validation for routes.txt.
    """

    def __init__(
        self,
        *,
        validator: RouteRowValidator | None = None,
        log_validation_errors: bool = True,
        max_logged_validation_errors: int = 50,
    ) -> None:
        self._validator = validator or RouteRowValidator()
        self._log_validation_errors = log_validation_errors
        self._max_logged_validation_errors = max(1, max_logged_validation_errors)

    def load_text(
        self,
        text: object,
        *,
        source_description: str = DEFAULT_SOURCE_DESCRIPTION,
    ) -> ProcessedRoutes:
        """
        Parse and validate one CSV blob.
        """

        if not isinstance(text, str) or text.strip() == "":
            logger.error(
                "Routes CSV source is missing, empty, or not text source=%r",
                source_description,
            )
            return self._failure(
                source_description=source_description,
                error=RouteRecordError(details="Embedded CSV data not found or empty."),
            )

        try:
            records = parse_csv_records(text)
        except CSVFormatError as exc:
            logger.error("Critical error parsing routes CSV source=%r: %s", source_description, exc)
            return self._failure(
                source_description=source_description,
                error=RouteRecordError(
                    details=f"CSV parsing failed: {exc}",
                    raw_input=text[:RAW_INPUT_PREVIEW_CHARS],
                ),
            )

        routes: list[Route] = []
        errors: list[RouteRecordError] = []
        for row_number, record in records:
            route, row_errors = self._validator.validate_row(raw_row=record, row_number=row_number)
            if row_errors or route is None:
                error = RouteRecordError(
                    details=tuple(row_errors),
                    record=record,
                    row_number=row_number,
                )
                self._record_error(errors, error)
                continue
            routes.append(route)

        if errors:
            logger.warning(
                "%d validation errors while processing routes source=%r; %d routes loaded",
                len(errors),
                source_description,
                len(routes),
            )
        else:
            logger.info(
                "Successfully processed %d routes source=%r",
                len(routes),
                source_description,
            )

        return ProcessedRoutes(
            routes=tuple(routes),
            errors=tuple(errors),
            success=True,
            source_description=source_description,
            rows_read=len(records),
        )

    def load_file(self, path: Path) -> ProcessedRoutes:
        """
        Read a routes.txt file from disk and load it.
        """

        source_description = f"routes.txt at {path}"
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Unable to read routes file path=%s: %s", path, exc)
            return self._failure(
                source_description=source_description,
                error=RouteRecordError(details=f"Routes file could not be read: {exc}"),
            )
        return self.load_text(text, source_description=source_description)

    def _record_error(self, errors: list[RouteRecordError], error: RouteRecordError) -> None:
        if self._log_validation_errors and len(errors) < self._max_logged_validation_errors:
            logger.warning(
                "Route validation error row=%s route_id=%r message=%s",
                error.row_number,
                (error.record or {}).get("route_id"),
                error.message,
            )
        errors.append(error)

    @staticmethod
    def _failure(*, source_description: str, error: RouteRecordError) -> ProcessedRoutes:
        return ProcessedRoutes(
            routes=(),
            errors=(error,),
            success=False,
            source_description=source_description,
        )


def load_routes(text: object, *, source_description: str = DEFAULT_SOURCE_DESCRIPTION) -> ProcessedRoutes:
    """
    Load a routes CSV blob with default loader settings.
    """

    return RouteLoader().load_text(text, source_description=source_description)


def load_routes_file(path: Path) -> ProcessedRoutes:
    """
    Load a routes.txt file with default loader settings.
    """

    return RouteLoader().load_file(path)
