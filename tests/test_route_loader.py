"""
tests/test_route_loader.py

Pytest unit tests for RouteLoader and the CSV record parser.

Coverage
--------
- Rejected rows are isolated from the rest of the batch
- Blob-level failures (missing, non-string, blank, malformed)
- Parsing details: trimming, blank lines, BOM, ragged rows, row numbers
- Loading from a file on disk
"""

from __future__ import annotations

from pathlib import Path

import pytest

from app.services.route_loader import (
    CSVFormatError,
    RouteLoader,
    load_routes,
    load_routes_file,
    parse_csv_records,
)

HEADER = "route_id,agency_id,route_short_name,route_long_name,route_desc,route_type,route_url,route_color,route_text_color"

ROUTES_CSV = "\n".join(
    [
        HEADER,
        "A,MTA,A,8 Avenue Express,,1,https://example.com/a,0039A6,FFFFFF",
        "B,MTA,B,6 Avenue Express,,one,https://example.com/b,FF6319,FFFFFF",
        "C,MTA,C,8 Avenue Local,,1,,0039a6,ffffff",
        "",
        "M15,MTABC,M15,1st/2nd Av,Select Bus,3,,  00ff00 ,000000",
    ]
)


# ---------------------------------------------------------------------------
# Batch behaviour
# ---------------------------------------------------------------------------


class TestLoadRoutes:
    def test_invalid_row_does_not_abort_batch(self) -> None:
        result = load_routes(ROUTES_CSV)

        assert result.success is True
        assert [route.route_id for route in result.routes] == ["A", "C", "M15"]
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.record is not None
        assert error.record["route_id"] == "B"
        assert error.row_number == 3
        assert [detail.column for detail in error.details] == ["route_type"]
        assert result.rows_read == 4
        assert result.rows_failed == 1

    def test_colors_are_normalized(self) -> None:
        result = load_routes(ROUTES_CSV)

        by_id = {route.route_id: route for route in result.routes}
        assert by_id["C"].route_color == "0039A6"
        assert by_id["C"].route_text_color == "FFFFFF"
        assert by_id["M15"].route_color == "00FF00"
        assert by_id["M15"].route_type_name == "Bus"

    def test_source_description_is_kept(self) -> None:
        result = load_routes(ROUTES_CSV, source_description="unit test blob")

        assert result.source_description == "unit test blob"

    @pytest.mark.parametrize("blob", [None, "", "   \n  ", 42, b"route_id\nR1"])
    def test_missing_or_non_string_blob_fails(self, blob: object) -> None:
        result = load_routes(blob)

        assert result.success is False
        assert result.routes == ()
        assert len(result.errors) == 1
        assert result.errors[0].message == "Embedded CSV data not found or empty."

    def test_ragged_row_fails_whole_blob(self) -> None:
        blob = HEADER + "\nA,MTA,A,Name,,1,,,\nB,MTA,B\n"

        result = load_routes(blob)

        assert result.success is False
        assert result.routes == ()
        assert len(result.errors) == 1
        assert result.errors[0].message.startswith("CSV parsing failed:")
        assert result.errors[0].raw_input == blob[:500]

    def test_row_of_empty_fields_is_rejected_not_skipped(self) -> None:
        blob = "route_id,route_short_name,route_long_name,route_type\nA,1,x,3\n,,,\nB,2,y,3\n"

        result = load_routes(blob)

        assert result.success is True
        assert [route.route_id for route in result.routes] == ["A", "B"]
        assert len(result.errors) == 1
        assert result.errors[0].row_number == 3
        assert [detail.column for detail in result.errors[0].details] == ["route_id", "route_type"]

    def test_short_row_of_commas_fails_whole_blob(self) -> None:
        blob = "route_id,route_short_name,route_long_name,route_type\nA,1,x,3\n,\nB,2,y,3\n"

        result = load_routes(blob)

        assert result.success is False
        assert result.routes == ()
        assert result.errors[0].message.startswith("CSV parsing failed:")

    def test_missing_required_column_is_record_level(self) -> None:
        blob = "route_id,route_short_name,route_type\nR1,1,3\nR2,2,3\n"

        result = load_routes(blob)

        assert result.success is True
        assert result.routes == ()
        assert len(result.errors) == 2
        assert all(error.details[0].column == "route_long_name" for error in result.errors)

    def test_rejected_row_logging_can_be_disabled(self, caplog: pytest.LogCaptureFixture) -> None:
        loader = RouteLoader(log_validation_errors=False)

        with caplog.at_level("WARNING", logger="app.services.route_loader"):
            result = loader.load_text(ROUTES_CSV)

        assert len(result.errors) == 1
        assert not any("Route validation error" in record.message for record in caplog.records)


# ---------------------------------------------------------------------------
# CSV record parsing
# ---------------------------------------------------------------------------


class TestParseCsvRecords:
    def test_trims_headers_and_fields(self) -> None:
        records = parse_csv_records(" route_id , route_type \n  R1 ,  3 \n")

        assert records == [(2, {"route_id": "R1", "route_type": "3"})]

    def test_skips_blank_lines(self) -> None:
        records = parse_csv_records("route_id\n\nR1\n   \nR2\n")

        assert [record["route_id"] for _, record in records] == ["R1", "R2"]
        assert [row_number for row_number, _ in records] == [3, 5]

    def test_row_of_empty_fields_is_a_record(self) -> None:
        records = parse_csv_records("route_id,route_type\n , \nR1,3\n")

        assert records == [(2, {"route_id": "", "route_type": ""}), (3, {"route_id": "R1", "route_type": "3"})]

    def test_trims_padding_inside_quoted_fields(self) -> None:
        records = parse_csv_records('route_id,route_long_name\nR1,"  Main St  "\n')

        assert records[0][1]["route_long_name"] == "Main St"

    def test_ignores_byte_order_mark(self) -> None:
        records = parse_csv_records("\ufeffroute_id,route_type\nR1,3\n")

        assert records[0][1] == {"route_id": "R1", "route_type": "3"}

    def test_quoted_fields_may_contain_commas(self) -> None:
        records = parse_csv_records('route_id,route_long_name\nR1,"Downtown, via Main St"\n')

        assert records[0][1]["route_long_name"] == "Downtown, via Main St"

    def test_ragged_row_raises(self) -> None:
        with pytest.raises(CSVFormatError):
            parse_csv_records("route_id,route_type\nR1\n")

    def test_header_only_yields_no_records(self) -> None:
        assert parse_csv_records("route_id,route_type\n") == []


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestLoadRoutesFile:
    def test_loads_file_from_disk(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.txt"
        path.write_text(ROUTES_CSV, encoding="utf-8")

        result = load_routes_file(path)

        assert result.success is True
        assert len(result.routes) == 3
        assert str(path) in result.source_description

    def test_missing_file_is_a_source_failure(self, tmp_path: Path) -> None:
        result = load_routes_file(tmp_path / "routes.txt")

        assert result.success is False
        assert len(result.errors) == 1
        assert result.errors[0].message.startswith("Routes file could not be read:")
