"""
app/validators/route_validator.py

Row-level validation and type coercion for GTFS routes.txt records.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from pydantic import AnyUrl, TypeAdapter, ValidationError

from app.domain.gtfs_route import FieldValidationError, Route

HEX_COLOR_PATTERN = re.compile(r"^[0-9A-F]{6}$")
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


class RouteRowValidator:
    """
    Validates and coerces raw routes.txt rows into Route records.
    """

    def validate_row(
        self,
        *,
        raw_row: Mapping[str, str | None],
        row_number: int,
    ) -> tuple[Route | None, list[FieldValidationError]]:
        """
        Validate one raw row. Every failing field is reported.
        """

        errors: list[FieldValidationError] = []

        route_id = self._parse_required_string(
            value=raw_row.get("route_id"),
            row_number=row_number,
            column="route_id",
            errors=errors,
        )
        agency_id = self._parse_optional_string(raw_row.get("agency_id"))
        route_short_name = self._parse_present_string(
            value=raw_row.get("route_short_name"),
            row_number=row_number,
            column="route_short_name",
            errors=errors,
        )
        route_long_name = self._parse_present_string(
            value=raw_row.get("route_long_name"),
            row_number=row_number,
            column="route_long_name",
            errors=errors,
        )
        route_desc = raw_row.get("route_desc")

        route_type = self._parse_route_type(
            value=raw_row.get("route_type"),
            row_number=row_number,
            errors=errors,
        )
        route_url = self._parse_url(
            value=raw_row.get("route_url"),
            row_number=row_number,
            errors=errors,
        )
        route_color = self._parse_color(
            value=raw_row.get("route_color"),
            row_number=row_number,
            column="route_color",
            errors=errors,
        )
        route_text_color = self._parse_color(
            value=raw_row.get("route_text_color"),
            row_number=row_number,
            column="route_text_color",
            errors=errors,
        )
        route_sort_order = self._parse_sort_order(
            value=raw_row.get("route_sort_order"),
            row_number=row_number,
            errors=errors,
        )

        if errors:
            return None, errors

        return (
            Route(
                route_id=route_id,
                agency_id=agency_id,
                route_short_name=route_short_name,
                route_long_name=route_long_name,
                route_desc=route_desc,
                route_type=route_type,
                route_url=route_url,
                route_color=route_color,
                route_text_color=route_text_color,
                route_sort_order=route_sort_order,
            ),
            [],
        )

    def _parse_required_string(
        self,
        *,
        value: Any,
        row_number: int,
        column: str,
        errors: list[FieldValidationError],
    ) -> str:
        if self._is_blank(value):
            errors.append(
                FieldValidationError(
                    row_number=row_number,
                    column=column,
                    message="Required value is missing.",
                    value=self._stringify_value(value),
                )
            )
            return ""
        return str(value).strip()

    def _parse_present_string(
        self,
        *,
        value: str | None,
        row_number: int,
        column: str,
        errors: list[FieldValidationError],
    ) -> str:
        # Column must exist; an empty value is allowed.
        if value is None:
            errors.append(
                FieldValidationError(
                    row_number=row_number,
                    column=column,
                    message="Required column is missing.",
                    value=None,
                )
            )
            return ""
        return value

    def _parse_optional_string(self, value: str | None) -> str | None:
        if self._is_blank(value):
            return None
        return str(value).strip()

    def _parse_route_type(
        self,
        *,
        value: str | None,
        row_number: int,
        errors: list[FieldValidationError],
    ) -> int:
        if self._is_blank(value):
            errors.append(
                FieldValidationError(
                    row_number=row_number,
                    column="route_type",
                    message="Required value is missing.",
                    value=self._stringify_value(value),
                )
            )
            return 0

        parsed = self._parse_integer(str(value))
        if parsed is None:
            errors.append(
                FieldValidationError(
                    row_number=row_number,
                    column="route_type",
                    message="route_type must be an integer.",
                    value=self._stringify_value(value),
                )
            )
            return 0
        return parsed

    def _parse_url(
        self,
        *,
        value: str | None,
        row_number: int,
        errors: list[FieldValidationError],
    ) -> str | None:
        if value is None:
            return None

        raw = value.strip()
        if raw == "":
            return ""

        try:
            _URL_ADAPTER.validate_python(raw)
        except ValidationError:
            errors.append(
                FieldValidationError(
                    row_number=row_number,
                    column="route_url",
                    message="route_url must be empty or an absolute URL.",
                    value=value,
                )
            )
            return None
        return raw

    def _parse_color(
        self,
        *,
        value: str | None,
        row_number: int,
        column: str,
        errors: list[FieldValidationError],
    ) -> str | None:
        if value is None:
            return None

        normalized = value.strip().upper()
        if normalized == "" or HEX_COLOR_PATTERN.match(normalized):
            return normalized

        errors.append(
            FieldValidationError(
                row_number=row_number,
                column=column,
                message=f"{column} must be empty or a 6-digit hex string (e.g., 00FF00) without '#'.",
                value=value,
            )
        )
        return None

    def _parse_sort_order(
        self,
        *,
        value: str | None,
        row_number: int,
        errors: list[FieldValidationError],
    ) -> int | None:
        if self._is_blank(value):
            return None

        parsed = self._parse_integer(str(value))
        if parsed is None or parsed < 0:
            errors.append(
                FieldValidationError(
                    row_number=row_number,
                    column="route_sort_order",
                    message="route_sort_order must be a non-negative integer.",
                    value=self._stringify_value(value),
                )
            )
            return None
        return parsed

    @staticmethod
    def _parse_integer(raw: str) -> int | None:
        text = raw.strip()
        if _INTEGER_PATTERN.match(text):
            return int(text)

        # Integral decimals such as "3.0" or "1e1" are accepted.
        try:
            decimal_value = Decimal(text)
        except InvalidOperation:
            return None
        if not decimal_value.is_finite() or decimal_value != decimal_value.to_integral_value():
            return None
        return int(decimal_value)

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return str(value).strip() == ""

    @staticmethod
    def _stringify_value(value: Any) -> str | None:
        if value is None:
            return None
        return str(value)
