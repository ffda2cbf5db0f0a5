"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any

from .defaults import BookParams, PatternParams, ProfileParams, TapeParams


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    section: str
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_book_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate order book parameters."""
        errors = []

        if "depth" in params:
            value = params["depth"]
            if value is not None and (not _is_int(value) or value < 0):
                errors.append(ValidationError(
                    section="book",
                    field="depth",
                    message="Must be a non-negative integer or null",
                    value=value
                ))

        if "reject_crossed_book" in params:
            value = params["reject_crossed_book"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    section="book",
                    field="reject_crossed_book",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_tape_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate tape reading parameters."""
        errors = []

        if "block_threshold" in params:
            value = params["block_threshold"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    section="tape",
                    field="block_threshold",
                    message="Must be a positive number",
                    value=value
                ))

        if "cluster_time_window" in params:
            value = params["cluster_time_window"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    section="tape",
                    field="cluster_time_window",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "min_cluster_size" in params:
            value = params["min_cluster_size"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    section="tape",
                    field="min_cluster_size",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_profile_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate volume profile parameters."""
        errors = []

        if "tick_size" in params:
            value = params["tick_size"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    section="profile",
                    field="tick_size",
                    message="Must be a positive number",
                    value=value
                ))

        if "value_area_pct" in params:
            value = params["value_area_pct"]
            if not _is_number(value) or value <= 0 or value > 1:
                errors.append(ValidationError(
                    section="profile",
                    field="value_area_pct",
                    message="Must be a positive number between 0 and 1",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_pattern_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate pattern detection parameters."""
        errors = []

        if "iceberg_min_fills" in params:
            value = params["iceberg_min_fills"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    section="patterns",
                    field="iceberg_min_fills",
                    message="Must be a positive integer",
                    value=value
                ))

        for name in ("iceberg_price_tolerance", "absorption_price_range"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        section="patterns",
                        field=name,
                        message="Must be a non-negative number",
                        value=value
                    ))

        for name in ("spoofing_threshold", "support_resistance_threshold",
                     "absorption_volume_threshold"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        section="patterns",
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """
        Validate complete configuration.

        Unknown sections or keys and sections that are not mappings are
        reported as errors so a misspelled parameter never falls back to its
        default silently.
        """
        errors = []

        for section, params in config.items():
            if section not in _SECTIONS:
                errors.append(ValidationError(
                    section=section,
                    field="",
                    message="Unknown configuration section",
                    value=params
                ))
                continue

            if not isinstance(params, dict):
                errors.append(ValidationError(
                    section=section,
                    field="",
                    message="Must be a mapping",
                    value=params
                ))
                continue

            params_class, validate = _SECTIONS[section]
            known = {f.name for f in fields(params_class)}
            for key in params:
                if key not in known:
                    errors.append(ValidationError(
                        section=section,
                        field=str(key),
                        message="Unknown parameter",
                        value=params[key]
                    ))

            errors.extend(validate(params))

        return errors


_SECTIONS = {
    "book": (BookParams, ConfigValidator.validate_book_params),
    "tape": (TapeParams, ConfigValidator.validate_tape_params),
    "profile": (ProfileParams, ConfigValidator.validate_profile_params),
    "patterns": (PatternParams, ConfigValidator.validate_pattern_params),
}
