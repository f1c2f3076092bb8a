"""Configuration validation utilities."""

import logging
import re
from dataclasses import dataclass, fields
from typing import Any

from .defaults import (
    ChainParams,
    ClassifierParams,
    LoggingParams,
    MetadataParams,
    TallyParams,
)

_KNOWN_FIELDS = {
    "classifier": {f.name for f in fields(ClassifierParams)},
    "metadata": {f.name for f in fields(MetadataParams)},
    "tally": {f.name for f in fields(TallyParams)},
    "chain": {f.name for f in fields(ChainParams)},
    "logging": {f.name for f in fields(LoggingParams)},
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_classifier_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate message classification parameters."""
        errors = []

        for name in ("upgrade_message_type", "upgrade_message_marker",
                     "cancel_upgrade_message_type", "legacy_content_message_type"):
            if name in params and not _is_non_empty_str(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a non-empty string",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_metadata_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate plan info and version extraction parameters."""
        errors = []

        if "binary_name" in params:
            value = params["binary_name"]
            if not _is_non_empty_str(value) or "/" in value:
                errors.append(ValidationError(
                    field="binary_name",
                    message="Must be a non-empty string without '/'",
                    value=value
                ))

        if "platform_priority" in params:
            value = params["platform_priority"]
            if not isinstance(value, (list, tuple)) or not all(_is_non_empty_str(v) for v in value):
                errors.append(ValidationError(
                    field="platform_priority",
                    message="Must be a list of non-empty strings",
                    value=value
                ))

        if "version_pattern" in params:
            value = params["version_pattern"]
            if not _is_non_empty_str(value):
                errors.append(ValidationError(
                    field="version_pattern",
                    message="Must be a non-empty string",
                    value=value
                ))
            else:
                try:
                    re.compile(value)
                except re.error as e:
                    errors.append(ValidationError(
                        field="version_pattern",
                        message=f"Must be a valid regular expression ({e})",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_tally_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate tally and turnout parameters."""
        errors = []

        if "scale_exponent" in params:
            value = params["scale_exponent"]
            # Four decimals of a percentage need 100 * 10^4
            if not _is_int(value) or value < 6:
                errors.append(ValidationError(
                    field="scale_exponent",
                    message="Must be an integer >= 6",
                    value=value
                ))

        for name in ("two_decimals_at_pct", "three_decimals_at_pct"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative integer",
                        value=value
                    ))

        two = params.get("two_decimals_at_pct")
        three = params.get("three_decimals_at_pct")
        if _is_int(two) and _is_int(three) and three > two:
            errors.append(ValidationError(
                field="three_decimals_at_pct",
                message="Must not exceed two_decimals_at_pct",
                value=three
            ))

        if "unavailable" in params and not _is_non_empty_str(params["unavailable"]):
            errors.append(ValidationError(
                field="unavailable",
                message="Must be a non-empty string",
                value=params["unavailable"]
            ))

        return errors

    @staticmethod
    def validate_chain_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate denomination parameters."""
        errors = []

        if "denom_exponent" in params:
            value = params["denom_exponent"]
            if not _is_int(value) or value < 0 or value > 18:
                errors.append(ValidationError(
                    field="denom_exponent",
                    message="Must be an integer between 0 and 18",
                    value=value
                ))

        if "display_denom" in params and not _is_non_empty_str(params["display_denom"]):
            errors.append(ValidationError(
                field="display_denom",
                message="Must be a non-empty string",
                value=params["display_denom"]
            ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or not isinstance(logging.getLevelName(value.upper()), int):
                errors.append(ValidationError(
                    field="level",
                    message="Must be a logging level name",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_unknown_fields(config: dict[str, Any]) -> list[ValidationError]:
        """Reject sections and fields that no parameter set declares."""
        errors = []

        for section, params in config.items():
            if section not in _KNOWN_FIELDS:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=params
                ))
                continue
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            for name in params:
                if name not in _KNOWN_FIELDS[section]:
                    errors.append(ValidationError(
                        field=f"{section}.{name}",
                        message="Unknown configuration field",
                        value=params[name]
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = ConfigValidator.validate_unknown_fields(config)
        if errors:
            return errors

        if "classifier" in config:
            errors.extend(ConfigValidator.validate_classifier_params(config["classifier"]))

        if "metadata" in config:
            errors.extend(ConfigValidator.validate_metadata_params(config["metadata"]))

        if "tally" in config:
            errors.extend(ConfigValidator.validate_tally_params(config["tally"]))

        if "chain" in config:
            errors.extend(ConfigValidator.validate_chain_params(config["chain"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
