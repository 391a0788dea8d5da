"""
DSL Validator
=============

Schema validation and normalization of raw DSL documents using Cerberus schemas.
Normalization fills documented defaults so the compiler always receives a complete
``ResumeDsl``.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from cerberus import Validator  # type: ignore[import-untyped]
from pydantic import ValidationError

from resume_dsl.config.logging import get_logger
from resume_dsl.config.settings import Settings, get_settings
from resume_dsl.models.schemas import (
    ColumnDistribution,
    LayoutType,
    MarginSize,
    PaperSize,
    ResumeDsl,
    SectionColumn,
    ValidationResult,
)

from .exceptions import DSLCompilationError, InvalidDSLError

logger = get_logger(__name__)

SEMVER_PATTERN = r"^\d+\.\d+\.\d+$"
COLOR_PATTERN = r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]+|(rgb|rgba|hsl|hsla)\([0-9.,%\s]+\))$"


def _color(default: str) -> Dict[str, Any]:
    return {"type": "string", "regex": COLOR_PATTERN, "default": default}


def _keyword(default: str) -> Dict[str, Any]:
    return {"type": "string", "empty": False, "default": default}


def _not_boolean(field: str, value: Any, error: Any) -> None:
    # bool is an int subclass; Cerberus accepts it for "integer"
    if isinstance(value, bool):
        error(field, "must be of integer type")


def _section(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Optional nested mapping that is created empty when absent so its defaults apply."""
    return {"type": "dict", "schema": schema, "default_setter": lambda document: {}}


class DSLValidator:
    """Validates and normalizes raw resume DSL documents."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="validator")
        self._setup_schemas()

    def _setup_schemas(self) -> None:
        """Setup validation schemas."""
        self.layout_schema = {
            "type": {"type": "string", "required": True, "allowed": [e.value for e in LayoutType]},
            "paperSize": {"type": "string", "required": True, "allowed": [e.value for e in PaperSize]},
            "margins": {
                "type": "string",
                "allowed": [e.value for e in MarginSize],
                "default": MarginSize.NORMAL.value,
            },
            "columnDistribution": {
                "type": "string",
                "nullable": True,
                "allowed": [e.value for e in ColumnDistribution],
            },
            "pageBreakBehavior": {"type": "string", "nullable": True},
            "showPageNumbers": {"type": "boolean", "nullable": True},
            "pageNumberPosition": {"type": "string", "nullable": True},
        }

        typography_schema = {
            "fontFamily": _section({"heading": _keyword("inter"), "body": _keyword("inter")}),
            "fontSize": _keyword("base"),
            "headingStyle": _keyword("bold"),
        }

        palette_schema = {
            "primary": _color("#0066cc"),
            "secondary": _color("#666666"),
            "background": _color("#ffffff"),
            "surface": _color("#f9fafb"),
            "text": _section(
                {
                    "primary": _color("#1a1a1a"),
                    "secondary": _color("#666666"),
                    "accent": _color("#0066cc"),
                }
            ),
            "border": _color("#e5e7eb"),
            "divider": _color("#e5e7eb"),
        }

        self.tokens_schema = {
            "typography": _section(typography_schema),
            "colors": _section(
                {
                    "colors": _section(palette_schema),
                    "borderRadius": _keyword("md"),
                    "shadows": _keyword("none"),
                }
            ),
            "spacing": _section(
                {
                    "density": _keyword("comfortable"),
                    "sectionGap": _keyword("md"),
                    "itemGap": _keyword("md"),
                    "contentPadding": _keyword("md"),
                }
            ),
        }

        self.section_schema = {
            "id": {"type": "string", "required": True, "empty": False},
            "visible": {"type": "boolean", "required": True},
            "order": {"type": "integer", "required": True, "check_with": _not_boolean},
            "column": {"type": "string", "required": True, "allowed": [e.value for e in SectionColumn]},
        }

        self.item_override_schema = {
            "itemId": {"type": "string", "required": True, "empty": False},
            "visible": {"type": "boolean", "nullable": True},
            "order": {"type": "integer", "nullable": True, "check_with": _not_boolean},
        }

        self.document_schema: Dict[str, Any] = {
            "version": {"type": "string", "required": True, "regex": SEMVER_PATTERN},
            "layout": {"type": "dict", "required": True, "schema": self.layout_schema},
            "tokens": _section(self.tokens_schema),
            "sections": {
                "type": "list",
                "required": True,
                "maxlength": self.settings.dsl_max_sections,
                "schema": {"type": "dict", "schema": self.section_schema},
            },
            "itemOverrides": {
                "type": "dict",
                "keysrules": {"type": "string"},
                "valuesrules": {
                    "type": "list",
                    "maxlength": self.settings.dsl_max_item_overrides_per_section,
                    "schema": {"type": "dict", "schema": self.item_override_schema},
                },
                "default_setter": lambda document: {},
            },
        }

    def is_supported_version(self, version: Optional[str]) -> bool:
        """Whether documents of this version compile without migration."""
        return version == self.settings.dsl_current_version

    def validate(self, raw: Any) -> ValidationResult:
        """
        Validate and normalize a raw DSL document.

        Layout type, paper size, margins, column distribution and section column are
        strict: values outside their enums are rejected here. Design token keywords are
        free strings that the token resolver maps with fallbacks.

        Args:
            raw: Untrusted document, usually parsed JSON

        Returns:
            ValidationResult; ``normalized`` is set only when the document is valid
        """
        if not isinstance(raw, Mapping):
            errors = [f"document: must be an object, got {type(raw).__name__}"]
            self.logger.info("DSL document rejected", error_count=len(errors))
            return ValidationResult(valid=False, errors=errors)

        is_valid, errors, normalized = self.validate_document(dict(raw))
        if not is_valid:
            self.logger.info("DSL document rejected", error_count=len(errors))
            return ValidationResult(valid=False, errors=errors)

        try:
            document = ResumeDsl.model_validate(normalized)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
            ]
            self.logger.info("DSL document rejected", error_count=len(errors))
            return ValidationResult(valid=False, errors=errors)

        return ValidationResult(valid=True, errors=[], normalized=document)

    def validate_or_throw(self, raw: Any) -> ResumeDsl:
        """
        Validate a raw DSL document, raising on failure.

        Raises:
            InvalidDSLError: If the document fails validation
            DSLCompilationError: If a valid result carries no normalized document
        """
        result = self.validate(raw)
        if not result.valid:
            raise InvalidDSLError(result.errors)
        if result.normalized is None:
            raise DSLCompilationError("Validator reported a valid document without a normalized result")
        return result.normalized

    def validate_document(self, data: Dict[str, Any]) -> Tuple[bool, List[str], Dict[str, Any]]:
        """
        Validate DSL document structure.

        Args:
            data: Document data to validate

        Returns:
            Tuple of (is_valid, errors, normalized document)
        """
        validator = Validator(self.document_schema)  # type: ignore[misc]
        validator.allow_unknown = True  # type: ignore[attr-defined]

        is_valid = validator.validate(data)  # type: ignore[misc]
        errors: List[str] = []

        if not is_valid:
            errors.extend(self._format_validation_errors(validator.errors))  # type: ignore[attr-defined]

        errors.extend(self._perform_custom_validations(data))

        return is_valid and not errors, errors, validator.document  # type: ignore[attr-defined]

    def _format_validation_errors(self, errors: Mapping[Any, Any], path: str = "") -> List[str]:
        """Format Cerberus validation errors as ``path: message`` strings."""
        formatted_errors: List[str] = []

        for field, error_info in errors.items():
            if isinstance(field, int):
                current_path = f"{path}[{field}]"
            else:
                current_path = f"{path}.{field}" if path else str(field)

            entries = error_info if isinstance(error_info, list) else [error_info]
            for error in entries:
                if isinstance(error, Mapping):
                    formatted_errors.extend(self._format_validation_errors(error, current_path))
                else:
                    formatted_errors.append(f"{current_path}: {error}")

        return formatted_errors

    def _perform_custom_validations(self, data: Dict[str, Any]) -> List[str]:
        """Cross-field checks Cerberus schemas cannot express."""
        errors: List[str] = []

        sections = data.get("sections")
        if isinstance(sections, list):
            seen_ids = set()
            for i, section in enumerate(sections):
                if not isinstance(section, Mapping):
                    continue
                section_id = section.get("id")
                if not isinstance(section_id, str):
                    continue
                if section_id in seen_ids:
                    errors.append(f"sections[{i}].id: duplicate section id '{section_id}'")
                seen_ids.add(section_id)

        item_overrides = data.get("itemOverrides")
        if isinstance(item_overrides, Mapping):
            for section_id, overrides in item_overrides.items():
                if not isinstance(overrides, list):
                    continue
                seen_item_ids = set()
                for i, override in enumerate(overrides):
                    if not isinstance(override, Mapping):
                        continue
                    item_id = override.get("itemId")
                    if not isinstance(item_id, str):
                        continue
                    if item_id in seen_item_ids:
                        errors.append(f"itemOverrides.{section_id}[{i}].itemId: duplicate item id '{item_id}'")
                    seen_item_ids.add(item_id)

        return errors
