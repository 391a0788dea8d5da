"""
DSL Loader
==========

Parses DSL text into raw documents. Supports JSON and YAML formats with format
auto-detection; structural validation is left to the validator.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import json

import yaml  # type: ignore[import-untyped]

from resume_dsl.config.logging import get_logger

from .exceptions import InvalidDSLError

logger = get_logger(__name__)


class BaseDSLLoader(ABC):
    """Abstract base class for DSL text loaders."""

    @abstractmethod
    def load(self, content: str) -> Dict[str, Any]:
        """
        Parse DSL text into a raw document.

        Raises:
            InvalidDSLError: If the text is not a well-formed object document
        """
        pass


class JSONDSLLoader(BaseDSLLoader):
    """JSON-based DSL loader implementation."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(loader="json")

    def load(self, content: str) -> Dict[str, Any]:
        try:
            raw_data = json.loads(content)
        except json.JSONDecodeError as e:
            error_msg = f"Invalid JSON syntax at line {e.lineno}, column {e.colno}: {e.msg}"
            self.logger.info("JSON parsing failed", error=error_msg)
            raise InvalidDSLError([f"document: {error_msg}"]) from e

        if not isinstance(raw_data, dict):
            raise InvalidDSLError([f"document: JSON content must be an object, got {type(raw_data).__name__}"])
        return raw_data


class YAMLDSLLoader(BaseDSLLoader):
    """YAML-based DSL loader implementation."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(loader="yaml")

    def load(self, content: str) -> Dict[str, Any]:
        try:
            raw_data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML syntax: {e}"
            self.logger.info("YAML parsing failed", error=error_msg)
            raise InvalidDSLError([f"document: {error_msg}"]) from e

        if raw_data is None:
            raise InvalidDSLError(["document: Empty YAML document"])

        # YAML can return strings, lists, etc.
        if not isinstance(raw_data, dict):
            raise InvalidDSLError([f"document: YAML content must be an object, got {type(raw_data).__name__}"])
        return raw_data


class DSLLoaderFactory:
    """Factory for creating DSL loaders based on content type."""

    _loaders = {
        "json": JSONDSLLoader,
        "yaml": YAMLDSLLoader,
    }

    @classmethod
    def create_loader(cls, content_type: str) -> BaseDSLLoader:
        """
        Create a DSL loader instance.

        Args:
            content_type: Type of loader ("json", "yaml")

        Raises:
            ValueError: If the content type is not supported
        """
        if content_type not in cls._loaders:
            raise ValueError(f"Unsupported content type: {content_type}")

        return cls._loaders[content_type]()

    @classmethod
    def detect_content_type(cls, content: str) -> str:
        """
        Detect DSL content type from content.

        Args:
            content: Raw DSL content

        Returns:
            Detected content type
        """
        content = content.strip()
        if content.startswith(("{", "[")):
            return "json"
        elif content.startswith(("---", "- ")) or "\n-" in content[:100]:
            return "yaml"
        else:
            # Try JSON first, fall back to YAML
            try:
                json.loads(content)
                return "json"
            except json.JSONDecodeError:
                return "yaml"


def load_dsl_content(content: str, content_type: Optional[str] = None) -> Dict[str, Any]:
    """
    Load DSL text into a raw document.

    Args:
        content: Raw DSL text
        content_type: Optional "json" or "yaml"; detected from the content when omitted

    Returns:
        Raw DSL document, ready for migration and validation

    Raises:
        InvalidDSLError: If the content is empty, malformed or not an object
        ValueError: If ``content_type`` is not supported
    """
    if not content or not content.strip():
        raise InvalidDSLError(["document: Empty DSL content provided"])

    if not content_type:
        content_type = DSLLoaderFactory.detect_content_type(content)

    return DSLLoaderFactory.create_loader(content_type).load(content)
