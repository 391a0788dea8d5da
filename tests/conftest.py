"""
Test Configuration
==================

Pytest configuration with shared fixtures: test settings, compiler components and
sample DSL/resume data.
"""

from typing import Any, Dict, Generator
from unittest.mock import patch

import pytest
from pydantic_settings import SettingsConfigDict

from resume_dsl.config.settings import Settings
from resume_dsl.core.dsl.compiler import DSLCompiler
from resume_dsl.core.dsl.migrations import DSLMigrationService
from resume_dsl.core.dsl.tokens import TokenResolver
from resume_dsl.core.dsl.validator import DSLValidator
from resume_dsl.core.mappers.registry import SectionMapperRegistry
from resume_dsl.models.schemas import ResumeDocument

from tests.utils.data_generators import DSLDataGenerator, ResumeDataGenerator


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"
    dsl_max_sections: int = 10
    dsl_max_item_overrides_per_section: int = 5

    model_config = SettingsConfigDict(env_file=".env.test")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(scope="session", autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Override the global settings instance for testing."""
    with patch("resume_dsl.config.settings.settings", test_settings):
        yield test_settings


@pytest.fixture
def validator(test_settings: TestSettings) -> DSLValidator:
    return DSLValidator(test_settings)


@pytest.fixture
def token_resolver() -> TokenResolver:
    return TokenResolver()


@pytest.fixture
def registry() -> SectionMapperRegistry:
    return SectionMapperRegistry()


@pytest.fixture
def migration_service() -> DSLMigrationService:
    return DSLMigrationService()


@pytest.fixture
def compiler(test_settings: TestSettings, validator: DSLValidator) -> DSLCompiler:
    return DSLCompiler(validator=validator, settings=test_settings)


@pytest.fixture
def minimal_dsl() -> Dict[str, Any]:
    """Smallest valid DSL document."""
    return DSLDataGenerator.generate_minimal_dsl()


@pytest.fixture
def full_dsl() -> Dict[str, Any]:
    """DSL document with every token category spelled out."""
    return DSLDataGenerator.generate_full_dsl()


@pytest.fixture
def resume() -> ResumeDocument:
    """Resume with rows in every relation."""
    return ResumeDataGenerator.generate_resume()


@pytest.fixture
def empty_resume() -> ResumeDocument:
    """Resume without any relation rows."""
    return ResumeDataGenerator.generate_empty_resume()
