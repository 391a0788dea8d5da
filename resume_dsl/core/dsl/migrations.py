"""
DSL Migrations
==============

Upgrades raw DSL documents between versions by chaining registered migrators.

Migrators work on raw mappings: a document in an older shape does not fit the current
typed model, so migration runs before validation.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional

from resume_dsl.config.logging import get_logger
from resume_dsl.config.settings import get_settings

from .exceptions import DSLMigrationError, UnsupportedDSLVersionError

logger = get_logger(__name__)


class DSLMigrator(ABC):
    """Upgrades a raw DSL document by exactly one version step."""

    from_version: str
    to_version: str

    @abstractmethod
    def migrate(self, raw_dsl: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return the upgraded document.

        Implementations must not mutate ``raw_dsl`` and must set ``version`` to
        ``to_version`` on the result.
        """
        pass


class DSLMigrationService:
    """Chains registered migrators from a document's version to a target version."""

    def __init__(self, migrators: Optional[Iterable[DSLMigrator]] = None):
        self._migrators: Dict[str, DSLMigrator] = {}
        self.logger = logger.bind(component="migrations")
        if migrators:
            self.register_migrators(migrators)

    def register_migrators(self, migrators: Iterable[DSLMigrator]) -> None:
        """Register migrators keyed by source version; a later one replaces an earlier one."""
        for migrator in migrators:
            self._migrators[migrator.from_version] = migrator
            self.logger.debug(
                "Registered DSL migrator",
                from_version=migrator.from_version,
                to_version=migrator.to_version,
            )

    def get_migration_path(self, from_version: str, to_version: str) -> List[str]:
        """
        Versions visited when migrating, starting with ``from_version``.

        Raises:
            UnsupportedDSLVersionError: If no chain of migrators reaches ``to_version``
            DSLMigrationError: If the chain revisits a version
        """
        path = [from_version]
        current = from_version

        while current != to_version:
            migrator = self._migrators.get(current)
            if migrator is None:
                raise UnsupportedDSLVersionError(from_version, to_version)
            if migrator.to_version in path:
                raise DSLMigrationError(
                    f"Circular DSL migration detected: {' -> '.join(path + [migrator.to_version])}"
                )
            current = migrator.to_version
            path.append(current)

        return path

    def can_migrate(self, from_version: str, to_version: str) -> bool:
        try:
            self.get_migration_path(from_version, to_version)
        except (UnsupportedDSLVersionError, DSLMigrationError):
            return False
        return True

    def migrate(self, raw_dsl: Mapping[str, Any], target_version: Optional[str] = None) -> Dict[str, Any]:
        """
        Migrate a raw DSL document to the target version.

        Args:
            raw_dsl: Raw document carrying a ``version`` key
            target_version: Defaults to the configured current DSL version

        Returns:
            The migrated document; a document already at the target version is
            returned unchanged

        Raises:
            UnsupportedDSLVersionError: If no migration path exists
            DSLMigrationError: If a migrator produces the wrong version
        """
        target = target_version or get_settings().dsl_current_version
        version = raw_dsl.get("version")

        if version == target:
            return dict(raw_dsl)
        if not isinstance(version, str):
            raise UnsupportedDSLVersionError(None if version is None else str(version), target)

        path = self.get_migration_path(version, target)
        self.logger.info("Migrating DSL document", from_version=version, to_version=target, steps=len(path) - 1)

        document = dict(raw_dsl)
        for step_version in path[:-1]:
            migrator = self._migrators[step_version]
            document = migrator.migrate(document)
            if document.get("version") != migrator.to_version:
                raise DSLMigrationError(
                    f"Migrator {step_version} -> {migrator.to_version} produced version "
                    f"'{document.get('version')}'"
                )

        return document
