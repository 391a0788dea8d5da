"""
Section Mapper Registry
=======================

Lookup of section mappers by section id. Each registry instance owns its mappers;
there is no process-wide registry.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from resume_dsl.config.logging import get_logger
from resume_dsl.models.schemas import ItemOverride, ResumeDocument, SectionData

from .base import SectionMapper
from .sections import (
    AwardsSectionMapper,
    CertificationsSectionMapper,
    EducationSectionMapper,
    ExperienceSectionMapper,
    InterestsSectionMapper,
    LanguagesSectionMapper,
    PlaceholderSectionMapper,
    ProjectsSectionMapper,
    ReferencesSectionMapper,
    SkillsSectionMapper,
    SummarySectionMapper,
)

logger = get_logger(__name__)


def default_mappers() -> List[SectionMapper]:
    """Mappers registered on every new registry."""
    return [
        ExperienceSectionMapper(),
        EducationSectionMapper(),
        SkillsSectionMapper(),
        LanguagesSectionMapper(),
        ProjectsSectionMapper(),
        CertificationsSectionMapper(),
        AwardsSectionMapper(),
        InterestsSectionMapper(),
        ReferencesSectionMapper(),
        SummarySectionMapper(),
        PlaceholderSectionMapper("objective", "objective"),
        PlaceholderSectionMapper("volunteer", "volunteer"),
        PlaceholderSectionMapper("publications", "publications"),
    ]


class SectionMapperRegistry:
    """Section id -> mapper lookup."""

    def __init__(self, mappers: Optional[Iterable[SectionMapper]] = None):
        self._mappers: Dict[str, SectionMapper] = {}
        self.logger = logger.bind(component="mapper_registry")
        for mapper in default_mappers() if mappers is None else mappers:
            self.register(mapper)

    def register(self, mapper: SectionMapper) -> None:
        """Register a mapper, replacing any mapper with the same section id."""
        if mapper.section_id in self._mappers:
            self.logger.debug("Replacing section mapper", section_id=mapper.section_id)
        self._mappers[mapper.section_id] = mapper

    def get(self, section_id: str) -> SectionMapper:
        """Registered mapper, or a placeholder mapper for unregistered ids."""
        mapper = self._mappers.get(section_id)
        if mapper is None:
            return PlaceholderSectionMapper(section_id)
        return mapper

    def has(self, section_id: str) -> bool:
        return section_id in self._mappers

    @property
    def section_ids(self) -> List[str]:
        return list(self._mappers)

    def map_section(
        self,
        section_id: str,
        resume: ResumeDocument,
        overrides: Sequence[ItemOverride] = (),
    ) -> Optional[SectionData]:
        """
        Map a section with its registered mapper.

        Returns:
            Section data, or None when no mapper is registered or the mapper has no
            data source
        """
        if section_id not in self._mappers:
            self.logger.debug("No mapper registered for section", section_id=section_id)
        return self.get(section_id).map(resume, overrides)

    def get_placeholder(self, section_id: str) -> SectionData:
        """Placeholder data for a section; unknown ids get an empty custom section."""
        return self.get(section_id).get_placeholder()
