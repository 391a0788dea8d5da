"""
Section Mappers
===============

One mapper per resume section type. Item-based mappers project a stored relation
into AST items; the summary mapper is data-based and ignores item overrides.
"""

from typing import Optional, Sequence

from resume_dsl.models.schemas import (
    AwardEntity,
    AwardItem,
    AwardsSectionData,
    CertificationEntity,
    CertificationItem,
    CertificationsSectionData,
    CustomSectionData,
    EducationEntity,
    EducationItem,
    EducationSectionData,
    ExperienceEntity,
    ExperienceItem,
    ExperienceSectionData,
    InterestEntity,
    InterestItem,
    InterestsSectionData,
    ItemOverride,
    LanguageEntity,
    LanguageItem,
    LanguagesSectionData,
    Location,
    ObjectiveSectionData,
    ProjectEntity,
    ProjectItem,
    ProjectsSectionData,
    PublicationsSectionData,
    RecommendationEntity,
    ReferenceItem,
    ReferencesSectionData,
    ResumeDocument,
    SectionData,
    SkillEntity,
    SkillItem,
    SkillsSectionData,
    SummarySectionData,
    TextContent,
    VolunteerSectionData,
)

from .base import (
    ItemSectionMapper,
    SectionMapper,
    build_date_range,
    iso_date,
    split_keywords,
    split_lines,
)


def _location(value: Optional[str]) -> Optional[Location]:
    return Location(city=value) if value else None


class ExperienceSectionMapper(ItemSectionMapper):
    section_id = "experience"
    source_field = "experiences"
    section_model = ExperienceSectionData

    def map_item(self, entity: ExperienceEntity) -> ExperienceItem:
        return ExperienceItem(
            id=entity.id,
            title=entity.position,
            company=entity.company,
            location=_location(entity.location),
            date_range=build_date_range(entity.start_date, entity.end_date, entity.is_current),
            description=entity.description or None,
            achievements=[],
            skills=list(entity.skills),
        )


class EducationSectionMapper(ItemSectionMapper):
    section_id = "education"
    source_field = "education"
    section_model = EducationSectionData

    def map_item(self, entity: EducationEntity) -> EducationItem:
        return EducationItem(
            id=entity.id,
            institution=entity.institution,
            degree=entity.degree,
            field_of_study=entity.field,
            location=_location(entity.location),
            date_range=build_date_range(entity.start_date, entity.end_date, entity.is_current),
            grade=entity.gpa or None,
            activities=split_lines(entity.description),
        )


class SkillsSectionMapper(ItemSectionMapper):
    section_id = "skills"
    source_field = "skills"
    section_model = SkillsSectionData

    def map_item(self, entity: SkillEntity) -> SkillItem:
        return SkillItem(
            id=entity.id,
            name=entity.name,
            level=str(entity.level) if entity.level is not None else None,
            category=entity.category or None,
        )


class LanguagesSectionMapper(ItemSectionMapper):
    section_id = "languages"
    source_field = "languages"
    section_model = LanguagesSectionData

    def map_item(self, entity: LanguageEntity) -> LanguageItem:
        proficiency = entity.level
        if entity.cefr_level:
            proficiency = f"{entity.level} ({entity.cefr_level})"
        return LanguageItem(id=entity.id, name=entity.name, proficiency=proficiency)


class ProjectsSectionMapper(ItemSectionMapper):
    section_id = "projects"
    source_field = "projects"
    section_model = ProjectsSectionData

    def map_item(self, entity: ProjectEntity) -> ProjectItem:
        date_range = None
        if entity.start_date is not None:
            date_range = build_date_range(entity.start_date, entity.end_date, entity.is_current)
        return ProjectItem(
            id=entity.id,
            name=entity.name,
            date_range=date_range,
            url=entity.url or None,
            description=entity.description or None,
            highlights=[],
            technologies=list(entity.technologies),
        )


class CertificationsSectionMapper(ItemSectionMapper):
    section_id = "certifications"
    source_field = "certifications"
    section_model = CertificationsSectionData

    def map_item(self, entity: CertificationEntity) -> CertificationItem:
        return CertificationItem(
            id=entity.id,
            name=entity.name,
            issuer=entity.issuer,
            date=iso_date(entity.issue_date),
            url=entity.credential_url or None,
        )


class AwardsSectionMapper(ItemSectionMapper):
    section_id = "awards"
    source_field = "awards"
    section_model = AwardsSectionData

    def map_item(self, entity: AwardEntity) -> AwardItem:
        return AwardItem(
            id=entity.id,
            title=entity.title,
            issuer=entity.issuer,
            date=iso_date(entity.date),
            description=entity.description or None,
        )


class InterestsSectionMapper(ItemSectionMapper):
    section_id = "interests"
    source_field = "interests"
    section_model = InterestsSectionData

    def map_item(self, entity: InterestEntity) -> InterestItem:
        return InterestItem(id=entity.id, name=entity.name, keywords=split_keywords(entity.description))


class ReferencesSectionMapper(ItemSectionMapper):
    """References are built from the resume's recommendations."""

    section_id = "references"
    source_field = "recommendations"
    section_model = ReferencesSectionData

    def map_item(self, entity: RecommendationEntity) -> ReferenceItem:
        return ReferenceItem(
            id=entity.id,
            name=entity.author,
            role=entity.position or "",
            company=entity.company or None,
        )


class SummarySectionMapper(SectionMapper):
    section_id = "summary"

    def map(self, resume: ResumeDocument, overrides: Sequence[ItemOverride]) -> SectionData:
        return SummarySectionData(data=TextContent(content=resume.summary or ""))

    def get_placeholder(self) -> SectionData:
        return SummarySectionData(data=TextContent(content=""))


PLACEHOLDER_SECTIONS = {
    "objective": ObjectiveSectionData,
    "volunteer": VolunteerSectionData,
    "publications": PublicationsSectionData,
    "custom": CustomSectionData,
}


class PlaceholderSectionMapper(SectionMapper):
    """
    Mapper for sections without a data source.

    ``map`` always returns None, telling the caller to use the placeholder.
    """

    def __init__(self, section_id: str, placeholder_type: str = "custom"):
        self.section_id = section_id
        self.placeholder_type = placeholder_type if placeholder_type in PLACEHOLDER_SECTIONS else "custom"

    def map(self, resume: ResumeDocument, overrides: Sequence[ItemOverride]) -> Optional[SectionData]:
        return None

    def get_placeholder(self) -> SectionData:
        return PLACEHOLDER_SECTIONS[self.placeholder_type]()
