"""
Pydantic Models and Schemas
===========================

Core data models for DSL documents, resume documents, resolved design tokens and the
compiled AST. Every model is immutable and uses camelCase aliases on the wire, so
``model_dump(by_alias=True, exclude_none=True)`` yields the documented JSON shapes.
"""

from typing import Optional, List, Dict, Any, Union, Literal, Annotated
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Enums
class LayoutType(str, Enum):
    """Page layout types."""
    SINGLE_COLUMN = "single-column"
    TWO_COLUMN = "two-column"
    SIDEBAR_LEFT = "sidebar-left"
    SIDEBAR_RIGHT = "sidebar-right"
    MAGAZINE = "magazine"
    COMPACT = "compact"


class PaperSize(str, Enum):
    """Supported paper sizes."""
    A4 = "a4"
    LETTER = "letter"
    LEGAL = "legal"


class MarginSize(str, Enum):
    """Page margin presets."""
    COMPACT = "compact"
    NORMAL = "normal"
    RELAXED = "relaxed"
    WIDE = "wide"


class ColumnDistribution(str, Enum):
    """Main/sidebar width split for two-column layouts."""
    EVEN = "50-50"
    SIXTY_FORTY = "60-40"
    SIXTY_FIVE_THIRTY_FIVE = "65-35"
    SEVENTY_THIRTY = "70-30"


class SectionColumn(str, Enum):
    """Column a section is placed in."""
    MAIN = "main"
    SIDEBAR = "sidebar"
    FULL_WIDTH = "full-width"


class RenderTarget(str, Enum):
    """Renderer the AST is compiled for."""
    HTML = "html"
    PDF = "pdf"


# Base Models
class CamelModel(BaseModel):
    """Immutable model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# DSL Models
class LayoutConfig(CamelModel):
    """Page layout choices."""
    type: str = Field(..., description="Layout type")
    paper_size: str = Field(..., description="Paper size")
    margins: str = Field(MarginSize.NORMAL.value, description="Margin preset")
    column_distribution: Optional[str] = Field(None, description="Main/sidebar split")
    page_break_behavior: Optional[str] = None
    show_page_numbers: Optional[bool] = None
    page_number_position: Optional[str] = None


class FontFamilyTokens(CamelModel):
    heading: str = "inter"
    body: str = "inter"


class TypographyTokens(CamelModel):
    font_family: FontFamilyTokens = Field(default_factory=FontFamilyTokens)
    font_size: str = "base"
    heading_style: str = "bold"


class TextColors(CamelModel):
    primary: str = "#1a1a1a"
    secondary: str = "#666666"
    accent: str = "#0066cc"


class ColorPalette(CamelModel):
    primary: str = "#0066cc"
    secondary: str = "#666666"
    background: str = "#ffffff"
    surface: str = "#f9fafb"
    text: TextColors = Field(default_factory=TextColors)
    border: str = "#e5e7eb"
    divider: str = "#e5e7eb"


class ColorTokens(CamelModel):
    colors: ColorPalette = Field(default_factory=ColorPalette)
    border_radius: str = "md"
    shadows: str = "none"


class SpacingTokens(CamelModel):
    density: str = "comfortable"
    section_gap: str = "md"
    item_gap: str = "md"
    content_padding: str = "md"


class DesignTokens(CamelModel):
    """Semantic design tokens; never raw pixel values."""
    typography: TypographyTokens = Field(default_factory=TypographyTokens)
    colors: ColorTokens = Field(default_factory=ColorTokens)
    spacing: SpacingTokens = Field(default_factory=SpacingTokens)


class SectionConfig(CamelModel):
    """Placement and visibility of one resume section."""
    id: str = Field(..., description="Section identifier")
    visible: bool = Field(..., description="Whether the section is rendered")
    order: int = Field(..., description="Rendering order, ascending")
    column: str = Field(..., description="Target column")


class ItemOverride(CamelModel):
    """Per-item visibility/order adjustment scoped to one section."""
    item_id: str = Field(..., description="Identifier of the overridden item")
    visible: Optional[bool] = Field(None, description="Hidden when False")
    order: Optional[int] = Field(None, description="Replaces the stored item order")


class ResumeDsl(CamelModel):
    """Complete, validated DSL document."""
    version: str = Field(..., description="DSL version")
    layout: LayoutConfig
    tokens: DesignTokens = Field(default_factory=DesignTokens)
    sections: List[SectionConfig] = Field(default_factory=list)
    item_overrides: Dict[str, List[ItemOverride]] = Field(default_factory=dict)


# Resume Document Models
class ResumeEntity(CamelModel):
    """Base model for ordered resume relation rows."""
    id: str
    order: int = 0


class ExperienceEntity(ResumeEntity):
    company: str
    position: str
    start_date: datetime
    end_date: Optional[datetime] = None
    is_current: bool = False
    location: Optional[str] = None
    description: Optional[str] = None
    skills: List[str] = Field(default_factory=list)


class EducationEntity(ResumeEntity):
    institution: str
    degree: str
    field: str
    start_date: datetime
    end_date: Optional[datetime] = None
    is_current: bool = False
    location: Optional[str] = None
    description: Optional[str] = None
    gpa: Optional[str] = None


class SkillEntity(ResumeEntity):
    name: str
    category: Optional[str] = None
    level: Optional[int] = None


class LanguageEntity(ResumeEntity):
    name: str
    level: str
    cefr_level: Optional[str] = None


class ProjectEntity(ResumeEntity):
    name: str
    description: Optional[str] = None
    url: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_current: bool = False
    technologies: List[str] = Field(default_factory=list)


class CertificationEntity(ResumeEntity):
    name: str
    issuer: str
    issue_date: datetime
    expiry_date: Optional[datetime] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None


class AwardEntity(ResumeEntity):
    title: str
    issuer: str
    date: datetime
    description: Optional[str] = None


class RecommendationEntity(ResumeEntity):
    author: str
    position: Optional[str] = None
    company: Optional[str] = None
    content: str = ""
    date: Optional[datetime] = None


class InterestEntity(ResumeEntity):
    name: str
    description: Optional[str] = None


class ResumeTheme(CamelModel):
    """Persisted theme whose style config is a raw DSL fragment."""
    id: Optional[str] = None
    name: Optional[str] = None
    style_config: Dict[str, Any] = Field(default_factory=dict)
    version: str = "1.0.0"


class ResumeDocument(CamelModel):
    """Resume with every relation already loaded by the data-access layer."""
    id: str
    user_id: Optional[str] = None
    slug: Optional[str] = None
    is_public: bool = False
    title: Optional[str] = None
    full_name: Optional[str] = None
    job_title: Optional[str] = None
    summary: Optional[str] = None

    custom_theme: Optional[Dict[str, Any]] = None
    active_theme: Optional[ResumeTheme] = None

    experiences: List[ExperienceEntity] = Field(default_factory=list)
    education: List[EducationEntity] = Field(default_factory=list)
    skills: List[SkillEntity] = Field(default_factory=list)
    languages: List[LanguageEntity] = Field(default_factory=list)
    projects: List[ProjectEntity] = Field(default_factory=list)
    certifications: List[CertificationEntity] = Field(default_factory=list)
    awards: List[AwardEntity] = Field(default_factory=list)
    interests: List[InterestEntity] = Field(default_factory=list)
    recommendations: List[RecommendationEntity] = Field(default_factory=list)


# Resolved Token Models
class ResolvedTypography(CamelModel):
    heading_font_family: str
    body_font_family: str
    base_font_size_px: int
    heading_font_size_px: int
    line_height: float
    heading_font_weight: int
    body_font_weight: int
    heading_text_transform: str
    heading_border_bottom: Optional[str] = None
    heading_border_left: Optional[str] = None
    heading_padding_left: int = 0


class ResolvedColors(CamelModel):
    primary: str
    secondary: str
    background: str
    surface: str
    text_primary: str
    text_secondary: str
    text_accent: str
    border: str
    divider: str


class ResolvedSpacing(CamelModel):
    section_gap_px: int
    item_gap_px: int
    content_padding_px: int
    density_factor: float


class ResolvedEffects(CamelModel):
    border_radius_px: int
    box_shadow: str


class ResolvedTokens(CamelModel):
    """Concrete rendering values; contains no semantic keyword."""
    typography: ResolvedTypography
    colors: ResolvedColors
    spacing: ResolvedSpacing
    effects: ResolvedEffects


# Section Data Models
class DateRange(CamelModel):
    start_date: str
    end_date: Optional[str] = None
    is_current: bool = False


class Location(CamelModel):
    city: Optional[str] = None
    country: Optional[str] = None
    remote: Optional[bool] = None


class ExperienceItem(CamelModel):
    id: str
    title: str
    company: str
    location: Optional[Location] = None
    date_range: DateRange
    description: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)


class EducationItem(CamelModel):
    id: str
    institution: str
    degree: str
    field_of_study: str
    location: Optional[Location] = None
    date_range: DateRange
    grade: Optional[str] = None
    activities: List[str] = Field(default_factory=list)


class SkillItem(CamelModel):
    id: str
    name: str
    level: Optional[str] = None
    category: Optional[str] = None


class ProjectItem(CamelModel):
    id: str
    name: str
    role: Optional[str] = None
    date_range: Optional[DateRange] = None
    url: Optional[str] = None
    repository_url: Optional[str] = None
    description: Optional[str] = None
    highlights: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)


class LanguageItem(CamelModel):
    id: str
    name: str
    proficiency: str


class CertificationItem(CamelModel):
    id: str
    name: str
    issuer: str
    date: str
    url: Optional[str] = None


class InterestItem(CamelModel):
    id: str
    name: str
    keywords: List[str] = Field(default_factory=list)


class ReferenceItem(CamelModel):
    id: str
    name: str
    role: str
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class VolunteerItem(CamelModel):
    id: str
    organization: str
    role: str
    date_range: DateRange
    description: Optional[str] = None


class AwardItem(CamelModel):
    id: str
    title: str
    issuer: str
    date: str
    description: Optional[str] = None


class PublicationItem(CamelModel):
    id: str
    title: str
    publisher: str
    date: str
    url: Optional[str] = None
    description: Optional[str] = None


class TextContent(CamelModel):
    content: str = ""


class ExperienceSectionData(CamelModel):
    type: Literal["experience"] = "experience"
    items: List[ExperienceItem] = Field(default_factory=list)


class EducationSectionData(CamelModel):
    type: Literal["education"] = "education"
    items: List[EducationItem] = Field(default_factory=list)


class SkillsSectionData(CamelModel):
    type: Literal["skills"] = "skills"
    items: List[SkillItem] = Field(default_factory=list)


class ProjectsSectionData(CamelModel):
    type: Literal["projects"] = "projects"
    items: List[ProjectItem] = Field(default_factory=list)


class LanguagesSectionData(CamelModel):
    type: Literal["languages"] = "languages"
    items: List[LanguageItem] = Field(default_factory=list)


class CertificationsSectionData(CamelModel):
    type: Literal["certifications"] = "certifications"
    items: List[CertificationItem] = Field(default_factory=list)


class InterestsSectionData(CamelModel):
    type: Literal["interests"] = "interests"
    items: List[InterestItem] = Field(default_factory=list)


class ReferencesSectionData(CamelModel):
    type: Literal["references"] = "references"
    items: List[ReferenceItem] = Field(default_factory=list)


class VolunteerSectionData(CamelModel):
    type: Literal["volunteer"] = "volunteer"
    items: List[VolunteerItem] = Field(default_factory=list)


class AwardsSectionData(CamelModel):
    type: Literal["awards"] = "awards"
    items: List[AwardItem] = Field(default_factory=list)


class PublicationsSectionData(CamelModel):
    type: Literal["publications"] = "publications"
    items: List[PublicationItem] = Field(default_factory=list)


class SummarySectionData(CamelModel):
    type: Literal["summary"] = "summary"
    data: TextContent = Field(default_factory=TextContent)


class ObjectiveSectionData(CamelModel):
    type: Literal["objective"] = "objective"
    data: TextContent = Field(default_factory=TextContent)


class CustomSectionData(CamelModel):
    type: Literal["custom"] = "custom"
    items: List[Dict[str, Any]] = Field(default_factory=list)


SectionData = Annotated[
    Union[
        ExperienceSectionData,
        EducationSectionData,
        SkillsSectionData,
        ProjectsSectionData,
        LanguagesSectionData,
        CertificationsSectionData,
        InterestsSectionData,
        ReferencesSectionData,
        VolunteerSectionData,
        AwardsSectionData,
        PublicationsSectionData,
        SummarySectionData,
        ObjectiveSectionData,
        CustomSectionData,
    ],
    Field(discriminator="type"),
]


# AST Models
class PageColumn(CamelModel):
    id: str
    width_percentage: int
    order: int


class PageLayout(CamelModel):
    """Page geometry in millimeters."""
    width_mm: float
    height_mm: float
    margin_top_mm: float
    margin_bottom_mm: float
    margin_left_mm: float
    margin_right_mm: float
    columns: List[PageColumn]
    column_gap_mm: float


class ContainerStyles(CamelModel):
    background_color: str
    border_color: str
    border_width_px: int
    border_radius_px: int
    padding_px: int
    margin_bottom_px: int
    shadow: Optional[str] = None


class TextStyles(CamelModel):
    font_family: str
    font_size_px: int
    line_height: float
    font_weight: int
    text_transform: str
    text_decoration: str
    border_bottom: Optional[str] = None
    border_left: Optional[str] = None
    padding_left_px: Optional[int] = None


class SectionStyles(CamelModel):
    container: ContainerStyles
    title: TextStyles
    content: TextStyles


class PlacedSection(CamelModel):
    """A visible section assigned to a page column."""
    section_id: str
    column_id: str
    order: int
    data: SectionData
    styles: SectionStyles


class GlobalStyles(CamelModel):
    background: str
    text_primary: str
    text_secondary: str
    accent: str


class AstMeta(CamelModel):
    version: str
    generated_at: datetime


class ResumeAst(CamelModel):
    """Fully resolved, renderer-agnostic layout tree."""
    meta: AstMeta
    page: PageLayout
    sections: List[PlacedSection] = Field(default_factory=list)
    global_styles: GlobalStyles

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape consumed by renderers."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Validation Results
class ValidationResult(BaseModel):
    """Result of validating a raw DSL document."""
    valid: bool = Field(..., description="Whether the document is valid")
    errors: List[str] = Field(default_factory=list, description="'path: message' errors")
    normalized: Optional[ResumeDsl] = Field(None, description="Normalized document")


class DSLValidationResponse(BaseModel):
    """Response for validate-without-compiling requests."""
    valid: bool = Field(..., description="Whether DSL is valid")
    errors: Optional[List[str]] = Field(None, description="Validation errors, None when valid")


# Service Models
class CurrentUser(BaseModel):
    """Authenticated caller, resolved outside this package."""
    user_id: str = Field(..., description="User identifier")


class RenderedResume(BaseModel):
    """Compiled AST for a persisted resume."""
    ast: ResumeAst
    resume_id: Optional[str] = Field(None, description="Resume identifier for owner renders")
    slug: Optional[str] = Field(None, description="Public slug for public renders")
