"""
DSL Compiler
============

Compiles a resume DSL document into a fully resolved, renderer-agnostic AST.

Pipeline: migrate -> validate -> resolve tokens -> build page layout -> place sections
-> assemble. Every step is synchronous and side-effect free; a failing step aborts the
compile and no partial AST is returned.
"""

from datetime import datetime, timezone
from typing import Any, Collection, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from resume_dsl.config.logging import get_logger
from resume_dsl.config.settings import Settings, get_settings
from resume_dsl.core.mappers.registry import SectionMapperRegistry
from resume_dsl.models.schemas import (
    AstMeta,
    ContainerStyles,
    GlobalStyles,
    PageColumn,
    PageLayout,
    PlacedSection,
    RenderTarget,
    ResolvedTokens,
    ResumeAst,
    ResumeDocument,
    ResumeDsl,
    SectionStyles,
    TextStyles,
)

from .loader import load_dsl_content
from .migrations import DSLMigrationService
from .tokens import TokenResolver
from .validator import DSLValidator

logger = get_logger(__name__)


class PaperDimensions(NamedTuple):
    width_mm: float
    height_mm: float


PAPER_SIZES: Dict[str, PaperDimensions] = {
    "a4": PaperDimensions(210, 297),
    "letter": PaperDimensions(216, 279),
    "legal": PaperDimensions(216, 356),
}
DEFAULT_PAPER_SIZE = "a4"

# Uniform page margin in mm
MARGINS: Dict[str, float] = {
    "compact": 10,
    "normal": 15,
    "relaxed": 20,
    "wide": 25,
}
DEFAULT_MARGIN = "normal"

# (main, sidebar) width percentages
COLUMN_DISTRIBUTIONS: Dict[str, Tuple[int, int]] = {
    "50-50": (50, 50),
    "60-40": (60, 40),
    "65-35": (65, 35),
    "70-30": (70, 30),
}
DEFAULT_COLUMN_DISTRIBUTION = "70-30"
MAGAZINE_DISTRIBUTION = (60, 40)

# Approximate px -> mm conversion for the column gap
PX_PER_MM = 4

MAIN_COLUMN = "main"
SIDEBAR_COLUMN = "sidebar"

DslInput = Union[ResumeDsl, Mapping[str, Any]]


def build_columns(layout_type: str, distribution: Optional[str] = None) -> List[PageColumn]:
    """
    Derive page columns from the layout type.

    Unknown layout types get a single full-width main column; an unknown or missing
    distribution uses 70-30.
    """
    if layout_type in ("two-column", "sidebar-right", "sidebar-left"):
        main, sidebar = COLUMN_DISTRIBUTIONS.get(
            distribution or DEFAULT_COLUMN_DISTRIBUTION,
            COLUMN_DISTRIBUTIONS[DEFAULT_COLUMN_DISTRIBUTION],
        )
    elif layout_type == "magazine":
        main, sidebar = MAGAZINE_DISTRIBUTION
    else:
        # single-column, compact and unknown types
        return [PageColumn(id=MAIN_COLUMN, width_percentage=100, order=0)]

    if layout_type == "sidebar-left":
        return [
            PageColumn(id=SIDEBAR_COLUMN, width_percentage=sidebar, order=0),
            PageColumn(id=MAIN_COLUMN, width_percentage=main, order=1),
        ]
    return [
        PageColumn(id=MAIN_COLUMN, width_percentage=main, order=0),
        PageColumn(id=SIDEBAR_COLUMN, width_percentage=sidebar, order=1),
    ]


def build_page_layout(dsl: ResumeDsl, tokens: ResolvedTokens) -> PageLayout:
    """Compute page geometry in millimeters."""
    layout = dsl.layout
    paper = PAPER_SIZES.get(layout.paper_size, PAPER_SIZES[DEFAULT_PAPER_SIZE])
    margin = MARGINS.get(layout.margins, MARGINS[DEFAULT_MARGIN])

    return PageLayout(
        width_mm=paper.width_mm,
        height_mm=paper.height_mm,
        margin_top_mm=margin,
        margin_bottom_mm=margin,
        margin_left_mm=margin,
        margin_right_mm=margin,
        columns=build_columns(layout.type, layout.column_distribution),
        column_gap_mm=tokens.spacing.section_gap_px / PX_PER_MM,
    )


def map_column_to_id(column: str, column_ids: Optional[Collection[str]] = None) -> str:
    """
    DSL column -> AST column id; full-width and unknown columns go to main.

    When the page's declared ``column_ids`` are given, a sidebar section on a page
    without a sidebar column is placed in main.
    """
    if column == SIDEBAR_COLUMN and (column_ids is None or SIDEBAR_COLUMN in column_ids):
        return SIDEBAR_COLUMN
    return MAIN_COLUMN


def build_section_styles(tokens: ResolvedTokens) -> SectionStyles:
    """Section styles built entirely from resolved tokens."""
    typography = tokens.typography
    effects = tokens.effects

    return SectionStyles(
        container=ContainerStyles(
            background_color="transparent",
            border_color=tokens.colors.border,
            border_width_px=0,
            border_radius_px=effects.border_radius_px,
            padding_px=tokens.spacing.content_padding_px,
            margin_bottom_px=tokens.spacing.section_gap_px,
            shadow=effects.box_shadow if effects.box_shadow != "none" else None,
        ),
        title=TextStyles(
            font_family=typography.heading_font_family,
            font_size_px=typography.heading_font_size_px,
            line_height=typography.line_height,
            font_weight=typography.heading_font_weight,
            text_transform=typography.heading_text_transform,
            text_decoration="none",
            border_bottom=typography.heading_border_bottom,
            border_left=typography.heading_border_left,
            padding_left_px=typography.heading_padding_left or None,
        ),
        content=TextStyles(
            font_family=typography.body_font_family,
            font_size_px=typography.base_font_size_px,
            line_height=typography.line_height,
            font_weight=typography.body_font_weight,
            text_transform="none",
            text_decoration="none",
        ),
    )


class DSLCompiler:
    """Compiles DSL documents into ResumeAst values. Holds no per-call state."""

    def __init__(
        self,
        validator: Optional[DSLValidator] = None,
        token_resolver: Optional[TokenResolver] = None,
        registry: Optional[SectionMapperRegistry] = None,
        migration_service: Optional[DSLMigrationService] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.validator = validator or DSLValidator(self.settings)
        self.token_resolver = token_resolver or TokenResolver()
        self.registry = registry or SectionMapperRegistry()
        self.migration_service = migration_service or DSLMigrationService()
        self.logger = logger.bind(component="compiler")

    def compile(
        self,
        dsl: DslInput,
        target: Union[RenderTarget, str] = RenderTarget.HTML,
        resume: Optional[ResumeDocument] = None,
    ) -> ResumeAst:
        """
        Compile a DSL document into an AST.

        Args:
            dsl: Typed DSL document or raw mapping
            target: Renderer the AST is compiled for
            resume: Resume data; placeholders are used for every section when omitted

        Returns:
            Compiled ResumeAst

        Raises:
            InvalidDSLError: If the document fails validation
            UnsupportedDSLVersionError: If the document version cannot be migrated
        """
        render_target = RenderTarget(target)
        raw = self._to_raw(dsl)

        # 1. Migrate
        version = raw.get("version")
        if isinstance(version, str) and not self.validator.is_supported_version(version):
            raw = self.migration_service.migrate(raw, self.settings.dsl_current_version)

        # 2. Validate
        validated = self.validator.validate_or_throw(raw)

        self.logger.debug(
            "Compiling DSL",
            target=render_target.value,
            section_count=len(validated.sections),
            has_resume=resume is not None,
        )

        # 3. Resolve tokens
        tokens = self.token_resolver.resolve(validated.tokens)

        # 4. Build page layout
        page = build_page_layout(validated, tokens)

        # 5. Place sections
        sections = self.place_sections(validated, tokens, resume, page.columns)

        # 6. Assemble
        ast = ResumeAst(
            meta=AstMeta(version=validated.version, generated_at=datetime.now(timezone.utc)),
            page=page,
            sections=sections,
            global_styles=GlobalStyles(
                background=tokens.colors.background,
                text_primary=tokens.colors.text_primary,
                text_secondary=tokens.colors.text_secondary,
                accent=tokens.colors.primary,
            ),
        )

        self.logger.debug(
            "DSL compiled",
            target=render_target.value,
            placed_sections=len(sections),
            columns=len(page.columns),
        )
        return ast

    def compile_for_html(self, dsl: DslInput, resume: Optional[ResumeDocument] = None) -> ResumeAst:
        return self.compile(dsl, RenderTarget.HTML, resume)

    def compile_for_pdf(self, dsl: DslInput, resume: Optional[ResumeDocument] = None) -> ResumeAst:
        return self.compile(dsl, RenderTarget.PDF, resume)

    def compile_from_raw(
        self,
        raw: Any,
        target: Union[RenderTarget, str] = RenderTarget.HTML,
        resume: Optional[ResumeDocument] = None,
    ) -> ResumeAst:
        """Validate unparsed input, then compile it."""
        return self.compile(raw, target, resume)

    def compile_from_text(
        self,
        content: str,
        target: Union[RenderTarget, str] = RenderTarget.HTML,
        resume: Optional[ResumeDocument] = None,
        content_type: Optional[str] = None,
    ) -> ResumeAst:
        """Load JSON or YAML DSL text, then compile it."""
        return self.compile_from_raw(load_dsl_content(content, content_type), target, resume)

    def place_sections(
        self,
        dsl: ResumeDsl,
        tokens: ResolvedTokens,
        resume: Optional[ResumeDocument] = None,
        columns: Optional[Sequence[PageColumn]] = None,
    ) -> List[PlacedSection]:
        """Visible sections in ascending order, each with data, styles and a declared column."""
        if columns is None:
            columns = build_columns(dsl.layout.type, dsl.layout.column_distribution)
        column_ids = {column.id for column in columns}

        visible_sections = sorted(
            (section for section in dsl.sections if section.visible),
            key=lambda section: section.order,
        )
        styles = build_section_styles(tokens)

        placed: List[PlacedSection] = []
        for section in visible_sections:
            data = None
            if resume is not None:
                overrides = dsl.item_overrides.get(section.id, [])
                data = self.registry.map_section(section.id, resume, overrides)
            if data is None:
                data = self.registry.get_placeholder(section.id)

            placed.append(
                PlacedSection(
                    section_id=section.id,
                    column_id=map_column_to_id(section.column, column_ids),
                    order=section.order,
                    data=data,
                    styles=styles,
                )
            )

        return placed

    def _to_raw(self, dsl: Any) -> Dict[str, Any]:
        if isinstance(dsl, ResumeDsl):
            return dsl.model_dump(by_alias=True, exclude_none=True)
        if not isinstance(dsl, Mapping):
            # Raises the structured "must be an object" error
            self.validator.validate_or_throw(dsl)
        return dict(dsl)
