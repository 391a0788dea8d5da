"""
Unit Tests for DSL Compiler
===========================

Tests for page geometry, section placement and the full compile pipeline.
"""

from datetime import datetime, timezone
from typing import Any, Dict
from unittest.mock import Mock

import pytest
import yaml

from resume_dsl.core.dsl.compiler import (
    DSLCompiler,
    build_columns,
    build_section_styles,
    map_column_to_id,
)
from resume_dsl.core.dsl.exceptions import InvalidDSLError, UnsupportedDSLVersionError
from resume_dsl.core.dsl.migrations import DSLMigrationService, DSLMigrator
from resume_dsl.core.dsl.tokens import TokenResolver
from resume_dsl.models.schemas import DesignTokens, RenderTarget, ResumeAst, ResumeDsl

from tests.utils.assertions import (
    assert_ast_equal_except_timestamp,
    assert_valid_ast,
    section_item_ids,
)
from tests.utils.data_generators import DSLDataGenerator, ResumeDataGenerator


class LegacyMigrator(DSLMigrator):
    """Upgrades 0.9.0 documents, which named the paper size ``paper``."""

    from_version = "0.9.0"
    to_version = "1.0.0"

    def migrate(self, raw_dsl: Dict[str, Any]) -> Dict[str, Any]:
        layout = dict(raw_dsl["layout"])
        layout["paperSize"] = layout.pop("paper")
        return {**raw_dsl, "layout": layout, "version": self.to_version}


def _columns(layout_type, distribution=None):
    return [(c.id, c.width_percentage, c.order) for c in build_columns(layout_type, distribution)]


class TestColumnGeometry:
    """Test column derivation from layout types."""

    def test_two_column_70_30(self):
        assert _columns("two-column", "70-30") == [("main", 70, 0), ("sidebar", 30, 1)]

    def test_sidebar_left_puts_sidebar_first(self):
        assert _columns("sidebar-left", "70-30") == [("sidebar", 30, 0), ("main", 70, 1)]

    def test_sidebar_right(self):
        assert _columns("sidebar-right", "60-40") == [("main", 60, 0), ("sidebar", 40, 1)]

    @pytest.mark.parametrize("distribution", [None, "90-10"])
    def test_default_distribution(self, distribution):
        assert _columns("two-column", distribution) == [("main", 70, 0), ("sidebar", 30, 1)]

    def test_magazine_ignores_distribution(self):
        assert _columns("magazine", "50-50") == [("main", 60, 0), ("sidebar", 40, 1)]

    @pytest.mark.parametrize("layout_type", ["single-column", "compact", "unknown-layout"])
    def test_single_main_column(self, layout_type):
        assert _columns(layout_type, "50-50") == [("main", 100, 0)]

    @pytest.mark.parametrize(
        "column,expected",
        [("main", "main"), ("sidebar", "sidebar"), ("full-width", "main"), ("footer", "main")],
    )
    def test_map_column_to_id(self, column, expected):
        assert map_column_to_id(column) == expected

    def test_sidebar_without_declared_sidebar_goes_to_main(self):
        assert map_column_to_id("sidebar", {"main"}) == "main"
        assert map_column_to_id("sidebar", {"main", "sidebar"}) == "sidebar"


class TestSectionStyles:
    """Test section styles built from resolved tokens."""

    def test_default_styles(self):
        styles = build_section_styles(TokenResolver().resolve(DesignTokens()))

        assert styles.container.background_color == "transparent"
        assert styles.container.border_width_px == 0
        assert styles.container.shadow is None
        assert styles.container.padding_px == 16
        assert styles.container.margin_bottom_px == 16
        assert styles.title.font_weight == 700
        assert styles.title.text_decoration == "none"
        assert styles.content.font_size_px == 16
        assert styles.content.font_weight == 400
        assert styles.content.padding_left_px is None


class TestCompileScenarios:
    """Test end-to-end compilation."""

    def test_single_column_summary(self, compiler):
        """Test the single-column summary scenario end to end."""
        dsl = {
            "version": "1.0.0",
            "layout": {"type": "single-column", "paperSize": "a4", "margins": "normal"},
            "sections": [{"id": "summary", "visible": True, "order": 0, "column": "main"}],
        }
        resume = ResumeDataGenerator.generate_resume(summary="Experienced developer")

        ast = compiler.compile(dsl, RenderTarget.HTML, resume)
        data = ast.to_json_dict()

        assert data["page"]["widthMm"] == 210
        assert data["page"]["heightMm"] == 297
        assert data["page"]["marginTopMm"] == 15
        assert data["page"]["columns"] == [{"id": "main", "widthPercentage": 100, "order": 0}]
        assert len(data["sections"]) == 1
        section = data["sections"][0]
        assert section["sectionId"] == "summary"
        assert section["columnId"] == "main"
        assert section["data"] == {"type": "summary", "data": {"content": "Experienced developer"}}

    def test_full_document_with_resume(self, compiler, full_dsl, resume):
        ast = compiler.compile(full_dsl, "pdf", resume)

        assert_valid_ast(ast)
        assert ast.page.width_mm == 216
        assert ast.page.height_mm == 279
        assert ast.page.margin_left_mm == 20
        assert [(c.id, c.width_percentage) for c in ast.page.columns] == [("main", 65), ("sidebar", 35)]
        assert ast.page.column_gap_mm == 4.5
        assert [s.section_id for s in ast.sections] == ["summary", "experience", "skills"]
        assert [s.column_id for s in ast.sections] == ["main", "main", "sidebar"]
        assert section_item_ids(ast, "experience") == ["exp-1", "exp-3"]

    def test_full_document_styles(self, compiler, full_dsl):
        ast = compiler.compile(full_dsl)
        styles = ast.sections[0].styles

        assert styles.container.border_radius_px == 12
        assert styles.container.padding_px == 9
        assert styles.container.margin_bottom_px == 18
        assert styles.container.shadow == "0 1px 2px rgba(0, 0, 0, 0.05)"
        assert styles.title.border_bottom == "2px solid #3B82F6"
        assert styles.title.font_size_px == 26
        assert ast.global_styles.accent == "#3B82F6"
        assert ast.global_styles.text_primary == "#1E293B"

    def test_hidden_sections_excluded_and_sorted(self, compiler):
        sections = [
            DSLDataGenerator.generate_section("skills", 3),
            DSLDataGenerator.generate_section("summary", 1),
            DSLDataGenerator.generate_section("education", 2, visible=False),
            DSLDataGenerator.generate_section("experience", 0),
        ]
        ast = compiler.compile(DSLDataGenerator.generate_minimal_dsl(sections=sections))

        assert [s.section_id for s in ast.sections] == ["experience", "summary", "skills"]
        assert [s.order for s in ast.sections] == [0, 1, 3]

    def test_preview_without_resume_uses_placeholders(self, compiler, full_dsl):
        ast = compiler.compile(full_dsl)
        by_id = {s.section_id: s.data.model_dump() for s in ast.sections}

        assert by_id["summary"] == {"type": "summary", "data": {"content": ""}}
        assert by_id["experience"] == {"type": "experience", "items": []}
        assert by_id["skills"] == {"type": "skills", "items": []}

    def test_unknown_section_gets_custom_placeholder(self, compiler, resume):
        sections = [DSLDataGenerator.generate_section("hobbies", 0), DSLDataGenerator.generate_section("objective", 1)]
        ast = compiler.compile(DSLDataGenerator.generate_minimal_dsl(sections=sections), resume=resume)

        assert ast.sections[0].data.model_dump() == {"type": "custom", "items": []}
        assert ast.sections[1].data.model_dump() == {"type": "objective", "data": {"content": ""}}

    def test_overrides_scoped_to_section(self, compiler, resume):
        """Test an override list only affects the section it is keyed under."""
        dsl = DSLDataGenerator.generate_minimal_dsl(
            sections=[DSLDataGenerator.generate_section("experience", 0), DSLDataGenerator.generate_section("skills", 1)]
        )
        dsl["itemOverrides"] = {
            "skills": [{"itemId": "skill-2", "order": -1}, {"itemId": "exp-1", "visible": False}]
        }
        ast = compiler.compile(dsl, resume=resume)

        assert section_item_ids(ast, "experience") == ["exp-1", "exp-2", "exp-3"]
        assert section_item_ids(ast, "skills") == ["skill-2", "skill-1"]

    def test_empty_sections(self, compiler, minimal_dsl):
        ast = compiler.compile(minimal_dsl)

        assert ast.sections == []
        assert ast.meta.version == "1.0.0"


class TestSectionColumnPlacement:
    """Test sections land only in columns the page declares."""

    @pytest.mark.parametrize("layout_type", ["single-column", "compact"])
    def test_sidebar_section_on_single_column_page(self, compiler, resume, layout_type):
        sections = [
            DSLDataGenerator.generate_section("skills", 0, column="sidebar"),
            DSLDataGenerator.generate_section("summary", 1, column="full-width"),
        ]
        dsl = DSLDataGenerator.generate_minimal_dsl(layout_type=layout_type, sections=sections)

        ast = compiler.compile(dsl, resume=resume)

        assert {s.column_id for s in ast.sections} <= {c.id for c in ast.page.columns}
        assert [s.column_id for s in ast.sections] == ["main", "main"]

    def test_unknown_layout_type(self, compiler, resume):
        """Test a typed document with an unrecognized layout type still places sections in main."""
        dsl = ResumeDsl.model_validate(
            DSLDataGenerator.generate_minimal_dsl(
                layout_type="unknown-layout",
                sections=[DSLDataGenerator.generate_section("skills", 0, column="sidebar")],
            )
        )
        tokens = TokenResolver().resolve(dsl.tokens)
        columns = build_columns(dsl.layout.type, dsl.layout.column_distribution)

        for placed in (
            compiler.place_sections(dsl, tokens, resume, columns),
            compiler.place_sections(dsl, tokens, resume),
        ):
            assert {s.column_id for s in placed} <= {c.id for c in columns}
            assert placed[0].column_id == "main"

    def test_sidebar_kept_on_two_column_page(self, compiler, resume):
        sections = [DSLDataGenerator.generate_section("skills", 0, column="sidebar")]
        ast = compiler.compile(DSLDataGenerator.generate_minimal_dsl(layout_type="two-column", sections=sections), resume=resume)

        assert ast.sections[0].column_id == "sidebar"


class TestCompilerProperties:
    """Test idempotence, metadata and input handling."""

    def test_idempotent(self, compiler, full_dsl, resume):
        first = compiler.compile(full_dsl, "html", resume)
        second = compiler.compile(full_dsl, "html", resume)

        assert_ast_equal_except_timestamp(first, second)

    def test_generated_at_is_current_utc(self, compiler, minimal_dsl):
        before = datetime.now(timezone.utc)
        ast = compiler.compile(minimal_dsl)

        assert before <= ast.meta.generated_at <= datetime.now(timezone.utc)
        assert isinstance(ast.to_json_dict()["meta"]["generatedAt"], str)

    def test_json_output_has_no_nulls(self, compiler, minimal_dsl):
        dsl = DSLDataGenerator.generate_minimal_dsl(sections=[DSLDataGenerator.generate_section("skills")])
        data = compiler.compile(dsl, resume=ResumeDataGenerator.generate_resume()).to_json_dict()

        assert "shadow" not in data["sections"][0]["styles"]["container"]
        assert "borderBottom" not in data["sections"][0]["styles"]["title"]
        assert data["sections"][0]["data"]["items"][1] == {"id": "skill-2", "name": "Docker"}

    def test_accepts_typed_document(self, compiler, validator, full_dsl, resume):
        typed = validator.validate_or_throw(full_dsl)

        assert_ast_equal_except_timestamp(compiler.compile(typed, "html", resume), compiler.compile(full_dsl, "html", resume))

    def test_input_not_mutated(self, compiler, full_dsl, resume):
        snapshot = DSLDataGenerator.with_changes(full_dsl, "version", "1.0.0")
        compiler.compile(full_dsl, resume=resume)

        assert full_dsl == snapshot
        assert [e.order for e in resume.experiences] == [0, 1, 2]

    def test_html_and_pdf_wrappers(self, compiler, minimal_dsl):
        assert isinstance(compiler.compile_for_html(minimal_dsl), ResumeAst)
        assert isinstance(compiler.compile_for_pdf(minimal_dsl), ResumeAst)

    def test_unknown_target_rejected(self, compiler, minimal_dsl):
        with pytest.raises(ValueError):
            compiler.compile(minimal_dsl, "docx")


class TestCompilerErrors:
    """Test failures abort the pipeline."""

    def test_invalid_document_stops_pipeline(self, test_settings, validator):
        resolver = Mock(wraps=TokenResolver())
        compiler = DSLCompiler(validator=validator, token_resolver=resolver, settings=test_settings)

        with pytest.raises(InvalidDSLError) as exc_info:
            compiler.compile({"version": "1.0.0", "layout": {"type": "bogus", "paperSize": "a4"}, "sections": []})

        assert "layout.type: unallowed value bogus" in exc_info.value.errors
        resolver.resolve.assert_not_called()

    def test_compile_from_raw_non_mapping(self, compiler):
        with pytest.raises(InvalidDSLError):
            compiler.compile_from_raw(["not", "a", "document"])

    def test_unsupported_version(self, compiler, minimal_dsl):
        with pytest.raises(UnsupportedDSLVersionError):
            compiler.compile({**minimal_dsl, "version": "0.9.0"})

    def test_registered_migration_runs_before_validation(self, test_settings, validator, minimal_dsl):
        compiler = DSLCompiler(
            validator=validator,
            migration_service=DSLMigrationService([LegacyMigrator()]),
            settings=test_settings,
        )
        legacy = {**minimal_dsl, "version": "0.9.0", "layout": {"type": "single-column", "paper": "legal"}}

        ast = compiler.compile(legacy)

        assert ast.meta.version == "1.0.0"
        assert ast.page.height_mm == 356


class TestCompileFromText:
    """Test compiling JSON and YAML text."""

    def test_yaml_text(self, compiler, full_dsl, resume):
        ast = compiler.compile_from_text(yaml.safe_dump(full_dsl), "html", resume)

        assert [s.section_id for s in ast.sections] == ["summary", "experience", "skills"]

    def test_invalid_text(self, compiler):
        with pytest.raises(InvalidDSLError):
            compiler.compile_from_text("")
