"""
Test Assertions
===============

Custom assertion helpers for DSL validation and AST compilation tests.
"""

from typing import Any, Dict, List, Optional

from resume_dsl.models.schemas import ResumeAst, ValidationResult


def assert_valid_result(result: ValidationResult) -> None:
    """Assert that a validation result is valid and normalized."""
    assert isinstance(result, ValidationResult)
    assert result.valid is True, f"Unexpected errors: {result.errors}"
    assert result.errors == []
    assert result.normalized is not None


def assert_invalid_result(result: ValidationResult, expected_errors: Optional[List[str]] = None) -> None:
    """Assert that a validation result failed with expected error fragments."""
    assert isinstance(result, ValidationResult)
    assert result.valid is False
    assert result.normalized is None
    assert len(result.errors) > 0

    if expected_errors:
        for expected_error in expected_errors:
            assert any(expected_error in error for error in result.errors), \
                f"Expected error '{expected_error}' not found in {result.errors}"


def assert_valid_ast(ast: ResumeAst) -> None:
    """Assert the structural invariants every compiled AST holds."""
    assert isinstance(ast, ResumeAst)
    assert ast.page.width_mm > 0
    assert ast.page.height_mm > 0
    assert sum(column.width_percentage for column in ast.page.columns) == 100

    column_ids = {column.id for column in ast.page.columns}
    orders = [section.order for section in ast.sections]
    assert orders == sorted(orders)
    for section in ast.sections:
        assert section.column_id in column_ids


def assert_ast_equal_except_timestamp(first: ResumeAst, second: ResumeAst) -> None:
    """Assert two ASTs are identical apart from ``meta.generatedAt``."""
    assert _without_timestamp(first.to_json_dict()) == _without_timestamp(second.to_json_dict())


def _without_timestamp(data: Dict[str, Any]) -> Dict[str, Any]:
    meta = dict(data["meta"])
    meta.pop("generatedAt")
    return {**data, "meta": meta}


def section_item_ids(ast: ResumeAst, section_id: str) -> List[str]:
    """Item ids of a placed section, in AST order."""
    for section in ast.sections:
        if section.section_id == section_id:
            return [item.id for item in section.data.items]
    raise AssertionError(f"Section '{section_id}' not placed in AST")
