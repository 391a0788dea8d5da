"""
DSL Service
===========

Entry points used by the HTTP layer: validation-only checks, live preview and
theme-aware rendering of persisted resumes.

Data access is delegated to a ``ResumeStore``; authentication happens upstream and
arrives here as an opaque ``CurrentUser``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from resume_dsl.config.logging import get_logger
from resume_dsl.core.dsl.compiler import DSLCompiler
from resume_dsl.core.dsl.exceptions import ResumeNotFoundError
from resume_dsl.core.dsl.merge import deep_merge
from resume_dsl.core.dsl.validator import DSLValidator
from resume_dsl.models.schemas import (
    CurrentUser,
    DSLValidationResponse,
    RenderedResume,
    RenderTarget,
    ResumeAst,
    ResumeDocument,
)

logger = get_logger(__name__)


class ResumeStore(ABC):
    """Async data-access collaborator returning fully loaded resumes."""

    @abstractmethod
    async def get_resume(self, resume_id: str, user_id: str) -> Optional[ResumeDocument]:
        """Resume owned by ``user_id``, or None."""
        pass

    @abstractmethod
    async def get_public_resume(self, slug: str) -> Optional[ResumeDocument]:
        """Public resume published under ``slug``, or None."""
        pass


def merge_resume_theme(resume: ResumeDocument) -> Dict[str, Any]:
    """Active theme style config overlaid with the resume's custom theme."""
    base = resume.active_theme.style_config if resume.active_theme else {}
    return deep_merge(base, resume.custom_theme or {})


class DSLService:
    """Validation, preview and rendering on top of the DSL compiler."""

    def __init__(
        self,
        store: ResumeStore,
        compiler: Optional[DSLCompiler] = None,
        validator: Optional[DSLValidator] = None,
    ):
        self.store = store
        self.compiler = compiler or DSLCompiler(validator=validator)
        self.validator = validator or self.compiler.validator
        self.logger = logger.bind(component="dsl_service")

    def validate(self, raw: Any) -> DSLValidationResponse:
        """Validate a DSL document without compiling it."""
        result = self.validator.validate(raw)
        return DSLValidationResponse(valid=result.valid, errors=None if result.valid else result.errors)

    def preview(self, raw: Any, target: Union[RenderTarget, str] = RenderTarget.HTML) -> ResumeAst:
        """Compile a DSL document with placeholder data, for live editor previews."""
        self.logger.info("Previewing DSL", target=RenderTarget(target).value)
        return self.compiler.compile_from_raw(raw, target)

    async def render(
        self,
        resume_id: str,
        user: CurrentUser,
        target: Union[RenderTarget, str] = RenderTarget.HTML,
    ) -> RenderedResume:
        """
        Compile a user's resume with its theme and customizations.

        Raises:
            ResumeNotFoundError: If the user has no resume with this id
            InvalidDSLError: If the merged theme is not a valid DSL document
        """
        self.logger.info("Rendering resume", resume_id=resume_id, user_id=user.user_id)

        resume = await self.store.get_resume(resume_id, user.user_id)
        if resume is None:
            raise ResumeNotFoundError(f"Resume not found: {resume_id}")

        ast = self.compiler.compile(merge_resume_theme(resume), target, resume)
        return RenderedResume(ast=ast, resume_id=resume_id)

    async def render_public(
        self,
        slug: str,
        target: Union[RenderTarget, str] = RenderTarget.HTML,
    ) -> RenderedResume:
        """
        Compile a public resume by slug.

        Raises:
            ResumeNotFoundError: If no public resume uses this slug
        """
        self.logger.info("Rendering public resume", slug=slug)

        resume = await self.store.get_public_resume(slug)
        if resume is None or not resume.is_public:
            raise ResumeNotFoundError(f"Resume not found or not public: {slug}")

        ast = self.compiler.compile(merge_resume_theme(resume), target, resume)
        return RenderedResume(ast=ast, slug=slug)
