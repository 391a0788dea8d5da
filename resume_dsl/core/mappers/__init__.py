"""
Section Mappers
===============

Strategies converting resume data into typed AST section data.

Components:
- base: SectionMapper interface and item override application
- sections: Concrete mappers per section type
- registry: Section id lookup with placeholder fallback
"""

from .base import SectionMapper, apply_item_overrides
from .registry import SectionMapperRegistry

__all__ = ["SectionMapper", "SectionMapperRegistry", "apply_item_overrides"]
