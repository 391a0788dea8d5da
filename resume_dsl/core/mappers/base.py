"""
Section Mapper Base
===================

Strategy interface for converting a slice of a resume document into AST section data,
plus the shared item-override algorithm.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from resume_dsl.models.schemas import (
    CamelModel,
    DateRange,
    ItemOverride,
    ResumeDocument,
    ResumeEntity,
    SectionData,
)

EntityT = TypeVar("EntityT", bound=ResumeEntity)


def apply_item_overrides(items: Sequence[EntityT], overrides: Sequence[ItemOverride]) -> List[EntityT]:
    """
    Apply per-item visibility and order overrides.

    Items hidden by an override (``visible=False``) are dropped. Kept items whose
    override carries an ``order`` get a copy with that order; source items are never
    mutated. The result is sorted ascending by effective order, stable for ties.
    Overrides naming an unknown item match nothing. The validator rejects repeated
    item ids; when called directly with repeats, the last override for an id wins.

    Args:
        items: Stored resume items
        overrides: Overrides scoped to the section

    Returns:
        New list of visible items in effective order
    """
    by_item_id: Dict[str, ItemOverride] = {override.item_id: override for override in overrides}

    visible_items: List[EntityT] = []
    for item in items:
        override = by_item_id.get(item.id)
        if override is None:
            visible_items.append(item)
            continue
        if override.visible is False:
            continue
        if override.order is not None and override.order != item.order:
            item = item.model_copy(update={"order": override.order})
        visible_items.append(item)

    return sorted(visible_items, key=lambda entity: entity.order)


def iso_date(value: Optional[datetime]) -> Optional[str]:
    """Format a timestamp as an ISO calendar date."""
    if value is None:
        return None
    return value.date().isoformat()


def build_date_range(start: datetime, end: Optional[datetime], is_current: bool) -> DateRange:
    return DateRange(
        start_date=iso_date(start),
        end_date=None if is_current else iso_date(end),
        is_current=is_current,
    )


def split_lines(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def split_keywords(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [keyword.strip() for keyword in text.split(",") if keyword.strip()]


class SectionMapper(ABC):
    """Strategy converting resume data into one section type's AST data."""

    section_id: str

    @abstractmethod
    def map(self, resume: ResumeDocument, overrides: Sequence[ItemOverride]) -> Optional[SectionData]:
        """
        Map resume data into section data.

        Returns:
            Section data, or None when this mapper has no data source
        """
        pass

    @abstractmethod
    def get_placeholder(self) -> SectionData:
        """Empty section data with the same tagged shape ``map`` produces."""
        pass


class ItemSectionMapper(SectionMapper):
    """
    Base for item-based sections.

    Subclasses name the resume relation they read (``source_field``), the section data
    model they produce (``section_model``) and project a single entity in ``map_item``.
    """

    source_field: str
    section_model: Type[CamelModel]

    def map(self, resume: ResumeDocument, overrides: Sequence[ItemOverride]) -> SectionData:
        entities = getattr(resume, self.source_field)
        items = [self.map_item(entity) for entity in apply_item_overrides(entities, overrides)]
        return self.section_model(items=items)

    def get_placeholder(self) -> SectionData:
        return self.section_model(items=[])

    @abstractmethod
    def map_item(self, entity: Any) -> CamelModel:
        """Project one stored entity into its AST item."""
        pass
