"""
Token Resolver
==============

Resolves semantic design tokens into concrete rendering values:

- ``spacing.sectionGap: lg`` with ``density: compact`` -> ``sectionGapPx: 18``
- ``colors.borderRadius: lg`` -> ``borderRadiusPx: 12``
- ``typography.fontSize: base`` -> ``baseFontSizePx: 16``

Resolution is total: an unrecognized keyword falls back to a documented default and
never raises.
"""

from typing import Dict, NamedTuple, Optional

from resume_dsl.models.schemas import (
    DesignTokens,
    ResolvedColors,
    ResolvedEffects,
    ResolvedSpacing,
    ResolvedTokens,
    ResolvedTypography,
)


class FontSizePair(NamedTuple):
    base: int
    heading: int


class HeadingStyle(NamedTuple):
    font_weight: int
    text_transform: str
    border_bottom: Optional[str]
    border_left: Optional[str]
    padding_left: int


FONT_FAMILIES: Dict[str, str] = {
    "inter": "Inter, system-ui, sans-serif",
    "merriweather": "Merriweather, Georgia, serif",
    "roboto": "Roboto, Arial, sans-serif",
    "open-sans": "Open Sans, Arial, sans-serif",
    "playfair-display": "Playfair Display, Georgia, serif",
    "source-serif": "Source Serif Pro, Georgia, serif",
    "lato": "Lato, Arial, sans-serif",
    "poppins": "Poppins, Arial, sans-serif",
}
DEFAULT_FONT_FAMILY = "inter"

FONT_SIZES: Dict[str, FontSizePair] = {
    "sm": FontSizePair(base=14, heading=18),
    "base": FontSizePair(base=16, heading=22),
    "lg": FontSizePair(base=18, heading=26),
}
DEFAULT_FONT_SIZE = "base"

LINE_HEIGHT = 1.5
BODY_FONT_WEIGHT = 400

# Base spacing in px, before density scaling
SPACING_SIZES: Dict[str, int] = {
    "sm": 12,
    "md": 16,
    "lg": 24,
    "xl": 32,
}
DEFAULT_SECTION_GAP_PX = 24
DEFAULT_ITEM_GAP_PX = 16
DEFAULT_CONTENT_PADDING_PX = 16

DENSITY_FACTORS: Dict[str, float] = {
    "compact": 0.75,
    "comfortable": 1.0,
    "spacious": 1.25,
}
DEFAULT_DENSITY_FACTOR = 1.0

BORDER_RADII: Dict[str, int] = {
    "none": 0,
    "sm": 4,
    "md": 8,
    "lg": 12,
    "full": 9999,
}
DEFAULT_BORDER_RADIUS_PX = 0

SHADOWS: Dict[str, str] = {
    "none": "none",
    "subtle": "0 1px 2px rgba(0, 0, 0, 0.05)",
    "medium": "0 4px 6px -1px rgba(0, 0, 0, 0.1)",
    "strong": "0 10px 15px -3px rgba(0, 0, 0, 0.1)",
}
DEFAULT_SHADOW = "none"


def _round_px(value: float) -> int:
    # Half-up rounding; the builtin round() rounds halves to even.
    return int(value + 0.5)


def resolve_heading_style(style: str, accent_color: str) -> HeadingStyle:
    """
    Resolve a heading style keyword into concrete heading decoration.

    Args:
        style: Heading style keyword
        accent_color: Resolved primary color used by bordered styles

    Returns:
        HeadingStyle; unknown keywords resolve like ``bold``
    """
    if style == "underline":
        return HeadingStyle(600, "none", f"2px solid {accent_color}", None, 0)
    if style == "uppercase":
        return HeadingStyle(600, "uppercase", None, None, 0)
    if style == "accent-border":
        return HeadingStyle(700, "none", None, f"4px solid {accent_color}", 12)
    if style == "minimal":
        return HeadingStyle(500, "none", None, None, 0)
    # bold, default and anything unrecognized
    return HeadingStyle(700, "none", None, None, 0)


class TokenResolver:
    """Maps semantic design tokens to concrete values. Stateless and thread-safe."""

    def resolve(self, tokens: DesignTokens) -> ResolvedTokens:
        """
        Resolve semantic tokens to concrete values.

        Args:
            tokens: Validated design tokens

        Returns:
            ResolvedTokens with pixel values, CSS font stacks and color strings
        """
        typography = tokens.typography
        palette = tokens.colors.colors
        spacing = tokens.spacing

        font_size = FONT_SIZES.get(typography.font_size, FONT_SIZES[DEFAULT_FONT_SIZE])
        density_factor = DENSITY_FACTORS.get(spacing.density, DEFAULT_DENSITY_FACTOR)
        heading = resolve_heading_style(typography.heading_style, palette.primary)

        return ResolvedTokens(
            typography=ResolvedTypography(
                heading_font_family=self._font_family(typography.font_family.heading),
                body_font_family=self._font_family(typography.font_family.body),
                base_font_size_px=font_size.base,
                heading_font_size_px=font_size.heading,
                line_height=LINE_HEIGHT,
                heading_font_weight=heading.font_weight,
                body_font_weight=BODY_FONT_WEIGHT,
                heading_text_transform=heading.text_transform,
                heading_border_bottom=heading.border_bottom,
                heading_border_left=heading.border_left,
                heading_padding_left=heading.padding_left,
            ),
            colors=ResolvedColors(
                primary=palette.primary,
                secondary=palette.secondary,
                background=palette.background,
                surface=palette.surface,
                text_primary=palette.text.primary,
                text_secondary=palette.text.secondary,
                text_accent=palette.text.accent,
                border=palette.border,
                divider=palette.divider,
            ),
            spacing=ResolvedSpacing(
                section_gap_px=self._spacing(spacing.section_gap, DEFAULT_SECTION_GAP_PX, density_factor),
                item_gap_px=self._spacing(spacing.item_gap, DEFAULT_ITEM_GAP_PX, density_factor),
                content_padding_px=self._spacing(
                    spacing.content_padding, DEFAULT_CONTENT_PADDING_PX, density_factor
                ),
                density_factor=density_factor,
            ),
            effects=ResolvedEffects(
                border_radius_px=BORDER_RADII.get(tokens.colors.border_radius, DEFAULT_BORDER_RADIUS_PX),
                box_shadow=SHADOWS.get(tokens.colors.shadows, DEFAULT_SHADOW),
            ),
        )

    @staticmethod
    def _font_family(keyword: str) -> str:
        return FONT_FAMILIES.get(keyword, FONT_FAMILIES[DEFAULT_FONT_FAMILY])

    @staticmethod
    def _spacing(keyword: str, default_px: int, density_factor: float) -> int:
        return _round_px(SPACING_SIZES.get(keyword, default_px) * density_factor)
