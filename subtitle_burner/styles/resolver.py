"""Resolve user-facing StyleOptions into a format-specific ResolvedStyle.

WHY: Both compilers need the same decisions made the same way: which
alignment code a position means, which margins apply, whether the text gets
an outline or a background box, and what every named color is in each
target encoding. Making those decisions once keeps the ASS path and the
drawtext path visually consistent.

HOW: Every enumerated field is looked up through lookup_or_default(), so
bad input degrades to defaults instead of failing. The preset supplies a
weight flag and nominal outline/shadow widths; caller overrides apply only
when no background is selected.

RULES:
- Background precedence is absolute: any background ⇒ outline 0, shadow 0,
  border style 3 (opaque box), regardless of requested outline/shadow
- No background ⇒ border style 1, outline/shadow = caller value or preset
- The boxed preset adds 10px horizontal margins and a semi-transparent
  black box when no background was chosen
- Font size is clamped to 8–200; non-positive sizes fall back to 24
- Pure function: equal options give equal ResolvedStyle values
"""

from __future__ import annotations

from subtitle_burner.core.ir import ResolvedStyle, StyleOptions
from subtitle_burner.render.colors import (
    alpha_to_opacity,
    ass_style_color,
    ass_to_hex,
    is_ass_color,
    parse_ass_color,
)
from subtitle_burner.styles.tables import (
    ANIMATION_NAMES,
    BACKGROUNDS,
    BORDER_STYLE_OPAQUE_BOX,
    BORDER_STYLE_OUTLINE,
    BOXED_DEFAULT_BACKGROUND,
    COLORS,
    DEFAULT_ANIMATION,
    DEFAULT_BACKGROUND,
    DEFAULT_COLOR,
    DEFAULT_EFFECT_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_OUTLINE_COLOR,
    DEFAULT_POSITION,
    DEFAULT_PRESET,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    OUTLINE_COLORS,
    POSITIONS,
    PRESETS,
    lookup_or_default,
    resolve_key,
)


def clamp_font_size(size: object) -> int:
    """Clamp a requested font size to the supported range."""
    try:
        value = int(size)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return DEFAULT_FONT_SIZE
    if value <= 0:
        return DEFAULT_FONT_SIZE
    return max(MIN_FONT_SIZE, min(value, MAX_FONT_SIZE))


def resolve_effect_color(value: object) -> str:
    """Return the ASS token for an effect color given as a name or raw token."""
    if isinstance(value, str) and is_ass_color(value):
        return value.strip()
    return lookup_or_default(COLORS, value, DEFAULT_EFFECT_COLOR)


def resolve(options: StyleOptions | None = None) -> ResolvedStyle:
    """Compile StyleOptions into the parameters both compilers consume.

    Args:
        options: User options; None means all defaults.

    Returns:
        A frozen ResolvedStyle.
    """
    if options is None:
        options = StyleOptions()

    preset = lookup_or_default(PRESETS, options.preset, DEFAULT_PRESET)
    position = resolve_key(POSITIONS, options.position, DEFAULT_POSITION)
    alignment, margin_v, margin_l, margin_r = POSITIONS[position]

    text_token = lookup_or_default(COLORS, options.color, DEFAULT_COLOR)
    outline_token = lookup_or_default(OUTLINE_COLORS, options.outline_color, DEFAULT_OUTLINE_COLOR)
    shadow_token = lookup_or_default(OUTLINE_COLORS, options.shadow_color, DEFAULT_OUTLINE_COLOR)
    effect_token = resolve_effect_color(options.effect_color)

    background_key = resolve_key(BACKGROUNDS, options.background, DEFAULT_BACKGROUND)
    if preset["box"] and background_key == DEFAULT_BACKGROUND:
        background_key = BOXED_DEFAULT_BACKGROUND
    background_token = BACKGROUNDS[background_key]

    extra = preset["extra_margin"]
    margin_l += extra
    margin_r += extra

    if background_token is not None:
        outline = 0
        shadow = 0
        border_style = BORDER_STYLE_OPAQUE_BOX
        # libass paints the opaque box with OutlineColour, its shadow with BackColour
        outline_ass = ass_style_color(background_token)
        back_ass = ass_style_color(background_token)
        background_hex = ass_to_hex(background_token)
        background_opacity = alpha_to_opacity(parse_ass_color(background_token)[3])
    else:
        outline = _non_negative(options.outline_thickness, preset["outline"])
        shadow = _non_negative(options.shadow_depth, preset["shadow"])
        border_style = BORDER_STYLE_OUTLINE
        outline_ass = ass_style_color(outline_token)
        back_ass = ass_style_color(shadow_token)
        background_hex = None
        background_opacity = 0.0

    animation = resolve_key(ANIMATION_NAMES, options.animation, DEFAULT_ANIMATION)

    return ResolvedStyle(
        font_name=(options.font_family or "Arial").strip() or "Arial",
        font_size=clamp_font_size(options.font_size),
        bold=bool(preset["bold"]),
        alignment=alignment,
        margin_v=margin_v,
        margin_l=margin_l,
        margin_r=margin_r,
        primary_ass=ass_style_color(text_token),
        outline_ass=outline_ass,
        back_ass=back_ass,
        outline=outline,
        shadow=shadow,
        border_style=border_style,
        text_hex=ass_to_hex(text_token),
        outline_hex=ass_to_hex(outline_token),
        shadow_hex=ass_to_hex(shadow_token),
        effect_hex=ass_to_hex(effect_token),
        background_hex=background_hex,
        background_opacity=background_opacity,
        position=position,
        words_per_line=max(int(options.words_per_line or 0), 0),
        animation=animation,
    )


def _non_negative(value: int | None, default: int) -> int:
    if value is None:
        return default
    return max(int(value), 0)
