"""Decorative color-cycling and glitch animations.

WHY: Fire, ice and glitch looks are built by stacking several copies of
the same line and switching them on and off with the frame clock. No single
drawtext command can cycle colors, but many time-gated ones can.

HOW: Palette effects draw a faint base copy, then one layer per palette
color. Each layer is enabled for its slice of a repeating cycle using
``mod(t-S, cycle)``. Glitch draws offset red, green and blue copies that
jitter on sine waves of different frequencies, a solid white main layer
on top, and a cyan copy that flashes for a short slice of every period.

RULES:
- fire-text: 5 warm colors, 0.1s per color (0.5s cycle)
- ice-text: 5 cold colors, 0.2s per color (1.0s cycle)
- Palette layer k is on while ``k*d <= mod(t-S,C) < (k+1)*d``
- glitch emits 5 commands per line: R, G, B, main, flash (in that order)
- All layers are additionally gated by the cue window
"""

from __future__ import annotations

from typing import List, Sequence

from subtitle_burner.compilers.base import DrawText, LineAnimation, PlacedLine, between, restyle, styled_text
from subtitle_burner.core.ir import Cue, ResolvedStyle
from subtitle_burner.render.colors import with_opacity
from subtitle_burner.render.layout import fmt_num

BASE_LAYER_OPACITY = 0.3

FIRE_PALETTE = ("0xFF4500", "0xFF6A00", "0xFF8C00", "0xFFB000", "0xFFD700")
ICE_PALETTE = ("0xE0FFFF", "0xB0E0E6", "0x87CEEB", "0x00BFFF", "0x1E90FF")
FIRE_SECONDS_PER_COLOR = 0.1
ICE_SECONDS_PER_COLOR = 0.2

GLITCH_FLASH_PERIOD = 0.3
GLITCH_FLASH_ON = 0.05


def cycle_slice(start: float, end: float, index: int, seconds: float, count: int) -> str:
    """Enable expression for slice ``index`` of a repeating color cycle."""
    cycle = fmt_num(seconds * count)
    phase = "mod(t-{},{})".format(fmt_num(start), cycle)
    return "{}*gte({},{})*lt({},{})".format(
        between(start, end),
        phase,
        fmt_num(index * seconds),
        phase,
        fmt_num((index + 1) * seconds),
    )


class _PaletteCycle(LineAnimation):
    palette: Sequence[str] = ()
    seconds_per_color: float = 0.1

    def line_commands(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        commands = [styled_text(
            style, line.text, line.x, line.y,
            enable=between(cue.start_time, cue.end_time),
            fontcolor=with_opacity(style.text_hex, BASE_LAYER_OPACITY),
        )]
        for index, color in enumerate(self.palette):
            commands.append(styled_text(
                style, line.text, line.x, line.y,
                enable=cycle_slice(cue.start_time, cue.end_time, index, self.seconds_per_color, len(self.palette)),
                fontcolor=color,
            ))
        return commands


class FireText(_PaletteCycle):
    palette = FIRE_PALETTE
    seconds_per_color = FIRE_SECONDS_PER_COLOR

    @property
    def name(self) -> str:
        return "fire-text"


class IceText(_PaletteCycle):
    palette = ICE_PALETTE
    seconds_per_color = ICE_SECONDS_PER_COLOR

    @property
    def name(self) -> str:
        return "ice-text"


# (color, x jitter, y jitter) for the channel-split layers
GLITCH_CHANNELS = (
    ("0xFF0000@0.7", "+4*sin(23*t)", "+2*sin(17*t)"),
    ("0x00FF00@0.7", "-3*sin(31*t)", "+2*sin(29*t+1)"),
    ("0x0000FF@0.7", "+3*sin(37*t+2)", "-2*sin(19*t)"),
)
GLITCH_MAIN_COLOR = "0xFFFFFF"
GLITCH_FLASH = ("0x00FFFF@0.8", "+6*sin(60*t)", "")


class Glitch(LineAnimation):
    @property
    def name(self) -> str:
        return "glitch"

    def line_commands(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        window = between(cue.start_time, cue.end_time)
        main = styled_text(style, line.text, line.x, line.y, enable=window, fontcolor=GLITCH_MAIN_COLOR)

        commands = []
        for color, dx, dy in GLITCH_CHANNELS:
            commands.append(restyle(
                main,
                fontcolor=color,
                x="({}){}".format(line.x, dx),
                y="({}){}".format(line.y, dy),
                borderw=0,
                shadow=0,
                box=False,
            ))
        commands.append(main)

        color, dx, dy = GLITCH_FLASH
        commands.append(restyle(
            main,
            fontcolor=color,
            x="({}){}".format(line.x, dx),
            y="({}){}".format(line.y, dy),
            enable="{}*lt(mod(t,{}),{})".format(window, fmt_num(GLITCH_FLASH_PERIOD), fmt_num(GLITCH_FLASH_ON)),
            borderw=0,
            shadow=0,
            box=False,
        ))
        return commands
