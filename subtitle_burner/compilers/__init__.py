"""Animation registry: pluggable drawtext effect hub.

WHY: The filter-graph builder, the CLI and the HTTP layer all need one
lookup from an animation name to the code that compiles it. A central dict
makes adding an effect a two-step job: write the class, add one line here.

HOW: ANIMATIONS maps request keys to animation *classes* (not instances).
get_animation() instantiates the class, or returns None for "none" and for
names it does not know, which sends the caller down the static subtitle
track path.

RULES:
- Keys match styles.tables.ANIMATION_NAMES minus "none"
- Values are BaseAnimation subclasses (not instances)
- The document compiler (ass_document) and the graph assembler
  (filter_graph) are imported from their own modules, not re-exported here
"""

from __future__ import annotations

from typing import Dict, Optional, Type

from subtitle_burner.compilers.base import BaseAnimation
from subtitle_burner.compilers.decorative import FireText, Glitch, IceText
from subtitle_burner.compilers.motion import Bounce, FadeIn, SlideLeft, SlideUp, Typewriter
from subtitle_burner.compilers.word_families import Stroke, WordColor, WordFill, WordHighlight, WordReveal

ANIMATIONS: Dict[str, Type[BaseAnimation]] = {
    "fade-in": FadeIn,
    "slide-up": SlideUp,
    "slide-left": SlideLeft,
    "bounce": Bounce,
    "typewriter": Typewriter,
    "word-reveal": WordReveal,
    "word-color": WordColor,
    "word-fill": WordFill,
    "word-highlight": WordHighlight,
    "stroke": Stroke,
    "fire-text": FireText,
    "ice-text": IceText,
    "glitch": Glitch,
}


def get_animation(name: Optional[str]) -> Optional[BaseAnimation]:
    """Instantiate the animation registered under ``name``, if any."""
    if not name:
        return None
    animation_cls = ANIMATIONS.get(name.strip().lower())
    if animation_cls is None:
        return None
    return animation_cls()
