"""Core data model, cue parsing, and word timing.

WHY: Everything downstream (style resolution, compilers, HTTP layer) shares
the same Cue and style records. This package holds them plus the two pure
helpers every compiler needs: cue validation and word timing.

RULES:
- No I/O in this package
- No imports from compilers/, engine/ or server/
"""

from subtitle_burner.core.ir import Cue, ResolvedStyle, StyleOptions, WordTiming

__all__ = ["Cue", "ResolvedStyle", "StyleOptions", "WordTiming"]
