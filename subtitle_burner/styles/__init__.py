"""Style tables and the StyleOptions → ResolvedStyle resolver."""

from subtitle_burner.styles.resolver import resolve
from subtitle_burner.styles.tables import lookup_or_default

__all__ = ["resolve", "lookup_or_default"]
