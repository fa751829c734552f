"""Escaping for literal values embedded in an FFmpeg filter graph.

WHY: Cue text is user input. A colon, quote, bracket or comma left raw in a
drawtext value ends the option, the filter, or the whole chain, and FFmpeg
fails with an unhelpful parse error (or draws the wrong thing).

HOW: FFmpeg unescapes a filter value twice before the filter sees it.
The graph parser reads the whole option string of each filter, and then
the option parser reads each ``key=value``. Both levels strip single
quotes and treat a backslash outside quotes as "take the next character
literally"; inside quotes a backslash is an ordinary character. drawtext
then expands the text a third time (``\\x`` → ``x``, ``%{...}`` sequences).

Values are therefore built inside out:
  1. escape_text_expansion(): drawtext level, ``\\`` and ``%``
  2. escape_option_value():   option level, ``\\``, ``'`` and ``:``
  3. quote_graph_value():     graph level, wrapped in single quotes with each
                              ``'`` written as ``'\\''`` (close, escaped quote,
                              reopen)
Inside graph-level quotes ``,``, ``;``, ``[`` and ``]`` are plain
characters, so they need no escaping of their own.

RULES:
- Every *_option() helper returns a complete, already-quoted value
- Line breaks and tabs in drawtext text become spaces (one command = one line)
- Paths use forward slashes so Windows drive letters survive
"""

from __future__ import annotations


def escape_text_expansion(text: str) -> str:
    """Escape text for drawtext's own expansion (``expansion=normal``)."""
    text = text.replace("\\", "\\\\").replace("%", "\\%")
    for ws in ("\r\n", "\n", "\r", "\t"):
        text = text.replace(ws, " ")
    return text


def escape_option_value(value: str) -> str:
    """Backslash-escape the characters the option parser treats as syntax."""
    return value.replace("\\", "\\\\").replace("'", "\\'").replace(":", "\\:")


def quote_graph_value(value: str) -> str:
    """Single-quote a value for the graph parser."""
    return "'{}'".format(value.replace("'", "'\\''"))


def drawtext_text_option(text: str) -> str:
    """Quoted value for drawtext's ``text`` option."""
    return quote_graph_value(escape_option_value(escape_text_expansion(text)))


def font_name_option(name: str) -> str:
    """Quoted value for drawtext's ``font`` option."""
    return quote_graph_value(escape_option_value(name))


def filter_path_option(path: str) -> str:
    """Quoted value for a file path option such as ``filename`` or ``fontsdir``."""
    return quote_graph_value(escape_option_value(str(path).replace("\\", "/")))
