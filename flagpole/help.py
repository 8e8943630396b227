"""
Usage text for a FlagParser.

Layout
    Usage for <prog>

    <description>

    Options:
      <long>|<short>  <description>

- <prog> falls back to the discovered program name, then to "PROGRAM".
- The description block is dropped when the parser has none.
- One line per registered option, in matching order.

Rendering goes through a rich Console on stderr. Styling is only applied when
`colorful` is set; the palette can be overridden with a __styles__ mapping in
__main__. Writing is best effort: an I/O or encoding failure while printing
help is logged and dropped.
"""
import logging
from collections import defaultdict

from rich.console import Console
from rich.text import Text

logger = logging.getLogger(__name__)

DEFAULT_PROG = "PROGRAM"


class HelpFormatter:
    def __init__(self, *, colorful=False, console=None):
        self.colorful = colorful
        self.console = console

    def styles(self):
        if not self.colorful:
            return defaultdict(str)
        return defaultdict(str, {
            "usage-label": "bold #00E6FF",
            "program-name": "bold #FF4D94",
            "description-section": "italic #A3A3A3",
            "group-label": "bold #FFFFFF",
            "option-name": "bold #00E6FF",
            "option-description": "#9CA3AF",
        } | getattr(__import__("__main__"), "__styles__", {}))

    def render(self, prog, descr, options):
        styles = self.styles()

        text = Text()
        text.append("Usage for ", styles["usage-label"])
        text.append(prog or DEFAULT_PROG, styles["program-name"])
        text.append("\n")
        if descr:
            text.append("\n")
            text.append(descr, styles["description-section"])
            text.append("\n")
        text.append("\n")
        text.append("Options:", styles["group-label"])
        text.append("\n")
        for option in options:
            text.append_text(option.describe(styles))
            text.append("\n")
        return text

    def print(self, prog, descr, options):
        console = self.console or Console(stderr=True)
        try:
            console.print(self.render(prog, descr, options), end="", soft_wrap=True, highlight=False)
        except (OSError, UnicodeError) as e:
            logger.debug("help output dropped: %s", e)


__all__ = (
    "HelpFormatter",
)
