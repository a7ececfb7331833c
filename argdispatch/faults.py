"""
argdispatch faults and rendering.

Scope
- FaultCode: stable numeric identifiers for user-facing faults.
- ParseException: base type carrying a message plus runtime options, able to
  render itself through rich and to decide whether to raise or exit.
- MissingArgumentsError: the only fatal parse outcome, raised when required
  arguments are absent after a full scan.
- trigger(): central entry point to surface a fault.

Modes
- Library mode (shell=False): the fault is raised to the caller.
- Shell mode (shell=True): the fault is printed on stderr and the process
  exits with the configured status (-1 by default, 255 on POSIX).

Host hooks (read from __main__)
- __codes__: mapping FaultCode -> label, overrides the numeric code.
- __prog__: program name shown in fancy panels.
- __styles__: style overrides, keys "header", "missing", "name", "code".
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    - parsing (112xx)
      • MISSING_REQUIRED: one or more required arguments were not supplied.
    """
    MISSING_REQUIRED = 11201

    def normalize(self):
        """
        return a host-normalized string for this code (see __codes__ in __main__).
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseException(Exception):
    """
    Base of argdispatch faults.

    options
    - shell: print and exit instead of raising.
    - status: exit status used in shell mode.
    - colorful: style the rendered diagnostic.
    - fancy: wrap the diagnostic in a titled panel.
    - code: the FaultCode of this fault.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def _styles(self):
        return defaultdict(str, {
            "header": "bold red",
            "missing": "",
            "name": "bold",
            "code": "bold cyan",
        } | getattr(__import__("__main__"), "__styles__", {}))

    def _lines(self, styler):
        return [Text(line, no_wrap=True, overflow="ignore") for line in str(self).splitlines()]

    def __rich__(self):
        styles = self._styles()

        def styler(style):
            return styles[style] if self.options.get("colorful", False) else ""

        body = Group(*self._lines(styler))

        if self.options.get("fancy", False):
            main = __import__("__main__")
            title = Text.assemble(
                "[ ",
                (getattr(main, "__prog__", coalesce(self.options.get("prog", Unset), "argdispatch")), styler("header")),
                " | ",
                (self.options.get("code", FaultCode.MISSING_REQUIRED).normalize(), styler("code")),
                " ]"
            )
            return Panel(body, title=title, title_align="left")

        return body

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        # diagnostic lines are never wrapped, one name per line
        console.print(self, soft_wrap=not self.options.get("fancy", False))
        sys.exit(self.options.get("status", -1))

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingArgumentsError(ParseException):
    """
    Raised when a parse pass finishes with required arguments still absent.

    No handler runs when this fault is raised. missing lists the absent names
    in name order.
    """

    header = "Error when parsing arguments: One or more required arguments are missing:"

    def __init__(self, missing, /, **options):
        self.missing = tuple(missing)
        options.setdefault("code", FaultCode.MISSING_REQUIRED)
        super().__init__("\n".join([self.header, *("Missing: " + name for name in self.missing)]), **options)

    def _lines(self, styler):
        return [
            Text(self.header, styler("header"), no_wrap=True, overflow="ignore"),
            *(
                Text.assemble(
                    ("Missing: ", styler("missing")),
                    (name, styler("name")),
                    no_wrap=True,
                    overflow="ignore"
                )
                for name in self.missing
            ),
        ]

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.missing, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods.
    - options are merged into a copy of the fault via __replace__ before triggering.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseException",
    "MissingArgumentsError",
    "trigger",
)
