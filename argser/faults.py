"""
Argser faults (errors and warnings) and rendering.

Scope
- Reason: the two recoverable input conditions the parser reports
  ("unknown" and "incomplete").
- FaultCode: canonical, stable numeric identifiers for every fault, grouped by
  domain so logs and searches stay predictable.
- ArgserError / ArgserWarning: base types that carry a message plus options and
  know how to render themselves through rich.
- trigger(): central entry point to surface any fault (respecting
  shell/deferred/fancy/colorful).

Contract
- parse() never raises UnknownOptionError or IncompleteOptionError; it returns
  them next to the namespace. Callers decide whether to trigger(), raise or
  ignore them.
- In non-shell mode, trigger() raises errors and emits warnings through the
  warnings module; in shell mode both are rendered on stderr, and errors end
  the process with status 1 unless deferred.

Host configuration (read from __main__ at render time)
- __prog__: program name shown in headers (defaults to basename of sys.argv[0]).
- __styles__: overrides for the style names used below.
- __codes__: FaultCode -> label mapping used by FaultCode.normalize().
"""
import copy
import os
import sys
import warnings
from collections import defaultdict
from enum import IntEnum, StrEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class Reason(StrEnum):
    """why parsing stopped early."""
    UNKNOWN = "unknown"
    INCOMPLETE = "incomplete"


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - option errors (1111x)
      • UNKNOWN_OPTION: an option-shaped token matched no name or alias.
      • INCOMPLETE_OPTION: a value-bearing option ran out of input.
    - warnings (1211x)
      • SHADOWED_NAME: a schema alias overwrote an earlier name mapping.
    """
    # --- option errors (11xxx) ---
    UNKNOWN_OPTION              = 11112
    INCOMPLETE_OPTION           = 11117

    # --- warnings (12xxx) ---
    SHADOWED_NAME               = 12113

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog():
    return getattr(__import__("__main__"), "__prog__", None) or os.path.basename(sys.argv[0]) or "argser"


class _Renderable:
    __styles__ = {}

    def __rich__(self):
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, type(self).__styles__ | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(_prog(), "prog-name"),
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.title.title(), self.__kind__ + "-title"),
            " ]"
        )
        message = text(self.message, self.__kind__ + "-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint"))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)


class ArgserError(_Renderable, Exception):
    """
    base type of the recoverable parse errors.

    attributes
    - arg: the offending token exactly as it was read from the stream.
    - reason: Reason.UNKNOWN or Reason.INCOMPLETE.
    - code: the FaultCode of the concrete error.
    - options: read-only runtime options (shell, fancy, colorful, deferred, hint).
    """
    __kind__ = "error"
    __styles__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "error-title": "bold #FF4DA6",
        "error-message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
    }

    reason = None
    code = None
    title = None
    template = None

    def __init__(self, arg, /, **options):
        if type(self) is ArgserError:
            raise TypeError("ArgserError is abstract; raise UnknownOptionError or IncompleteOptionError")
        if not isinstance(arg, str):
            raise TypeError("%s() argument must be a string" % type(self).__name__)
        self.arg = arg
        self.options = MappingProxyType(options)
        super().__init__(self.message)

    @property
    def message(self):
        return self.template % self.arg

    @property
    def hint(self):
        return self.options.get("hint") or self.__hint__()

    def __hint__(self):
        return ""

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.arg)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.arg, **{**self.options, **overrides})

    def __copy__(self):
        return self.__replace__()

    def __deepcopy__(self, memo):
        return self.__replace__()


class UnknownOptionError(ArgserError):
    reason = Reason.UNKNOWN
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"
    template = "option %r is unknown"

    def __hint__(self):
        return "check the spelling of %r or place it after '--' to pass it through" % self.arg


class IncompleteOptionError(ArgserError):
    reason = Reason.INCOMPLETE
    code = FaultCode.INCOMPLETE_OPTION
    title = "missing option value"
    template = "option %r requires a value"

    def __hint__(self):
        return "pass a value after it (for example: %s <value> or %s=<value>)" % (self.arg, self.arg)


class ArgserWarning(_Renderable, UserWarning):
    """base type of development-time notices; never affects parse results."""
    __kind__ = "warning"
    __styles__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",
        "warning-title": "bold #FFC2E0",
        "warning-message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
    }

    code = None
    title = None

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        self.message = message
        self.options = MappingProxyType(options)
        super().__init__(message)

    @property
    def hint(self):
        return self.options.get("hint", "")

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, skip_file_prefixes=(os.path.dirname(__file__) + os.sep,))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})

    def __copy__(self):
        return self.__replace__()

    def __deepcopy__(self, memo):
        return self.__replace__()


class ShadowedNameWarning(ArgserWarning):
    code = FaultCode.SHADOWED_NAME
    title = "shadowed option name"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the stderr rich console; otherwise
      errors are raised and warnings are emitted.

    typical options
    - shell, fancy, colorful, deferred, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "Reason",
    "FaultCode",
    "ArgserError",
    "UnknownOptionError",
    "IncompleteOptionError",
    "ArgserWarning",
    "ShadowedNameWarning",
    "trigger",
)
