"""
Faults behavioral tests (errors, warnings, codes, trigger, rendering).

Scope
- Validate error attributes (arg, reason, code) and messages.
- Validate trigger() in non-shell (raise/warn) and shell (render/exit) modes.
- Validate host configuration through __main__ dunders (__prog__, __codes__).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured with color disabled for deterministic comparison.
"""
import copy
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argser import (
    Reason,
    FaultCode,
    ArgserError,
    UnknownOptionError,
    IncompleteOptionError,
    ShadowedNameWarning,
    trigger,
)
from argser import faults


def _render(renderable):
    console = Console(color_system=None, force_terminal=False, width=120)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestErrors(TestCase):

    def testUnknownAttributes(self):
        error = UnknownOptionError("-c")
        self.assertEqual(error.arg, "-c")
        self.assertIs(error.reason, Reason.UNKNOWN)
        self.assertIs(error.code, FaultCode.UNKNOWN_OPTION)
        self.assertIsInstance(error, ArgserError)
        self.assertEqual(str(error), "option '-c' is unknown")

    def testIncompleteAttributes(self):
        error = IncompleteOptionError("--out")
        self.assertIs(error.reason, Reason.INCOMPLETE)
        self.assertIs(error.code, FaultCode.INCOMPLETE_OPTION)
        self.assertEqual(str(error), "option '--out' requires a value")
        self.assertIn("--out <value>", error.hint)

    def testBaseIsAbstract(self):
        with self.assertRaises(TypeError):
            ArgserError("-c")

    def testArgumentMustBeString(self):
        with self.assertRaises(TypeError):
            UnknownOptionError(1)

    def testReplaceKeepsArgument(self):
        error = copy.replace(UnknownOptionError("-c"), hint="custom")
        self.assertIsInstance(error, UnknownOptionError)
        self.assertEqual(error.arg, "-c")
        self.assertEqual(error.hint, "custom")

    def testCopiesKeepArgumentAndOptions(self):
        error = UnknownOptionError("-c", hint="custom")
        for duplicate in (copy.copy(error), copy.deepcopy(error)):
            with self.subTest(duplicate=duplicate):
                self.assertIsInstance(duplicate, UnknownOptionError)
                self.assertIsNot(duplicate, error)
                self.assertEqual(duplicate.arg, "-c")
                self.assertEqual(duplicate.hint, "custom")

    def testWarningCopiesKeepMessage(self):
        warning = ShadowedNameWarning("shadowed", hint="rename it")
        duplicate = copy.deepcopy(warning)
        self.assertIsInstance(duplicate, ShadowedNameWarning)
        self.assertEqual((duplicate.message, duplicate.hint), ("shadowed", "rename it"))

    def testRepr(self):
        self.assertEqual(repr(UnknownOptionError("-c")), "UnknownOptionError('-c')")


class TestFaultCode(TestCase):

    def testNormalizeDefaultsToNumber(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "11112")

    def testNormalizeUsesHostLabels(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.UNKNOWN_OPTION: "E-UNK"}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "E-UNK")


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        with self.assertRaises(UnknownOptionError):
            trigger(UnknownOptionError("-c"))

    def testWarnsOutsideShell(self):
        with self.assertWarns(ShadowedNameWarning):
            trigger(ShadowedNameWarning("option name 'x' now resolves to 'b' instead of 'a'"))

    def testShellExits(self):
        with mock.patch.object(faults, "console", Console(file=io.StringIO(), color_system=None)):
            with self.assertRaises(SystemExit) as context:
                trigger(IncompleteOptionError("-a"), shell=True)
        self.assertEqual(context.exception.code, 1)

    def testShellDeferredReturns(self):
        with mock.patch.object(faults, "console", Console(file=io.StringIO(), color_system=None)):
            self.assertIsNone(trigger(IncompleteOptionError("-a"), shell=True, deferred=True))

    def testShellWarningPrints(self):
        with mock.patch.object(faults, "console", Console(file=io.StringIO(), color_system=None)):
            self.assertIsNone(trigger(ShadowedNameWarning("shadowed"), shell=True))

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))


class TestRendering(TestCase):

    def testPlainRendering(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "tool", create=True):
            output = _render(copy.replace(UnknownOptionError("-c"), colorful=False))
        self.assertIn("[ tool — 11112 | Unknown Option ]", output)
        self.assertIn("option '-c' is unknown", output)
        self.assertIn("→", output)

    def testFancyRendering(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "tool", create=True):
            output = _render(copy.replace(IncompleteOptionError("-a"), fancy=True))
        self.assertIn("Missing Option Value", output)
        self.assertIn("option '-a' requires a value", output)

    def testWarningRendering(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "tool", create=True):
            output = _render(ShadowedNameWarning("shadowed", hint="rename it"))
        self.assertIn("12113", output)
        self.assertIn("rename it", output)


if __name__ == "__main__":
    unittest.main()
