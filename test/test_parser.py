"""
Parsing engine behavioral tests.

Scope
- tokenize(): the five normalization rules, help scoping, purity.
- Parser.parse(): presence, required arguments, value harvesting, defaults,
  required values, help interception and the accepted input shapes.
- Faults: type, message wording and the options they carry.

Conventions
- Test method names follow CamelCase per project convention.
- Every test builds its own parser; a parser parses exactly once.
"""
import unittest
from unittest import TestCase

from simpleargs import *


class TestTokenize(TestCase):
    """Normalization of the raw vector into ARGUMENT/VALUE/HELP tokens."""

    def setUp(self):
        self.registry = Registry()
        self.alpha = self.registry.register(Argument("-a", "--alpha"))
        self.bravo = self.registry.register(Argument("-b", "--bravo"))
        self.charlie = self.registry.register(Argument("-c", "--charlie").takes_value())
        self.source = self.registry.register(Argument("source").takes_value())

    def shape(self, args):
        return [(token.kind, token.text) for token in tokenize(self.registry, args)]

    def testRegisteredSpellings(self):
        self.assertEqual(self.shape(["-a", "--bravo", "source"]), [
            (TokenKind.ARGUMENT, "-a"),
            (TokenKind.ARGUMENT, "--bravo"),
            (TokenKind.ARGUMENT, "source"),
        ])

    def testAssignment(self):
        self.assertEqual(self.shape(["--charlie=x", "source=y", "-c=a=b"]), [
            (TokenKind.ARGUMENT, "--charlie"),
            (TokenKind.VALUE, "x"),
            (TokenKind.ARGUMENT, "source"),
            (TokenKind.VALUE, "y"),
            (TokenKind.ARGUMENT, "-c"),
            (TokenKind.VALUE, "a=b"),
        ])

    def testEmptyAssignmentIsNotSplit(self):
        self.assertEqual(self.shape(["--charlie="]), [(TokenKind.VALUE, "--charlie=")])

    def testConcatenation(self):
        self.assertEqual(self.shape(["-abc"]), [
            (TokenKind.ARGUMENT, "-a"),
            (TokenKind.ARGUMENT, "-b"),
            (TokenKind.ARGUMENT, "-c"),
        ])

    def testConcatenationWithValue(self):
        self.assertEqual(self.shape(["-abc=val"]), [
            (TokenKind.ARGUMENT, "-a"),
            (TokenKind.ARGUMENT, "-b"),
            (TokenKind.ARGUMENT, "-c"),
            (TokenKind.VALUE, "val"),
        ])

    def testConcatenationTakesShortestPrefix(self):
        registry = Registry()
        registry.register(Argument("-x", "--ex"))
        registry.register(Argument("-yz", "--why-zed"))
        self.assertEqual([token.text for token in tokenize(registry, ["-xyz"])], ["-x", "-yz"])

    def testUndecomposableClusterStaysAValue(self):
        self.assertEqual(self.shape(["-abz", "-=x", "--ab"]), [
            (TokenKind.VALUE, "-abz"),
            (TokenKind.VALUE, "-=x"),
            (TokenKind.VALUE, "--ab"),
        ])

    def testValuesSpelledLikeBareNamesStayValues(self):
        self.assertEqual(self.shape(["-c", "charlie", "-source"]), [
            (TokenKind.ARGUMENT, "-c"),
            (TokenKind.VALUE, "charlie"),
            (TokenKind.VALUE, "-source"),
        ])

    def testHelpScoping(self):
        tokens = tokenize(self.registry, ["-h", "-a", "--help", "x", "-h", "-b", "-h", "-h"])
        helps = [token.argument for token in tokens if token.kind is TokenKind.HELP]
        self.assertEqual(helps, [null, self.alpha, null, self.bravo, null])

    def testTokensRememberTheirPosition(self):
        tokens = tokenize(self.registry, ["x", "-ab=1"])
        self.assertEqual([token.index for token in tokens], [1, 2, 2, 2])

    def testInputIsNotModified(self):
        args = ["-abc=val", "--charlie=x"]
        tokenize(self.registry, args)
        self.assertEqual(args, ["-abc=val", "--charlie=x"])


class TestParse(TestCase):
    """Presence, harvesting and validation."""

    def setUp(self):
        self.parser = Parser()
        self.input = self.parser.register(Argument("-i", "--input", "file to read").requires_value())
        self.output = self.parser.register(Argument("-o", "--output", "file to write").default("out.txt"))
        self.verbose = self.parser.register(Argument("-v", "--verbose", "chatty output"))
        self.files = self.parser.register(Argument("-f", "--file", "extra files").takes_value())
        self.source = self.parser.register(Argument("source", description="what to copy").takes_value())

    def testEmptyVector(self):
        self.assertIs(self.parser.parse([]), HelpRequest.NONE)
        self.assertFalse(self.input.present)
        self.assertFalse(self.verbose.present)

    def testKeywordWithValue(self):
        self.parser.parse(["-i", "a.txt", "--verbose"])
        self.assertTrue(self.input.present)
        self.assertEqual(self.input.values, ("a.txt",))
        self.assertEqual(self.input.value, "a.txt")
        self.assertTrue(self.verbose.present)

    def testAssignmentForm(self):
        self.parser.parse(["--input=a.txt"])
        self.assertEqual(self.input.values, ("a.txt",))

    def testConcatenatedFlags(self):
        self.parser.parse(["-vf", "x", "y"])
        self.assertTrue(self.verbose.present)
        self.assertEqual(self.files.values, ("x", "y"))

    def testConcatenationWithAssignedValue(self):
        self.parser.parse(["-vi=a.txt"])
        self.assertTrue(self.verbose.present)
        self.assertEqual(self.input.values, ("a.txt",))

    def testPositionalWithValue(self):
        self.parser.parse(["source", "a.txt"])
        self.assertTrue(self.source.present)
        self.assertEqual(self.source.value, "a.txt")

    def testMultipleValuesAreGreedy(self):
        self.parser.parse(["-f", "a", "b", "-v", "--file", "c"])
        self.assertEqual(self.files.values, ("a", "b", "c"))

    def testValueSpelledLikeBareNameIsKept(self):
        self.parser.parse(["-i", "input"])
        self.assertEqual(self.input.values, ("input",))

    def testEmptyStringIsAValue(self):
        self.parser.parse(["-i", ""])
        self.assertEqual(self.input.values, ("",))

    def testDefaultForAbsentArgument(self):
        self.parser.parse([])
        self.assertEqual(self.output.values, ("out.txt",))
        self.assertFalse(self.output.present)

    def testDefaultForBareArgument(self):
        self.parser.parse(["-o"])
        self.assertTrue(self.output.present)
        self.assertEqual(self.output.values, ("out.txt",))

    def testExplicitValueReplacesDefault(self):
        self.parser.parse(["-o", "b.txt"])
        self.assertEqual(self.output.values, ("b.txt",))

    def testStringInputIsSplit(self):
        self.parser.parse("-i 'a b.txt' -v")
        self.assertEqual(self.input.values, ("a b.txt",))
        self.assertTrue(self.verbose.present)

    def testTupleInput(self):
        self.parser.parse(("-v",))
        self.assertTrue(self.verbose.present)

    def testIsolatedStateAcrossParsers(self):
        self.parser.parse(["-v"])
        other = Parser()
        verbose = other.register(Argument("-v", "--verbose"))
        other.parse([])
        self.assertFalse(verbose.present)
        self.assertTrue(self.verbose.present)


class TestParseFaults(TestCase):
    """Every fault aborts the parse with the documented wording."""

    def setUp(self):
        self.parser = Parser()
        self.input = self.parser.register(Argument("-i", "--input").requires_value().single_value())
        self.verbose = self.parser.register(Argument("-v", "--verbose"))

    def testUnknownArgument(self):
        with self.assertRaises(UnknownArgumentError) as context:
            self.parser.parse(["--bogus", "-v"])
        fault = context.exception
        self.assertEqual(str(fault), "Unrecognized argument provided: --bogus")
        self.assertEqual(fault.token, "--bogus")
        self.assertEqual(fault.options["index"], 1)
        self.assertEqual(fault.code, FaultCode.UNKNOWN_ARGUMENT)
        self.assertIn("first", fault.hint)
        self.assertIn("--help", fault.hint)

    def testUnknownHintWithoutHelp(self):
        parser = Parser(help=False)
        with self.assertRaises(UnknownArgumentError) as context:
            parser.parse(["stray"])
        self.assertNotIn("--help", context.exception.hint)

    def testLeadingValueIsUnknown(self):
        with self.assertRaises(UnknownArgumentError):
            self.parser.parse(["a.txt", "-i", "b.txt"])

    def testUndecomposableClusterIsUnknown(self):
        with self.assertRaises(UnknownArgumentError) as context:
            self.parser.parse(["-vz"])
        self.assertEqual(context.exception.token, "-vz")

    def testUnknownWhenNothingIsRegistered(self):
        with self.assertRaises(UnknownArgumentError):
            Parser().parse(["x"])

    def testValueNotAllowed(self):
        with self.assertRaises(ValueNotAllowedError) as context:
            self.parser.parse(["-v", "x"])
        self.assertEqual(str(context.exception), "Argument -v may not have a value but was assigned: x")
        self.assertIs(context.exception.argument, self.verbose)

    def testValueNotAllowedLooksLikeUnknown(self):
        with self.assertRaises(ValueNotAllowedError) as context:
            self.parser.parse(["--verbose", "-q"])
        self.assertEqual(
            str(context.exception),
            "Unrecognized argument provided: -q or Argument --verbose may not have a value but was assigned: -q",
        )

    def testAssignedValueNotAllowed(self):
        with self.assertRaises(ValueNotAllowedError):
            self.parser.parse(["--verbose=yes"])

    def testTooManyValues(self):
        with self.assertRaises(TooManyValuesError) as context:
            self.parser.parse(["-i", "a", "b"])
        self.assertEqual(str(context.exception), "Argument -i allowed to only have one value.")
        self.assertEqual(context.exception.token, "b")

    def testTooManyValuesAcrossOccurrences(self):
        with self.assertRaises(TooManyValuesError):
            self.parser.parse(["-i", "a", "--input", "b"])

    def testMissingRequiredArgument(self):
        self.input.require()
        with self.assertRaises(MissingRequiredArgumentError) as context:
            self.parser.parse(["-v"])
        self.assertEqual(str(context.exception), "Argument --input is required but not specified.")
        self.assertIs(context.exception.argument, self.input)

    def testMissingRequiredPositional(self):
        parser = Parser()
        parser.register(Argument("source").require())
        with self.assertRaises(MissingRequiredArgumentError) as context:
            parser.parse([])
        self.assertEqual(str(context.exception), "Argument source is required but not specified.")

    def testRequiredIsCheckedBeforeValues(self):
        self.input.require()
        with self.assertRaises(MissingRequiredArgumentError):
            self.parser.parse(["stray"])

    def testMissingArgumentValue(self):
        with self.assertRaises(MissingArgumentValueError) as context:
            self.parser.parse(["-i"])
        self.assertEqual(str(context.exception), "Argument --input requires a value.")

    def testMissingValueWhenNextTokenIsAnArgument(self):
        with self.assertRaises(MissingArgumentValueError):
            self.parser.parse(["-i", "-v"])

    def testNoRollback(self):
        with self.assertRaises(TooManyValuesError):
            self.parser.parse(["-v", "-i", "a", "b"])
        self.assertTrue(self.verbose.present)
        self.assertEqual(self.input.values, ("a",))

    def testFaultsAreInputErrors(self):
        with self.assertRaises(InvalidInputError):
            self.parser.parse(["--bogus"])

    def testNullInput(self):
        with self.assertRaises(NullInputError):
            self.parser.parse(None)

    def testWrongInputTypes(self):
        with self.assertRaises(TypeError):
            self.parser.parse(["-v", 1])
        with self.assertRaises(TypeError):
            Parser().parse(42)

    def testParsesOnlyOnce(self):
        self.parser.parse([])
        with self.assertRaises(RuntimeError):
            self.parser.parse([])


class TestHelp(TestCase):
    """Help markers, scoping and interception."""

    def setUp(self):
        self.parser = Parser()
        self.input = self.parser.register(Argument("-i", "--input").requires_value().require())
        self.input.help("The file to read.")
        self.verbose = self.parser.register(Argument("-v", "--verbose"))

    def testProgramHelp(self):
        self.assertIs(self.parser.parse(["-h"]), HelpRequest.PROGRAM)
        self.assertTrue(self.parser.program_help_requested)
        self.assertFalse(self.parser.argument_help_requested)
        self.assertIs(self.parser.requested_argument, null)
        self.assertFalse(self.input.present)

    def testArgumentHelp(self):
        self.assertIs(self.parser.parse(["-i", "--help"]), HelpRequest.ARGUMENT)
        self.assertTrue(self.input.help_requested)
        self.assertTrue(self.parser.argument_help_requested)
        self.assertFalse(self.parser.program_help_requested)
        self.assertIs(self.parser.requested_argument, self.input)
        self.assertEqual(self.parser.argument_help, "The file to read.")

    def testHelpAfterValueIsProgramHelp(self):
        self.assertIs(self.parser.parse(["-i", "a.txt", "-h"]), HelpRequest.PROGRAM)
        self.assertFalse(self.input.help_requested)

    def testProgramHelpWins(self):
        self.assertIs(self.parser.parse(["-v", "-h", "-h"]), HelpRequest.PROGRAM)
        self.assertTrue(self.verbose.help_requested)
        self.assertTrue(self.parser.argument_help_requested)

    def testHelpSkipsValidation(self):
        self.assertIs(self.parser.parse(["--bogus", "-h"]), HelpRequest.PROGRAM)

    def testNoHelpRequest(self):
        self.assertIs(self.parser.parse(["-i", "a.txt"]), HelpRequest.NONE)
        self.assertEqual(self.parser.argument_help, "")

    def testDisabledHelpParsesNormally(self):
        parser = Parser(help=False)
        verbose = parser.register(Argument("-v", "--verbose"))
        self.assertFalse(parser.help_enabled)
        self.assertIs(parser.parse(["-v", "-h", "--help"]), HelpRequest.NONE)
        self.assertTrue(verbose.present)
        self.assertTrue(verbose.help_requested)
        self.assertTrue(parser.program_help_requested)

    def testDisabledHelpStillValidates(self):
        self.parser.disable_help()
        with self.assertRaises(MissingRequiredArgumentError):
            self.parser.parse(["-h"])

    def testDisableHelpAfterParse(self):
        self.parser.parse(["-h"])
        with self.assertRaises(RuntimeError):
            self.parser.disable_help()

    def testRegisteredHelpNameWins(self):
        parser = Parser()
        host = parser.register(Argument("-h", "--host").requires_value())
        self.assertIs(parser.parse(["-h", "localhost"]), HelpRequest.NONE)
        self.assertEqual(host.values, ("localhost",))


class TestParserRegistry(TestCase):

    def testSharedRegistry(self):
        registry = Registry()
        verbose = registry.register(Argument("-v", "--verbose"))
        parser = Parser(registry)
        self.assertIs(parser.registry, registry)
        self.assertIs(parser.lookup("--verbose"), verbose)
        self.assertTrue(parser.is_known_name("v"))
        self.assertEqual(parser.arguments, (verbose,))

    def testRejectsNonRegistry(self):
        with self.assertRaises(TypeError):
            Parser({})


if __name__ == "__main__":
    unittest.main()
