"""
Tokenizer behavioral tests (quoted-phrase reconstruction).

Scope
- Well-formed spans are merged with their outer quotes stripped.
- Malformed quoting degrades to literal passthrough, never raising or dropping tokens.
- Raw strings are split on whitespace before reconstruction.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argdispatch import reconstruct, split


class TestReconstruct(TestCase):
    """Behavioral tests for reconstruct() on pre-split tokens."""

    def testPlainTokensPassThrough(self):
        self.assertEqual(reconstruct(["one", "two", "three"]), ["one", "two", "three"])

    def testEmptyInput(self):
        self.assertEqual(reconstruct([]), [])

    def testQuotedPhraseMerged(self):
        self.assertEqual(reconstruct(['"one', 'two"', "three"]), ["one two", "three"])

    def testQuotedPhraseSpanningSeveralTokens(self):
        self.assertEqual(reconstruct(['"a', "b", "c", 'd"']), ["a b c d"])

    def testMultipleIndependentSpans(self):
        self.assertEqual(
            reconstruct(['"one', 'two"', '"three', 'four"']),
            ["one two", "three four"],
        )

    def testUnterminatedOpeningQuoteIsLiteral(self):
        self.assertEqual(reconstruct(['"one']), ['"one'])

    def testUnterminatedClosingQuoteIsLiteral(self):
        self.assertEqual(reconstruct(['one"']), ['one"'])

    def testUnterminatedSpanKeepsEveryToken(self):
        self.assertEqual(reconstruct(['"one', "two", "three"]), ['"one', "two", "three"])

    def testThreeOpeningQuotesResolveIndependently(self):
        self.assertEqual(reconstruct(['"one', '"two', '"three']), ['"one', '"two', '"three'])

    def testStrayClosingThenSpan(self):
        self.assertEqual(reconstruct(['one"', '"two', 'three"']), ['one"', "two three"])

    def testReopenedSpanEmitsPendingTokensLiterally(self):
        self.assertEqual(reconstruct(['"a', "b", '"c', 'd"']), ['"a', "b", "c d"])

    def testFullyQuotedTokenOutsideSpanIsUnchanged(self):
        self.assertEqual(reconstruct(['"three"']), ['"three"'])

    def testLoneQuoteInsideSpanIsMember(self):
        self.assertEqual(reconstruct(['"a', '"', 'b"']), ['a " b'])

    def testNoCharacterIsLost(self):
        tokens = ['-x', '"one', "two", '"three', 'four"', 'five"', '"six']
        result = reconstruct(tokens)
        # one well-formed span strips two quotes and adds one joining space
        self.assertEqual(sum(map(len, result)), sum(map(len, tokens)) - 2 + 1)
        self.assertEqual(result, ["-x", '"one', "two", "three four", 'five"', '"six'])

    def testAlternativeQuoteCharacter(self):
        self.assertEqual(reconstruct(["'one", "two'"], quote="'"), ["one two"])
        self.assertEqual(reconstruct(['"one', 'two"'], quote="'"), ['"one', 'two"'])

    def testAcceptsAnyIterable(self):
        self.assertEqual(reconstruct(iter(['"one', 'two"'])), ["one two"])

    def testRejectsString(self):
        with self.assertRaises(TypeError):
            reconstruct('"one two"')

    def testRejectsNonStringTokens(self):
        with self.assertRaises(TypeError):
            reconstruct(["one", 2])

    def testRejectsMultiCharacterQuote(self):
        with self.assertRaises(ValueError):
            reconstruct(["one"], quote='""')


class TestSplit(TestCase):
    """Behavioral tests for split() on raw command lines."""

    def testSplitOnWhitespace(self):
        self.assertEqual(split("one  two\tthree"), ["one", "two", "three"])

    def testQuotedPhrase(self):
        self.assertEqual(split('"one two" three'), ["one two", "three"])

    def testInnerWhitespaceCollapses(self):
        self.assertEqual(split('-m "hello   world" -v'), ["-m", "hello world", "-v"])

    def testMalformedQuotes(self):
        self.assertEqual(split('one" "two three"'), ['one"', "two three"])
        self.assertEqual(split('"one "two "three'), ['"one', '"two', '"three'])

    def testBlankInput(self):
        self.assertEqual(split("   "), [])

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            split(["one"])


if __name__ == "__main__":
    unittest.main()
