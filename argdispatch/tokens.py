"""
argdispatch tokenizer: rebuild quoted phrases from whitespace-split tokens.

Shells (and naive ``str.split``) break ``-m "hello world"`` into
``['-m', '"hello', 'world"']``. reconstruct() merges such runs back into one
logical token and strips the enclosing quote characters.

Rules
- A token that starts with the quote and does not end with it opens a span.
- A token that ends with the quote and does not start with it closes the open
  span; the span is joined with single spaces and its outer quotes removed.
- Any other token is emitted as-is outside a span, and joins the span inside one.
- A span still open when another one opens, or at the end of input, is emitted
  token by token, literally (quotes retained).

Malformed quoting never raises and never drops a token.

Examples
    >>> reconstruct(['"one', 'two"', 'three'])
    ['one two', 'three']
    >>> reconstruct(['one"', '"two', 'three"'])
    ['one"', 'two three']
    >>> reconstruct(['"one', '"two', '"three'])
    ['"one', '"two', '"three']
    >>> split('-m "hello world" -v')
    ['-m', 'hello world', '-v']
"""
import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def _check_quote(quote, caller):
    if not isinstance(quote, str):
        raise TypeError(f"{caller}() 'quote' must be a string")
    if len(quote) != 1:
        raise ValueError(f"{caller}() 'quote' must be a single character")


def reconstruct(tokens, /, *, quote='"'):
    """
    Merge quoted runs of tokens back into single logical tokens.

    Parameters
    - tokens: Iterable[str]
      Tokens as produced by whitespace splitting.
    - quote: str
      The quotation character (a double quote by default).

    Returns
    - list[str]: the corrected token sequence.

    Raises
    - TypeError: when tokens is not an iterable of strings.
    """
    _check_quote(quote, "reconstruct")
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("reconstruct() argument must be an iterable of strings")

    result = []
    span = []  # tokens of the currently open quoted span

    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("reconstruct() argument must be an iterable of strings")

        opening = token.startswith(quote) and not token.endswith(quote)
        closing = token.endswith(quote) and not token.startswith(quote)

        if opening:
            if span:
                logger.debug("quoted span %r reopened before closing, kept literal", span[0])
                result.extend(span)
            span = [token]
        elif closing and span:
            span.append(token)
            result.append(" ".join(span)[1:-1])
            span = []
        elif span:
            span.append(token)
        else:
            result.append(token)

    if span:
        logger.debug("quoted span %r never closed, kept literal", span[0])
        result.extend(span)

    return result


def split(input, /, *, quote='"'):
    """
    Split a raw command line on whitespace, then reconstruct quoted phrases.

    Runs of whitespace inside a quoted phrase collapse to a single space.
    """
    if not isinstance(input, str):
        raise TypeError("split() argument must be a string")
    _check_quote(quote, "split")
    return reconstruct(input.split(), quote=quote)


__all__ = (
    "reconstruct",
    "split",
)
