"""
argdispatch parse results.

ParsedArgs is a fixed-size, index-addressed record of parsed values. A
definition registered with an index has its value stored in that slot; slots
of arguments that did not appear stay None. It is an output convenience only,
dispatch never reads from it.
"""


class ParsedArgs:
    """
    Fixed-size sequence of opaque parsed values.

    Example
        >>> args = ParsedArgs(2)
        >>> args.set(0, "hello")
        >>> args.get(0), args.get(1, "fallback")
        ('hello', 'fallback')
    """

    __slots__ = ("_values",)

    def __init__(self, size, /):
        if not isinstance(size, int) or isinstance(size, bool):
            raise TypeError("ParsedArgs() argument must be an integer")
        if size < 0:
            raise ValueError("ParsedArgs() argument cannot be negative")
        self._values = [None] * size

    def get(self, index, default=None, /):
        """
        Return the value at index, or default when that slot holds None.
        """
        object = self._values[index]
        return default if object is None else object

    def set(self, index, value, /):
        self._values[index] = value

    def __getitem__(self, index):
        return self._values[index]

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def __eq__(self, other):
        if not isinstance(other, ParsedArgs):
            return NotImplemented
        return self._values == other._values

    __hash__ = None

    def __rich_repr__(self):
        yield from self._values

    def __repr__(self):
        return f"ParsedArgs({', '.join(map(repr, self._values))})"


__all__ = ("ParsedArgs",)
