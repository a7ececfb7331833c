"""
argdispatch parser: register arguments, scan tokens, dispatch handlers.

What this module provides
- Parser: fluent builder accumulating named argument definitions.
- Registry: immutable snapshot of a Parser, the object that actually parses.
- Definition: one registered argument (name, kind, priority, required, ...).
- invoke(object, prompt): convenience runner.

Parse pass
1. Scanning: tokens are read left to right. A token equal to a registered
   name hands the cursor to that argument's extract(); flags take nothing,
   values take the next token (None when the input is exhausted). Tokens that
   match no name are skipped.
2. Required check: if any required name was never matched, a
   MissingArgumentsError is triggered and no handler runs at all.
3. Dispatching: matched arguments are handled in ascending priority, ties in
   registration order, on the caller's thread. Handler exceptions propagate
   unchanged.

Quick start
    from argdispatch import Parser, Flag, Value

    parser = (
        Parser(shell=True)
        .with_argument("-message", Value(print), True)
        .with_argument("-v", -1, Flag(lambda present: print("verbose")))
    )
    parser.parse('-v -message "hello world"')
"""
import logging
import sys
from collections import deque, namedtuple
from collections.abc import Iterable
from types import MappingProxyType

from .arguments import Argument
from .faults import MissingArgumentsError, trigger
from .parsed import ParsedArgs
from .tokens import reconstruct, split
from .utils import *

logger = logging.getLogger(__name__)


class Definition(namedtuple("Definition", ("name", "argument", "priority", "required", "order", "index"))):
    """
    One registered argument.

    fields
    - name: the exact token that selects this argument.
    - argument: the Argument doing extraction and handling.
    - priority: dispatch rank, lower runs earlier.
    - required: whether the name must appear in the input.
    - order: registration sequence number, breaks priority ties.
    - index: ParsedArgs slot for the value, or None.
    """
    __slots__ = ()

    def __rich_repr__(self):
        yield from zip(self._fields, self)


def _sanitize_options(options, /):
    for name in ("shell", "colorful", "fancy"):
        if not isinstance(options[name], bool):
            raise TypeError(f"parser '{name}' must be a boolean")
    if not isinstance(options["status"], int) or isinstance(options["status"], bool):
        raise TypeError("parser 'status' must be an integer")
    if not isinstance(prog := options["prog"], str | Unset):
        raise TypeError("parser 'prog' must be a string")
    elif isinstance(prog, str) and not (prog := prog.strip()):
        raise ValueError("parser 'prog' cannot be empty")
    options["prog"] = prog
    if not isinstance(options["quote"], str):
        raise TypeError("parser 'quote' must be a string")
    if len(options["quote"]) != 1:
        raise ValueError("parser 'quote' must be a single character")


class Registry:
    """
    Read-only set of definitions plus the runtime options of its Parser.

    Built by Parser.build(); registering more arguments on the Parser later
    does not change an existing Registry. Iteration yields names in name order.
    """

    def __init__(self, definitions, /, **options):
        self._definitions = MappingProxyType(dict(definitions))
        self._options = MappingProxyType(dict(options))

        slots = {}
        for definition in self._definitions.values():
            if definition.index is None:
                continue
            if definition.index >= len(self._definitions):
                raise ValueError(
                    f"index {definition.index} of {definition.name!r} is out of range "
                    f"for {len(self._definitions)} definitions"
                )
            if definition.index in slots:
                raise ValueError(
                    f"index {definition.index} of {definition.name!r} is already taken "
                    f"by {slots[definition.index]!r}"
                )
            slots[definition.index] = definition.name

    @property
    def definitions(self):
        return self._definitions

    @property
    def options(self):
        return self._options

    def __getitem__(self, name):
        return self._definitions[name]

    def __contains__(self, name):
        return name in self._definitions

    def __len__(self):
        return len(self._definitions)

    def __iter__(self):
        return iter(sorted(self._definitions))

    def __rich_repr__(self):
        yield from self._options.items()
        for name in self:
            yield name, self._definitions[name]

    def __repr__(self):
        return f"Registry({', '.join(map(repr, self))})"

    def _tokenize(self, prompt):
        quote = self._options.get("quote", '"')
        if prompt is Unset:
            return reconstruct(sys.argv[1:], quote=quote)
        elif isinstance(prompt, str):
            return split(prompt, quote=quote)
        elif isinstance(prompt, Iterable):
            return reconstruct(prompt, quote=quote)
        raise TypeError("parse() argument must be a string or an iterable of strings")

    def _scan(self, tokens):
        values = {}
        while tokens:
            token = tokens.popleft()
            if (definition := self._definitions.get(token)) is None:
                logger.debug("skipping unrecognized token %r", token)
                continue
            values[token] = definition.argument.extract(tokens)
            logger.debug("matched %r -> %r", token, values[token])
        return values

    def parse(self, prompt=Unset, /):
        """
        Run one parse pass and dispatch the matched handlers.

        Parameters
        - prompt:
          • Unset: use sys.argv[1:].
          • str: split on whitespace, then quoted phrases are rebuilt.
          • Iterable[str]: pre-split tokens; quoted phrases are rebuilt.

        Returns
        - ParsedArgs holding the values of matched definitions that declared an index.

        Raises
        - MissingArgumentsError: required arguments are absent (library mode).
          In shell mode the diagnostic is printed and the process exits instead.
        """
        values = self._scan(deque(self._tokenize(prompt)))

        missing = [
            name for name in sorted(self._definitions)
            if self._definitions[name].required and name not in values
        ]
        if missing:
            logger.debug("required arguments missing: %s", ", ".join(missing))
            trigger(MissingArgumentsError(missing), **self._options)

        matched = sorted(
            (self._definitions[name] for name in values),
            key=lambda definition: (definition.priority, definition.order)
        )

        parsed = ParsedArgs(len(self._definitions))
        for definition in matched:
            if definition.index is not None:
                parsed.set(definition.index, values[definition.name])

        for definition in matched:
            logger.debug("dispatching %r (priority %d)", definition.name, definition.priority)
            definition.argument.handle(values[definition.name])

        return parsed

    __invoke__ = parse


class Parser:
    """
    Fluent builder of argument definitions.

    Options
    - shell: on missing required arguments, print the diagnostic on stderr and
      exit the process instead of raising MissingArgumentsError.
    - status: exit status used in shell mode (-1, i.e. 255 on POSIX).
    - colorful: style the diagnostic.
    - fancy: render the diagnostic inside a titled panel.
    - prog: program name shown in the fancy panel title.
    - quote: quotation character used to rebuild quoted phrases.
    """

    shell = mirror("shell")
    status = mirror("status")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    prog = property(rename(lambda self: coalesce(self._prog), "prog"))
    quote = mirror("quote")

    def __init__(self, *, shell=False, status=-1, colorful=True, fancy=False, prog=Unset, quote='"'):
        options = {
            "shell": shell,
            "status": status,
            "colorful": colorful,
            "fancy": fancy,
            "prog": prog,
            "quote": quote,
        }
        _sanitize_options(options)
        for name, object in options.items():
            setattr(self, "_" + name, object)
        self._definitions = {}
        self._order = 0

    def register(self, name, argument, /, priority=Unset, required=False, index=Unset):
        """
        Register (or replace) the argument selected by name.

        Parameters
        - name: str, matched verbatim against tokens (e.g. "-v", "--message").
        - argument: Argument, the kind and handler.
        - priority: int, lower dispatches first; defaults to the number of
          definitions registered so far.
        - required: bool, the name must appear in every parsed input.
        - index: int, ParsedArgs slot receiving the value.

        Returns
        - self, for chaining.
        """
        if not isinstance(name, str):
            raise TypeError("register() name must be a string")
        if not isinstance(argument, Argument):
            raise TypeError("register() argument must be an Argument instance")
        if not isinstance(priority, int | Unset) or isinstance(priority, bool):
            raise TypeError("register() priority must be an integer")
        if not isinstance(required, bool):
            raise TypeError("register() required must be a boolean")
        if not isinstance(index, int | Unset) or isinstance(index, bool):
            raise TypeError("register() index must be an integer")
        if isinstance(index, int) and index < 0:
            raise ValueError("register() index cannot be negative")

        if name in self._definitions:
            logger.debug("replacing definition of %r", name)

        self._definitions[name] = Definition(
            name,
            argument,
            coalesce(priority, len(self._definitions)),
            required,
            self._order,
            coalesce(index),
        )
        self._order += 1
        return self

    def with_argument(self, name, /, *args):
        """
        Overloaded registration, all forms funnel into register():

        - with_argument(name, argument)
        - with_argument(name, argument, required)
        - with_argument(name, priority, argument)
        - with_argument(name, priority, argument, required)
        """
        match args:
            case (Argument() as argument,):
                return self.register(name, argument)
            case (Argument() as argument, bool() as required):
                return self.register(name, argument, required=required)
            case (int() as priority, Argument() as argument):
                return self.register(name, argument, priority=priority)
            case (int() as priority, Argument() as argument, bool() as required):
                return self.register(name, argument, priority=priority, required=required)
            case _:
                raise TypeError(
                    "with_argument() expects (name, argument), (name, argument, required), "
                    "(name, priority, argument) or (name, priority, argument, required)"
                )

    def build(self):
        """
        Snapshot the current definitions and options into a Registry.
        """
        return Registry(
            self._definitions,
            shell=self._shell,
            status=self._status,
            colorful=self._colorful,
            fancy=self._fancy,
            prog=self._prog,
            quote=self._quote,
        )

    def parse(self, prompt=Unset, /):
        """
        Build a Registry from the current definitions and parse prompt with it.
        """
        return self.build().parse(prompt)

    __invoke__ = parse

    def __contains__(self, name):
        return name in self._definitions

    def __len__(self):
        return len(self._definitions)

    def __rich_repr__(self):
        for name in ("shell", "status", "colorful", "fancy", "prog", "quote"):
            yield name, getattr(self, name)
        for name in sorted(self._definitions):
            yield name, self._definitions[name]

    def __repr__(self):
        return f"Parser({', '.join(map(repr, sorted(self._definitions)))})"


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for parsers and registries.

    Parameters
    - object: anything implementing __invoke__(prompt) (Parser, Registry).
    - prompt: Unset (sys.argv[1:]), a raw string, or an iterable of tokens.

    Returns
    - whatever __invoke__ returns (ParsedArgs for the built-in types).
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Definition",
    "Registry",
    "Parser",
    "invoke",
)
