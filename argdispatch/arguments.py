r"""
argdispatch argument kinds and decorators.

Overview
- Kinds
  • Argument: the shared capability pair, extract(tokens) -> value and handle(value).
  • Flag: presence-only switch; extract() never consumes and yields True.
  • Value: string-valued option; extract() consumes exactly one following token,
    or yields None when the input is exhausted.

- Decorators
  • @flag(...): build a Flag and bind the decorated function as its callback.
  • @value(...): build a Value and bind the decorated function as its callback.

- Subclassing
  Kinds are open: override handle() on a Flag/Value subclass, or subclass
  Argument and implement extract() to add a new kind.

Metadata (sanitized on construction)
- descr: Unset | str, short description, non-empty when provided.
- metavar: Unset | str (Value only), label of the consumed token.

Quick example:
    >>> from argdispatch.arguments import flag, value
    >>> @flag()
    ... def on_verbose(present): ...
    ...
    >>> @value(metavar="TEXT")
    ... def on_message(text): ...
    ...
"""
import functools
import operator
import re
from abc import ABCMeta, abstractmethod

from .utils import *


class ArgumentType(ABCMeta):
    """
    Metaclass giving argument kinds a stable identity and representation.

    Responsibilities
    - __typename__ derived from the class name (camel case split with hyphens),
      used in messages.
    - Read-only properties for every name in __introspectable__ via mirror().
    - __repr__/__rich_repr__ built from the introspectable fields.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - value(callback=<function on_message ...>, metavar='TEXT', descr=None)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            yield "callback", coalesce(self._callback)
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the callback and 'descr' metadata.

    Raises
    - TypeError: if the callback is not callable or 'descr' is not a string.
    - ValueError: if 'descr' is empty after trimming.
    """
    if metadata["callback"] is not Unset and not callable(metadata["callback"]):
        raise TypeError(f"{cls.__typename__} callback must be callable")

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_valued_metadata(cls, metadata, /):
    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = coalesce(metavar)


class Argument(metaclass=ArgumentType):
    """
    Base of every argument kind.

    An argument knows how to pull its value out of the token cursor that
    follows its matched name (extract) and what to do with that value once
    dispatch reaches it (handle). The default handle() forwards to the bound
    callback, and does nothing when no callback is bound.
    """

    __introspectable__ = ("descr",)

    def __init__(self, callback=Unset, /, *, descr=Unset):
        metadata = {"callback": callback, "descr": descr}
        _sanitize_metadata(type(self), metadata)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def callback(self):
        return coalesce(self._callback)

    @abstractmethod
    def extract(self, tokens, /):
        """
        Consume what this argument needs from the cursor and return its value.

        tokens is a collections.deque holding the tokens after the matched name.
        """

    def handle(self, value, /):
        if self._callback is Unset:
            return
        self._callback(value)


class Flag(Argument):
    """
    Presence-only argument.

    A flag never consumes a following token; when matched its value is True,
    and its handler is only ever called with True.
    """

    def extract(self, tokens, /):
        return True


class Value(Argument):
    """
    String-valued argument.

    A value consumes exactly one following token. When the name is the last
    token of the input, the value is None and the argument still counts as
    present.
    """

    __introspectable__ = (
        "metavar",
        "descr",
    )

    def __init__(self, callback=Unset, /, *, metavar=Unset, descr=Unset):
        metadata = {"metavar": metavar}
        _sanitize_valued_metadata(type(self), metadata)
        super().__init__(callback, descr=descr)
        self._metavar = metadata["metavar"]

    def extract(self, tokens, /):
        if tokens:
            return tokens.popleft()
        return None


def _binder(kind, argument, /):
    @rename(kind)
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError(f"@{kind}() must be applied to a callable")
        if argument._callback is not Unset:
            raise TypeError(f"@{kind}() must be applied only once")
        argument._callback = callback
        return argument
    return wrapper


def flag(*args, **kwargs):
    """
    Decorator/factory for a presence-only argument.

    Usage
        @flag(descr="print more")
        def on_verbose(present): ...

    Returns a decorator; applying it binds the function and returns the Flag.
    """
    return _binder("flag", Flag(*args, **kwargs))


def value(*args, **kwargs):
    """
    Decorator/factory for a string-valued argument.

    Usage
        @value(metavar="TEXT")
        def on_message(text): ...

    Returns a decorator; applying it binds the function and returns the Value.
    """
    return _binder("value", Value(*args, **kwargs))


__all__ = (
    # Classes
    "Argument",
    "Flag",
    "Value",

    # Decorators
    "flag",
    "value",
)

del ArgumentType
