from rich.pretty import pprint

from argdispatch import *


@value(metavar="TEXT", descr="message to print")
def message(text):
    pprint(text)


@flag(descr="show the parser before dispatching")
def debug(present):
    pprint(parser)


parser = (
    Parser(shell=True)
    .with_argument("-message", message, True)
    .with_argument("--debug", -1, debug)
)


if __name__ == '__main__':
    invoke(parser)
