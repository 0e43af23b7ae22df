"""CLI argument parser for imgcat."""

from __future__ import annotations

import argparse
import sys

from imgcat.config import VERSION
from imgcat.sources import InputKind, InputRef

_DESCRIPTION = """\
Display images inline in terminals supporting iTerm2's inline images protocol.

Inputs are FILE arguments ('-' reads stdin, http(s) URLs are fetched) and
-f / -u options, displayed in command-line order. Without any input, stdin
is read.

If you don't specify width or height an appropriate value is chosen
automatically. Width and height are given as 'auto' or a number N followed
by a unit:

    N      character cells
    Npx    pixels
    N%     percent of the session's width or height
    auto   the image's inherent size determines the dimension

A file type hint (-t) may be a MIME type like text/markdown, a language name
like Java, or a file extension like .c. It is most useful when a filename is
not available, such as when input comes from a pipe.
"""

_EPILOG = """\
examples:
  imgcat -W 250px -H 250px -s avatar.png
  cat graph.png | imgcat -W 100%
  imgcat -p -W 500px -u http://host.tld/path/to/image.jpg -f image.png
  imgcat -t application/json config.json
"""

# Options that consume the following argument as their value.
_VALUE_OPTIONS = frozenset({
    "-f", "--file",
    "-u", "--url",
    "-t", "--file-type",
    "-W", "--width",
    "-H", "--height",
})

# Hidden option every positional FILE is rewritten to, so that files, URLs
# and stdin share one ordered list with -f / -u.
_POSITIONAL_OPTION = "--input"


class _AppendInput(argparse.Action):
    """Append an ``InputRef`` to the shared, ordered ``refs`` list."""

    def __init__(self, option_strings, dest, kind: InputKind | None = None, **kwargs):
        self.kind = kind
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        refs = list(getattr(namespace, self.dest, None) or [])
        if self.kind is None:
            refs.append(InputRef.from_arg(values))
        else:
            refs.append(InputRef(self.kind, values))
        setattr(namespace, self.dest, refs)


def _cluster_takes_value(token: str) -> bool:
    """True if a short-option cluster such as ``-sW`` ends waiting for a value."""
    for i, ch in enumerate(token[1:], start=1):
        if f"-{ch}" in _VALUE_OPTIONS:
            return i == len(token) - 1
    return False


def tag_positionals(argv: list[str]) -> list[str]:
    """Rewrite positional FILE arguments as ``--input=FILE``, keeping order."""
    tagged: list[str] = []
    expects_value = False
    only_positionals = False
    for token in argv:
        if expects_value:
            tagged.append(token)
            expects_value = False
        elif only_positionals or token == "-" or not token.startswith("-"):
            tagged.append(f"{_POSITIONAL_OPTION}={token}")
        elif token == "--":
            only_positionals = True
        elif token.startswith("--"):
            tagged.append(token)
            expects_value = "=" not in token and token in _VALUE_OPTIONS
        else:
            tagged.append(token)
            expects_value = _cluster_takes_value(token)
    return tagged


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgcat",
        usage="%(prog)s [options] [FILE ...]",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )

    parser.add_argument(
        _POSITIONAL_OPTION,
        dest="refs",
        action=_AppendInput,
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "-f", "--file",
        dest="refs",
        action=_AppendInput,
        kind=InputKind.FILE,
        metavar="PATH",
        help="Read an image from a local file (repeatable)",
    )
    parser.add_argument(
        "-u", "--url",
        dest="refs",
        action=_AppendInput,
        kind=InputKind.URL,
        metavar="URL",
        help="Read an image from a URL (repeatable)",
    )
    parser.add_argument(
        "-t", "--file-type",
        type=str,
        default=None,
        metavar="HINT",
        help="MIME type, language name or file extension of the input",
    )
    parser.add_argument(
        "-W", "--width",
        type=str,
        default=None,
        metavar="SPEC",
        help="Output width of the image (default: auto)",
    )
    parser.add_argument(
        "-H", "--height",
        type=str,
        default=None,
        metavar="SPEC",
        help="Output height of the image (default: auto)",
    )
    parser.add_argument(
        "-s", "--stretch",
        action="store_true",
        default=False,
        help="Do not preserve the aspect ratio when drawing the image",
    )
    parser.add_argument(
        "-p", "--print-path",
        action="store_true",
        default=False,
        help="Print the file path or URL after each image",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print debug information to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )
    return parser


def parse_args(
    parser: argparse.ArgumentParser,
    argv: list[str] | None = None,
) -> argparse.Namespace:
    argv = sys.argv[1:] if argv is None else argv
    return parser.parse_args(tag_positionals(list(argv)))


def input_refs(args: argparse.Namespace) -> list[InputRef]:
    """Inputs in command-line order; stdin when none were given."""
    refs = list(args.refs or [])
    if not refs:
        refs.append(InputRef(InputKind.STDIN))
    return refs
