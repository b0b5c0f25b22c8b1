r"""
Argser parser: turn raw argv-like tokens into a Namespace.

What this module provides
- parse(definitions) / parse(args, definitions):
  single left-to-right pass over the tokens, returning (namespace, error).
  The error is None on success, or an UnknownOptionError/IncompleteOptionError
  instance (returned, never raised) when parsing stopped early.
- strict(...): same call shapes as parse(), returns the namespace and raises
  the error instead of returning it.
- command(args, *allowed) / command(*allowed):
  peel a leading command token off the arguments, returning (command, rest).

Token grammar
- option:    -+<name>[=<value>]   name runs up to the first '=' and is never empty
- cluster:   -<abc>[=<value>]     one leading dash, several characters, no '-'
             inside; expanded into -a -b -c[=<value>] and re-processed
- marker:    --                   everything after it is positional, unparsed
- otherwise: positional

Error policy
- On an unknown name or a value-bearing option without a value, parsing stops;
  the offending token and every unconsumed token are appended to the
  positionals so the caller can show what was left.
- The end-of-options marker is never consumed as an option value.
- Converter exceptions are not caught.

Quick example:
    >>> namespace, error = parse(["-vj", "4", "build"], {
    ...     "verbose": {"alias": "v"},
    ...     "jobs": {"value": int, "alias": "j"},
    ... })
    >>> namespace.verbose, namespace.jobs, namespace.positionals, error
    (True, 4, ['build'], None)
"""
import re
import sys
from collections import deque
from collections.abc import Iterable, Mapping

from .faults import UnknownOptionError, IncompleteOptionError
from .schema import compile
from .utils import *

PREFIX = "-"
TERMINATOR = "--"
SEPARATOR = "="

_TOKEN = re.compile(r"-+(?P<name>[^=]+)(?:=(?P<value>.*))?", re.DOTALL)


def _arguments(args, /):
    """
    Copy the argument source into a fresh list.

    - Unset: read sys.argv[1:] (program name stripped) at call time.
    - Iterable[str]: copied; the caller's object is never consumed or mutated.
    """
    if args is Unset:
        return sys.argv[1:]
    if isinstance(args, str) or not isinstance(args, Iterable):
        raise TypeError("arguments must be an iterable of strings")
    args = list(args)
    for arg in args:
        if not isinstance(arg, str):
            raise TypeError("arguments must be an iterable of strings")
    return args


def _unpack(parameters, /):
    match parameters:
        case (Mapping() as definitions,):
            return _arguments(Unset), definitions
        case (args, Mapping() as definitions):
            return _arguments(args), definitions
        case _:
            raise TypeError("parse() takes a definitions mapping, optionally preceded by the arguments")


def _expand(token, name, value, /):
    """
    split a single-dash cluster into one token per character.

    returns None when the token is not a cluster: double dashes, a single
    character, or a '-' among the characters (which would synthesize '--').
    """
    if token.startswith(TERMINATOR) or len(name) < 2 or PREFIX in name:
        return None
    tokens = [PREFIX + char for char in name]
    if value is not None:
        tokens[-1] += SEPARATOR + value
    return tokens


def parse(*parameters):
    """
    Parse arguments against option definitions.

    Call shapes
    - parse(definitions): arguments are read from sys.argv[1:].
    - parse(args, definitions): args is copied before consumption.

    Returns
    - (namespace, None) on success.
    - (namespace, UnknownOptionError | IncompleteOptionError) when parsing
      stopped early; the namespace holds everything parsed so far.

    Raises
    - TypeError: for malformed call shapes, arguments or definitions.
    - whatever a caller-supplied converter raises.
    """
    args, definitions = _unpack(parameters)
    schema = compile(definitions)
    namespace = schema.namespace()
    tokens = deque(args)

    while tokens:
        token = tokens.popleft()

        if token == TERMINATOR:
            break

        if not (match := _TOKEN.fullmatch(token)):
            namespace._extend((token,))
            continue

        name, value = match["name"], match["value"]

        if (cluster := _expand(token, name, value)) is not None:
            tokens.extendleft(reversed(cluster))
            continue

        if (canonical := schema.canonical(name)) is None:
            namespace._extend((token, *tokens))
            return namespace, UnknownOptionError(token)

        if (converter := schema.converter(canonical)) is None:
            # flags never take a value, inline or spaced
            value = True
        else:
            if value is None and tokens and tokens[0] != TERMINATOR:
                value = tokens.popleft()
            if value is None:
                namespace._extend((token, *tokens))
                return namespace, IncompleteOptionError(token)
            value = converter(value)

        if schema.repeatable(canonical):
            namespace._append(canonical, value)
        else:
            namespace._assign(canonical, value)

    namespace._extend(tokens)
    return namespace, None


def strict(*parameters):
    """
    Fail-fast variant of parse(): return the namespace or raise the error.

    Raises
    - UnknownOptionError / IncompleteOptionError instead of returning them.
    """
    namespace, error = parse(*parameters)
    if error is not None:
        raise error
    return namespace


def command(*parameters):
    """
    Extract a leading command token.

    Call shapes
    - command(): arguments from sys.argv[1:], any non-option token matches.
    - command(*allowed): arguments from sys.argv[1:].
    - command(args, *allowed): args is any non-string iterable of strings.

    Matching
    - no allowed commands: the first token matches when it does not start with '-'.
    - otherwise: the first token matches when it equals one of the allowed commands.
    - at most one token is consumed.

    Returns
    - (command, remaining) on a match, (None, arguments) otherwise; remaining
      is always a fresh list.
    """
    if parameters and not isinstance(parameters[0], str):
        args, allowed = _arguments(parameters[0]), parameters[1:]
    else:
        args, allowed = _arguments(Unset), parameters

    for candidate in allowed:
        if not isinstance(candidate, str):
            raise TypeError("command() allowed commands must be strings")

    if not args:
        return None, args

    head = args[0]
    if head in allowed if allowed else not head.startswith(PREFIX):
        return head, args[1:]
    return None, args


__all__ = (
    "PREFIX",
    "TERMINATOR",
    "SEPARATOR",
    "parse",
    "strict",
    "command",
)
