"""
Argser schema compiler.

Overview
- Definitions (input)
  • False                      → flag (presence-only).
  • True                       → option whose value is the raw string.
  • callable(str) -> T         → option whose value is converted by the callable.
  • {"alias", "value", "many"} → any of the above plus an alias and repeatability;
    an empty mapping is a flag.

- Specs (derived, one per schema key except "_")
  • Spec.name/alias/kind/converter/many/default, read-only.
  • Kind is the tagged variant (FLAG / RAW / CONVERTED) resolved once at
    compile time, so the parser never inspects raw definitions per token.

- Schema (lookups)
  • canonical(token) → primary name (identity and alias entries).
  • converter(name)  → callable or None for flags.
  • repeatable(name) → bool.
  • namespace()      → a fresh Namespace populated with defaults.

Collisions
- Names and aliases are registered in definition order with overwrite
  semantics: the last registration of a token wins. This is accepted, but a
  ShadowedNameWarning is triggered so it does not go unnoticed.

Quick example:
    >>> schema = compile({"verbose": {"alias": "v"}, "jobs": int})
    >>> schema.canonical("v")
    'verbose'
    >>> schema.converter("jobs")
    <class 'int'>
"""
import builtins
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from .faults import ShadowedNameWarning, trigger
from .namespace import POSITIONALS, Namespace
from .utils import *


@rename("identity")
def _identity(value, /):
    return value


class Kind(Enum):
    """tagged variant of an option definition."""
    FLAG = "flag"
    RAW = "raw"
    CONVERTED = "converted"


def _sanitize_definition(name, definition, /):
    """
    Internal: normalize one definition into (alias, value, many).

    Responsibilities
    - bools and callables are shorthands for {"value": definition}.
    - mappings may only carry the keys 'alias', 'value' and 'many'.
    - alias: Unset, None or a string; empty and "_" aliases are dropped.
    - value: a bool or a callable (bools are checked first since neither
      True nor False is callable).
    - many: a bool.

    Raises
    - TypeError: for any definition or field of an unsupported type.
    """
    if isinstance(definition, bool) or builtins.callable(definition):
        definition = {"value": definition}
    elif not isinstance(definition, Mapping):
        raise TypeError(f"option {name!r} definition must be a bool, a callable or a mapping")

    if unknown := set(definition) - {"alias", "value", "many"}:
        raise TypeError(f"option {name!r} definition has unexpected keys: {', '.join(sorted(map(str, unknown)))}")

    alias = definition.get("alias", Unset)
    value = definition.get("value", False)
    many = definition.get("many", False)

    if not isinstance(alias, str | None | Unset):
        raise TypeError(f"option {name!r} 'alias' must be a string")
    if not isinstance(value, bool) and not builtins.callable(value):
        raise TypeError(f"option {name!r} 'value' must be a bool or a callable")
    if not isinstance(many, bool):
        raise TypeError(f"option {name!r} 'many' must be a bool")

    if not alias or alias == POSITIONALS:
        alias = None

    return alias, value, many


class Spec:
    """
    Canonical option record compiled from a single definition.

    Attributes (read-only)
    - name: schema key, also the namespace field name.
    - alias: secondary token name, or None.
    - kind: Kind.FLAG, Kind.RAW or Kind.CONVERTED.
    - converter: None for flags, identity for raw values, the caller's callable otherwise.
    - many: whether occurrences accumulate into a list.
    """
    __slots__ = ("_name", "_alias", "_kind", "_converter", "_many")
    __introspectable__ = ("name", "alias", "kind", "converter", "many")

    name = mirror("name")
    alias = mirror("alias")
    kind = mirror("kind")
    converter = mirror("converter")
    many = mirror("many")

    def __init__(self, name, definition=False, /):
        if not isinstance(name, str):
            raise TypeError("option names must be strings")
        if name == POSITIONALS:
            raise ValueError(f"{POSITIONALS!r} is reserved for positionals")
        self._name = name
        self._alias, value, self._many = _sanitize_definition(name, definition)

        if value is False:
            self._kind, self._converter = Kind.FLAG, None
        elif value is True:
            self._kind, self._converter = Kind.RAW, _identity
        else:
            self._kind, self._converter = Kind.CONVERTED, value

    @property
    def flag(self):
        return self._kind is Kind.FLAG

    @property
    def default(self):
        """[] when repeatable, None when value-bearing, False for flags (fresh on every access)."""
        if self._many:
            return []
        return False if self.flag else None

    def __eq__(self, other):
        if not isinstance(other, Spec):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__introspectable__)

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in self.__introspectable__))

    def __repr__(self):
        return "spec(%s)" % ", ".join("%s=%r" % field for field in self.__rich_repr__())

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, name)


class Schema:
    """
    Lookup tables built from a definitions mapping (see compile()).

    A Schema is immutable once built; build a new one per parse call.
    """
    __slots__ = ("_specs", "_names")

    def __init__(self, definitions, /):
        if not isinstance(definitions, Mapping):
            raise TypeError("definitions must be a mapping of option names to definitions")

        specs = {}
        names = {}

        def register(token, name):
            if (previous := names.get(token, name)) != name:
                trigger(ShadowedNameWarning(
                    "option name %r now resolves to %r instead of %r" % (token, name, previous),
                    hint="rename the alias of %r or of %r so each token resolves to one option" % (previous, name),
                ))
            names[token] = name

        for name, definition in definitions.items():
            if name == POSITIONALS:
                continue
            specs[name] = spec = Spec(name, definition)
            register(name, name)
            if spec.alias is not None:
                register(spec.alias, name)

        self._specs = MappingProxyType(specs)
        self._names = MappingProxyType(names)

    @property
    def specs(self):
        return self._specs

    @property
    def names(self):
        return self._names

    def canonical(self, token, /):
        """primary option name for a name or alias, None when unknown."""
        return self._names.get(token)

    def converter(self, name, /):
        return self._specs[name].converter

    def repeatable(self, name, /):
        return self._specs[name].many

    def namespace(self):
        """fresh result object: every option at its default, no positionals."""
        return Namespace({POSITIONALS: []} | {name: spec.default for name, spec in self._specs.items()})

    def __contains__(self, token):
        return token in self._names

    def __repr__(self):
        return "schema(%s)" % ", ".join(map(repr, self._specs.values()))

    def __rich_repr__(self):
        yield from self._specs.items()


def compile(definitions, /):
    """
    Compile a definitions mapping into a Schema.

    Raises
    - TypeError: when definitions is not a mapping or a definition is malformed.
    """
    return Schema(definitions)


__all__ = (
    "Kind",
    "Spec",
    "Schema",
    "compile",
)
