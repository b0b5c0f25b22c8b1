"""
Parse result container.

A Namespace is a read-only mapping from option names to parsed values, plus
the "_" key holding the positional arguments. Fields are reachable both as
items (namespace["dry-run"]) and, when the name is an identifier, as
attributes (namespace.verbose). Equality follows Mapping semantics, so a
Namespace compares equal to a plain dict holding the same items.

Attribute access yields to the class: options named like a Mapping method
(keys, items, values, get) or like the positionals property are reachable
only as items (namespace["keys"]).
"""
from collections.abc import Mapping

POSITIONALS = "_"


class Namespace(Mapping):
    __slots__ = ("_fields",)

    def __init__(self, fields=(), /):
        object.__setattr__(self, "_fields", dict(fields))
        self._fields.setdefault(POSITIONALS, [])

    @property
    def positionals(self):
        return self._fields[POSITIONALS]

    def __getitem__(self, name):
        return self._fields[name]

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def __getattr__(self, name):
        # only reached when regular lookup fails
        if name == "_fields":
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError("namespace has no option %r" % name) from None

    def __setattr__(self, name, value):
        raise AttributeError("namespace is read-only")

    def __delattr__(self, name):
        raise AttributeError("namespace is read-only")

    def __dir__(self):
        return [*super().__dir__(), *(name for name in self._fields if name.isidentifier())]

    def __repr__(self):
        return "namespace(%s)" % ", ".join("%s=%r" % field for field in self.__rich_repr__())

    def __reduce__(self):
        return type(self), (self._fields,)

    def __rich_repr__(self):
        yield from self._fields.items()

    def _assign(self, name, value):
        self._fields[name] = value

    def _append(self, name, value):
        self._fields[name].append(value)

    def _extend(self, values):
        self._fields[POSITIONALS].extend(values)


__all__ = (
    "POSITIONALS",
    "Namespace",
)
