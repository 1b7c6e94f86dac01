import inspect
import typing as t
from collections.abc import Callable, Hashable
from copy import deepcopy
from functools import partial
from types import SimpleNamespace

_object_setattr = object.__setattr__

_EMPTY = inspect.Parameter.empty


def unwrap_callable(func: Callable) -> Callable:
    """Return the plain function behind bound methods, partials and
    `functools.wraps` chains.
    """
    while True:
        if isinstance(func, partial):
            func = func.func
        elif hasattr(func, "__func__"):
            func = func.__func__
        elif hasattr(func, "__wrapped__"):
            func = func.__wrapped__
        else:
            return func


def typed_signature(
    callable: Callable[..., t.Any], *, follow_wrapped=True, globalns=None, localns=None
) -> inspect.Signature:
    """`inspect.signature()` with string annotations evaluated and
    `typing.Annotated` extras preserved.

    Each annotation is evaluated on its own. One that cannot be resolved is
    left as written.
    """
    sig = inspect.signature(callable, follow_wrapped=follow_wrapped)

    if globalns is None:
        globalns = getattr(unwrap_callable(callable), "__globals__", None) or {}

    params = (
        p.replace(annotation=eval_type(p.annotation, globalns, localns))
        for p in sig.parameters.values()
    )

    return sig.replace(
        parameters=params,
        return_annotation=eval_type(sig.return_annotation, globalns, localns),
    )


def eval_type(value, globalns, localns=None):
    if value is _EMPTY:
        return value

    # evaluated off the function so `x: T = None` does not become `Optional[T]`
    ns = SimpleNamespace(__annotations__={"value": value})
    try:
        return t.get_type_hints(ns, globalns, localns, include_extras=True)["value"]
    except NameError:
        return value


class MissingType:

    __slots__ = ()

    __value__: t.ClassVar["MissingType"] = None

    def __new__(cls):
        return cls.__value__

    @classmethod
    def _makenew__(cls, name):
        if cls.__value__ is None:
            cls.__value__ = object.__new__(cls)
        return cls()

    def __bool__(self):
        return False

    def __str__(self):
        return ""

    def __repr__(self):
        return f"Missing"

    def __reduce__(self):
        return self.__class__, ()  # pragma: no cover

    def __eq__(self, x):
        return x is self

    def __hash__(self):
        return id(self)


Missing = MissingType._makenew__("Missing")


_T_Key = t.TypeVar("_T_Key")
_T_Val = t.TypeVar("_T_Val", covariant=True)


class ReadonlyDict(dict[_T_Key, _T_Val]):
    """A readonly `dict` subclass.

    Raises:
        TypeError: on any attempted modification
    """

    __slots__ = ()

    def not_mutable(self, *a, **kw):
        raise TypeError(f"readonly type: {self} ")

    __delitem__ = __setitem__ = setdefault = not_mutable
    clear = pop = popitem = update = __ior__ = not_mutable
    del not_mutable

    def __reduce__(self):
        return (
            self.__class__,
            (dict(self),),
        )

    def copy(self):
        return self.__class__(self)

    __copy__ = copy

    def __deepcopy__(self, memo=None):
        return self.__class__(deepcopy(dict(self), memo))


class FrozenDict(ReadonlyDict[_T_Key, _T_Val]):
    """An hashable `ReadonlyDict`"""

    __slots__ = ("_v_hash",)

    def __hash__(self):
        try:
            ash = self._v_hash
        except AttributeError:
            ash = None
            items = self._eval_hashable()
            if items is not None:
                try:
                    ash = hash(items)
                except TypeError:
                    pass
            _object_setattr(self, "_v_hash", ash)

        if ash is None:
            raise TypeError(f"un-hashable type: {self.__class__.__name__!r}")

        return ash

    def _eval_hashable(self) -> Hashable:
        return (*((k, self[k]) for k in sorted(self)),)
