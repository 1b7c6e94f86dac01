import typing as t
from collections import abc
from enum import Enum

import attr

from ._common import FrozenDict, Missing, unwrap_callable
from .exceptions import MissingDescriptorError


_T_Fn = t.TypeVar("_T_Fn", bound=abc.Callable)

_SPEC_ATTR = "__cache_spec__"


class Qualifier(Enum):
    """Selects one of the two expiration views that share the `Expiration`
    type. Used as `typing.Annotated` metadata:

        def test_expiry(cache: Cache, expiry: Annotated[Expiration, ExpireAfterWrite]):
            ...

    Attributes:
        ACCESS (Qualifier): expire after access
        WRITE (Qualifier): expire after write
    """

    ACCESS = "access"
    WRITE = "write"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}.{self.name}"


ExpireAfterAccess = Qualifier.ACCESS
ExpireAfterWrite = Qualifier.WRITE


@attr.s(slots=True, frozen=True, init=False, repr=False)
class CacheSpec:
    """Declares the shape of the scenarios a test runs against.

    The options are opaque to the binder and are passed untouched to the
    scenario generator. Use as a decorator:

        @CacheSpec(population="full", maximum=(10, 100))
        def test_get(cache: Cache, context: CacheContext):
            ...

    Attributes:
        options (FrozenDict): the scenario options.
    """

    options: FrozenDict[str, t.Any] = attr.ib(converter=FrozenDict)

    def __init__(self, **options) -> None:
        self.__attrs_init__(options)

    def __call__(self, func: _T_Fn) -> _T_Fn:
        setattr(unwrap_callable(func), _SPEC_ATTR, self)
        return func

    def get(self, name: str, default=None):
        return self.options.get(name, default)

    def __getitem__(self, name: str):
        return self.options[name]

    def __contains__(self, name) -> bool:
        return name in self.options

    def __repr__(self) -> str:
        opts = ", ".join(f"{k}={v!r}" for k, v in self.options.items())
        return f"{self.__class__.__name__}({opts})"


def get_cache_spec(func: abc.Callable, default=Missing) -> CacheSpec:
    """Returns the `CacheSpec` attached to `func`.

    Args:
        func (Callable): a test function, method or wrapper of either.
        default (Any, optional): returned if no spec was attached.

    Raises:
        MissingDescriptorError: if there is no spec and no `default` was given.
    """
    spec = getattr(func, _SPEC_ATTR, None)
    if spec is None:
        spec = getattr(unwrap_callable(func), _SPEC_ATTR, None)

    if spec is None:
        if default is Missing:
            raise MissingDescriptorError(func)
        return default
    return spec
