import typing as t

import attr

if t.TYPE_CHECKING:  # pragma: no cover
    from .binder import BindKind
    from .descriptors import Param
    from .markers import Qualifier


class CacheCasesException(Exception):
    """Base class for all internal exceptions."""


@attr.s(auto_exc=True)
class MissingDescriptorError(LookupError, CacheCasesException):
    """Raised when a test function has no `@CacheSpec` declaration.

    Args:
        func (Callable): the test function
    """

    func: t.Callable = attr.ib(default=None)

    def __str__(self) -> str:
        name = getattr(self.func, "__qualname__", self.func)
        return f"@CacheSpec not found on `{name}`"


@attr.s(auto_exc=True)
class BindingError(CacheCasesException):
    """Raised when a test parameter cannot be bound to a scenario.

    Args:
        param (Param): the offending parameter
        index (int): the parameter's position in the argument vector
    """

    param: "Param" = attr.ib(default=None)
    index: int = attr.ib(default=None)

    @property
    def name(self) -> str:
        return getattr(self.param, "name", None)

    @property
    def declared(self):
        return getattr(self.param, "declared", None)


@attr.s(auto_exc=True)
class ViewUnavailableError(LookupError, BindingError):
    """The cache does not support the capability view requested by a parameter.

    Args:
        kind (BindKind): the requested view
        qualifier (Qualifier): the expiration qualifier, if any
    """

    kind: "BindKind" = attr.ib(default=None)
    qualifier: "Qualifier" = attr.ib(default=None)

    def __str__(self) -> str:
        kind = getattr(self.kind, "name", self.kind)
        if self.qualifier is not None:
            kind = f"{kind}({self.qualifier.name})"
        return (
            f"cache does not support the `{kind}` view requested "
            f"by parameter {self.index} `{self.name}`"
        )


@attr.s(auto_exc=True)
class AmbiguousParameterError(TypeError, BindingError):
    """An expiration parameter without a qualifier."""

    def __str__(self) -> str:
        return (
            f"expiration parameter {self.index} `{self.name}` must carry a "
            f"disambiguating qualifier: ExpireAfterAccess or ExpireAfterWrite"
        )


@attr.s(auto_exc=True)
class UnresolvableParameterError(TypeError, BindingError):
    """A parameter whose type matches none of the bindable kinds."""

    def __str__(self) -> str:
        return (
            f"unknown parameter type {self.declared!r} "
            f"for parameter {self.index} `{self.name}`"
        )
