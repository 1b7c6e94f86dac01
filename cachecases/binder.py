import typing as t
from collections import abc
from enum import Enum

from .descriptors import Descriptor, Param
from .exceptions import (
    AmbiguousParameterError,
    UnresolvableParameterError,
    ViewUnavailableError,
)
from .markers import Qualifier
from .views import Cache, Eviction, Expiration, Ticker
from . import signals


class Scenario(t.NamedTuple):
    """A generated test case: the scenario's context and its cache."""

    context: t.Any
    cache: Cache


class BindKind(Enum):
    """The values a test parameter can be bound to, in resolution order.

    A parameter is bound to the first kind whose candidate type it accepts,
    so a broadly typed parameter receives the context or the cache itself
    rather than one of the narrower views.

    Attributes:
        CONTEXT (BindKind): the scenario context
        CACHE (BindKind): the cache
        MAP (BindKind): the cache's mapping view
        EVICTION (BindKind): the cache's eviction controls
        EXPIRATION (BindKind): the cache's access or write expiration controls
        TICKER (BindKind): the context's ticker
    """

    CONTEXT = 1
    CACHE = 2
    MAP = 3
    EVICTION = 4
    EXPIRATION = 5
    TICKER = 6

    def candidate(self, context, cache) -> type:
        """Returns the type a parameter must accept to bind to this kind."""
        if self is BindKind.CONTEXT:
            return context.__class__
        elif self is BindKind.CACHE:
            return cache.__class__
        return _view_types[self]


_view_types = {
    BindKind.MAP: abc.MutableMapping,
    BindKind.EVICTION: Eviction,
    BindKind.EXPIRATION: Expiration,
    BindKind.TICKER: Ticker,
}


def kind_of(param: Param, context, cache: Cache, *, index: int = None) -> BindKind:
    """Returns the `BindKind` the given parameter resolves to.

    Raises:
        UnresolvableParameterError: if the parameter accepts none of the kinds.
    """
    for kind in BindKind:
        if param.accepts(kind.candidate(context, cache)):
            return kind
    raise UnresolvableParameterError(param, index)


def resolve(param: Param, context, cache: Cache, *, index: int = None):
    """Returns the value bound to `param` for the scenario `(context, cache)`.

    Raises:
        ViewUnavailableError: the cache lacks the requested eviction or
            expiration view.
        AmbiguousParameterError: an expiration parameter has no qualifier.
        UnresolvableParameterError: the parameter's type is not bindable.
    """
    kind = kind_of(param, context, cache, index=index)
    if kind is BindKind.CONTEXT:
        return context
    elif kind is BindKind.CACHE:
        return cache
    elif kind is BindKind.MAP:
        return cache.as_map()
    elif kind is BindKind.TICKER:
        return context.ticker
    elif kind is BindKind.EVICTION:
        view = cache.policy().eviction()
    elif param.qualifier is Qualifier.ACCESS:
        view = cache.policy().expire_after_access()
    elif param.qualifier is Qualifier.WRITE:
        view = cache.policy().expire_after_write()
    else:
        raise AmbiguousParameterError(param, index)

    if view is None:
        qualifier = param.qualifier if kind is BindKind.EXPIRATION else None
        raise ViewUnavailableError(param, index, kind, qualifier)
    return view


def bind(descriptor: Descriptor, scenario: abc.Iterable) -> tuple:
    """Builds the argument vector of one scenario.

    Args:
        descriptor (Descriptor): the test's parameters
        scenario (Iterable): a `(context, cache)` pair

    Returns:
        args (tuple): one value per parameter, in order.
    """
    context, cache = scenario
    return tuple(
        resolve(p, context, cache, index=i) for i, p in enumerate(descriptor)
    )


def as_test_cases(
    descriptor: Descriptor, scenarios: abc.Iterable
) -> abc.Iterator[tuple]:
    """Lazily binds each scenario to the descriptor.

    Scenarios are pulled one at a time as the returned iterator is consumed.

    Args:
        descriptor (Descriptor): the test's parameters
        scenarios (Iterable): `(context, cache)` pairs

    Yields:
        args (tuple): the argument vector of each scenario
    """
    for scenario in scenarios:
        context, cache = scenario
        args = bind(descriptor, (context, cache))
        if signals.on_scenario_bound.receivers:
            signals.on_scenario_bound.send(
                descriptor, context=context, cache=cache, args=args
            )
        yield args
