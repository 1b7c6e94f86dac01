"""pytest integration.

    provider = CacheProvider(generate_caches)

    @parametrize_caches(provider)
    @CacheSpec(population="full")
    def test_put(cache: Cache, ticker: Ticker):
        ...

`parametrize_caches` must be applied after `CacheSpec`.
"""
import typing as t
from collections import abc

import pytest

from .providers import CacheProvider


_T_Fn = t.TypeVar("_T_Fn", bound=abc.Callable)


def parametrize_caches(
    provider: CacheProvider, **kwargs
) -> abc.Callable[[_T_Fn], _T_Fn]:
    """Parametrizes a test with the argument vectors of `provider`.

    pytest collects the full list of vectors up front. A function without
    parameters is still run once per scenario.

    Args:
        provider (CacheProvider): the provider
        **kwargs: passed to `pytest.mark.parametrize()`
    """

    def decorator(func: _T_Fn) -> _T_Fn:
        descriptor = provider.descriptor(func)
        argvalues = list(provider(func))
        return pytest.mark.parametrize(descriptor.names, argvalues, **kwargs)(func)

    return decorator
