import typing as t
from collections import abc
from logging import getLogger

import attr

from .binder import as_test_cases
from .descriptors import Descriptor
from .markers import CacheSpec, get_cache_spec
from .views import Cache


logger = getLogger(__name__)


ScenarioSource = abc.Callable[[CacheSpec, bool], abc.Iterable[tuple[t.Any, Cache]]]
"""Generates the `(context, cache)` scenarios of a `CacheSpec`.

Called with the spec and a `loading_only` flag. When the flag is set, only
caches that implement `LoadingCache` may be generated.
"""


@attr.s(slots=True, frozen=True)
class CacheProvider:
    """Provides the argument vectors of a `@CacheSpec` test function.

    Test parameters are optional and may be declared in any order. Each is
    bound by its annotation to one of: the scenario context, the cache, the
    cache's `as_map()` view, its `Eviction` view, one of its `Expiration`
    views or the context's `Ticker`. `Expiration` parameters must be qualified
    with `Annotated[Expiration, ExpireAfterAccess]` or
    `Annotated[Expiration, ExpireAfterWrite]`.

        provider = CacheProvider(generate_caches)

        @CacheSpec(population="full")
        def test_put(cache: Cache, data: MutableMapping, ticker: Ticker):
            ...

        for args in provider(test_put):
            test_put(*args)

    Attributes:
        generator (ScenarioSource): builds the scenarios of a spec
    """

    generator: ScenarioSource = attr.ib()

    def descriptor(self, func: abc.Callable) -> Descriptor:
        return Descriptor.inspect(func)

    def is_loading_only(self, func: abc.Callable) -> bool:
        return self.descriptor(func).is_loading_only()

    def __call__(self, func: abc.Callable) -> abc.Iterator[tuple]:
        """Returns a lazy iterator of the argument vectors of `func`.

        Raises:
            MissingDescriptorError: `func` has no `@CacheSpec`. Raised before
                the generator is called.
        """
        spec = get_cache_spec(func)
        descriptor = self.descriptor(func)
        loading_only = descriptor.is_loading_only()
        if loading_only:
            logger.debug(f"{spec!r}: generating loading caches only")
        return as_test_cases(descriptor, self.generator(spec, loading_only))

    provide = __call__
