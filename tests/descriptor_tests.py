from __future__ import annotations

import typing as t
from collections import abc
from functools import partial, wraps

import pytest

from cachecases import (
    Cache,
    CacheContext,
    Descriptor,
    Eviction,
    Expiration,
    ExpireAfterAccess,
    ExpireAfterWrite,
    LoadingCache,
    Missing,
    Param,
    Ticker,
    on_descriptor_inspected,
)

from .mocks import SimpleLoadingCache


xfail = pytest.mark.xfail
parametrize = pytest.mark.parametrize


def _sample(
    context: CacheContext,
    cache: Cache,
    data: abc.MutableMapping[int, int],
    access: t.Annotated[Expiration, ExpireAfterAccess],
    write: t.Annotated[Expiration, "doc", ExpireAfterWrite, ExpireAfterAccess],
    ticker: Ticker,
):
    ...


class ParamTests:
    @parametrize(
        ["annotation", "declared", "qualifier"],
        [
            (Cache, Cache, None),
            (t.Any, object, None),
            (Missing, Missing, None),
            (abc.Mapping[str, int], abc.Mapping, None),
            (t.Annotated[Expiration, ExpireAfterWrite], Expiration, ExpireAfterWrite),
            (t.Annotated[Expiration, "write"], Expiration, None),
            (t.Annotated[Expiration[int], ExpireAfterAccess], Expiration, ExpireAfterAccess),
            (t.Annotated[Eviction, ExpireAfterAccess], Eviction, ExpireAfterAccess),
        ],
    )
    def test_from_annotation(self, annotation, declared, qualifier):
        p = Param.from_annotation("p", annotation)
        assert p.name == "p"
        assert p.annotation is annotation
        assert p.declared is declared
        assert p.qualifier is qualifier

    @parametrize(
        ["declared", "cls", "exp"],
        [
            (Cache, SimpleLoadingCache, True),
            (LoadingCache, SimpleLoadingCache, True),
            (SimpleLoadingCache, Cache, False),
            (abc.Mapping, abc.MutableMapping, True),
            (dict, abc.MutableMapping, False),
            (object, int, True),
            (Missing, int, False),
            (t.Union[int, str], int, False),
        ],
    )
    def test_accepts(self, declared, cls, exp):
        assert Param("p", declared, declared).accepts(cls) is exp


class DescriptorTests:
    def test_inspect(self):
        descriptor = Descriptor.inspect(_sample)
        assert len(descriptor) == 6
        assert descriptor.names == ("context", "cache", "data", "access", "write", "ticker")
        assert [p.declared for p in descriptor] == [
            CacheContext,
            Cache,
            abc.MutableMapping,
            Expiration,
            Expiration,
            Ticker,
        ]
        assert [p.qualifier for p in descriptor] == [
            None,
            None,
            None,
            ExpireAfterAccess,
            ExpireAfterWrite,
            None,
        ]

    def test_cached(self):
        assert Descriptor.inspect(_sample) is Descriptor.inspect(_sample)

    def test_empty(self):
        def func():
            ...

        descriptor = Descriptor.inspect(func)
        assert len(descriptor) == 0
        assert not descriptor
        assert descriptor == Descriptor()

    def test_method(self):
        class Foo:
            def test_it(self, cache: Cache, ticker: Ticker):
                ...

            @classmethod
            def test_cls(cls, cache: Cache):
                ...

        assert Descriptor.inspect(Foo.test_it).names == ("cache", "ticker")
        assert Descriptor.inspect(Foo().test_it) is Descriptor.inspect(Foo.test_it)
        assert Descriptor.inspect(Foo.test_cls).names == ("cache",)

    def test_annotated_self_is_kept(self):
        def func(self: Cache):
            ...

        assert Descriptor.inspect(func).names == ("self",)

    def test_wrapped(self):
        def func(cache: Cache, ticker: Ticker):
            ...

        @wraps(func)
        def wrapper(*a, **kw):
            return func(*a, **kw)

        assert Descriptor.inspect(wrapper) is Descriptor.inspect(func)

    def test_partial(self):
        def func(context: CacheContext, cache: Cache, ticker: Ticker):
            ...

        fn = partial(func, object())
        assert Descriptor.inspect(fn).names == ("cache", "ticker")
        assert Descriptor.inspect(fn) is Descriptor.inspect(fn)
        assert Descriptor.inspect(func).names == ("context", "cache", "ticker")
        assert Descriptor.inspect(partial(func)).names == ("context", "cache", "ticker")

    def test_partial_keywords(self):
        def func(context: CacheContext, cache: Cache):
            ...

        (cache,) = Descriptor.inspect(partial(func, context=object()))
        assert cache.name == "cache"
        assert cache.declared is Cache

    def test_partial_method(self):
        class Foo:
            def test_it(self, ticker: Ticker, cache: Cache):
                ...

        (cache,) = Descriptor.inspect(partial(Foo().test_it, object()))
        assert cache.declared is Cache

    def test_none_default(self):
        def func(cache: Cache = None, ticker: t.Optional[Ticker] = None):
            ...

        cache, ticker = Descriptor.inspect(func)
        assert cache.annotation is Cache
        assert cache.declared is Cache
        assert ticker.annotation == t.Optional[Ticker]

    def test_unresolved_annotation(self):
        def func(a: Undefined, b: Cache, c: t.Annotated[Expiration, ExpireAfterWrite]):  # noqa: F821
            ...

        a, b, c = Descriptor.inspect(func)
        assert a.annotation == "Undefined"
        assert b.declared is Cache
        assert c.declared is Expiration
        assert c.qualifier is ExpireAfterWrite

    def test_unannotated(self):
        def func(a, b: Cache):
            ...

        a, b = Descriptor.inspect(func)
        assert a.declared is Missing
        assert a.annotation is Missing
        assert b.declared is Cache

    def test_of(self):
        descriptor = Descriptor.of(Cache, (Expiration, ExpireAfterWrite), (Ticker, None))
        assert descriptor.names == ("arg0", "arg1", "arg2")
        assert descriptor[1].declared is Expiration
        assert descriptor[1].qualifier is ExpireAfterWrite
        assert descriptor[2].annotation is Ticker
        assert descriptor == Descriptor.of(
            Cache, t.Annotated[Expiration, ExpireAfterWrite], Ticker
        )

    @parametrize(
        ["types", "exp"],
        [
            ((), False),
            ((Cache, CacheContext, Ticker), False),
            ((object,), False),
            ((LoadingCache,), True),
            ((CacheContext, SimpleLoadingCache), True),
            ((t.Annotated[LoadingCache, "x"],), True),
            ((t.Union[LoadingCache, None],), False),
        ],
    )
    def test_is_loading_only(self, types, exp):
        assert Descriptor.of(*types).is_loading_only() is exp

    def test_signal(self):
        received = []

        def receiver(sender, descriptor):
            received.append((sender, descriptor))

        def func(cache: Cache):
            ...

        with on_descriptor_inspected.connected_to(receiver):
            descriptor = Descriptor.inspect(func)
            Descriptor.inspect(func)

        assert received == [(func, descriptor)]
