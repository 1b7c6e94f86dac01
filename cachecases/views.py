"""Abstract cache types a test function can ask for.

A cache exposes several typed views over the same entries. Mutations made
through one view are visible through all the others.

Concrete caches either subclass these or `register()` with them.
"""
import typing as t
from abc import ABCMeta, abstractmethod
from collections import abc


_K = t.TypeVar("_K")
_V = t.TypeVar("_V")


class Ticker(metaclass=ABCMeta):
    """A time source."""

    __slots__ = ()

    @abstractmethod
    def read(self) -> int:
        """Returns the number of nanoseconds elapsed since this ticker's
        fixed point of reference.
        """


class Eviction(metaclass=ABCMeta):
    """Size-based eviction controls of a bounded cache."""

    __slots__ = ()

    @property
    @abstractmethod
    def is_weighted(self) -> bool:
        ...  # pragma: no cover

    @abstractmethod
    def get_maximum(self) -> int:
        ...  # pragma: no cover

    @abstractmethod
    def set_maximum(self, maximum: int) -> None:
        ...  # pragma: no cover


class Expiration(t.Generic[_K], metaclass=ABCMeta):
    """Fixed expiration controls. A cache may expire entries after their last
    access, their last write, or both. Both flavours share this type.
    """

    __slots__ = ()

    @abstractmethod
    def age_of(self, key: _K) -> t.Optional[int]:
        """Returns the age of the entry in nanoseconds or `None` if absent."""

    @abstractmethod
    def get_expires_after(self) -> int:
        ...  # pragma: no cover

    @abstractmethod
    def set_expires_after(self, duration: int) -> None:
        ...  # pragma: no cover


class Policy(metaclass=ABCMeta):
    """Access to the optional capability views of a cache.

    Each method returns `None` when the cache was not built with that
    capability.
    """

    __slots__ = ()

    @abstractmethod
    def eviction(self) -> t.Optional[Eviction]:
        ...  # pragma: no cover

    @abstractmethod
    def expire_after_access(self) -> t.Optional[Expiration]:
        ...  # pragma: no cover

    @abstractmethod
    def expire_after_write(self) -> t.Optional[Expiration]:
        ...  # pragma: no cover


class Cache(t.Generic[_K, _V], metaclass=ABCMeta):
    """A key-value cache."""

    __slots__ = ()

    @abstractmethod
    def get_if_present(self, key: _K) -> t.Optional[_V]:
        ...  # pragma: no cover

    @abstractmethod
    def put(self, key: _K, value: _V) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def invalidate(self, key: _K) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def estimated_size(self) -> int:
        ...  # pragma: no cover

    @abstractmethod
    def as_map(self) -> abc.MutableMapping[_K, _V]:
        """Returns a mapping view backed by this cache."""

    @abstractmethod
    def policy(self) -> Policy:
        ...  # pragma: no cover


class LoadingCache(Cache[_K, _V]):
    """A cache that computes missing values on `get()`."""

    __slots__ = ()

    @abstractmethod
    def get(self, key: _K) -> _V:
        ...  # pragma: no cover

    @abstractmethod
    def get_all(self, keys: abc.Iterable[_K]) -> dict[_K, _V]:
        ...  # pragma: no cover

    @abstractmethod
    def refresh(self, key: _K) -> None:
        ...  # pragma: no cover


class CacheContext(metaclass=ABCMeta):
    """The metadata of a generated scenario.

    Attributes:
        ticker (Ticker): the time source the scenario's cache reads.
    """

    __slots__ = ()

    ticker: Ticker
