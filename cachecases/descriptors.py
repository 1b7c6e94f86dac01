import typing as t
from collections import abc
from functools import partial
from inspect import Parameter
from logging import getLogger
from weakref import WeakKeyDictionary

import attr
from typing_extensions import Self

from ._common import Missing, typed_signature, unwrap_callable
from .markers import Qualifier
from .views import LoadingCache
from . import signals


logger = getLogger(__name__)

_EMPTY = Parameter.empty
_SELF_NAMES = frozenset(("self", "cls"))
_POSITIONAL_KINDS = frozenset(
    [Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD]
)

_descriptors: "WeakKeyDictionary[abc.Callable, Descriptor]" = WeakKeyDictionary()


def _declared_type(annotation):
    if annotation is _EMPTY or annotation is Missing:
        return Missing
    elif annotation is t.Any:
        return object
    return t.get_origin(annotation) or annotation


@attr.s(slots=True, frozen=True, cache_hash=True)
class Param:
    """A declared test parameter.

    Attributes:
        name (str): the parameter's name
        annotation (Any): the annotation as written
        declared (Any): the annotation stripped of `Annotated` metadata and
            generic arguments. `Missing` when the parameter has no annotation.
        qualifier (Qualifier, optional): the first `Qualifier` found in the
            `Annotated` metadata.
    """

    name: str = attr.ib()
    annotation: t.Any = attr.ib(default=Missing)
    declared: t.Any = attr.ib(default=Missing)
    qualifier: t.Optional[Qualifier] = attr.ib(default=None)

    @classmethod
    def from_annotation(cls, name: str, annotation: t.Any = Missing) -> Self:
        tp, qualifier = annotation, None
        if t.get_origin(tp) is t.Annotated:
            qualifier = next(
                (m for m in tp.__metadata__ if isinstance(m, Qualifier)), None
            )
            tp = tp.__origin__
        return cls(name, annotation, _declared_type(tp), qualifier)

    def accepts(self, cls: type) -> bool:
        """Returns `True` if a value of type `cls` can be assigned to this
        parameter.
        """
        declared = self.declared
        return isinstance(declared, type) and issubclass(cls, declared)


@attr.s(slots=True, frozen=True, cache_hash=True)
class Descriptor(abc.Sequence[Param]):
    """The ordered parameters of a test function.

    Attributes:
        params (tuple[Param]): the parameters
    """

    params: tuple[Param, ...] = attr.ib(default=(), converter=tuple)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    def __len__(self) -> int:
        return len(self.params)

    def __iter__(self) -> abc.Iterator[Param]:
        return iter(self.params)

    def __getitem__(self, index):
        return self.params[index]

    def __bool__(self) -> bool:
        return not not self.params

    def is_loading_only(self) -> bool:
        """Returns `True` if any parameter asks for a `LoadingCache`.

        Scenario generators use this to restrict the caches they build to ones
        that can load missing entries.
        """
        for p in self.params:
            if isinstance(p.declared, type) and issubclass(p.declared, LoadingCache):
                return True
        return False

    @classmethod
    def of(cls, *types: t.Union[t.Any, tuple[t.Any, t.Optional[Qualifier]]]) -> Self:
        """Build a descriptor from a list of types.

        Each item is either an annotation or a `(type, qualifier)` pair.
        Parameters are named `arg0`, `arg1`...

            Descriptor.of(CacheContext, (Expiration, ExpireAfterAccess))
        """
        params = []
        for i, tp in enumerate(types):
            if isinstance(tp, tuple):
                tp, qualifier = tp
                if qualifier is not None:
                    tp = t.Annotated[tp, qualifier]
            params.append(Param.from_annotation(f"arg{i}", tp))
        return cls(params)

    @classmethod
    def inspect(cls, func: abc.Callable) -> Self:
        """Returns the descriptor of the given test function.

        Results are cached per function. Bound methods and `functools.wraps`
        wrappers resolve to the function they wrap. A `functools.partial`
        keeps its own descriptor, without the arguments it already binds.
        A leading unannotated `self` or `cls` is skipped.

        Args:
            func (Callable): the test function

        Returns:
            descriptor (Descriptor):
        """
        if not isinstance(func, partial):
            func = unwrap_callable(func)
        try:
            return _descriptors[func]
        except KeyError:
            pass

        rv = _descriptors[func] = cls(cls._iter_params(func))
        logger.debug(f"inspected {getattr(func, '__qualname__', func)}: {rv.names}")
        signals.on_descriptor_inspected.send(func, descriptor=rv)
        return rv

    @classmethod
    def _iter_params(cls, func: abc.Callable):
        sig = typed_signature(func)
        bound = func.keywords if isinstance(func, partial) else {}
        params = (p for p in sig.parameters.values() if p.name not in bound)
        for i, p in enumerate(params):
            if (
                i == 0
                and p.name in _SELF_NAMES
                and p.annotation is _EMPTY
                and p.kind in _POSITIONAL_KINDS
            ):
                continue
            yield Param.from_annotation(
                p.name, Missing if p.annotation is _EMPTY else p.annotation
            )
