from ._common import Missing


from .markers import (
    CacheSpec,
    ExpireAfterAccess,
    ExpireAfterWrite,
    Qualifier,
    get_cache_spec,
)


from .exceptions import (
    AmbiguousParameterError,
    BindingError,
    CacheCasesException,
    MissingDescriptorError,
    UnresolvableParameterError,
    ViewUnavailableError,
)


from .views import (
    Cache,
    CacheContext,
    Eviction,
    Expiration,
    LoadingCache,
    Policy,
    Ticker,
)
from .descriptors import Descriptor, Param
from .binder import BindKind, Scenario, as_test_cases, bind, resolve
from .providers import CacheProvider, ScenarioSource
from .signals import on_descriptor_inspected, on_scenario_bound
