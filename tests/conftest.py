import pytest

from cachecases import CacheProvider

from .mocks import MockGenerator, scenario as new_scenario


@pytest.fixture
def generator():
    return MockGenerator()


@pytest.fixture
def provider(generator):
    return CacheProvider(generator)


@pytest.fixture
def scenario_options():
    return {}


@pytest.fixture
def scenario(scenario_options):
    return new_scenario(**scenario_options)

