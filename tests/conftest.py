from datetime import datetime

import pytest
import structlog
from faker import Faker

from openapi_autodoc.rules.enricher import DescriptorEnricher
from openapi_autodoc.rules.parser import RuleParser

NOW = datetime(2024, 3, 15, 10, 30, 0)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def faker():
    fake = Faker()
    fake.seed_instance(1234)
    return fake


@pytest.fixture
def parser(faker):
    return RuleParser(faker=faker, now=NOW)


@pytest.fixture
def enricher(faker):
    return DescriptorEnricher(faker=faker)
