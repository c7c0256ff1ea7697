"""
Shared pytest fixtures.

Payloads are built fresh per test so tests can mutate them freely.
"""
import copy
from pathlib import Path

import pytest

from payload_validator.engine import StepValidator
from payload_validator.validators import validator_registry

FIXTURES_DIR = Path(__file__).parent / "fixtures"

TEXT_MESSAGE_TYPE = "com.nunomorais.examples.TextMessage"
URL_MESSAGE_TYPE = "com.nunomorais.examples.UrlMessage"

_VALID_FOO = {
    "age": 6,
    "bar": {
        "name": "hello1",
        "foo": {"list": [1, 2, 3]},
    },
    "bool": False,
    "messages": [
        {"@td-type": TEXT_MESSAGE_TYPE, "text": "Welcome", "language": {"code": "en-US"}},
        {"@td-type": URL_MESSAGE_TYPE, "url": "https://cdn.example.com/welcome.mp3"},
    ],
}


@pytest.fixture()
def foo_payload():
    return copy.deepcopy(_VALID_FOO)


@pytest.fixture()
def engine():
    return StepValidator()


@pytest.fixture()
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture()
def registered_validators():
    """Register validator classes for one test and remove them afterwards."""
    registered = []

    def _register(*validator_classes):
        for validator_cls in validator_classes:
            validator_registry.register(validator_cls)
            registered.append(validator_cls.kind)

    yield _register

    for kind in registered:
        validator_registry.unregister(kind)
