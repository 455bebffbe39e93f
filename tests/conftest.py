import pytest

from lambdarun import parse
from lambdarun.term import Abstraction, Application, Variable


def pytest_addoption(parser):
    parser.addoption(
        "--runslow", action="store_true", default=False, help="run slow tests"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def identity():
    return Abstraction("x", Variable("x"))


@pytest.fixture
def omega():
    u = Abstraction("x", Application(Variable("x"), Variable("x")))
    return Application(u, u)


@pytest.fixture
def p():
    return parse
