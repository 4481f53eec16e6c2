"""Configures pytest further, and provides the key material shared by the test modules."""
import pytest
import sympy

from minirsa.keygen import KeyPair


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run exhaustive extremely slow tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture(scope="session")
def textbook_key() -> KeyPair:
    """The classic p=61, q=53 key. Its modulus is far too small for 3-byte blocks."""
    return KeyPair(3233, 17, 2753)


@pytest.fixture(scope="session")
def large_key() -> KeyPair:
    """Key built from the two largest primes below 2**16, so every block is below the modulus."""
    p = sympy.prevprime(2**16)
    q = sympy.prevprime(p)
    e = 65537
    return KeyPair(p * q, e, pow(e, -1, (p - 1) * (q - 1)))
