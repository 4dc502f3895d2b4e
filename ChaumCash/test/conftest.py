import pytest
from ChaumCash import rng
from ChaumCash.protocol.bank import KeyAuthority, withdraw_coin


@pytest.fixture(scope="session")
def authority():
    # 1024 bits keeps key generation fast; the protocol does not depend on size
    return KeyAuthority(bits=1024)


@pytest.fixture
def coin(authority):
    return withdraw_coin(authority, "alice", 20)


@pytest.fixture(autouse=True)
def seeded_rng():
    rng.set_seed(1234)
    yield
    rng.set_seed(None)
