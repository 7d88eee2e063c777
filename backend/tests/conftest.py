import pytest

from fake_chain import FakeChain, fake_web3
from vault_status.chain.reader import ChainReader
from vault_status.core.config import ReportConfig


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def config() -> ReportConfig:
    return ReportConfig()


@pytest.fixture
def reader(chain: FakeChain, config: ReportConfig) -> ChainReader:
    return ChainReader(fake_web3(chain), multicall_address=config.addresses.multicall3)
