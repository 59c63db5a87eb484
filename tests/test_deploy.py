import asyncio
import threading
from types import SimpleNamespace

import pytest

from fury_sdk import config, deploy
from fury_sdk.deploy import Deployer, TxFailed


class FakeWallet:
    def __init__(self, address):
        self.key = SimpleNamespace(acc_address=address)
        self.signed = []

    async def create_and_sign_tx(self, options):
        self.signed.append(options)
        return options


class FakeClient:
    def __init__(self, code=0):
        self.code = code
        self.tx = self

    async def broadcast(self, tx):
        return SimpleNamespace(txhash="F00D", code=self.code, raw_log="out of gas")


def test_failed_broadcast_raises():
    deployer = Deployer(client=FakeClient(code=11), wallet=FakeWallet("terra1mint"))
    with pytest.raises(TxFailed, match="out of gas") as excinfo:
        asyncio.run(deployer.send_msg(object()))
    assert excinfo.value.result.txhash == "F00D"


def test_send_msg_signs_with_given_wallet():
    default, treasury = FakeWallet("terra1mint"), FakeWallet("terra1treasury")
    deployer = Deployer(client=FakeClient(), wallet=default, denom="uluna")
    result = asyncio.run(deployer.send_msg(object(), treasury))
    assert result.txhash == "F00D"
    assert default.signed == []
    assert treasury.signed[0].fee_denoms == ["uluna"]


class FakeLCDClient:
    def __init__(self, url, chain_id, gas_prices=None):
        self.gas_prices = gas_prices

    def wallet(self, key):
        return SimpleNamespace(key=key)


def test_gas_prices_are_fetched_off_the_event_loop(monkeypatch):
    fetched_on = []

    def get_gas_prices(fcd_url):
        fetched_on.append(threading.current_thread())
        return {"uusd": "0.15"}

    monkeypatch.setattr(deploy, "get_gas_prices", get_gas_prices)
    monkeypatch.setattr(deploy, "AsyncLCDClient", FakeLCDClient)
    deployer, wallets = asyncio.run(deploy.get_deployer(config.get_bombay_config()))

    assert fetched_on and fetched_on[0] is not threading.main_thread()
    assert deployer.client.gas_prices == {"uusd": "0.15"}
    assert deployer.fee is None
    assert deployer.wallet is wallets["mint"]
    assert "funder" not in wallets


def test_localterra_uses_a_fixed_fee(monkeypatch):
    def get_gas_prices(fcd_url):
        raise AssertionError("localterra has no fcd endpoint")

    monkeypatch.setattr(deploy, "get_gas_prices", get_gas_prices)
    monkeypatch.setattr(deploy, "AsyncLCDClient", FakeLCDClient)
    deployer, wallets = asyncio.run(deploy.get_deployer(config.get_localterra_config()))

    assert deployer.client.gas_prices is None
    assert deployer.fee.gas_limit == 4000000
    assert sorted(wallets) == ["bonded_reward", "funder", "liquidity_reward", "mint", "treasury"]
