import asyncio
from types import SimpleNamespace

import pytest

from fury_sdk import cli, config
from fury_sdk.artifact import Artifact, ArtifactStore
from fury_sdk.deploy import TxFailed
from fury_sdk.pipeline import run_pipeline
from fury_sdk.prompt import Prompter
from tests.test_helpers import FULL_DEPLOY_ANSWERS, WALLET_ROLES, FakeDeployer, fake_wallet, make_context


@pytest.fixture
def deployer(monkeypatch, tmp_path):
    deployer = FakeDeployer()
    wallets = {role: fake_wallet(role) for role in WALLET_ROLES}

    async def get_deployer(network):
        return deployer, wallets

    monkeypatch.setattr(cli, "get_deployer", get_deployer)
    monkeypatch.setattr(config, "ARTIFACTS_DIR", str(tmp_path))
    monkeypatch.delenv("FURY_NETWORK", raising=False)
    return deployer


def test_deploy_fresh_discards_the_stored_artifact(tmp_path, deployer):
    ArtifactStore(tmp_path).save({"furyTokenCodeId": 99}, "localterra")
    prompter = Prompter(dict(FULL_DEPLOY_ANSWERS, prime_accounts="N", start_fresh="y"))

    artifact = asyncio.run(cli.deploy(config.get_localterra_config(), prompter))

    assert artifact["furyTokenCodeId"] == 1
    assert artifact["poolpairSavedToProxy"] is True
    assert ArtifactStore(tmp_path).load("localterra") == artifact
    assert prompter.asked == ["prime_accounts", "start_fresh", "upload_fury_token", "instantiate_fury_token"]
    assert deployer.performed("send") == []
    assert deployer.closed


def test_prime_accounts_funds_every_role(deployer):
    prompter = Prompter(dict(FULL_DEPLOY_ANSWERS, prime_accounts="y"))
    asyncio.run(cli.deploy(config.get_localterra_config(), prompter))

    sends = deployer.performed("send")
    assert [to for _, to, _ in sends] == [
        "terra1liquidityreward", "terra1bondedreward", "terra1treasury", "terra1mint",
    ]
    assert {coins for _, _, coins in sends} == {"1000000000uusd"}


@pytest.mark.parametrize("answer", ["N", "n", "", "yes"])
def test_prime_accounts_needs_a_yes(deployer, answer):
    prompter = Prompter(dict(FULL_DEPLOY_ANSWERS, prime_accounts=answer))
    asyncio.run(cli.deploy(config.get_localterra_config(), prompter))
    assert deployer.performed("send") == []


def test_withdraw_uses_the_stored_artifact(tmp_path, deployer):
    asyncio.run(run_pipeline(make_context(tmp_path), Artifact()))

    withdrawal = asyncio.run(cli.withdraw(config.get_localterra_config()))

    assert withdrawal.lp_share == 2000
    assert deployer.performed("store") == []
    assert deployer.closed


def test_failed_transaction_exits_with_status_1():
    async def broadcast():
        raise TxFailed(SimpleNamespace(txhash="AB12", code=5, raw_log="insufficient fees"))

    with pytest.raises(SystemExit) as excinfo:
        cli._run(broadcast())
    assert excinfo.value.code == 1


def test_unexpected_errors_are_not_swallowed():
    async def broken():
        raise RuntimeError("bug")

    with pytest.raises(RuntimeError, match="bug"):
        cli._run(broken())


def test_main_aborts_on_missing_upstream_field(monkeypatch, deployer):
    # declining the token upload leaves furyTokenCodeId unset for the staking step
    monkeypatch.setattr(cli, "Prompter", lambda: Prompter({"upload_fury_token": "x"}))

    with pytest.raises(SystemExit) as excinfo:
        cli.main()

    assert excinfo.value.code == 1
    assert deployer.closed
    assert [path for _, path, _ in deployer.performed("store")] == [
        config.PAIR_CONTRACT_PATH, config.STAKING_CONTRACT_PATH,
    ]
