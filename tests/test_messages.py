import base64
import json

from fury_sdk import config
from fury_sdk.messages import (
    NativeToken, Token, asset, cw20_send_msg, mint_init_msg, pool_assets, proxy_init_msg,
    withdraw_liquidity_msg,
)


def test_asset_infos():
    assert asset(NativeToken("uusd"), 10) == {"info": {"native_token": {"denom": "uusd"}}, "amount": "10"}
    assert asset(Token("terra1fury"), "5") == {"info": {"token": {"contract_addr": "terra1fury"}}, "amount": "5"}


def test_send_embeds_hook_message_as_base64():
    msg = cw20_send_msg("terra1pair", 50, withdraw_liquidity_msg("terra1treasury", 50))
    assert msg["send"]["contract"] == "terra1pair"
    assert msg["send"]["amount"] == "50"
    assert json.loads(base64.b64decode(msg["send"]["msg"])) == {
        "withdraw_liquidity": {"sender": "terra1treasury", "amount": "50"}
    }


def test_proxy_init_msg_matches_contract_schema():
    msg = proxy_init_msg(
        custom_token_address="terra1fury",
        authorized_liquidity_provider="terra1admin",
        pair_fury_reward_wallet="terra1liquidity",
        native_investment_reward_wallet="terra1bonded",
        lp_tokens_holder="terra1treasury",
    )
    assert set(msg) == {
        "custom_token_address", "pair_discount_rate", "pair_bonding_period_in_days",
        "pair_fury_reward_wallet", "pair_lp_tokens_holder", "native_discount_rate",
        "native_bonding_period_in_days", "native_investment_reward_wallet",
        "native_investment_receive_wallet", "authorized_liquidity_provider", "swap_opening_date",
    }
    assert msg["swap_opening_date"] == "1644734115627110527"


def test_mint_init_msg_without_token_holders():
    network = config.get_localterra_config()
    network.token_holders = ()
    network.marketing_address = None
    msg = mint_init_msg(minter="terra1mint", deployer="terra1funder", network=network)
    assert [b["address"] for b in msg["initial_balances"]] == ["terra1mint", "terra1funder"]
    assert msg["marketing"]["marketing"] == "terra1mint"
    assert msg["mint"] == {"minter": "terra1mint", "cap": "420000000000000"}


def test_pool_assets_split_by_kind():
    pool = {"assets": [
        {"info": {"token": {"contract_addr": "terra1fury"}}, "amount": "1000000"},
        {"info": {"native_token": {"denom": "uusd"}}, "amount": "100000"},
    ]}
    native, token = pool_assets(pool)
    assert native["amount"] == "100000"
    assert token["amount"] == "1000000"
