import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import requests
from terra_sdk.core.coins import Coins


MILLION = 1_000_000

# Contracts
MINTING_CONTRACT_PATH = "artifacts/cw20_base.wasm"
PAIR_CONTRACT_PATH = "../artifacts/astroport_pair.wasm"
STAKING_CONTRACT_PATH = "../artifacts/astroport_staking.wasm"
WHITELIST_CONTRACT_PATH = "../artifacts/astroport_whitelist.wasm"
FACTORY_CONTRACT_PATH = "../artifacts/astroport_factory.wasm"
PROXY_CONTRACT_PATH = "../artifacts/astroport_proxy.wasm"

ARTIFACTS_DIR = os.environ.get("FURY_ARTIFACTS_DIR", "artifacts")

# Proxy parameters
SWAP_OPENING_DATE = "1644734115627110527"
CONFIGURED_SWAP_OPENING_DATE = "1644734115627110528"
PAIR_DISCOUNT_RATE = 700
PAIR_BONDING_PERIOD_IN_DAYS = 5
NATIVE_DISCOUNT_RATE = 500
NATIVE_BONDING_PERIOD_IN_DAYS = 7

# Fury token
TOKEN_NAME = "Fury"
TOKEN_SYMBOL = "FURY"
TOKEN_DECIMALS = 6
MINTER_BALANCE = "410000000000000"
DEPLOYER_BALANCE = "010000000000000"
TOKEN_CAP = "420000000000000"
MARKETING_PROJECT = "crypto11.me"
MARKETING_DESCRIPTION = "This token in meant to be used for playing gamesin crypto11 world"

TERRA_TOKEN_HOLDERS = (
    "terra1m46vy0jk9wck6r9mg2n8jnxw0y4g4xgl3csh9h",  # gamified airdrop
    "terra1k20rlfj3ea47zjr2sp672qqscck5k5mf3uersq",  # private category
    "terra1wjq02nwcv6rq4zutq9rpsyq9k08rj30rhzgvt4",  # marketing
    "terra19rgzfvlvq0f82zyy4k7whrur8x9wnpfcj5j9g7",  # advisory
    "terra12g4sj6euv68kgx40k7mxu5xlm5sfat806umek7",
)
TERRA_MARKETING_ADDRESS = "terra1wjq02nwcv6rq4zutq9rpsyq9k08rj30rhzgvt4"

LOCALTERRA_TEST1_MNEMONIC = "notice oak worry limit wrap speak medal online prefer cluster roof addict wrist behave treat actual wasp year salad speed social layer crew genius"

TERRA_WALLET_MNEMONICS = {
    "liquidity_reward": "priority rough worth change shop adapt ritual trap palm trust worth hidden shaft speak common parent armor fantasy artist retreat derive jeans remove glove",
    "bonded_reward": "kiwi bunker found artist script slim trade away sport manage manual receive obscure leader defense void bench mobile cricket naive surge pipe dream attend",
    "treasury": "wait tribe hard proud lyrics oblige enough assume tag appear breeze hint faculty tomato famous quarter elbow random across marine physical depart infant hobby",
    "mint": "awesome festival volume rifle diagram suffer rhythm knock unlock reveal marine transfer lumber faint walnut love hover beach amazing robust oppose moon west will",
}


@dataclass
class NetworkConfig:
    chain_id: str
    lcd_url: str
    denom: str
    wallet_mnemonics: Dict[str, str]
    fee_gas: Optional[int] = None
    fee_amount: Optional[str] = None
    fcd_url: Optional[str] = None
    funder_mnemonic: Optional[str] = None
    prime_amount: int = 1000 * MILLION
    token_holders: Tuple[str, ...] = ()
    marketing_address: Optional[str] = None
    label: str = "fury"

    @property
    def lp_token_name(self) -> str:
        return f"{TOKEN_SYMBOL}-{self.denom.upper()}-LP"


def get_gas_prices(fcd_url: str) -> Coins:
    return Coins(requests.get(f"{fcd_url}/v1/txs/gas_prices").json())


def get_localterra_config() -> NetworkConfig:
    return NetworkConfig(
        chain_id="localterra",
        lcd_url="http://localhost:1317",
        denom="uusd",
        wallet_mnemonics=dict(TERRA_WALLET_MNEMONICS),
        fee_gas=4000000,
        fee_amount="1000000uusd",
        funder_mnemonic=LOCALTERRA_TEST1_MNEMONIC,
        token_holders=TERRA_TOKEN_HOLDERS,
        marketing_address=TERRA_MARKETING_ADDRESS,
    )


def get_bombay_config() -> NetworkConfig:
    return NetworkConfig(
        chain_id="bombay-12",
        lcd_url="https://bombay-lcd.terra.dev",
        fcd_url="https://bombay-fcd.terra.dev",
        denom="uusd",
        wallet_mnemonics=dict(TERRA_WALLET_MNEMONICS),
        token_holders=TERRA_TOKEN_HOLDERS,
        marketing_address=TERRA_MARKETING_ADDRESS,
    )


NETWORKS = {
    "localterra": get_localterra_config,
    "bombay-12": get_bombay_config,
}


def get_config(network: str) -> NetworkConfig:
    try:
        return NETWORKS[network]()
    except KeyError:
        raise ValueError(f"unknown network profile {network!r}, expected one of {sorted(NETWORKS)}")
