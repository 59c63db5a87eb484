import base64
import json
from typing import List, Tuple, Union

from attr import dataclass

from fury_sdk import config


@dataclass
class NativeToken:
    denom: str = ''

    def info(self) -> dict:
        return {"native_token": {"denom": self.denom}}


@dataclass
class Token:
    contract_addr: str = ''

    def info(self) -> dict:
        return {"token": {"contract_addr": self.contract_addr}}


AssetToken = Union[NativeToken, Token]


def encode_msg(msg: dict) -> str:
    return base64.b64encode(bytes(json.dumps(msg), 'ascii')).decode()


def asset(token: AssetToken, amount: Union[int, str]) -> dict:
    return {
        "info": token.info(),
        "amount": str(amount)
    }


###############################################
################ CW20 MESSAGES ################
###############################################

def increase_allowance_msg(spender: str, amount: Union[int, str]) -> dict:
    return {
        "increase_allowance": {
            "spender": spender,
            "amount": str(amount)
        }
    }


def cw20_send_msg(contract: str, amount: Union[int, str], msg: dict) -> dict:
    return {
        "send": {
            "contract": contract,
            "amount": str(amount),
            "msg": encode_msg(msg)
        }
    }


###############################################
########### PAIR / PROXY MESSAGES #############
###############################################

def provide_liquidity_msg(assets: List[dict], receiver: str) -> dict:
    return {
        "provide_liquidity": {
            "assets": assets,
            "receiver": receiver
        }
    }


def swap_msg(sender: str, offer_asset: dict) -> dict:
    return {
        "swap": {
            "sender": sender,
            "offer_asset": offer_asset
        }
    }


def withdraw_liquidity_msg(sender: str, amount: Union[int, str]) -> dict:
    return {
        "withdraw_liquidity": {
            "sender": sender,
            "amount": str(amount)
        }
    }


def simulation_query(offer_asset: dict) -> dict:
    return {"simulation": {"offer_asset": offer_asset}}


def reverse_simulation_query(ask_asset: dict) -> dict:
    return {"reverse_simulation": {"ask_asset": ask_asset}}


def configure_msg(pool_pair_address: str, liquidity_token: str, swap_opening_date: str) -> dict:
    return {
        "configure": {
            "pool_pair_address": pool_pair_address,
            "liquidity_token": liquidity_token,
            "swap_opening_date": swap_opening_date,
        }
    }


def create_pair_msg(asset_infos: List[dict], init_params: dict) -> dict:
    return {
        "create_pair": {
            "pair_type": {"xyk": {}},
            "asset_infos": asset_infos,
            "init_params": encode_msg(init_params)
        }
    }


###############################################
############ INSTANTIATE MESSAGES #############
###############################################

def mint_init_msg(minter: str, deployer: str, network: config.NetworkConfig) -> dict:
    initial_balances = [{"address": minter, "amount": config.MINTER_BALANCE}]
    initial_balances += [{"address": holder, "amount": "0"} for holder in network.token_holders]
    initial_balances.append({"address": deployer, "amount": config.DEPLOYER_BALANCE})
    return {
        "name": config.TOKEN_NAME,
        "symbol": config.TOKEN_SYMBOL,
        "decimals": config.TOKEN_DECIMALS,
        "initial_balances": initial_balances,
        "mint": {
            "minter": minter,
            "cap": config.TOKEN_CAP
        },
        "marketing": {
            "project": config.MARKETING_PROJECT,
            "description": config.MARKETING_DESCRIPTION,
            "marketing": network.marketing_address or minter
        },
    }


def staking_init_msg(owner: str, token_code_id: int, deposit_token_addr: str) -> dict:
    return {
        "owner": owner,
        "token_code_id": token_code_id,
        "deposit_token_addr": deposit_token_addr
    }


def factory_init_msg(owner: str, pair_code_id: int, token_code_id: int, whitelist_code_id: int) -> dict:
    return {
        "owner": owner,
        "pair_configs": [
            {
                "code_id": pair_code_id,
                "pair_type": {"xyk": {}},
                "total_fee_bps": 0,
                "maker_fee_bps": 0
            }
        ],
        "token_code_id": token_code_id,
        "whitelist_code_id": whitelist_code_id
    }


def proxy_init_msg(custom_token_address: str, authorized_liquidity_provider: str,
                   pair_fury_reward_wallet: str, native_investment_reward_wallet: str,
                   lp_tokens_holder: str) -> dict:
    return {
        "custom_token_address": custom_token_address,
        "pair_discount_rate": config.PAIR_DISCOUNT_RATE,
        "pair_bonding_period_in_days": config.PAIR_BONDING_PERIOD_IN_DAYS,
        "pair_fury_reward_wallet": pair_fury_reward_wallet,
        "pair_lp_tokens_holder": lp_tokens_holder,
        "native_discount_rate": config.NATIVE_DISCOUNT_RATE,
        "native_bonding_period_in_days": config.NATIVE_BONDING_PERIOD_IN_DAYS,
        "native_investment_reward_wallet": native_investment_reward_wallet,
        "native_investment_receive_wallet": lp_tokens_holder,
        "authorized_liquidity_provider": authorized_liquidity_provider,
        "swap_opening_date": config.SWAP_OPENING_DATE,
    }


def pool_assets(pool: dict) -> Tuple[dict, dict]:
    """Split a `pool` query response into (native, token) assets."""
    native = next(a for a in pool["assets"] if "native_token" in a["info"])
    token = next(a for a in pool["assets"] if "token" in a["info"])
    return native, token
