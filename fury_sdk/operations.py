"""Exercising the deployed proxy, pair and token contracts.

Nothing here is written back to the deployment artifact. Failures are not
retried; they propagate to the caller.
"""
import json
from dataclasses import dataclass
from typing import List

from loguru import logger

from fury_sdk.artifact import Artifact
from fury_sdk.context import Context
from fury_sdk.events import find_attribute
from fury_sdk.messages import (
    NativeToken, Token, asset, cw20_send_msg, increase_allowance_msg, pool_assets,
    provide_liquidity_msg, reverse_simulation_query, simulation_query, swap_msg,
    withdraw_liquidity_msg,
)

LP_SHARE_EVENT = "wasm"

PROVIDE_NATIVE_AMOUNT = 500_000_000
PROVIDE_FURY_AMOUNT = 5_000_000_000
SIMULATION_OFFER_AMOUNT = 100_000_000
SIMULATION_ASK_AMOUNT = 1_000_000
SWAP_AMOUNT = 10_000
WITHDRAW_POOL_FRACTION = 10_000


def ceil_div(amount: int, divisor: int) -> int:
    return -(-amount // divisor)


def transfer_tax(amount: int) -> int:
    """Native transfer tax the proxy needs on top of what it forwards (0.1%, rounded up)."""
    return ceil_div(amount, 1000)


def native(ctx: Context) -> NativeToken:
    return NativeToken(ctx.network.denom)


def fury(artifact: Artifact) -> Token:
    return Token(artifact["furyContractAddress"])


async def check_lp_token_details(ctx: Context, artifact: Artifact):
    lp_token_details = await ctx.deployer.query_contract(artifact["poolLpTokenAddress"], {"token_info": {}})
    logger.info(json.dumps(lp_token_details))
    if lp_token_details["name"] != ctx.network.lp_token_name:
        raise AssertionError(f"expected LP token {ctx.network.lp_token_name!r}, got {lp_token_details['name']!r}")
    return lp_token_details


async def provide_liquidity(ctx: Context, artifact: Artifact):
    proxy = artifact["proxyContractAddress"]
    # the proxy pulls the fury side from the mint wallet
    response = await ctx.deployer.execute_contract(
        artifact["furyContractAddress"], increase_allowance_msg(proxy, PROVIDE_FURY_AMOUNT))
    logger.info(f"Increase allowance response hash = {response.txhash}")
    execute_msg = provide_liquidity_msg(
        assets=[
            asset(native(ctx), PROVIDE_NATIVE_AMOUNT),
            asset(fury(artifact), PROVIDE_FURY_AMOUNT),
        ],
        receiver=artifact["adminWallet"],
    )
    coins = f"{PROVIDE_NATIVE_AMOUNT + transfer_tax(PROVIDE_NATIVE_AMOUNT)}{ctx.network.denom}"
    response = await ctx.deployer.execute_contract(proxy, execute_msg, coins=coins)
    logger.info(f"Provide liquidity response - {response.txhash}")
    return response


async def query_pool(ctx: Context, artifact: Artifact):
    logger.info("querying pool details")
    pool_details = await ctx.deployer.query_contract(artifact["proxyContractAddress"], {"pool": {}})
    logger.info(json.dumps(pool_details))
    return pool_details


async def query_swap_opening_date(ctx: Context, artifact: Artifact):
    opening_date = await ctx.deployer.query_contract(artifact["proxyContractAddress"], {"get_swap_opening_date": {}})
    logger.info(f"swap opening date = {opening_date}")
    return opening_date


async def query_cumulative_prices(ctx: Context, artifact: Artifact):
    prices = await ctx.deployer.query_contract(artifact["proxyContractAddress"], {"cumulative_prices": {}})
    logger.info(json.dumps(prices))
    return prices


async def simulation_offer_native(ctx: Context, artifact: Artifact):
    logger.info("performing simulation for offering native coins")
    result = await ctx.deployer.query_contract(
        artifact["proxyContractAddress"], simulation_query(asset(native(ctx), SIMULATION_OFFER_AMOUNT)))
    logger.info(json.dumps(result))
    return result


async def simulation_offer_fury(ctx: Context, artifact: Artifact):
    logger.info("performing simulation for offering Fury tokens")
    result = await ctx.deployer.query_contract(
        artifact["proxyContractAddress"], simulation_query(asset(fury(artifact), SIMULATION_OFFER_AMOUNT)))
    logger.info(json.dumps(result))
    return result


async def reverse_simulation_ask_native(ctx: Context, artifact: Artifact):
    logger.info("performing reverse simulation asking for native coins")
    result = await ctx.deployer.query_contract(
        artifact["proxyContractAddress"], reverse_simulation_query(asset(native(ctx), SIMULATION_ASK_AMOUNT)))
    logger.info(json.dumps(result))
    return result


async def reverse_simulation_ask_fury(ctx: Context, artifact: Artifact):
    logger.info("performing reverse simulation asking for Fury tokens")
    result = await ctx.deployer.query_contract(
        artifact["proxyContractAddress"], reverse_simulation_query(asset(fury(artifact), SIMULATION_ASK_AMOUNT)))
    logger.info(json.dumps(result))
    return result


async def buy_fury_tokens(ctx: Context, artifact: Artifact):
    execute_msg = swap_msg(sender=ctx.address("mint"), offer_asset=asset(native(ctx), SWAP_AMOUNT))
    coins = f"{SWAP_AMOUNT + transfer_tax(SWAP_AMOUNT)}{ctx.network.denom}"
    response = await ctx.deployer.execute_contract(artifact["proxyContractAddress"], execute_msg, coins=coins)
    logger.info(f"Buy Fury swap response tx hash = {response.txhash}")
    return response


async def sell_fury_tokens(ctx: Context, artifact: Artifact):
    hook_msg = swap_msg(sender=ctx.address("mint"), offer_asset=asset(fury(artifact), SWAP_AMOUNT))
    execute_msg = cw20_send_msg(contract=artifact["proxyContractAddress"], amount=SWAP_AMOUNT, msg=hook_msg)
    response = await ctx.deployer.execute_contract(artifact["furyContractAddress"], execute_msg)
    logger.info(f"Sell Fury swap response tx hash = {response.txhash}")
    return response


OPERATIONS = [
    check_lp_token_details,
    provide_liquidity,
    query_pool,
    query_swap_opening_date,
    query_cumulative_prices,
    simulation_offer_native,
    simulation_offer_fury,
    reverse_simulation_ask_native,
    reverse_simulation_ask_fury,
    buy_fury_tokens,
    sell_fury_tokens,
]


async def run_operations(ctx: Context, artifact: Artifact, operations=OPERATIONS) -> List[str]:
    done = []
    for operation in operations:
        logger.info(f"Running {operation.__name__}")
        await operation(ctx, artifact)
        done.append(operation.__name__)
    logger.info("Finished!")
    return done


###############################################
############# WITHDRAW LIQUIDITY ##############
###############################################

@dataclass
class Withdrawal:
    fury_amount: int
    native_amount: int
    native_tax: int
    lp_share: int
    tx_hashes: List[str]


async def withdraw_liquidity(ctx: Context, artifact: Artifact, wallet_role: str = "treasury",
                             through_proxy: bool = False) -> Withdrawal:
    """Provide a small slice of the pool from `wallet_role`, then withdraw it again.

    The LP tokens minted for the provision are returned half through the pair
    and half through the proxy, each as a cw20 `send` carrying a
    `withdraw_liquidity` hook message.
    """
    wallet = ctx.wallet(wallet_role)
    address = ctx.address(wallet_role)
    pair = artifact["poolPairContractAddress"]
    proxy = artifact["proxyContractAddress"]
    provide_to = proxy if through_proxy else pair
    logger.info(f"Starting withdraw test from {address} using {provide_to}")

    balance = await ctx.deployer.query_contract(artifact["furyContractAddress"], {"balance": {"address": address}})
    logger.info(f"fury balance in wallet = {balance['balance']}")
    balance = await ctx.deployer.query_contract(artifact["poolLpTokenAddress"], {"balance": {"address": address}})
    logger.info(f"lptoken balance in wallet = {balance['balance']}")

    pool = await ctx.deployer.query_contract(proxy, {"pool": {}})
    native_asset, fury_asset = pool_assets(pool)
    fury_reserve = int(fury_asset["amount"])
    native_reserve = int(native_asset["amount"])
    logger.info(f"{ctx.network.denom} {native_reserve}, fury {fury_reserve}, fury price {native_reserve / fury_reserve}")

    for owner in (address, proxy):
        allowances = await ctx.deployer.query_contract(
            artifact["furyContractAddress"], {"all_allowances": {"owner": owner}})
        logger.info(f"allowances of {owner} = {json.dumps(allowances)}")

    fury_amount = ceil_div(fury_reserve, WITHDRAW_POOL_FRACTION)
    native_amount = ceil_div(native_reserve, WITHDRAW_POOL_FRACTION)
    native_tax = transfer_tax(native_amount)
    tx_hashes = []

    response = await ctx.deployer.execute_contract(
        artifact["furyContractAddress"], increase_allowance_msg(provide_to, fury_amount), wallet=wallet)
    logger.info(f"Increase allowance - fury - {fury_amount} response hash = {response.txhash}")
    tx_hashes.append(response.txhash)

    execute_msg = provide_liquidity_msg(
        assets=[
            asset(native(ctx), native_amount),
            asset(fury(artifact), fury_amount),
        ],
        receiver=address,
    )
    funds = native_amount + native_tax if through_proxy else native_amount
    response = await ctx.deployer.execute_contract(
        provide_to, execute_msg, coins=f"{funds}{ctx.network.denom}", wallet=wallet)
    lp_share = int(find_attribute(response, LP_SHARE_EVENT, "share"))
    logger.info(f"lptokens - {lp_share}, provide_liquidity response - {response.txhash}")
    tx_hashes.append(response.txhash)

    via_pair = lp_share // 2
    for contract, amount in ((pair, via_pair), (proxy, lp_share - via_pair)):
        execute_msg = cw20_send_msg(contract=contract, amount=amount, msg=withdraw_liquidity_msg(address, amount))
        response = await ctx.deployer.execute_contract(artifact["poolLpTokenAddress"], execute_msg, wallet=wallet)
        logger.info(f"withdraw {amount} LP tokens via {contract} - {response.txhash}")
        tx_hashes.append(response.txhash)

    return Withdrawal(
        fury_amount=fury_amount,
        native_amount=native_amount,
        native_tax=native_tax,
        lp_share=lp_share,
        tx_hashes=tx_hashes,
    )
