"""Resumable deployment of the Fury token, astroport contracts and proxy.

Each step records its results in the deployment artifact right after the
chain accepts the transaction, and is skipped on later runs once all of its
fields are set. Steps read the fields of earlier steps by indexing the
artifact, so running one out of order raises `MissingArtifactField`.
"""
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from loguru import logger

from fury_sdk import config
from fury_sdk.artifact import Artifact
from fury_sdk.context import Context
from fury_sdk.events import extract_address_by_role, find_attribute, get_events
from fury_sdk.messages import (
    NativeToken, Token, configure_msg, create_pair_msg, factory_init_msg, mint_init_msg,
    proxy_init_msg, staking_init_msg,
)
from fury_sdk.prompt import is_no, is_yes

PAIR_CREATED_EVENT = "from_contract"

Action = Callable[[Context, Artifact], Awaitable[Optional[Dict[str, object]]]]
FollowUp = Callable[[Context, Artifact], Awaitable[None]]


class Step:
    def __init__(self, name: str, produces: Sequence[str], action: Action, then: Optional[FollowUp] = None):
        self.name = name
        self.produces = tuple(produces)
        self.action = action
        self.then = then

    def is_complete(self, artifact: Artifact) -> bool:
        return artifact.has_all(self.produces)

    async def __call__(self, ctx: Context, artifact: Artifact) -> bool:
        """Run the step unless it already completed; True if anything was recorded."""
        if self.is_complete(artifact):
            logger.debug(f"{self.name}: already done, skipping")
            return False
        fields = await self.action(ctx, artifact)
        if not fields:
            logger.info(f"{self.name}: nothing recorded")
            return False
        artifact.update(fields)
        ctx.save(artifact)
        logger.info(f"{self.name}: recorded {fields}")
        if self.then is not None:
            await self.then(ctx, artifact)
        return True

    def __repr__(self):
        return f"Step({self.name!r}, produces={self.produces})"


async def upload(ctx: Context, contract_path: str) -> int:
    code_id = await ctx.deployer.store_contract(contract_path)
    logger.info(f"Uploaded {contract_path}, code id {code_id}")
    return code_id


async def instantiate(ctx: Context, code_id: int, init_msg: dict) -> List[dict]:
    result = await ctx.deployer.instantiate_contract(code_id, init_msg)
    return get_events(result)


async def prime_accounts_with_funds(ctx: Context) -> None:
    if "funder" not in ctx.wallets:
        logger.warning(f"No funder wallet configured for {ctx.network.chain_id}, not priming accounts")
        return
    coins = f"{ctx.network.prime_amount}{ctx.network.denom}"
    for role in ctx.network.wallet_mnemonics:
        result = await ctx.deployer.send_funds(ctx.address(role), coins, wallet=ctx.wallet("funder"))
        logger.info(f"Sent {coins} to {role} wallet {ctx.address(role)}: {result.txhash}")


###############################################
################ DEPLOY STEPS #################
###############################################

async def set_admin_wallet(ctx, artifact):
    return {"adminWallet": ctx.address("mint")}


async def upload_fury_token(ctx, artifact):
    answer = await ctx.prompter.ask("upload_fury_token", 'Do you want to upload Fury Token Contract? (y/N) ')
    if is_no(answer):
        code_id = await ctx.prompter.ask("fury_token_code_id", 'Please provide code id for Fury Token contract: ')
        if code_id.isdigit():
            return {"furyTokenCodeId": int(code_id)}
    elif not is_yes(answer):
        logger.info("Alright! Have fun!! :-)")
        return None
    return {"furyTokenCodeId": await upload(ctx, config.MINTING_CONTRACT_PATH)}


async def instantiate_fury_token(ctx, artifact):
    answer = await ctx.prompter.ask("instantiate_fury_token", 'Do you want to instantiate Fury Token Contract? (y/N) ')
    if is_no(answer):
        address = await ctx.prompter.ask("fury_contract_address", 'Please provide contract address for Fury Token contract: ')
        return {"furyContractAddress": address} if address else None
    if not is_yes(answer):
        return None
    deployer_address = ctx.address("funder") if "funder" in ctx.wallets else ctx.address("mint")
    init_msg = mint_init_msg(minter=ctx.address("mint"), deployer=deployer_address, network=ctx.network)
    events = await instantiate(ctx, artifact["furyTokenCodeId"], init_msg)
    return {"furyContractAddress": extract_address_by_role(events)}


async def upload_pair(ctx, artifact):
    return {"pairCodeId": await upload(ctx, config.PAIR_CONTRACT_PATH)}


async def upload_staking(ctx, artifact):
    return {"stakingCodeId": await upload(ctx, config.STAKING_CONTRACT_PATH)}


async def instantiate_staking(ctx, artifact):
    init_msg = staking_init_msg(
        owner=artifact["adminWallet"],
        token_code_id=artifact["furyTokenCodeId"],
        deposit_token_addr=artifact["furyContractAddress"],
    )
    events = await instantiate(ctx, artifact["stakingCodeId"], init_msg)
    # staking first, then the xASTRO token it instantiates
    return {
        "stakingAddress": extract_address_by_role(events, occurrence=0),
        "xastroAddress": extract_address_by_role(events, occurrence=1),
    }


async def upload_whitelist(ctx, artifact):
    return {"whitelistCodeId": await upload(ctx, config.WHITELIST_CONTRACT_PATH)}


async def upload_factory(ctx, artifact):
    return {"factoryCodeId": await upload(ctx, config.FACTORY_CONTRACT_PATH)}


async def instantiate_factory(ctx, artifact):
    init_msg = factory_init_msg(
        owner=artifact["adminWallet"],
        pair_code_id=artifact["pairCodeId"],
        token_code_id=artifact["furyTokenCodeId"],
        whitelist_code_id=artifact["whitelistCodeId"],
    )
    events = await instantiate(ctx, artifact["factoryCodeId"], init_msg)
    return {"factoryAddress": extract_address_by_role(events)}


async def upload_proxy(ctx, artifact):
    return {"proxyCodeId": await upload(ctx, config.PROXY_CONTRACT_PATH)}


async def instantiate_proxy(ctx, artifact):
    init_msg = proxy_init_msg(
        custom_token_address=artifact["furyContractAddress"],
        authorized_liquidity_provider=artifact["adminWallet"],
        pair_fury_reward_wallet=ctx.address("liquidity_reward"),
        native_investment_reward_wallet=ctx.address("bonded_reward"),
        lp_tokens_holder=ctx.address("treasury"),
    )
    events = await instantiate(ctx, artifact["proxyCodeId"], init_msg)
    return {"proxyContractAddress": extract_address_by_role(events)}


async def create_pool_pair(ctx, artifact):
    execute_msg = create_pair_msg(
        asset_infos=[
            Token(artifact["furyContractAddress"]).info(),
            NativeToken(ctx.network.denom).info(),
        ],
        init_params={"proxy": artifact["proxyContractAddress"]},
    )
    response = await ctx.deployer.execute_contract(artifact["factoryAddress"], execute_msg)
    pair_address = find_attribute(response, PAIR_CREATED_EVENT, "pair_contract_addr")
    pair_info = await ctx.deployer.query_contract(pair_address, {"pair": {}})
    logger.info(f"Pair successfully created! Address: {pair_address}")
    return {
        "poolPairContractAddress": pair_address,
        "poolLpTokenAddress": pair_info["liquidity_token"],
    }


async def configure_proxy(ctx, artifact):
    execute_msg = configure_msg(
        pool_pair_address=artifact["poolPairContractAddress"],
        liquidity_token=artifact["poolLpTokenAddress"],
        swap_opening_date=config.CONFIGURED_SWAP_OPENING_DATE,
    )
    response = await ctx.deployer.execute_contract(artifact["proxyContractAddress"], execute_msg)
    logger.info(f"Proxy configured - {response.txhash}")


async def save_pair_address_to_proxy(ctx, artifact):
    configuration = await ctx.deployer.query_contract(artifact["proxyContractAddress"], {"configuration": {}})
    configuration["pool_pair_address"] = artifact["poolPairContractAddress"]
    logger.info(f"Configuration = {configuration}")
    response = await ctx.deployer.execute_contract(artifact["proxyContractAddress"], {"configure": configuration})
    logger.info(f"Save Response - {response.txhash}")
    return {"poolpairSavedToProxy": True}


DEPLOYMENT_STEPS = [
    Step("admin wallet", ["adminWallet"], set_admin_wallet),
    Step("upload fury token", ["furyTokenCodeId"], upload_fury_token),
    Step("instantiate fury token", ["furyContractAddress"], instantiate_fury_token),
    Step("upload pair", ["pairCodeId"], upload_pair),
    Step("upload staking", ["stakingCodeId"], upload_staking),
    Step("instantiate staking", ["stakingAddress", "xastroAddress"], instantiate_staking),
    Step("upload whitelist", ["whitelistCodeId"], upload_whitelist),
    Step("upload factory", ["factoryCodeId"], upload_factory),
    Step("instantiate factory", ["factoryAddress"], instantiate_factory),
    Step("upload proxy", ["proxyCodeId"], upload_proxy),
    Step("instantiate proxy", ["proxyContractAddress"], instantiate_proxy),
    Step("create pool pair", ["poolPairContractAddress", "poolLpTokenAddress"], create_pool_pair, then=configure_proxy),
    Step("save pair to proxy", ["poolpairSavedToProxy"], save_pair_address_to_proxy),
]


async def run_pipeline(ctx: Context, artifact: Artifact, steps: Sequence[Step] = DEPLOYMENT_STEPS) -> List[str]:
    """Run `steps` in order; returns the names of the steps that recorded something."""
    performed = []
    for step in steps:
        if await step(ctx, artifact):
            performed.append(step.name)
    return performed
