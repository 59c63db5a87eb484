import asyncio
import json
import os
import sys

from aiohttp import ClientConnectorError
from loguru import logger
from terra_sdk.exceptions import LCDResponseError

from fury_sdk import config
from fury_sdk.artifact import Artifact, ArtifactStore, MissingArtifactField
from fury_sdk.context import Context
from fury_sdk.deploy import TxFailed, get_deployer
from fury_sdk.operations import run_operations, withdraw_liquidity
from fury_sdk.pipeline import prime_accounts_with_funds, run_pipeline
from fury_sdk.prompt import Prompter, is_yes

ABORTING_ERRORS = (LCDResponseError, ClientConnectorError, TxFailed, MissingArtifactField)


def get_network() -> config.NetworkConfig:
    return config.get_config(os.environ.get("FURY_NETWORK", "localterra"))


async def deploy(network: config.NetworkConfig, prompter: Prompter) -> Artifact:
    deployer, wallets = await get_deployer(network)
    ctx = Context(deployer=deployer, network=network, store=ArtifactStore(config.ARTIFACTS_DIR),
                  prompter=prompter, wallets=wallets)
    try:
        artifact = ctx.store.load(network.chain_id)
        if is_yes(await prompter.ask("prime_accounts", 'Do you want to preload custom accounts? (y/N) ')):
            await prime_accounts_with_funds(ctx)
        if is_yes(await prompter.ask("start_fresh", 'Do you want to upload and deploy fresh? (y/N) ')):
            artifact = Artifact()
        await run_pipeline(ctx, artifact)
        logger.info("deploymentDetails = " + json.dumps(artifact, indent=1))
        await run_operations(ctx, artifact)
        return artifact
    finally:
        await deployer.close()


async def withdraw(network: config.NetworkConfig):
    deployer, wallets = await get_deployer(network)
    ctx = Context(deployer=deployer, network=network, store=ArtifactStore(config.ARTIFACTS_DIR),
                  prompter=Prompter(), wallets=wallets)
    try:
        artifact = ctx.store.load(network.chain_id)
        logger.info("deploymentDetails = " + json.dumps(artifact, indent=1))
        return await withdraw_liquidity(ctx, artifact)
    finally:
        await deployer.close()


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except ABORTING_ERRORS:
        logger.exception("Aborted, rerun to resume from the last recorded step")
        sys.exit(1)


def main():
    _run(deploy(get_network(), Prompter()))


def withdraw_main():
    _run(withdraw(get_network()))


if __name__ == "__main__":
    main()
