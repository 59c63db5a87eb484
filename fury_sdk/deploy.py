import asyncio
from typing import Dict, Optional

from loguru import logger
from terra_sdk.client.lcd import AsyncLCDClient
from terra_sdk.client.lcd.api.tx import CreateTxOptions
from terra_sdk.core.bank import MsgSend
from terra_sdk.core.coins import Coins
from terra_sdk.core.fee import Fee
from terra_sdk.core.wasm import MsgStoreCode, MsgInstantiateContract, MsgExecuteContract
from terra_sdk.key.mnemonic import MnemonicKey
from terra_sdk.util.contract import read_file_as_b64, get_code_id

from fury_sdk.config import NetworkConfig, get_gas_prices


class TxFailed(Exception):
    def __init__(self, result):
        self.result = result
        super().__init__(f"tx {result.txhash} failed with code {result.code}: {result.raw_log}")


class Deployer:
    """Signs, broadcasts and queries on behalf of one default wallet.

    Every operation accepts an optional `wallet` so the same client can sign
    for the treasury or reward wallets when an operation needs them.
    """

    def __init__(self, client: AsyncLCDClient, wallet, fee: Optional[Fee] = None, denom: str = "uusd", label: str = "fury"):
        self.client = client
        self.wallet = wallet
        self.fee = fee
        self.denom = denom
        self.label = label

    def _tx_options(self, msgs) -> CreateTxOptions:
        if self.fee:
            return CreateTxOptions(msgs=msgs, fee=self.fee)
        return CreateTxOptions(msgs=msgs, fee_denoms=[self.denom])

    async def send_msg(self, msg, wallet=None):
        wallet = wallet or self.wallet
        tx = await wallet.create_and_sign_tx(self._tx_options([msg]))
        result = await self.client.tx.broadcast(tx)
        if getattr(result, "code", 0):
            raise TxFailed(result)
        return result

    async def store_contract(self, contract_path: str, wallet=None) -> int:
        wallet = wallet or self.wallet
        wasm_byte_code = read_file_as_b64(contract_path)
        msg = MsgStoreCode(sender=wallet.key.acc_address, wasm_byte_code=wasm_byte_code)
        result = await self.send_msg(msg, wallet)
        return int(get_code_id(result))

    async def instantiate_contract(self, code_id: int, init_msg: dict, wallet=None):
        wallet = wallet or self.wallet
        msg = MsgInstantiateContract(
            sender=wallet.key.acc_address,
            admin=wallet.key.acc_address,
            code_id=int(code_id),
            label=self.label,
            msg=init_msg,
        )
        return await self.send_msg(msg, wallet)

    async def execute_contract(self, contract_addr: str, execute_msg: dict, coins=None, wallet=None):
        wallet = wallet or self.wallet
        msg = MsgExecuteContract(
            sender=wallet.key.acc_address,
            contract=contract_addr,
            msg=execute_msg,
            coins=Coins(coins) if coins else Coins(),
        )
        return await self.send_msg(msg, wallet)

    async def query_contract(self, contract_addr: str, query_msg: dict):
        return await self.client.wasm.contract_query(contract_addr, query_msg)

    async def send_funds(self, to_address: str, coins, wallet=None):
        wallet = wallet or self.wallet
        msg = MsgSend(from_address=wallet.key.acc_address, to_address=to_address, amount=Coins(coins))
        return await self.send_msg(msg, wallet)

    async def close(self):
        await self.client.session.close()


def get_wallets(client: AsyncLCDClient, network: NetworkConfig) -> Dict[str, object]:
    wallets = {
        role: client.wallet(MnemonicKey(mnemonic=mnemonic))
        for role, mnemonic in network.wallet_mnemonics.items()
    }
    if network.funder_mnemonic:
        wallets["funder"] = client.wallet(MnemonicKey(mnemonic=network.funder_mnemonic))
    return wallets


async def get_deployer(network: NetworkConfig):
    """Build the client, the role wallets and a Deployer signing with the mint wallet."""
    gas_prices = None
    if network.fcd_url:
        gas_prices = await asyncio.to_thread(get_gas_prices, network.fcd_url)
    client = AsyncLCDClient(url=network.lcd_url, chain_id=network.chain_id, gas_prices=gas_prices)
    wallets = get_wallets(client, network)
    fee = Fee(network.fee_gas, network.fee_amount) if network.fee_gas else None
    deployer = Deployer(client=client, wallet=wallets["mint"], fee=fee, denom=network.denom, label=network.label)
    logger.info(f"Connected to {network.chain_id} at {network.lcd_url}, mint wallet {wallets['mint'].key.acc_address}")
    return deployer, wallets
