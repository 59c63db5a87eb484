from dataclasses import dataclass
from typing import Dict

from fury_sdk.artifact import Artifact, ArtifactStore
from fury_sdk.config import NetworkConfig
from fury_sdk.prompt import Prompter


@dataclass
class Context:
    """Everything a deployment step or operation needs, passed explicitly."""

    deployer: object
    network: NetworkConfig
    store: ArtifactStore
    prompter: Prompter
    wallets: Dict[str, object]

    def wallet(self, role: str):
        return self.wallets[role]

    def address(self, role: str) -> str:
        return self.wallets[role].key.acc_address

    def save(self, artifact: Artifact) -> None:
        self.store.save(artifact, self.network.chain_id)
