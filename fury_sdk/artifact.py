"""Deployment artifact persistence.

One JSON document per network, holding everything earlier runs produced
(code ids, contract addresses, completion flags). Steps define the schema
implicitly through the fields they read and write, so nothing is validated
here.
"""
import json
import os
import pathlib
import tempfile
from typing import Iterable, Union

from loguru import logger


class MissingArtifactField(KeyError):
    """Raised when a step reads a field an earlier step has not recorded."""

    def __init__(self, field: str):
        super().__init__(field)
        self.field = field

    def __str__(self):
        return f"deployment artifact has no {self.field!r}, run the step that records it first"


class Artifact(dict):
    """Flat field -> value mapping; indexing a missing field fails fast."""

    def __missing__(self, key):
        raise MissingArtifactField(key)

    def has(self, field: str) -> bool:
        # `0`, `""`, `None` and `False` all mean the step has not completed
        return bool(self.get(field))

    def has_all(self, fields: Iterable[str]) -> bool:
        return all(self.has(field) for field in fields)


class ArtifactStore:
    def __init__(self, directory: Union[str, pathlib.Path] = "artifacts"):
        self.directory = pathlib.Path(directory)

    def path(self, network_id: str) -> pathlib.Path:
        return self.directory / f"{network_id}.json"

    def load(self, network_id: str) -> Artifact:
        path = self.path(network_id)
        try:
            with open(path) as f:
                return Artifact(json.load(f))
        except FileNotFoundError:
            logger.debug(f"no artifact at {path}, starting empty")
            return Artifact()

    def save(self, artifact: dict, network_id: str) -> None:
        path = self.path(network_id)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{network_id}.", suffix=".json")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(artifact, f, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            os.unlink(tmp_path)
            raise
        logger.debug(f"artifact saved to {path}")
