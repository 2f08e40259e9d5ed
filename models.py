import logging
from typing import Any, Dict, Optional, Union

from schemas import GenesisPayload, ObservationRecord
from utils import compute_hash, meets_difficulty

logger = logging.getLogger(__name__)

BlockData = Union[GenesisPayload, ObservationRecord]

class SealingError(RuntimeError):
    pass

class Block:
    """
    One ledger entry. Constructed unsealed with nonce 0 and a provisional
    hash; `mine` searches nonces until the hash meets the difficulty.
    """

    def __init__(self, index: Optional[int], timestamp: str, data: BlockData, previous_hash: str = ""):
        self.index = index
        self.timestamp = timestamp
        self.data = data
        self.previous_hash = previous_hash
        self.nonce = 0
        self.sealed = False
        self.hash = self.compute_hash()

    @property
    def is_genesis(self) -> bool:
        return isinstance(self.data, GenesisPayload)

    def payload(self) -> Dict[str, Any]:
        return self.data.model_dump(by_alias=True)

    def compute_hash(self) -> str:
        return compute_hash(self.index, self.previous_hash, self.timestamp, self.payload(), self.nonce)

    def mine(self, difficulty: int, max_attempts: Optional[int] = None) -> str:
        # expected attempts: 16 ** difficulty
        self.hash = self.compute_hash()
        attempts = 0
        while not meets_difficulty(self.hash, difficulty):
            if max_attempts is not None and attempts >= max_attempts:
                raise SealingError(f"failed to seal block after {attempts} attempts")
            self.nonce += 1
            self.hash = self.compute_hash()
            attempts += 1
        logger.debug("mined block %s in %d attempts", self.index, attempts)
        return self.hash

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "timestamp": self.timestamp,
            "data": self.payload(),
            "previousHash": self.previous_hash,
            "nonce": self.nonce,
            "hash": self.hash,
        }

    def __repr__(self):
        return f"Block(index={self.index}, nonce={self.nonce}, hash={self.hash[:12]})"
