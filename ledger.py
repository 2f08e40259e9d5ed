"""
ledger.py - append-only, hash-chained ledger of observation blocks.
"""
import logging
from threading import Lock
from typing import List, Optional

from models import Block, SealingError
from schemas import GenesisPayload, ObservationRecord, VerificationReport
from utils import GENESIS_PREV_HASH, utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = 2

class Ledger:
    """
    Owns the block sequence. `append` is the only mutation and runs under a
    lock for its whole duration (read tail, mine, push), so two appends never
    extend the same predecessor. Readers work on a snapshot of the list.
    """

    def __init__(self, difficulty: int = DEFAULT_DIFFICULTY, max_attempts: Optional[int] = None) -> None:
        if difficulty < 1:
            raise ValueError("difficulty must be a positive integer")
        self.difficulty = difficulty
        self.max_attempts = max_attempts
        self.lock = Lock()
        self._chain: List[Block] = [self.genesis()]
        logger.info("ledger created (difficulty=%d, genesis=%s)", difficulty, self._chain[0].hash[:12])

    @staticmethod
    def genesis() -> Block:
        # exempt from proof-of-work
        block = Block(0, utc_now_iso(), GenesisPayload(), GENESIS_PREV_HASH)
        block.hash = block.compute_hash()
        block.sealed = True
        return block

    def __len__(self) -> int:
        return len(self._chain)

    def blocks(self) -> List[Block]:
        with self.lock:
            return list(self._chain)

    def latest_block(self) -> Block:
        with self.lock:
            return self._chain[-1]

    def append(self, block: Block) -> Block:
        with self.lock:
            if block.sealed:
                raise ValueError("block is already sealed")
            tail = self._chain[-1]
            block.previous_hash = tail.hash
            block.index = tail.index + 1
            try:
                block.mine(self.difficulty, self.max_attempts)
            except SealingError:
                logger.error("could not seal block %d on top of %s", block.index, tail.hash[:12])
                raise
            block.sealed = True
            self._chain.append(block)
        logger.info("sealed block %d nonce=%d hash=%s", block.index, block.nonce, block.hash[:12])
        return block

    def verify_report(self, chain: Optional[List[Block]] = None) -> VerificationReport:
        # pass a snapshot from `blocks()` to verify exactly what is returned
        if chain is None:
            chain = self.blocks()
        for i in range(1, len(chain)):
            prev, curr = chain[i - 1], chain[i]
            reason = None
            if curr.hash != curr.compute_hash():
                reason = "hash mismatch"
            elif curr.previous_hash != prev.hash:
                reason = "broken link to previous block"
            if reason:
                logger.warning("ledger verification failed at block %d: %s", i, reason)
                return VerificationReport(valid=False, checked=i, first_invalid_index=i, reason=reason)
        return VerificationReport(valid=True, checked=len(chain) - 1)

    def verify(self, chain: Optional[List[Block]] = None) -> bool:
        return self.verify_report(chain).valid

    def find_by_product(self, product_id: str) -> List[ObservationRecord]:
        return [
            b.data for b in self.blocks()[1:]
            if isinstance(b.data, ObservationRecord) and b.data.product_id == product_id
        ]
