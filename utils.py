import hashlib
import json
from datetime import datetime, timezone
from typing import Any

GENESIS_PREV_HASH = "0"

def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

def canonical_json(payload: Any) -> str:
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)

def compute_hash(index: Any, prev_hash: str, timestamp: str, payload: Any, nonce: int) -> str:
    block = f"{index}{prev_hash}{timestamp}{canonical_json(payload)}{nonce}"
    return hashlib.sha256(block.encode("utf-8")).hexdigest()

def meets_difficulty(block_hash: str, difficulty: int) -> bool:
    return block_hash.startswith("0" * difficulty)

def expected_attempts(difficulty: int) -> int:
    # each hex digit is '0' with probability 1/16
    return 16 ** difficulty
