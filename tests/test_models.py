"""Tests for block hashing and proof-of-work sealing."""

import pytest

from models import Block, SealingError
from risk import assess
from schemas import GenesisPayload, ObservationRecord, SensorReading
from utils import canonical_json, compute_hash, expected_attempts


def make_record(product_id="P1") -> ObservationRecord:
    sensor = SensorReading(temp=10, humidity=80, ph=6.8, bacterial_count=1000)
    return ObservationRecord(
        product_id=product_id,
        timestamp="2025-01-01T00:00:00+00:00",
        sensor=sensor,
        location={"site": "Cold Room #1"},
        prediction=assess(sensor),
    )


def test_canonical_json_is_key_order_independent():
    assert canonical_json({"b": 1, "a": 2}) == canonical_json({"a": 2, "b": 1}) == '{"a":2,"b":1}'


def test_new_block_is_unsealed_with_provisional_hash():
    """Construction sets nonce 0 and a hash of the current fields."""
    block = Block(1, "2025-01-01T00:00:00+00:00", make_record(), "abc")
    assert block.nonce == 0
    assert not block.sealed
    assert len(block.hash) == 64
    assert block.hash == compute_hash(1, "abc", block.timestamp, block.payload(), 0)


def test_hash_is_deterministic():
    block = Block(3, "t", make_record(), "prev")
    assert block.compute_hash() == block.compute_hash() == block.hash


def test_hash_covers_every_field():
    """Changing any hashed field changes the hash."""
    block = Block(1, "t", make_record(), "prev")
    original = block.hash

    block.nonce = 7
    assert block.compute_hash() != original
    block.nonce = 0

    block.previous_hash = "other"
    assert block.compute_hash() != original
    block.previous_hash = "prev"

    block.data = make_record("P2")
    assert block.compute_hash() != original


@pytest.mark.parametrize("difficulty", [1, 2, 3])
def test_mine_meets_difficulty(difficulty):
    """Mined hashes start with the required zeros and recompute to themselves."""
    block = Block(1, "t", make_record(), "prev")
    block.mine(difficulty)
    assert block.hash.startswith("0" * difficulty)
    assert block.hash == block.compute_hash()


def test_mine_with_ceiling_raises():
    """A mining ceiling surfaces as SealingError."""
    block = Block(1, "t", make_record(), "prev")
    with pytest.raises(SealingError):
        block.mine(12, max_attempts=5)


def test_expected_attempts():
    assert expected_attempts(2) == 256


def test_to_dict_wire_format():
    block = Block(1, "t", make_record(), "prev")
    d = block.to_dict()
    assert set(d) == {"index", "timestamp", "data", "previousHash", "nonce", "hash"}
    assert d["data"]["productId"] == "P1"
    assert set(d["data"]["sensor"]) == {"temp", "humidity", "pH", "bacterialCount"}
    assert set(d["data"]["prediction"]) == {"score", "category", "reasons", "raw"}


def test_genesis_payload_is_tagged():
    assert Block(0, "t", GenesisPayload(), "0").is_genesis
    assert not Block(1, "t", make_record(), "0").is_genesis
