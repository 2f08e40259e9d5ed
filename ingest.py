import logging
from typing import Tuple

from ledger import Ledger
from models import Block
from risk import assess
from schemas import ObservationIn, ObservationRecord, RiskAssessment, SensorReading
from utils import utc_now_iso

logger = logging.getLogger(__name__)

# python attribute -> wire name
REQUIRED_FIELDS = {
    "product_id": "productId",
    "temp": "temp",
    "humidity": "humidity",
    "ph": "pH",
    "bacterial_count": "bacterialCount",
    "location": "location",
}

class MissingFieldError(ValueError):
    def __init__(self, field: str):
        super().__init__(f"missing field {field}")
        self.field = field

def check_required(body: ObservationIn) -> None:
    for attr, name in REQUIRED_FIELDS.items():
        if attr not in body.model_fields_set:
            raise MissingFieldError(name)

def record_observation(ledger: Ledger, body: ObservationIn) -> Tuple[Block, RiskAssessment]:
    check_required(body)
    reading = SensorReading(
        temp=body.temp,
        humidity=body.humidity,
        ph=body.ph,
        bacterial_count=body.bacterial_count,
    )
    prediction = assess(reading)
    record = ObservationRecord(
        product_id=body.product_id,
        timestamp=utc_now_iso(),
        sensor=reading,
        location=body.location,
        prediction=prediction,
        notes=body.notes or "",
    )
    block = ledger.append(Block(None, utc_now_iso(), record))
    logger.info("recorded %s for product %s in block %d", prediction.category, record.product_id, block.index)
    return block, prediction
