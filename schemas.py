from enum import Enum
from typing import Optional, Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, field_validator

class RiskCategory(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

class SensorReading(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temp: float
    humidity: float
    ph: float = Field(..., alias="pH")
    bacterial_count: float = Field(..., alias="bacterialCount")

class RiskAssessment(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    score: float
    category: RiskCategory
    reasons: List[str] = Field(default_factory=list, max_length=2)
    raw: Dict[str, float]

class GenesisPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    info: str = "genesis"

class ObservationRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    timestamp: str
    sensor: SensorReading
    location: Any
    prediction: RiskAssessment
    notes: str = ""

# incoming body; presence of required fields is checked in ingest.
# defaults are unvalidated, so only an explicit null fails on typed fields
class ObservationIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(None, alias="productId")
    temp: FiniteFloat = None
    humidity: FiniteFloat = None
    ph: FiniteFloat = Field(None, alias="pH")
    bacterial_count: FiniteFloat = Field(None, alias="bacterialCount")
    location: Any = None
    notes: Optional[str] = None

    @field_validator("product_id", mode="before")
    @classmethod
    def _coerce_product_id(cls, v):
        return None if v is None else str(v)

    # falsy notes become "", anything else its string form
    @field_validator("notes", mode="before")
    @classmethod
    def _coerce_notes(cls, v):
        return str(v) if v else None

class BlockSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: int
    hash: str
    previous_hash: str = Field(..., alias="previousHash")
    timestamp: str

class SubmitResponse(BaseModel):
    message: str
    block: BlockSummary
    prediction: RiskAssessment

class ChainResponse(BaseModel):
    length: int
    valid: bool
    chain: List[Dict[str, Any]]

class ValidateResponse(BaseModel):
    valid: bool

class VerificationReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    checked: int
    first_invalid_index: Optional[int] = Field(None, alias="firstInvalidIndex")
    reason: Optional[str] = None

class ProductRecords(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    count: int
    records: List[ObservationRecord]
