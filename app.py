import os
import io
import sys
import logging

from fastapi import FastAPI, HTTPException, Depends, Response
from fastapi.middleware.cors import CORSMiddleware

import qrcode

from ledger import Ledger, DEFAULT_DIFFICULTY
from ingest import MissingFieldError, record_observation
from schemas import (
    BlockSummary, ChainResponse, ObservationIn, ProductRecords, SubmitResponse,
    ValidateResponse, VerificationReport,
)

# ---------- Config ----------
BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")
LEDGER_DIFFICULTY = int(os.getenv("LEDGER_DIFFICULTY", str(DEFAULT_DIFFICULTY)))
MINING_MAX_ATTEMPTS = int(os.getenv("MINING_MAX_ATTEMPTS", "0")) or None
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "8000"))

logging.basicConfig(
    level=LOG_LEVEL,
    format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Food Chain Ledger", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- Ledger ----------
# one ledger for the process lifetime, not persisted
food_chain = Ledger(difficulty=LEDGER_DIFFICULTY, max_attempts=MINING_MAX_ATTEMPTS)

def get_ledger() -> Ledger:
    return food_chain

# ---------- APIs ----------
@app.get("/")
def root():
    return {"ok": True, "info": "Food chain ledger: contamination risk scoring + local blockchain"}

@app.post("/api/data", response_model=SubmitResponse)
def submit_observation(body: ObservationIn, ledger: Ledger = Depends(get_ledger)):
    try:
        block, prediction = record_observation(ledger, body)
    except MissingFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("failed to record observation for product %s", body.product_id)
        raise HTTPException(status_code=500, detail="server error")
    return SubmitResponse(
        message="Data recorded and secured on blockchain",
        block=BlockSummary(
            index=block.index,
            hash=block.hash,
            previous_hash=block.previous_hash,
            timestamp=block.timestamp,
        ),
        prediction=prediction,
    )

@app.get("/api/chain", response_model=ChainResponse)
def get_chain(ledger: Ledger = Depends(get_ledger)):
    blocks = ledger.blocks()
    chain = [b.to_dict() for b in blocks]
    return ChainResponse(length=len(chain), valid=ledger.verify(blocks), chain=chain)

@app.get("/api/validate", response_model=ValidateResponse)
def validate_chain(ledger: Ledger = Depends(get_ledger)):
    return ValidateResponse(valid=ledger.verify())

@app.get("/api/validate/report", response_model=VerificationReport)
def validate_report(ledger: Ledger = Depends(get_ledger)):
    return ledger.verify_report()

@app.get("/api/products/{product_id}", response_model=ProductRecords)
def product_records(product_id: str, ledger: Ledger = Depends(get_ledger)):
    records = ledger.find_by_product(product_id)
    return ProductRecords(product_id=product_id, count=len(records), records=records)

@app.get("/api/products/{product_id}/qrcode")
def product_qrcode(product_id: str):
    url = f"{BASE_URL}/api/products/{product_id}"
    img = qrcode.make(url)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return Response(content=buf.getvalue(), media_type="image/png")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
