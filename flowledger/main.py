import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from flowledger import models
from flowledger.config import LOG_LEVEL, SEED_DEMO_DATA
from flowledger.database import engine, SessionLocal

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables
    models.Base.metadata.create_all(bind=engine)
    # Seed a demo transaction graph if empty
    if SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            count = db.query(models.Transaction).count()
            if count == 0:
                import subprocess
                import sys
                logger.info("Ledger is empty, seeding demo transactions")
                subprocess.run([sys.executable, "scripts/generate_test_data.py"], check=False)
        finally:
            db.close()
    yield


app = FastAPI(
    title="Flow Ledger API",
    description="Labeled transaction ledger with per-party indexing, flagging and bounded flow tracing",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "flowledger-api"}


from flowledger.routers import transactions, bulk, parties, compliance  # noqa: E402
app.include_router(bulk.router, prefix="/api/v1/transactions", tags=["bulk"])
app.include_router(transactions.router, prefix="/api/v1/transactions", tags=["transactions"])
app.include_router(parties.router, prefix="/api/v1/parties", tags=["parties"])
app.include_router(compliance.router, prefix="/api/v1/compliance", tags=["compliance"])
