from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from policyfund import config
from policyfund.routes import router as policy_fund_router, get_engine

logging.basicConfig(level=config.LOG_LEVEL)
logging.info("App starting")

app = FastAPI(title="Policy Fund Matching API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(policy_fund_router)

# Build the engine now so an invalid catalog or scoring table fails boot
get_engine()


@app.get("/", tags=["meta"])
def root():
    return {"service": "policy-fund-matching", "docs": "/docs"}
