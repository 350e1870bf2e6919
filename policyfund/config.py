import os
from dotenv import load_dotenv

load_dotenv()

MAX_MATCHED = int(os.getenv("POLICY_FUND_MAX_MATCHED", "5"))

# Optional JSON files replacing the built-in catalog / scoring table
CATALOG_PATH = os.getenv("POLICY_FUND_CATALOG_PATH")
SCORING_TABLE_PATH = os.getenv("POLICY_FUND_SCORING_TABLE")

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
AI_MODEL = os.getenv("POLICY_FUND_AI_MODEL", "gpt-4o-mini")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
