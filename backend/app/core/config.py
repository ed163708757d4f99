import os
from dotenv import load_dotenv

load_dotenv()

API_NAME = os.getenv("API_NAME", "Savings Planner API")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("API_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# trailing months of transactions behind every spending pattern
ANALYSIS_WINDOW_MONTHS = int(os.getenv("ANALYSIS_WINDOW_MONTHS", "6"))

# optional JSON seed for the in-memory store (see app.db.seed)
DATA_FILE = os.getenv("DATA_FILE") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
