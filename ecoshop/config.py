from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent / "data"


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "ecoshop-secret-change-in-production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    catalog_csv: Path = Path(os.getenv("CATALOG_CSV", str(_DATA_DIR / "products.csv")))
    recommendation_limit: int = int(os.getenv("RECOMMENDATION_LIMIT", "10"))
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    default_currency: str = os.getenv("DEFAULT_CURRENCY", "INR")
    payment_key_id: str = os.getenv("PAYMENT_KEY_ID", "rzp_test_ecoshop")
    payment_key_secret: str = os.getenv("PAYMENT_KEY_SECRET", "ecoshop-payment-secret")


DEFAULT_APP_CONFIG = AppConfig()
