import os
from dataclasses import dataclass

@dataclass
class Settings:
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    DEBTS_COLLECTION: str = os.getenv("DEBTS_COLLECTION", "debts")
    # safety bounds for the payoff simulator
    SIM_MAX_MONTHS: int = int(os.getenv("SIM_MAX_MONTHS", "600"))
    SIM_DIVERGENCE_FACTOR: float = float(os.getenv("SIM_DIVERGENCE_FACTOR", "10"))
    API_BASE: str = os.getenv("API_BASE", "http://localhost:5002")
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    PORT: int = int(os.getenv("PORT", "5002"))

settings = Settings()
