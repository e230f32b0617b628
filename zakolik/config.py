"""Configuration utilities.

Central place to load environment driven settings (default tier, trip defaults, output paths).
Avoids scattering os.getenv calls around the codebase.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()


@dataclass(slots=True)
class Settings:
    default_tier: str = os.getenv("ZAKOLIK_TIER", "Basic")
    default_km: float = float(os.getenv("ZAKOLIK_KM", "10"))
    output_html: Path = Path(os.getenv("ZAKOLIK_OUTPUT_HTML", "quote.html"))
    log_level: str = os.getenv("ZAKOLIK_LOG_LEVEL", "INFO")


settings = Settings()
