"""Application configuration loaded from environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    """Centralized application settings."""

    # Server
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "8080"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Income years
    SUPPORTED_INCOME_YEARS: tuple[str, ...] = ("2023-2024", "2024-2025", "2025-2026")
    DEFAULT_INCOME_YEAR: str = os.getenv("DEFAULT_INCOME_YEAR", "2025-2026")
    FALLBACK_INCOME_YEAR: str = os.getenv("FALLBACK_INCOME_YEAR", "2024-2025")

    # Presentation
    CURRENCY_CODE: str = os.getenv("CURRENCY_CODE", "BDT")

    # Input limits
    MAX_AMOUNT: float = float(os.getenv("MAX_AMOUNT", "1e12"))   # any single amount < ৳1 lakh crore

    # Statutory constants (Finance Act)
    STANDARD_EXEMPTION_DIVISOR: int = 3         # 1/3 of total income
    MINIMUM_TAX_AMOUNT: float = 5_000.0         # ৳5,000
    INVESTMENT_REBATE_RATE: float = 0.15        # 15% of eligible investment
    MAX_INVESTMENT_PERCENT: float = 0.20        # 20% of taxable income
    MAX_INVESTMENT_ABSOLUTE: float = 10_000_000.0  # ৳1 crore

    # Effective-rate curve
    CURVE_MIN_INCOME: int = int(os.getenv("CURVE_MIN_INCOME", "350000"))
    CURVE_MAX_INCOME: int = int(os.getenv("CURVE_MAX_INCOME", "5000000"))
    CURVE_STEP: int = int(os.getenv("CURVE_STEP", "50000"))
    CURVE_INVESTMENT_FRACTION: float = 0.25


settings = Settings()
