from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict

from cashdesk.models.constants import DENOMINATIONS


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, DB_FILENAME, BASE_CURRENCY, ORDER_NUMBER_WIDTH).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Exchange Counter"
    debug: bool = True
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "ledger.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Counter
    base_currency: str = "CZK"
    order_number_width: int = 6
    default_operator: str = "counter"
    timezone: str = "Europe/Prague"

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        # Ensure persistence directory exists
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.base_currency = self.base_currency.upper()
        if self.base_currency not in DENOMINATIONS:
            raise ValueError(
                f"Base currency '{self.base_currency}' has no denomination table"
            )
        if not (1 <= self.order_number_width <= 12):
            raise ValueError("order_number_width must be between 1 and 12")
        try:
            ZoneInfo(self.timezone)
        except ZoneInfoNotFoundError as e:
            raise ValueError(f"Unknown timezone '{self.timezone}'") from e

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
