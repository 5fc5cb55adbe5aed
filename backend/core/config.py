import os
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


class Settings:
    def __init__(
        self,
        database_url: Optional[str] = None,
        database_echo: Optional[bool] = None,
        sales_mirror_path: Optional[str] = None,
        log_level: Optional[str] = None,
        cors_origins: Optional[List[str]] = None,
    ):
        self.database_url = database_url or os.getenv(
            "DATABASE_URL",
            "sqlite+aiosqlite:///./stall.db"
        )
        if database_echo is None:
            database_echo = os.getenv("DATABASE_ECHO", "False").lower() == "true"
        self.database_echo = database_echo

        # Flat-file copy of the sales log served by /api/stats
        self.sales_mirror_path = sales_mirror_path or os.getenv(
            "SALES_MIRROR_PATH",
            os.path.join("data", "sales.json")
        )

        self.log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).strip().upper()

        if cors_origins is None:
            raw = os.getenv("CORS_ORIGINS", "*")
            cors_origins = [o.strip() for o in raw.split(",") if o.strip()]
        self.cors_origins = cors_origins


settings = Settings()
