from dataclasses import dataclass
import os
from typing import Optional
from dotenv import load_dotenv


load_dotenv()


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class Settings:
    app_title: str = os.getenv("CGPACALC_TITLE", "AKTU SGPA / CGPA Calculator")
    web_mode: bool = os.getenv("CGPACALC_WEB", "0") == "1"
    port: int = int(os.getenv("PORT", "8550"))

    log_level: str = os.getenv("CGPACALC_LOG_LEVEL", "INFO").upper()
    log_file: Optional[str] = _optional(os.getenv("CGPACALC_LOG_FILE"))


settings = Settings()
