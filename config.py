# backend/config.py
import os
from pathlib import Path
from typing import Optional, Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent

# The trigger fires at 11:15 while the startup message has always announced
# midnight. Both are kept configurable until the intended time is confirmed.
DEFAULT_RESET_CRON = "15 11 * * *"
DEFAULT_RESET_TIMEZONE = "Asia/Kolkata"
DEFAULT_RESET_SCHEDULE_LABEL = "12:00 AM India Standard Time"


class ConfigError(ValueError):
    """Raised when process configuration cannot be parsed"""


class Settings(BaseModel):
    """Process configuration read from the environment"""
    port: int = Field(3000, description="HTTP listening port")
    dist_dir: Path = Field(default_factory=lambda: PROJECT_ROOT / "dist", description="Prebuilt SPA bundle")
    reset_cron: str = Field(DEFAULT_RESET_CRON, description="Crontab expression for the daily reset")
    reset_timezone: str = Field(DEFAULT_RESET_TIMEZONE, description="Timezone the cron expression is evaluated in")
    reset_schedule_label: str = Field(DEFAULT_RESET_SCHEDULE_LABEL, description="Human description of the schedule")


def get_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Builds Settings from environment variables, falling back to defaults.
    """
    env = os.environ if environ is None else environ

    port_value = env.get("PORT") or "3000"
    try:
        port = int(port_value)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {port_value!r}")

    values = {"port": port}
    if env.get("DIST_DIR"):
        values["dist_dir"] = Path(env["DIST_DIR"])
    if env.get("RESET_CRON"):
        values["reset_cron"] = env["RESET_CRON"]
    if env.get("RESET_TIMEZONE"):
        values["reset_timezone"] = env["RESET_TIMEZONE"]
    if env.get("RESET_SCHEDULE_LABEL"):
        values["reset_schedule_label"] = env["RESET_SCHEDULE_LABEL"]

    return Settings(**values)
