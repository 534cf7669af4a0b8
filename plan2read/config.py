from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path

# Get the project root directory (parent of plan2read folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    # Transport selection: "local" (simulated backend) or "http" (deployed Apps Script)
    transport: str = "local"

    # Deployed backend settings
    apps_script_url: str = ""
    request_timeout: Optional[float] = None  # None keeps requests pending until they settle

    # Local simulation storage ("sqlite://" for a pure in-memory store)
    database_url: str = "sqlite:///" + str(PROJECT_ROOT / "plan2read_local.db")

    # Local preference store
    preferences_path: str = str(Path.home() / ".plan2read" / "preferences.json")

    # Author label sent with posts and comments
    discussion_author: str = "Anonymous"

    # Logging
    log_level: str = "INFO"
    log_file: str = str(PROJECT_ROOT / "logs" / "plan2read.log")

    class Config:
        env_prefix = "PLAN2READ_"
        env_file = str(PROJECT_ROOT / ".env")

settings = Settings()
