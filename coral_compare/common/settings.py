"""
Environment Settings

Secrets and endpoints read from the process environment (optionally
seeded from a repo-root .env file via python-dotenv).
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_dotenv() -> None:
    root_env = Path(__file__).resolve().parents[2] / ".env"
    if root_env.exists():
        load_dotenv(root_env)
    else:
        load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Runtime settings for one scrape run."""

    supabase_url: str = ""
    supabase_key: str = ""
    scrape_secret: str = ""
    site_url: str = ""

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from environment variables."""
        if load_env_file:
            _load_dotenv()
        return cls(
            supabase_url=(
                os.environ.get("SUPABASE_URL")
                or os.environ.get("NEXT_PUBLIC_SUPABASE_URL")
                or ""
            ),
            supabase_key=os.environ.get("SUPABASE_SERVICE_ROLE_KEY", ""),
            scrape_secret=os.environ.get("SCRAPE_SECRET", ""),
            site_url=os.environ.get("SITE_URL", ""),
        )

    def require_supabase(self) -> None:
        """Raise if the listing store cannot be reached with these settings."""
        if not self.supabase_url or not self.supabase_key:
            raise RuntimeError("Missing SUPABASE env vars")
