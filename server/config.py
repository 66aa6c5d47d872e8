"""Collection service configuration, read from the environment (.env aware)."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class ServerConfig:
    admin_password: str = "admin"
    data_dir: Path = Path("data")
    public_dir: Path = Path("public")
    port: int = 3000
    max_upload_mb: int = 50

    @property
    def db_path(self) -> Path:
        return self.data_dir / "db.json"

    @property
    def uploads_dir(self) -> Path:
        return self.public_dir / "uploads"

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build a config from FOLIO_* variables after loading `.env`."""
        load_dotenv()
        return cls(
            admin_password=os.getenv("FOLIO_ADMIN_PASSWORD", "admin"),
            data_dir=Path(os.getenv("FOLIO_DATA_DIR", "data")),
            public_dir=Path(os.getenv("FOLIO_PUBLIC_DIR", "public")),
            port=int(os.getenv("FOLIO_PORT", "3000")),
            max_upload_mb=int(os.getenv("FOLIO_MAX_UPLOAD_MB", "50")),
        )
