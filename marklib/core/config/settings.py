# File: marklib/core/config/settings.py

import os
from pathlib import Path


class Settings:
    # --- Paths ---
    # marklib/core/config/settings.py -> marklib/core/config -> marklib/core -> marklib -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("MARKLIB_DATA_DIR", str(BASE_DIR / "data")))

    # --- Database ---
    # A personal library lives in a local SQLite file unless told otherwise.
    USE_SQLITE: bool = os.getenv("USE_SQLITE", "true").lower() == "true"
    SQLITE_PATH: Path = Path(os.getenv("MARKLIB_SQLITE_PATH", str(DATA_DIR / "library.db")))

    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "marklib_db")

    @property
    def DATABASE_URL(self) -> str:
        explicit = os.getenv("MARKLIB_DATABASE_URL")
        if explicit:
            return explicit

        if self.USE_SQLITE:
            return f"sqlite:///{self.SQLITE_PATH}"

        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # --- Import Limits ---
    MAX_BOOK_SIZE_MB: int = int(os.getenv("MARKLIB_MAX_BOOK_SIZE_MB", "100"))

    @property
    def MAX_BOOK_SIZE_BYTES(self) -> int:
        return self.MAX_BOOK_SIZE_MB * 1024 * 1024

    # --- Markdown ---
    # Suffix match is literal and case-sensitive ("d.MD" is not a book).
    MARKDOWN_SUFFIXES = (".md", ".markdown")
    MARKDOWN_CONTENT_TYPE: str = "text/markdown"
    MARKDOWN_CONTENT_TYPES = frozenset({"text/markdown", "text/x-markdown"})

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        if self.USE_SQLITE:
            self.SQLITE_PATH.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
