import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

BACKENDS = ("json", "sqlite")
DEFAULT_STORES = {
    "json": "data/store.json",
    "sqlite": "data/roles.db",
}


def load_env() -> None:
    """Load .env from the working directory if present. Existing variables win."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


@dataclass
class Settings:
    backend: str = "json"
    store_path: Path = Path(DEFAULT_STORES["json"])
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    @classmethod
    def from_env(cls, backend: Optional[str] = None, store: Optional[str] = None) -> "Settings":
        """
        Build settings from ROLETAGGER_* variables; explicit arguments win.

        Raises:
            ValueError: If the backend is not json or sqlite
        """
        backend = (backend or os.getenv("ROLETAGGER_BACKEND") or "json").lower()
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend {backend!r}, expected one of {', '.join(BACKENDS)}")
        store = store or os.getenv("ROLETAGGER_STORE") or DEFAULT_STORES[backend]
        return cls(
            backend=backend,
            store_path=Path(store),
            log_level=os.getenv("ROLETAGGER_LOG_LEVEL", "INFO"),
            log_dir=Path(os.getenv("ROLETAGGER_LOG_DIR", "logs")),
        )

    def open_store(self):
        if self.backend == "sqlite":
            from .database import SqliteStore
            return SqliteStore(self.store_path)
        from .storage import JsonFileStore
        return JsonFileStore(self.store_path)
