import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Images are always served as JPEG
IMAGE_EXTENSION = ".jpg"
IMAGE_MEDIA_TYPE = "image/jpeg"

DEFAULT_MAX_BODY_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    The instance is immutable; command-line values are applied with
    ``dataclasses.replace`` and the result is injected into the app.
    """

    # Server
    host: str = os.getenv("CAT_CACHE_HOST", "127.0.0.1")
    port: int = int(os.getenv("CAT_CACHE_PORT", "8080"))

    # Cache
    cache_dir: Path = Path(os.getenv("CAT_CACHE_DIR", "./cache"))
    max_body_bytes: int = int(os.getenv("CAT_CACHE_MAX_BODY_BYTES", str(DEFAULT_MAX_BODY_BYTES)))

    # Upstream
    upstream_url: str = os.getenv("CAT_CACHE_UPSTREAM_URL", "https://http.cat")
    fetch_timeout: float = float(os.getenv("CAT_CACHE_FETCH_TIMEOUT", "10.0"))

    # Logging
    log_level: str = os.getenv("CAT_CACHE_LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 1 <= self.port <= 65535:
            raise ValueError(
                f"Invalid port number: {self.port}. Must be an integer between 1 and 65535."
            )

        if self.max_body_bytes <= 0:
            raise ValueError("CAT_CACHE_MAX_BODY_BYTES must be positive")

        if self.fetch_timeout <= 0:
            raise ValueError("CAT_CACHE_FETCH_TIMEOUT must be positive")

        # Callers may pass the cache directory as a plain string
        object.__setattr__(self, "cache_dir", Path(self.cache_dir))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
