"""
Settings of the Fractal Music service.

Every field can be set through an environment variable named after it
with the ``FRACTAL_MUSIC_`` prefix (``FRACTAL_MUSIC_PORT=9000``) or in a
``.env`` file in the working directory. Groups:
- HTTP server, management endpoints and CORS
- Limits of the fractal calculations and number parsing
- Image size
- Response security headers
- Logging, metrics and tracing
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Tuple

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from api.src import __version__

DEFAULT_SAMPLE_IMAGE = Path("samples") / "heic0602inv.png"

CHOICES: Dict[str, Tuple[str, ...]] = {
    "log_level": ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
    "environment": ("development", "staging", "production"),
    "log_format": ("json", "text"),
}


class Settings(BaseSettings):
    """Service settings, see the module docstring for how they are loaded."""

    # =========================================================================
    # API Settings
    # =========================================================================

    app_name: str = Field(
        default="fractal-music",
        description="Application name"
    )
    app_version: str = Field(
        default=__version__,
        description="Application version"
    )
    app_group: str = Field(
        default="de.muellerlund",
        description="Organisation the application is published under"
    )

    debug: bool = Field(
        default=False,
        description="Reload on code changes and return tracebacks in error pages"
    )
    environment: str = Field(
        default="production",
        description="Deployment environment: development|staging|production"
    )

    host: str = Field(
        default="0.0.0.0",
        description="Interface Uvicorn binds to"
    )
    port: int = Field(
        default=8080,
        description="Port Uvicorn listens on",
        gt=0,
        lt=65536
    )

    management_prefix: str = Field(
        default="/actuator",
        description="URL prefix of the health, readiness, info and metrics endpoints"
    )

    # =========================================================================
    # Fractal Settings
    # =========================================================================

    decimal_separator: str = Field(
        default=".",
        description="Decimal separator used when parsing complex numbers from query parameters"
    )
    max_tree_numbers: int = Field(
        default=1 << 10,
        description="Upper bound for dimensions ** depth of a preimage tree",
        gt=0,
        le=1 << 16
    )
    max_backtrace_values: int = Field(
        default=10_000_000,
        description="Exclusive upper bound for spread ** imax of a backtrace tree",
        gt=0
    )
    sample_image_path: Path = Field(
        default=DEFAULT_SAMPLE_IMAGE,
        description="PNG served by the sample endpoint, relative paths resolve against the working directory"
    )

    # =========================================================================
    # Rendering Settings
    # =========================================================================

    image_width: int = Field(
        default=800,
        description="Width of rendered images in pixels",
        ge=16,
        le=4096
    )

    # =========================================================================
    # CORS Settings
    # =========================================================================

    cors_enabled: bool = Field(
        default=True,
        description="Answer cross origin requests from browsers"
    )
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Origins allowed to embed the images"
    )
    cors_allow_methods: List[str] = Field(
        default=["GET", "OPTIONS"],
        description="Methods allowed for cross origin requests"
    )
    cors_allow_headers: List[str] = Field(
        default=["*"],
        description="Headers allowed for cross origin requests"
    )

    # =========================================================================
    # Security Settings
    # =========================================================================

    security_headers_enabled: bool = Field(
        default=True,
        description="Add X-Content-Type-Options, X-Frame-Options and Referrer-Policy to responses"
    )
    security_require_https: bool = Field(
        default=False,
        description="Send HSTS headers (enable behind TLS in production)"
    )
    security_hsts_max_age: int = Field(
        default=31536000,  # 1 year
        description="max-age of the Strict-Transport-Security header in seconds"
    )

    # =========================================================================
    # Monitoring and Observability
    # =========================================================================

    metrics_enabled: bool = Field(
        default=True,
        description="Serve Prometheus metrics under the management prefix"
    )

    tracing_enabled: bool = Field(
        default=False,
        description="Export spans of requests and calculations"
    )
    tracing_otlp_endpoint: str = Field(
        default="http://otel-collector:4318/v1/traces",
        description="OTLP/HTTP traces endpoint"
    )
    tracing_sample_rate: float = Field(
        default=0.1,
        description="Fraction of traces sampled, 0.0 to 1.0",
        ge=0.0,
        le=1.0
    )

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG|INFO|WARNING|ERROR|CRITICAL"
    )
    log_format: str = Field(
        default="json",
        description="Log format: json|text"
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level", "environment", "log_format")
    @classmethod
    def validate_choice(cls, v: str, info: ValidationInfo) -> str:
        """Normalize the case of enumerated settings and reject unknown values."""
        allowed = CHOICES[info.field_name]
        normalized = v.upper() if info.field_name == "log_level" else v.lower()
        if normalized not in allowed:
            raise ValueError(f"{info.field_name} must be one of {list(allowed)}, got: {v}")
        return normalized

    @field_validator("cors_origins")
    @classmethod
    def default_cors_origins(cls, v: List[str]) -> List[str]:
        """An empty origin list allows every origin."""
        return v or ["*"]

    @field_validator("decimal_separator")
    @classmethod
    def validate_decimal_separator(cls, v: str) -> str:
        if v not in (".", ","):
            raise ValueError(f"decimal_separator must be '.' or ',', got: {v!r}")
        return v

    @field_validator("management_prefix")
    @classmethod
    def validate_management_prefix(cls, v: str) -> str:
        """Normalize to a single leading slash and no trailing slash."""
        v = "/" + v.strip("/")
        if v == "/":
            raise ValueError("management_prefix must not be the root path")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"

    model_config = SettingsConfigDict(
        env_prefix="FRACTAL_MUSIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Settings shared by the whole process.

    Read from the environment on first use. Tests replace them through
    ``app.dependency_overrides[get_settings]`` or reload them with
    :func:`clear_settings_cache`.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call reads the environment again."""
    get_settings.cache_clear()
