"""Configuration management with Pydantic settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """fnpack configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    Relative directories are resolved against ``project_dir``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FNPACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    project_dir: Path = Field(
        default_factory=Path.cwd,
        description="Service root containing the service definition",
    )

    build_output_dir: Path = Field(
        default=Path(".webpack"),
        description="Bundler output directory holding compiled units and build-stage zips",
    )

    staging_dir_name: str = Field(
        default=".serverless",
        description="Deploy staging directory (relative to project_dir)",
    )

    service_file: str = Field(
        default="serverless.yml",
        description="Service definition file name inside project_dir",
    )

    packager: str = Field(
        default="npm",
        description="Dependency-management backend id (npm or yarn)",
    )

    exclude_regex: str | None = Field(
        default=None,
        description="Regular expression of relative paths to drop from every artifact",
    )

    compression_level: int = Field(
        default=4,
        ge=0,
        le=9,
        description="Deflate level used for artifacts",
    )

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Upper bound on concurrent archive builds (None = executor default)",
    )

    runtime_prefix: str = Field(
        default="nodejs",
        description="Only functions whose runtime starts with this prefix are packaged",
    )

    framework_version: str = Field(
        default="3.0.0",
        description="Host framework version used to pick the artifact assignment shape",
    )

    verbose: bool = Field(
        default=False,
        description="Emit verbose log lines",
    )

    def get_project_dir(self) -> Path:
        """Return the absolute project directory."""
        return Path(self.project_dir).expanduser().resolve()

    def get_build_output_dir(self) -> Path:
        """Return the absolute build output directory."""
        output_dir = Path(self.build_output_dir).expanduser()
        if not output_dir.is_absolute():
            output_dir = self.get_project_dir() / output_dir
        return output_dir

    def get_staging_dir(self) -> Path:
        """Return the absolute deploy staging directory."""
        return self.get_project_dir() / self.staging_dir_name

    def get_service_file(self) -> Path:
        """Return the path to the service definition file."""
        return self.get_project_dir() / self.service_file


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
