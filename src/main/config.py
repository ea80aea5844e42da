"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.entities.source import DataSource, SourceFormat
from src.domain.entities.time_series import Metric
from src.shared import EnumEnvironment, EnumLogLevel

JSON_FEED_BASE_URL = "https://coronavirus-tracker-api.herokuapp.com/"
CSV_FEED_BASE_URL = (
    "https://raw.githubusercontent.com/CSSEGISandData/COVID-19/master/"
    "archived_data/time_series/"
)

_DEFAULT_PATHS = {
    SourceFormat.HIERARCHICAL: {
        Metric.CONFIRMED: "confirmed",
        Metric.DEATHS: "deaths",
        Metric.RECOVERED: "recovered",
    },
    SourceFormat.TABULAR: {
        Metric.CONFIRMED: "time_series_2019-ncov-Confirmed.csv",
        Metric.DEATHS: "time_series_2019-ncov-Deaths.csv",
        Metric.RECOVERED: "time_series_2019-ncov-Recovered.csv",
    },
}


class FeedSettings(BaseSettings):
    """Data feed configuration settings."""

    format: SourceFormat = Field(
        default=SourceFormat.HIERARCHICAL,
        description="Feed format served by every source (csv or json)",
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Base URL the metric paths are appended to; "
        "defaults to the public feed for the chosen format",
    )
    confirmed_path: Optional[str] = Field(
        default=None, description="Path of the confirmed cases feed"
    )
    deaths_path: Optional[str] = Field(
        default=None, description="Path of the deaths feed"
    )
    recovered_path: Optional[str] = Field(
        default=None, description="Path of the recovered cases feed"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout (s)")

    model_config = SettingsConfigDict(
        env_prefix="FEED_", case_sensitive=False, extra="ignore"
    )

    def url_for(self, metric: Metric) -> str:
        base = self.base_url
        if base is None:
            base = (
                CSV_FEED_BASE_URL
                if self.format == SourceFormat.TABULAR
                else JSON_FEED_BASE_URL
            )
        path = getattr(self, f"{metric.value}_path", None)
        if path is None:
            path = _DEFAULT_PATHS[self.format][metric]
        return base.rstrip("/") + "/" + path.lstrip("/")

    def source_for(self, metric: Metric) -> DataSource:
        return DataSource(format=self.format, url=self.url_for(metric))


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    feed: FeedSettings = Field(default_factory=FeedSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on enviroment.
    """
    return AppSettings()


settings = get_settings()
