"""
Configuration for SupplierWorker.

Uses Pydantic for validation and environment loading.
Oracle Fusion credentials, Graph credentials and run policy live in
separate sub-models so each component receives only what it needs.
"""

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ICON_URL = "https://img.icons8.com/?size=100&id=1349&format=png&color=000000"


class OracleConfig(BaseModel):
    """Oracle Fusion supplier API settings (OAuth2 client credentials)."""

    client_id: str = Field(default="", description="OAuth2 client ID")
    client_secret: str = Field(default="", description="OAuth2 client secret")
    scope: str = Field(default="", description="OAuth2 scope")
    access_token_url: str = Field(default="", description="Token endpoint")
    supplier_url: str = Field(default="", description="Suppliers REST resource URL")
    supplier_link_base: str = Field(
        default="", description="Base for item deep links, defaults to supplier_url"
    )
    page_size: int = Field(default=100, description="Items per page request")

    @property
    def link_base(self) -> str:
        return (self.supplier_link_base or self.supplier_url).rstrip("/")


class GraphConfig(BaseModel):
    """Microsoft Graph external connection settings."""

    tenant_id: str = Field(default="", description="Azure AD tenant ID")
    client_id: str = Field(default="", description="Application (client) ID")
    client_secret: str = Field(default="", description="Client secret")
    connection_id: str = Field(default="", description="Default external connection")
    base_url: str = Field(default="https://graph.microsoft.com/v1.0")
    authority_url: str = Field(default="https://login.microsoftonline.com")
    scope: str = Field(default="https://graph.microsoft.com/.default")
    icon_url: str = Field(default=DEFAULT_ICON_URL, description="Item icon URL")
    schema_poll_interval: float = Field(
        default=5.0, description="Seconds between schema operation checks"
    )
    schema_poll_max_attempts: int = Field(
        default=120, description="Schema operation checks before giving up"
    )

    @property
    def token_endpoint(self) -> str:
        """Get the OAuth2 token endpoint."""
        return f"{self.authority_url}/{self.tenant_id}/oauth2/v2.0/token"


class RetryConfig(BaseModel):
    """Retry policy for child-table page requests."""

    max_attempts: int = Field(default=3, description="Attempts per page request")
    delay_seconds: float = Field(default=2.0, description="Fixed delay between attempts")


class WorkerConfig(BaseSettings):
    """Master configuration for SupplierWorker.

    Loads from environment variables (no prefix) and an optional ``.env``.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    # Service identity
    service_name: str = Field(default="supplierworker")
    log_level: str = Field(default="INFO")

    # Run policy
    state_path: str = Field(
        default="lastuploadtime.txt", description="Durable cutoff file"
    )
    advance_cutoff_on_upload_failure: bool = Field(
        default=True,
        description="Advance the cutoff even when some uploads failed",
    )
    http_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # Temporal (scheduled runs)
    temporal_host: str = Field(default="localhost:7233")
    task_queue: str = Field(default="supplier-sync-tasks")

    oracle: OracleConfig = Field(default_factory=OracleConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @classmethod
    def from_env(cls) -> "WorkerConfig":
        """Load configuration from environment variables."""
        return cls(
            service_name=os.getenv("SERVICE_NAME", "supplierworker"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            state_path=os.getenv("SYNC_STATE_PATH", "lastuploadtime.txt"),
            advance_cutoff_on_upload_failure=os.getenv(
                "ADVANCE_CUTOFF_ON_UPLOAD_FAILURE", "true"
            ).lower()
            == "true",
            http_timeout=float(os.getenv("HTTP_TIMEOUT_SEC", "30.0")),
            temporal_host=os.getenv("TEMPORAL_HOST", "localhost:7233"),
            task_queue=os.getenv("TEMPORAL_TASK_QUEUE", "supplier-sync-tasks"),
            oracle=OracleConfig(
                client_id=os.getenv("ORACLE_CLIENT_ID", ""),
                client_secret=os.getenv("ORACLE_CLIENT_SECRET", ""),
                scope=os.getenv("ORACLE_SCOPE", ""),
                access_token_url=os.getenv("ORACLE_ACCESS_TOKEN_URL", ""),
                supplier_url=os.getenv("ORACLE_SUPPLIER_URL", ""),
                supplier_link_base=os.getenv("ORACLE_SUPPLIER_LINK_BASE", ""),
            ),
            graph=GraphConfig(
                tenant_id=os.getenv("GRAPH_TENANT_ID", ""),
                client_id=os.getenv("GRAPH_CLIENT_ID", ""),
                client_secret=os.getenv("GRAPH_CLIENT_SECRET", ""),
                connection_id=os.getenv("GRAPH_CONNECTION_ID", ""),
                base_url=os.getenv("GRAPH_BASE_URL", "https://graph.microsoft.com/v1.0"),
                icon_url=os.getenv("GRAPH_ICON_URL", DEFAULT_ICON_URL),
                schema_poll_max_attempts=int(os.getenv("GRAPH_SCHEMA_POLL_MAX_ATTEMPTS", "120")),
            ),
            retry=RetryConfig(
                max_attempts=int(os.getenv("CHILD_RETRY_MAX_ATTEMPTS", "3")),
                delay_seconds=float(os.getenv("CHILD_RETRY_DELAY_SEC", "2.0")),
            ),
        )

    def missing_settings(self) -> List[str]:
        """Names of required settings that are empty."""
        required = {
            "ORACLE_CLIENT_ID": self.oracle.client_id,
            "ORACLE_CLIENT_SECRET": self.oracle.client_secret,
            "ORACLE_SCOPE": self.oracle.scope,
            "ORACLE_ACCESS_TOKEN_URL": self.oracle.access_token_url,
            "ORACLE_SUPPLIER_URL": self.oracle.supplier_url,
            "GRAPH_TENANT_ID": self.graph.tenant_id,
            "GRAPH_CLIENT_ID": self.graph.client_id,
            "GRAPH_CLIENT_SECRET": self.graph.client_secret,
        }
        return [name for name, value in required.items() if not value]


@lru_cache(maxsize=1)
def get_config() -> WorkerConfig:
    """Get the process-wide configuration (loaded once)."""
    return WorkerConfig.from_env()
