"""Runtime configuration loaded from the environment (and an optional .env file)."""

from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from hr_agent.core.errors import ConfigurationError

COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"


class Settings(BaseSettings):
    """Runtime configuration for the HR agent service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Document database
    db_host: str = Field(..., alias="DB_HOST")
    db_port: int = Field(default=27017, alias="DB_PORT")
    db_query_string: str = Field(default="", alias="DB_QUERY_STRING")
    db_name: str = Field(default="hr_database", alias="DB_NAME")
    db_cert: str = Field(..., alias="DB_CERT")
    db_user_name: str = Field(..., alias="DB_USER_NAME")
    db_pwd: str = Field(..., alias="DB_PWD")

    # Identity provider
    azure_tenant_id: str = Field(..., alias="AZURE_TENANT_ID")
    azure_client_id: str = Field(..., alias="AZURE_CLIENT_ID")
    azure_client_secret: str = Field(..., alias="AZURE_CLIENT_SECRET")
    azure_authority_host: str = Field(default="https://login.microsoftonline.com", alias="AZURE_AUTHORITY_HOST")

    # Model endpoint
    azure_openai_api_instance_name: str = Field(..., alias="AZURE_OPENAI_API_INSTANCE_NAME")
    azure_openai_api_deployment_name: str = Field(..., alias="AZURE_OPENAI_API_DEPLOYMENT_NAME")
    azure_openai_api_version: str = Field(..., alias="AZURE_OPENAI_API_VERSION")
    azure_openai_api_embeddings_deployment_name: str = Field(
        default="text-embedding-ada-002", alias="AZURE_OPENAI_API_EMBEDDINGS_DEPLOYMENT_NAME"
    )

    # Agent
    agent_max_turns: int = Field(default=15, gt=0, alias="AGENT_MAX_TURNS")
    conversation_store_backend: Literal["mongo", "memory"] = Field(default="mongo", alias="CONVERSATION_STORE_BACKEND")

    # HTTP
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def azure_openai_endpoint(self) -> str:
        """Endpoint URL derived from the Azure OpenAI instance name."""
        return f"https://{self.azure_openai_api_instance_name}.openai.azure.com/"


def load_settings(**overrides) -> Settings:
    """Load settings, turning validation failures into a ConfigurationError.

    Args:
        **overrides: Values keyed by environment variable name, taking precedence over the environment

    Raises:
        ConfigurationError: If required variables are missing or malformed
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        problems = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise ConfigurationError(f"Invalid or missing configuration: {problems}") from e
