"""Azure AD credential provider for the model endpoint."""

from collections.abc import Callable

from azure.identity import ClientSecretCredential, get_bearer_token_provider

from hr_agent.core.config import COGNITIVE_SERVICES_SCOPE, Settings
from hr_agent.core.errors import ConfigurationError
from hr_agent.utils.logging import get_logger

logger = get_logger(__name__)

TokenProvider = Callable[[], str]


def create_token_provider(settings: Settings, scope: str = COGNITIVE_SERVICES_SCOPE) -> TokenProvider:
    """Create a bearer token provider using client-credential auth.

    Tokens are fetched lazily by the OpenAI client on each request and cached by azure-identity.

    Args:
        settings: Application settings holding tenant, client id, secret and authority
        scope: OAuth scope to request tokens for

    Returns:
        Callable returning a bearer token
    """
    if not settings.azure_client_secret:
        raise ConfigurationError("AZURE_CLIENT_SECRET must not be empty")

    credential = ClientSecretCredential(
        tenant_id=settings.azure_tenant_id,
        client_id=settings.azure_client_id,
        client_secret=settings.azure_client_secret,
        authority=settings.azure_authority_host,
    )
    logger.info(f"Azure credential created for tenant {settings.azure_tenant_id}")

    return get_bearer_token_provider(credential, scope)
