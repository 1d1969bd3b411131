"""Factories for the Azure OpenAI chat model and embeddings."""

from langchain_openai import AzureChatOpenAI, AzureOpenAIEmbeddings

from hr_agent.clients.credentials import TokenProvider
from hr_agent.core.config import Settings
from hr_agent.utils.logging import get_logger

logger = get_logger(__name__)


def create_chat_model(settings: Settings, token_provider: TokenProvider) -> AzureChatOpenAI:
    """Create the chat model used for reasoning turns."""
    model = AzureChatOpenAI(
        azure_ad_token_provider=token_provider,
        azure_endpoint=settings.azure_openai_endpoint,
        azure_deployment=settings.azure_openai_api_deployment_name,
        api_version=settings.azure_openai_api_version,
        temperature=0,
    )
    logger.info(f"Azure chat model created for deployment {settings.azure_openai_api_deployment_name}")
    return model


def create_embeddings(settings: Settings, token_provider: TokenProvider) -> AzureOpenAIEmbeddings:
    """Create the embeddings model; must match the one used to index the employee records."""
    embeddings = AzureOpenAIEmbeddings(
        azure_ad_token_provider=token_provider,
        azure_endpoint=settings.azure_openai_endpoint,
        azure_deployment=settings.azure_openai_api_embeddings_deployment_name,
        api_version=settings.azure_openai_api_version,
    )
    logger.info(f"Azure embeddings created for deployment {settings.azure_openai_api_embeddings_deployment_name}")
    return embeddings
