import os
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_REGION = "eastus"
DEFAULT_SKU = "Basic"
SUPPORTED_SKUS = ("Basic", "Standard", "Premium")

DOCKER_IMAGE_NAME = "hello-world"
DOCKER_IMAGE_TAG = "latest"
DOCKER_CONTAINER_NAME = "sample-hello"
DOCKER_IMAGE_REL_PATH = "samplespython"

WEBHOOK_SERVICE_URI = "https://www.bing.com"

REGISTRY_TAGS = {"tag1": "value1", "sample": "acr-webhooks"}

REMOTE_ENGINE_ENV = "DOCKER_REMOTE_HOST"

CREDENTIAL_ENV_VARS = {
    "tenant_id": "TENANT_ID",
    "client_id": "CLIENT_ID",
    "client_secret": "CLIENT_SECRET",
    "subscription_id": "SUBSCRIPTION_ID",
}


def create_random_name(prefix: str, length: int = 8) -> str:
    """Append a random lowercase alphanumeric suffix to prefix."""
    return f"{prefix}{uuid.uuid4().hex[:length]}"


@dataclass
class ServicePrincipal:
    tenant_id: str
    client_id: str
    client_secret: str
    subscription_id: str

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "ServicePrincipal":
        """
        Read the service principal from the environment.

        Raises ValueError naming every variable that is missing or empty.
        """
        if environ is None:
            environ = os.environ

        values = {field: environ.get(var, "").strip() for field, var in CREDENTIAL_ENV_VARS.items()}
        missing = [CREDENTIAL_ENV_VARS[field] for field, value in values.items() if not value]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

        return cls(**values)


@dataclass
class SampleConfig:
    region: str = DEFAULT_REGION
    sku: str = DEFAULT_SKU
    resource_group_prefix: str = "ACRTemplateRG"
    registry_prefix: str = "acrsample"
    image_name: str = DOCKER_IMAGE_NAME
    image_tag: str = DOCKER_IMAGE_TAG
    container_name: str = DOCKER_CONTAINER_NAME
    image_rel_path: str = DOCKER_IMAGE_REL_PATH
    webhook_uri: str = WEBHOOK_SERVICE_URI
    remote_engine_url: Optional[str] = None
    verify_push: bool = True

    def __post_init__(self):
        if self.sku not in SUPPORTED_SKUS:
            raise ValueError(f"Unsupported registry SKU '{self.sku}'. Choose one of: {', '.join(SUPPORTED_SKUS)}")
        if self.remote_engine_url is None:
            self.remote_engine_url = os.environ.get(REMOTE_ENGINE_ENV) or None

    def resource_group_name(self) -> str:
        return create_random_name(self.resource_group_prefix)

    def registry_name(self) -> str:
        # Registry names must be alphanumeric
        return create_random_name(self.registry_prefix)
