#!/usr/bin/env python3
"""
Azure management API access for resource groups, registries and webhooks.
"""

from typing import Any, Dict, List

from azure.identity import ClientSecretCredential
from azure.mgmt.containerregistry import ContainerRegistryManagementClient
from azure.mgmt.containerregistry.models import Registry, Sku
from azure.mgmt.resource import ResourceManagementClient

from acrhooks.config import ServicePrincipal
from acrhooks.models import RegistryCredentials, RegistryHandle, ResourceGroupHandle, WebhookEventRecord
from acrhooks.webhooks import WebhookSpec


class RegistryManager:
    """Client for the resource group, registry and webhook management APIs.

    Every long-running operation is awaited before returning.
    https://learn.microsoft.com/rest/api/containerregistry/
    """

    def __init__(self, resource_client: Any, registry_client: Any):
        self.resource_client = resource_client
        self.registry_client = registry_client

    @classmethod
    def from_credentials(cls, credential: Any, subscription_id: str) -> "RegistryManager":
        return cls(
            ResourceManagementClient(credential, subscription_id),
            ContainerRegistryManagementClient(credential, subscription_id),
        )

    @classmethod
    def from_service_principal(cls, principal: ServicePrincipal) -> "RegistryManager":
        credential = ClientSecretCredential(
            tenant_id=principal.tenant_id,
            client_id=principal.client_id,
            client_secret=principal.client_secret,
        )
        return cls.from_credentials(credential, principal.subscription_id)

    def create_resource_group(self, name: str, region: str) -> ResourceGroupHandle:
        resource_group = self.resource_client.resource_groups.create_or_update(name, {"location": region})
        return ResourceGroupHandle.from_azure(resource_group)

    def delete_resource_group(self, resource_group: ResourceGroupHandle):
        poller = self.resource_client.resource_groups.begin_delete(resource_group.name)
        poller.result()

    def create_registry(self, resource_group: str, name: str, region: str,
                        sku: str, tags: Dict[str, str]) -> RegistryHandle:
        registry = Registry(
            location=region,
            sku=Sku(name=sku),
            admin_user_enabled=True,
            tags=dict(tags),
        )
        poller = self.registry_client.registries.begin_create(resource_group, name, registry)
        return RegistryHandle.from_azure(poller.result())

    def get_credentials(self, resource_group: str, registry_name: str) -> RegistryCredentials:
        """Return the admin username and primary password of the registry."""
        result = self.registry_client.registries.list_credentials(resource_group, registry_name)
        passwords = result.passwords or []
        if not passwords:
            raise ValueError(f"Registry '{registry_name}' returned no admin passwords")

        primary = next((p for p in passwords if p.name == "password"), passwords[0])
        return RegistryCredentials(username=result.username, password=primary.value)

    def create_webhook(self, resource_group: str, registry_name: str, region: str, webhook: WebhookSpec) -> Any:
        poller = self.registry_client.webhooks.begin_create(
            resource_group, registry_name, webhook.name, webhook.to_create_parameters(region)
        )
        return poller.result()

    def get_webhook(self, resource_group: str, registry_name: str, webhook_name: str) -> Any:
        return self.registry_client.webhooks.get(resource_group, registry_name, webhook_name)

    def ping_webhook(self, resource_group: str, registry_name: str, webhook_name: str) -> str:
        """Send a synthetic test event and return its id."""
        event_info = self.registry_client.webhooks.ping(resource_group, registry_name, webhook_name)
        return event_info.id

    def list_webhook_events(self, resource_group: str, registry_name: str,
                            webhook_name: str) -> List[WebhookEventRecord]:
        events = self.registry_client.webhooks.list_events(resource_group, registry_name, webhook_name)
        return [WebhookEventRecord.from_azure(event) for event in events]
