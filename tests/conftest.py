from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from acrhooks.config import SampleConfig
from acrhooks.models import RegistryCredentials, RegistryHandle, ResourceGroupHandle, WebhookEventRecord

LOGIN_SERVER = "acrsampletest.azurecr.io"


class FakeRegistryManager:
    """In-memory stand-in for RegistryManager that records every call."""

    def __init__(self):
        self.calls = []
        self.webhooks = {}
        self.events = {}
        self.deleted = []

    def create_resource_group(self, name, region):
        self.calls.append("create_resource_group")
        return ResourceGroupHandle(name=name, id=f"/subscriptions/sub/resourceGroups/{name}")

    def delete_resource_group(self, resource_group):
        self.calls.append("delete_resource_group")
        self.deleted.append(resource_group)

    def create_registry(self, resource_group, name, region, sku, tags):
        self.calls.append("create_registry")
        return RegistryHandle(name=name, login_server=LOGIN_SERVER, sku=sku, admin_user_enabled=True,
                              id=f"/subscriptions/sub/resourceGroups/{resource_group}/registries/{name}")

    def create_webhook(self, resource_group, registry_name, region, webhook):
        self.calls.append("create_webhook")
        self.webhooks[webhook.name] = webhook
        self.events[webhook.name] = []
        return SimpleNamespace(name=webhook.name, status=webhook.status, actions=webhook.sorted_actions())

    def get_webhook(self, resource_group, registry_name, webhook_name):
        self.calls.append("get_webhook")
        webhook = self.webhooks[webhook_name]
        return SimpleNamespace(name=webhook.name, status=webhook.status, actions=webhook.sorted_actions())

    def ping_webhook(self, resource_group, registry_name, webhook_name):
        self.calls.append("ping_webhook")
        self._record(webhook_name, '{"action": "ping"}')
        return "ping-1"

    def list_webhook_events(self, resource_group, registry_name, webhook_name):
        self.calls.append("list_webhook_events")
        return list(self.events[webhook_name])

    def get_credentials(self, resource_group, registry_name):
        self.calls.append("get_credentials")
        return RegistryCredentials(username=registry_name, password="secret")

    def _record(self, webhook_name, content):
        events = self.events[webhook_name]
        events.append(WebhookEventRecord(id=f"event-{len(events)}", content=content, status_code="200"))

    def record_push(self):
        for name, webhook in self.webhooks.items():
            if webhook.enabled and "push" in webhook.actions:
                self._record(name, '{"action": "push"}')


class FakeEngine:
    name = "fake"

    def __init__(self, client, available=True):
        self.client = client
        self.available = available

    def is_available(self):
        return self.available

    def connect(self):
        return self.client

    def describe(self):
        return "fake engine"


@pytest.fixture
def manager():
    return FakeRegistryManager()


@pytest.fixture
def docker_client(manager):
    client = MagicMock()
    client.api.base_url = "http+docker://localhost"
    client.images.list.return_value = []
    client.containers.list.return_value = []

    def push(repository, tag=None, **kwargs):
        manager.record_push()
        return iter([{"status": "Pushed", "id": "abc"}, {"status": f"{tag}: digest: sha256:123"}])

    client.images.push.side_effect = push
    return client


@pytest.fixture
def config():
    return SampleConfig(remote_engine_url=None, verify_push=False)
