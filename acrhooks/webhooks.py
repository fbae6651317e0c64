from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List

from azure.mgmt.containerregistry.models import WebhookCreateParameters

from acrhooks.config import SampleConfig

PUSH = "push"
DELETE = "delete"
WEBHOOK_ACTIONS = frozenset({PUSH, DELETE})


@dataclass(frozen=True)
class WebhookSpec:
    """
    A webhook subscription to attach to a registry.

    An empty scope matches every repository in the registry. Disabled webhooks
    are created but receive no deliveries until enabled.
    """
    name: str
    actions: FrozenSet[str]
    service_uri: str
    enabled: bool = True
    scope: str = ""
    custom_headers: Dict[str, str] = field(default_factory=dict)
    tags: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        actions = frozenset(self.actions)
        if not actions:
            raise ValueError(f"Webhook '{self.name}' needs at least one trigger action")
        unknown = actions - WEBHOOK_ACTIONS
        if unknown:
            raise ValueError(f"Unknown webhook actions for '{self.name}': {', '.join(sorted(unknown))}")
        object.__setattr__(self, "actions", actions)

    @property
    def status(self) -> str:
        return "enabled" if self.enabled else "disabled"

    def sorted_actions(self) -> List[str]:
        return sorted(self.actions)

    def to_create_parameters(self, location: str) -> WebhookCreateParameters:
        return WebhookCreateParameters(
            location=location,
            tags=dict(self.tags),
            service_uri=self.service_uri,
            custom_headers=dict(self.custom_headers),
            status=self.status,
            scope=self.scope,
            actions=self.sorted_actions(),
        )


def default_webhooks(config: SampleConfig) -> List[WebhookSpec]:
    """The two webhooks created by the sample, in creation order."""
    return [
        WebhookSpec(
            name="webhookbing1",
            actions=frozenset({PUSH, DELETE}),
            service_uri=config.webhook_uri,
            tags={"tag": "value", "sample": "webhooks"},
            custom_headers={"name": "value"},
        ),
        WebhookSpec(
            name="webhookbing2",
            actions=frozenset({PUSH}),
            service_uri=config.webhook_uri,
            enabled=False,
            scope="",
        ),
    ]
