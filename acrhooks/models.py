"""
Value records built from Azure management API and docker responses.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ResourceGroupHandle:
    name: str
    id: Optional[str] = None

    @classmethod
    def from_azure(cls, resource_group: Any) -> "ResourceGroupHandle":
        return cls(name=resource_group.name, id=resource_group.id)


@dataclass(frozen=True)
class RegistryHandle:
    name: str
    login_server: str
    sku: str
    admin_user_enabled: bool
    id: Optional[str] = None

    @classmethod
    def from_azure(cls, registry: Any) -> "RegistryHandle":
        sku = registry.sku.name if registry.sku is not None else ""
        return cls(
            name=registry.name,
            login_server=registry.login_server,
            sku=str(getattr(sku, "value", sku)),
            admin_user_enabled=bool(registry.admin_user_enabled),
            id=registry.id,
        )


@dataclass(frozen=True)
class RegistryCredentials:
    username: str
    password: str


@dataclass(frozen=True)
class WebhookEventRecord:
    id: Optional[str]
    content: Optional[str]
    status_code: Optional[str] = None

    @classmethod
    def from_azure(cls, event: Any) -> "WebhookEventRecord":
        response = event.event_response_message
        if response is None:
            return cls(id=event.id, content=None)
        return cls(id=event.id, content=response.content, status_code=response.status_code)


@dataclass(frozen=True)
class ImageRef:
    repository: str
    tag: str = "latest"

    def __str__(self) -> str:
        return f"{self.repository}:{self.tag}"
