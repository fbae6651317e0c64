"""
Container registry with webhooks sample.

  - Create a container registry and set up two webhooks triggered on registry
    actions (push, delete)
  - Ping the first webhook and list its event notifications
  - Use a docker engine (local, or a configured remote one) to pull a test
    image from the public repo, commit it as a new image and push it to the
    registry
  - List the webhook event notifications again after the push
  - Delete the resource group holding everything that was created
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

import requests

from acrhooks.config import REGISTRY_TAGS, SampleConfig
from acrhooks.docker_engine import default_engines, open_engine
from acrhooks.docker_registry import RegistryApiClient
from acrhooks.images import (
    commit_container,
    create_container,
    list_containers,
    list_images,
    private_repository,
    pull_image,
    push_image,
)
from acrhooks.models import ImageRef, RegistryCredentials, RegistryHandle, ResourceGroupHandle, WebhookEventRecord
from acrhooks.webhooks import default_webhooks


@dataclass
class SampleRun:
    """Everything a run created or observed; resource_group drives cleanup."""
    resource_group: Optional[ResourceGroupHandle] = None
    registry: Optional[RegistryHandle] = None
    webhooks: List[Any] = field(default_factory=list)
    events_before_push: List[WebhookEventRecord] = field(default_factory=list)
    events_after_push: List[WebhookEventRecord] = field(default_factory=list)
    pushed_image: Optional[ImageRef] = None
    push_verified: Optional[bool] = None
    cleaned_up: bool = False


def print_registry(registry: RegistryHandle):
    print("Container Registry:")
    print(f"\tName: {registry.name}")
    print(f"\tId: {registry.id}")
    print(f"\tLogin server: {registry.login_server}")
    print(f"\tSKU: {registry.sku}")
    print(f"\tAdmin user enabled: {registry.admin_user_enabled}")


def list_webhook_events(manager, run: SampleRun, webhook_name: str) -> List[WebhookEventRecord]:
    events = manager.list_webhook_events(run.resource_group.name, run.registry.name, webhook_name)
    print(f"Found {len(events)} webhook events for: {webhook_name} with container service: {run.registry.name}")
    for event in events:
        print(f"\t{event.content}")
    return events


def verify_push(registry: RegistryHandle, image: ImageRef, credentials: RegistryCredentials) -> bool:
    """Check through the registry HTTP API that the pushed tag is visible."""
    client = RegistryApiClient(registry.login_server, image.repository, credentials)
    try:
        found = client.has_tag(image.tag)
    except requests.RequestException as e:
        print(f"⚠️  Could not reach {registry.login_server} to verify {image}: {e}")
        return False

    if found:
        print(f"✅ {image} is available in {registry.login_server}")
    else:
        print(f"⚠️  {image} not found in {registry.login_server} yet")
    return found


def cleanup(manager, run: SampleRun):
    """Delete the resource group if one was created. Errors are reported, not raised."""
    resource_group = run.resource_group
    if resource_group is None or not resource_group.id:
        print("Did not create any resources in Azure. No clean up is necessary")
        return

    try:
        print(f"Deleting Resource Group: {resource_group.id}")
        manager.delete_resource_group(resource_group)
        run.cleaned_up = True
        print(f"Deleted Resource Group: {resource_group.id}")
    except Exception as e:
        print(f"❌ Failed to delete resource group {resource_group.name}: {e}")


def _run_steps(manager, config: SampleConfig, engines: Sequence, run: SampleRun):
    print("Creating resource group...")
    run.resource_group = manager.create_resource_group(config.resource_group_name(), config.region)
    rg_name = run.resource_group.name
    print(f"Created a resource group with name: {rg_name}")

    print("Creating an Azure Container Registry")
    run.registry = manager.create_registry(rg_name, config.registry_name(), config.region,
                                           config.sku, REGISTRY_TAGS)
    registry = run.registry
    print_registry(registry)

    webhook_specs = default_webhooks(config)
    for hook in webhook_specs:
        print(f"Creating webhook {hook.name} ({', '.join(hook.sorted_actions())}, {hook.status})")
        run.webhooks.append(manager.create_webhook(rg_name, registry.name, config.region, hook))

    # Ping the first webhook to validate it works as expected
    webhook_name = webhook_specs[0].name
    manager.ping_webhook(rg_name, registry.name, webhook_name)
    run.events_before_push = list_webhook_events(manager, run, webhook_name)

    credentials = manager.get_credentials(rg_name, registry.name)

    source = ImageRef(config.image_name, config.image_tag)
    with open_engine(engines) as client:
        pull_image(client, source)
        list_images(client)

        container = create_container(client, source, config.container_name)
        list_containers(client)

        repository = private_repository(registry.login_server, config.image_rel_path, config.container_name)
        run.pushed_image = commit_container(container, repository, config.image_tag)
        push_image(client, run.pushed_image, credentials, registry.login_server)

    if config.verify_push:
        run.push_verified = verify_push(registry, run.pushed_image, credentials)

    # Events after the push should include the push notification
    webhook = manager.get_webhook(rg_name, registry.name, webhook_name)
    run.events_after_push = list_webhook_events(manager, run, webhook.name)


def run_sample(manager, config: Optional[SampleConfig] = None, engines: Optional[Sequence] = None) -> SampleRun:
    """
    Run the sample end to end.

    Every step blocks until its remote operation completes. The resource group
    is deleted on every exit path once it has been created; exceptions from
    the steps propagate after cleanup.
    """
    if config is None:
        config = SampleConfig()
    if engines is None:
        engines = default_engines(config.remote_engine_url)

    run = SampleRun()
    try:
        _run_steps(manager, config, engines, run)
    finally:
        cleanup(manager, run)

    return run
