from typing import Any, Dict, List

import docker

from acrhooks.models import ImageRef, RegistryCredentials


def private_repository(login_server: str, rel_path: str, container_name: str) -> str:
    """Repository path of the committed image inside the private registry."""
    return f"{login_server}/{rel_path}/{container_name}"


def pull_image(client: docker.DockerClient, ref: ImageRef) -> Any:
    print(f"Pulling image {ref}...")
    return client.images.pull(ref.repository, tag=ref.tag)


def list_images(client: docker.DockerClient) -> List[Any]:
    print(f"List Docker images for: {client.api.base_url}")
    images = client.images.list(all=True)
    for image in images:
        name = image.tags[0] if image.tags else "<none>"
        print(f"\tFound image {name} (id:{image.short_id})")
    return images


def list_containers(client: docker.DockerClient) -> List[Any]:
    print(f"List Docker containers for: {client.api.base_url}")
    containers = client.containers.list(all=True)
    for container in containers:
        print(f"\tFound container {container.name} (id:{container.short_id})")
    return containers


def create_container(client: docker.DockerClient, ref: ImageRef, name: str) -> Any:
    return client.containers.create(image=str(ref), name=name)


def commit_container(container: Any, repository: str, tag: str) -> ImageRef:
    """Capture the container filesystem as a new image."""
    print(f"Committing image at: {repository}")
    container.commit(repository=repository, tag=tag)
    return ImageRef(repository=repository, tag=tag)


def push_image(client: docker.DockerClient, ref: ImageRef,
               credentials: RegistryCredentials, server_address: str) -> List[Dict[str, Any]]:
    """
    Push an image to a private registry and return the progress entries.

    The engine reports push failures inside the progress stream rather than
    as an HTTP error, so an entry carrying an error raises RuntimeError.
    """
    auth_config = {
        "username": credentials.username,
        "password": credentials.password,
        "serveraddress": server_address,
    }

    print(f"Pushing image {ref}...")
    progress = []
    for entry in client.images.push(ref.repository, tag=ref.tag, auth_config=auth_config,
                                    stream=True, decode=True):
        progress.append(entry)
        if "error" in entry:
            raise RuntimeError(f"Failed to push {ref}: {entry['error']}")
        if "status" in entry and "id" not in entry:
            print(f"\t{entry['status']}")

    print(f"✅ Pushed {ref}")
    return progress
