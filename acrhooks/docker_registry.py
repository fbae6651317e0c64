#!/usr/bin/env python3
"""
Registry HTTP API client for checking images pushed to a private registry.
"""

from typing import Any, Dict, List

import requests

from acrhooks.models import RegistryCredentials

REQUEST_TIMEOUT = 30
MANIFEST_ACCEPT = ", ".join([
    "application/vnd.docker.distribution.manifest.v2+json",
    "application/vnd.oci.image.manifest.v1+json",
])


class RegistryApiClient:
    """Client for the Docker Registry HTTP API v2 of a private registry.

    Authenticates with the registry admin credentials over basic auth.
    https://docs.docker.com/reference/api/registry/latest/
    """

    def __init__(self, login_server: str, repository: str, credentials: RegistryCredentials):
        self.registry_url = f"https://{login_server}"
        # Repository paths are relative to the login server
        prefix = f"{login_server}/"
        self.repository = repository[len(prefix):] if repository.startswith(prefix) else repository
        self.auth = (credentials.username, credentials.password)

    def list_tags(self) -> List[str]:
        """List the tags of the repository."""
        url = f"{self.registry_url}/v2/{self.repository}/tags/list"
        response = requests.get(url, auth=self.auth, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()

        return response.json().get("tags") or []

    def get_manifest(self, tag: str) -> Dict[str, Any]:
        """Get the image manifest for a tag."""
        headers = {"Accept": MANIFEST_ACCEPT}

        url = f"{self.registry_url}/v2/{self.repository}/manifests/{tag}"
        response = requests.get(url, headers=headers, auth=self.auth, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()

        return response.json()

    def has_tag(self, tag: str) -> bool:
        """Check if a tag exists using HEAD request."""
        url = f"{self.registry_url}/v2/{self.repository}/manifests/{tag}"
        response = requests.head(url, headers={"Accept": MANIFEST_ACCEPT}, auth=self.auth, timeout=REQUEST_TIMEOUT)

        return response.status_code == 200
