from unittest import mock

import pytest
import requests

from acrhooks.docker_registry import RegistryApiClient
from acrhooks.models import RegistryCredentials

CREDENTIALS = RegistryCredentials("acr1", "pw")


def test_repository_relative_to_login_server():
    client = RegistryApiClient("acr1.azurecr.io", "acr1.azurecr.io/samples/hello", CREDENTIALS)

    assert client.repository == "samples/hello"
    assert client.registry_url == "https://acr1.azurecr.io"


@mock.patch("acrhooks.docker_registry.requests.get")
def test_list_tags(mock_get):
    mock_get.return_value.json.return_value = {"name": "samples/hello", "tags": ["latest", "v1"]}
    client = RegistryApiClient("acr1.azurecr.io", "samples/hello", CREDENTIALS)

    assert client.list_tags() == ["latest", "v1"]
    url = mock_get.call_args.args[0]
    assert url == "https://acr1.azurecr.io/v2/samples/hello/tags/list"
    assert mock_get.call_args.kwargs["auth"] == ("acr1", "pw")


@mock.patch("acrhooks.docker_registry.requests.get")
def test_get_manifest_raises_for_status(mock_get):
    mock_get.return_value.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")
    client = RegistryApiClient("acr1.azurecr.io", "samples/hello", CREDENTIALS)

    with pytest.raises(requests.HTTPError):
        client.get_manifest("latest")


@pytest.mark.parametrize("status_code, expected", [(200, True), (404, False)])
@mock.patch("acrhooks.docker_registry.requests.head")
def test_has_tag(mock_head, status_code, expected):
    mock_head.return_value.status_code = status_code
    client = RegistryApiClient("acr1.azurecr.io", "samples/hello", CREDENTIALS)

    assert client.has_tag("latest") is expected
    assert mock_head.call_args.args[0] == "https://acr1.azurecr.io/v2/samples/hello/manifests/latest"
