"""
Container engine selection.

The local engine is preferred; a remote engine is used only when one has been
configured and answers its ping endpoint.
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence
from urllib.parse import urlsplit

import docker
import requests
from docker.errors import DockerException

PING_TIMEOUT = 5


class LocalEngine:
    name = "local"

    def is_available(self) -> bool:
        try:
            client = docker.from_env()
        except DockerException:
            return False

        try:
            return bool(client.ping())
        except (DockerException, requests.RequestException):
            return False
        finally:
            client.close()

    def connect(self) -> docker.DockerClient:
        return docker.from_env()

    def describe(self) -> str:
        return "local docker engine"


class RemoteEngine:
    name = "remote"

    def __init__(self, base_url: Optional[str]):
        self.base_url = base_url

    def _ping_url(self) -> str:
        # tcp://host:2375 is served as plain HTTP
        parts = urlsplit(self.base_url)
        scheme = "http" if parts.scheme in ("tcp", "http", "") else parts.scheme
        return f"{scheme}://{parts.netloc}/_ping"

    def is_available(self) -> bool:
        if not self.base_url:
            return False

        try:
            response = requests.get(self._ping_url(), timeout=PING_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException:
            return False

        return response.text.strip() == "OK"

    def connect(self) -> docker.DockerClient:
        return docker.DockerClient(base_url=self.base_url)

    def describe(self) -> str:
        return f"remote docker engine at {self.base_url}"


def default_engines(remote_engine_url: Optional[str] = None) -> list:
    return [LocalEngine(), RemoteEngine(remote_engine_url)]


def select_engine(engines: Sequence):
    """Return the first engine that answers, in preference order."""
    for engine in engines:
        if engine.is_available():
            print(f"🐳 Using {engine.describe()}")
            return engine

    raise ConnectionError(
        "No container engine reachable. Start a local docker engine or set DOCKER_REMOTE_HOST."
    )


@contextmanager
def open_engine(engines: Sequence) -> Iterator[docker.DockerClient]:
    """Yield a connected docker client and close it on every exit path."""
    engine = select_engine(engines)
    client = engine.connect()
    try:
        yield client
    finally:
        client.close()
