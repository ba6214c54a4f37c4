"""Pytest configuration and shared fixtures."""
import sys
from pathlib import Path

# Code lives under src/ (src layout); make it importable without an install.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

import copy
import os
from typing import Any, Callable, Dict

import httpx
import pytest

METADATA_URL = "http://169.254.170.2/v4/cd189a933e5849daa93386466019ab50-2495160603"

TASK_METADATA: Dict[str, Any] = {
    "DockerId": "cd189a933e5849daa93386466019ab50-2495160603",
    "Name": "curl",
    "DockerName": "curl",
    "Image": "111122223333.dkr.ecr.us-west-2.amazonaws.com/curltest:latest",
    "ImageID": "sha256:25f3695bedfb454a50f12d127839a68ad3caf91e451c1da073db34c542c4d2cb",
    "AvailabilityZone": "us-west-2d",
    "ContainerARN": "arn:aws:ecs:us-west-2:111122223333:container/05966557-f16c-49cb-9352-24b3a0dcd0e1",
    "Networks": [
        {
            "NetworkMode": "awsvpc",
            "IPv4Addresses": ["10.0.0.108"],
            "AttachmentIndex": 0,
            "MACAddress": "0a:62:17:7a:36:68",
            "IPv4SubnetCIDRBlock": "10.0.0.0/24",
            "PrivateDNSName": "ip-10-0-0-108.us-west-2.compute.internal",
            "SubnetGatewayIpv4Address": "10.0.0.1/24",
        }
    ],
}

EXPECTED_RECORD: Dict[str, str] = {
    "ami-id": "sha256:25f3695bedfb454a50f12d127839a68ad3caf91e451c1da073db34c542c4d2cb",
    "instance-id": "cd189a933e5849daa93386466019ab50-2495160603",
    "instance-type": "FARGATE",
    "local-ipv4": "10.0.0.108",
    "local-hostname": "ip-10-0-0-108.us-west-2.compute.internal",
    "availability-zone": "us-west-2d",
    "public-hostname": "ip-10-0-0-108.us-west-2.compute.internal",
    "public-ipv4": "10.0.0.108",
    "mac": "0a:62:17:7a:36:68",
    "vpc-id": "awsvpc",
    "accountId": "111122223333",
}


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep host env vars and stray .env files out of the settings."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ECS_CONTAINER_METADATA_URI_V4", raising=False)
    for key in list(os.environ):
        if key.upper().startswith("FARGATE_METADATA_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def task_metadata() -> Dict[str, Any]:
    """Provide a fresh copy of a Fargate v4 container metadata document."""
    return copy.deepcopy(TASK_METADATA)


@pytest.fixture
def expected_record() -> Dict[str, str]:
    return dict(EXPECTED_RECORD)


@pytest.fixture
def metadata_url() -> str:
    return METADATA_URL


class RecordingHandler:
    """MockTransport handler that counts calls and replays a response factory."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.respond = respond
        self.calls = 0
        self.requests: list = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        self.requests.append(request)
        return self.respond(request)


@pytest.fixture
def json_endpoint(task_metadata: Dict[str, Any]) -> RecordingHandler:
    """Handler that serves the sample document with HTTP 200."""
    return RecordingHandler(lambda request: httpx.Response(200, json=task_metadata))
