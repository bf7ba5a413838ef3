# ruff: noqa: S101

"""Tests for the root and health endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from blog.config import settings


@pytest.mark.common
class TestCommon:
    """Tests for service information and liveness."""

    @classmethod
    def test_root(cls, client: TestClient) -> None:
        """The root reports service name and version."""
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"service": "blog", "version": settings.version}

    @classmethod
    def test_health(cls, client: TestClient) -> None:
        """The health check answers without content."""
        response = client.get("/health")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not response.content
