#!/usr/bin/env python3
"""
KUBEGETINFO OBJECT STORE
------------------------
Fetches objects of any resolved type as plain dictionaries.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from kubegetinfo.core.errors import ObjectRetrievalError
from kubegetinfo.core.models import Document, ResourceCoordinate
from kubegetinfo.discovery.transport import get_json

logger = logging.getLogger("kubegetinfo.store")

RETRIEVAL_ERRORS = (ApiException, HTTPError, ValueError)


class ObjectStore(Protocol):
    def get(self, coordinate: ResourceCoordinate, namespace: Optional[str], name: str) -> Document:
        ...

    def list(self, coordinate: ResourceCoordinate, namespace: Optional[str],
             label_selector: Optional[str] = None) -> List[Document]:
        ...


def resource_path(coordinate: ResourceCoordinate, namespace: Optional[str] = None,
                  name: Optional[str] = None) -> str:
    """REST path for a collection or a single object."""
    path = coordinate.api_path
    if coordinate.namespaced and namespace:
        path += f"/namespaces/{namespace}"
    path += f"/{coordinate.plural_name}"
    if name:
        path += f"/{name}"
    return path


def _describe(error: Exception) -> str:
    if isinstance(error, ApiException):
        return f"{error.status} {error.reason}".strip()
    return str(error)


class KubeObjectStore:
    """ObjectStore backed by a kubernetes ApiClient."""

    def __init__(self, api_client: Any, request_timeout: Optional[int] = None):
        self.api_client = api_client
        self.request_timeout = request_timeout

    def get(self, coordinate: ResourceCoordinate, namespace: Optional[str], name: str) -> Document:
        try:
            return get_json(self.api_client, resource_path(coordinate, namespace, name),
                            timeout=self.request_timeout)
        except RETRIEVAL_ERRORS as e:
            raise ObjectRetrievalError(f"error getting {name}: {_describe(e)}") from e

    def list(self, coordinate: ResourceCoordinate, namespace: Optional[str],
             label_selector: Optional[str] = None) -> List[Document]:
        query = [("labelSelector", label_selector)] if label_selector else []
        try:
            body = get_json(self.api_client, resource_path(coordinate, namespace),
                            query_params=query, timeout=self.request_timeout)
        except RETRIEVAL_ERRORS as e:
            raise ObjectRetrievalError(f"error listing resources: {_describe(e)}") from e
        return self._items_with_identity(body)

    @staticmethod
    def _items_with_identity(body: Dict[str, Any]) -> List[Document]:
        """
        List items come back without kind/apiVersion; restore them from the
        list itself ('DeploymentList' -> 'Deployment') so kind-based
        extraction works. The items are copied, the body is left alone.
        """
        list_kind = body.get("kind") or ""
        item_kind = list_kind[:-len("List")] if list_kind.endswith("List") else ""
        api_version = body.get("apiVersion") or ""

        items: List[Document] = []
        for raw in body.get("items") or []:
            if not isinstance(raw, dict):
                continue
            item = dict(raw)
            if not item.get("kind") and item_kind:
                item["kind"] = item_kind
            if not item.get("apiVersion") and api_version:
                item["apiVersion"] = api_version
            items.append(item)
        return items
