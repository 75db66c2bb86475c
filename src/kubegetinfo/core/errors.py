#!/usr/bin/env python3
"""
KUBEGETINFO ERRORS
------------------
Every failure the tool reports to the user derives from GetInfoError.
The CLI catches GetInfoError once and turns it into 'Error: <message>'.

Extraction never raises: a malformed field is simply absent.

Author: KubeGetInfo Team
Date: 2026-10-18
"""


class GetInfoError(Exception):
    """Base class for all user-facing failures."""


class ResourceNotFoundError(GetInfoError):
    """No catalog entry matches the requested type string."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(f"resource type '{resource_type}' not found in cluster")


class CatalogUnavailableError(GetInfoError):
    """Discovery failed and produced no usable entries at all."""


class ClusterConnectionError(GetInfoError):
    """Neither in-cluster config nor a kubeconfig file could be loaded."""


class ObjectRetrievalError(GetInfoError):
    """A get or list call against the object store failed."""
