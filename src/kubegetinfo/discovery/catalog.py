#!/usr/bin/env python3
"""
KUBEGETINFO CATALOG - API Discovery
-----------------------------------
Builds the resource catalog from the cluster's discovery endpoints:

1. /api          -> legacy core versions (v1)
2. /apis         -> every API group and its versions
3. per version   -> the resources served by that group-version

Group-versions that fail (a broken aggregated API server is the usual
culprit) are recorded and skipped; the rest of the catalog stays usable.
Only a discovery that yields nothing at all is fatal.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from kubegetinfo.core.config import CatalogOrder
from kubegetinfo.core.errors import CatalogUnavailableError
from kubegetinfo.core.models import CatalogEntry
from kubegetinfo.discovery.transport import get_json

logger = logging.getLogger("kubegetinfo.discovery")

# Failures of a single discovery request
DISCOVERY_ERRORS = (ApiException, HTTPError, ValueError)


@dataclass
class DiscoveryResult:
    """Catalog entries plus the group-versions that could not be listed."""
    entries: List[CatalogEntry] = field(default_factory=list)
    failed_groups: Dict[str, str] = field(default_factory=dict)

    @property
    def partial(self) -> bool:
        return bool(self.failed_groups)


class DiscoveryService(Protocol):
    def list_resource_catalog(self) -> DiscoveryResult:
        ...


def parse_group_version(group_version: str) -> Optional[Tuple[str, str]]:
    """'v1' -> ('', 'v1'); 'apps/v1' -> ('apps', 'v1'); malformed -> None."""
    parts = group_version.split("/")
    if len(parts) == 1 and parts[0]:
        return "", parts[0]
    if len(parts) == 2 and all(parts):
        return parts[0], parts[1]
    return None


def entries_from_resource_list(resource_list: Dict[str, Any], fallback_gv: str = "") -> List[CatalogEntry]:
    """Turns one APIResourceList body into catalog entries (sub-resources included)."""
    gv = parse_group_version(resource_list.get("groupVersion") or fallback_gv)
    if gv is None:
        logger.debug(f"Skipping resource list with malformed groupVersion '{resource_list.get('groupVersion')}'")
        return []
    group, version = gv

    entries = []
    for res in resource_list.get("resources") or []:
        if not isinstance(res, dict) or not res.get("name"):
            continue
        entries.append(CatalogEntry(
            api_group=group,
            api_version=version,
            plural_name=res["name"],
            kind=res.get("kind") or "",
            short_aliases=tuple(res.get("shortNames") or ()),
            namespaced=bool(res.get("namespaced", False)),
        ))
    return entries


def order_catalog(entries: Iterable[CatalogEntry], order: CatalogOrder = CatalogOrder.GROUP) -> List[CatalogEntry]:
    """
    Makes the first-match tie-break explicit. GROUP puts the core group
    first and the named groups alphabetically after it; the sort is stable,
    so each group keeps its server-side version order (preferred first).
    """
    entries = list(entries)
    if order is CatalogOrder.DISCOVERY:
        return entries
    return sorted(entries, key=lambda e: (e.api_group != "", e.api_group))


class KubeDiscovery:
    """DiscoveryService backed by a kubernetes ApiClient."""

    def __init__(self, api_client: Any, request_timeout: Optional[int] = None):
        self.api_client = api_client
        self.request_timeout = request_timeout

    def _get(self, path: str) -> Dict[str, Any]:
        return get_json(self.api_client, path, timeout=self.request_timeout)

    def _group_versions(self, failed: Dict[str, str]) -> List[str]:
        """All group-versions in server order, core first."""
        group_versions: List[str] = []
        root_errors = []

        try:
            core = self._get("/api")
            group_versions.extend(v for v in core.get("versions") or [] if isinstance(v, str))
        except DISCOVERY_ERRORS as e:
            root_errors.append(f"/api: {e}")
            failed["/api"] = str(e)

        try:
            groups = self._get("/apis")
            for group in groups.get("groups") or []:
                if not isinstance(group, dict):
                    continue
                for version in group.get("versions") or []:
                    gv = version.get("groupVersion") if isinstance(version, dict) else None
                    if gv:
                        group_versions.append(gv)
        except DISCOVERY_ERRORS as e:
            root_errors.append(f"/apis: {e}")
            failed["/apis"] = str(e)

        if len(root_errors) == 2:
            raise CatalogUnavailableError(f"API discovery failed: {'; '.join(root_errors)}")
        return group_versions

    def list_resource_catalog(self) -> DiscoveryResult:
        """
        Walks every group-version. Raises CatalogUnavailableError only when
        the walk produced no entries and at least one request failed.
        """
        result = DiscoveryResult()
        group_versions = self._group_versions(result.failed_groups)
        logger.debug(f"Discovered {len(group_versions)} group-versions")

        for gv in group_versions:
            path = f"/api/{gv}" if "/" not in gv else f"/apis/{gv}"
            try:
                resource_list = self._get(path)
            except DISCOVERY_ERRORS as e:
                result.failed_groups[gv] = str(e)
                continue
            result.entries.extend(entries_from_resource_list(resource_list, gv))

        if not result.entries and result.failed_groups:
            failures = "; ".join(f"{gv}: {err}" for gv, err in result.failed_groups.items())
            raise CatalogUnavailableError(f"API discovery failed: {failures}")

        logger.debug(f"Catalog holds {len(result.entries)} entries ({len(result.failed_groups)} group-versions failed)")
        return result
