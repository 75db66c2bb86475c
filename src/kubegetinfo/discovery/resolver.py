#!/usr/bin/env python3
"""
KUBEGETINFO RESOLVER - Type String to Coordinate
------------------------------------------------
Maps whatever the user typed ('po', 'Pods', 'deployment') onto a
ResourceCoordinate using the live catalog.

Matching is case-insensitive. Each entry is tested against its plural
name, then its kind, then its short aliases in declared order. The first
entry in catalog order that matches wins: this is first-match, not
best-match. Sub-resources ('pods/log') are never candidates.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

import logging
from typing import Iterable

from kubegetinfo.core.config import CatalogOrder
from kubegetinfo.core.errors import ResourceNotFoundError
from kubegetinfo.core.models import CatalogEntry, ResourceCoordinate
from kubegetinfo.discovery.catalog import DiscoveryService, order_catalog

logger = logging.getLogger("kubegetinfo.resolver")


class ResourceCatalogResolver:

    def __init__(self, catalog_order: CatalogOrder = CatalogOrder.GROUP):
        self.catalog_order = catalog_order

    @staticmethod
    def matches(entry: CatalogEntry, wanted: str) -> bool:
        """`wanted` must already be lower-cased."""
        if entry.plural_name.lower() == wanted:
            return True
        if entry.kind.lower() == wanted:
            return True
        return any(alias.lower() == wanted for alias in entry.short_aliases)

    def resolve(self, resource_type: str, catalog: Iterable[CatalogEntry]) -> ResourceCoordinate:
        """
        Pure first-match lookup over `catalog` as given. Raises
        ResourceNotFoundError when nothing matches (an empty catalog included).
        """
        wanted = (resource_type or "").strip().lower()
        if not wanted:
            raise ResourceNotFoundError(resource_type)

        for entry in catalog:
            if entry.is_subresource:
                continue
            if self.matches(entry, wanted):
                coordinate = ResourceCoordinate.from_entry(entry)
                logger.debug(f"Resolved '{resource_type}' to {coordinate} (namespaced={coordinate.namespaced})")
                return coordinate

        raise ResourceNotFoundError(resource_type)

    def resolve_from(self, discovery: DiscoveryService, resource_type: str) -> ResourceCoordinate:
        """
        Runs discovery, orders the catalog and resolves against it. A partial
        discovery only warns; CatalogUnavailableError from discovery propagates.
        """
        result = discovery.list_resource_catalog()
        if result.partial:
            logger.warning(
                f"Partial API discovery, continuing with {len(result.entries)} entries. "
                f"Failed: {', '.join(sorted(result.failed_groups))}"
            )
        return self.resolve(resource_type, order_catalog(result.entries, self.catalog_order))
