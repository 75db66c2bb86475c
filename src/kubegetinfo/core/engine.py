#!/usr/bin/env python3
"""
KUBEGETINFO ENGINE - The Query Orchestrator
-------------------------------------------
The GetInfoEngine runs one query through its four phases:

1. Resolution  - type string -> ResourceCoordinate (live discovery)
2. Scoping     - which namespace, if any, the query targets
3. Retrieval   - explicit names one by one (fail-fast), or a single list call
4. Extraction  - one OutputItem per retrieved object, shaped by the command

Author: KubeGetInfo Team
Date: 2026-10-18
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from kubegetinfo.core.config import GetInfoConfig
from kubegetinfo.core.models import Document, Output, OutputItem, ResourceCoordinate
from kubegetinfo.discovery.catalog import DiscoveryService
from kubegetinfo.discovery.resolver import ResourceCatalogResolver
from kubegetinfo.discovery.store import ObjectStore
from kubegetinfo.extraction.extractor import DocumentFieldExtractor, SchedulingField
from kubegetinfo.extraction.metadata import (
    extract_annotations,
    extract_labels,
    extract_owner_references,
    object_name,
    object_namespace,
)

logger = logging.getLogger("kubegetinfo.engine")

COMMANDS = ("labels", "annotations", "owner", "scheduling")


@dataclass
class QueryRequest:
    command: str
    resource_type: str
    names: List[str] = field(default_factory=list)
    scheduling_field: Optional[SchedulingField] = None
    namespace: Optional[str] = None
    all_namespaces: bool = False
    selector: Optional[str] = None


@dataclass
class QueryResult:
    coordinate: ResourceCoordinate
    output: Output

    @property
    def namespaced(self) -> bool:
        return self.coordinate.namespaced


class GetInfoEngine:
    """
    Wires discovery, retrieval and extraction together. The collaborators
    are injected so the engine itself never touches credentials.
    """

    def __init__(self, discovery: DiscoveryService, store: ObjectStore,
                 config: Optional[GetInfoConfig] = None,
                 current_namespace: Optional[Callable[[], str]] = None):
        self.config = config or GetInfoConfig()
        self.discovery = discovery
        self.store = store
        self.resolver = ResourceCatalogResolver(self.config.catalog_order)
        self.extractor = DocumentFieldExtractor(self.config.resource_merge)
        self.current_namespace = current_namespace or (lambda: "default")

    def run(self, request: QueryRequest) -> QueryResult:
        if request.command not in COMMANDS:
            raise ValueError(f"unknown command '{request.command}'")

        # Phase 1: Resolution
        coordinate = self.resolver.resolve_from(self.discovery, request.resource_type)

        # Phase 2: Scoping
        namespace = self._target_namespace(request, coordinate)

        # Phase 3: Retrieval
        documents = self._retrieve(coordinate, namespace, request)
        logger.debug(f"Retrieved {len(documents)} {coordinate.plural_name}")

        # Phase 4: Extraction
        output = Output(items=[self._build_item(doc, coordinate, request) for doc in documents])
        return QueryResult(coordinate=coordinate, output=output)

    def _target_namespace(self, request: QueryRequest, coordinate: ResourceCoordinate) -> Optional[str]:
        if not coordinate.namespaced or request.all_namespaces:
            return None
        return request.namespace or self.current_namespace()

    def _retrieve(self, coordinate: ResourceCoordinate, namespace: Optional[str],
                  request: QueryRequest) -> List[Document]:
        if request.names:
            # Sequential and fail-fast: the first failing name aborts the query
            return [self.store.get(coordinate, namespace, name) for name in request.names]
        return self.store.list(coordinate, namespace, request.selector)

    def _build_item(self, doc: Document, coordinate: ResourceCoordinate, request: QueryRequest) -> OutputItem:
        item = OutputItem(name=object_name(doc))
        if coordinate.namespaced:
            item.namespace = object_namespace(doc)

        if request.command == "labels":
            item.labels = extract_labels(doc)
        elif request.command == "annotations":
            item.annotations = extract_annotations(doc)
        elif request.command == "owner":
            item.owner_references = extract_owner_references(doc)
        elif request.scheduling_field is None:
            item.scheduling = self.extractor.extract_scheduling_snapshot(doc)
        else:
            field_name = request.scheduling_field
            self._apply_field(item, field_name, self.extractor.extract_field(doc, field_name))
        return item

    @staticmethod
    def _apply_field(item: OutputItem, field_name: SchedulingField, value) -> None:
        attr = {
            SchedulingField.TOLERATIONS: "tolerations",
            SchedulingField.AFFINITY: "affinity",
            SchedulingField.NODESELECTOR: "node_selector",
            SchedulingField.RESOURCES: "resources",
            SchedulingField.TOPOLOGY: "topology_spread_constraints",
            SchedulingField.PRIORITY: "priority",
            SchedulingField.RUNTIME: "runtime",
        }[field_name]
        setattr(item, attr, value)
