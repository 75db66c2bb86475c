#!/usr/bin/env python3
"""
KUBEGETINFO EXTRACTOR - Scheduling Field Surgeon
------------------------------------------------
Locates the pod-level spec inside any retrieved object and lifts the
scheduling-relevant fields out of it, either as one aggregated
SchedulingSnapshot or as a single narrowed field group.

Where the pod spec lives depends only on the declared kind: a Pod carries
it at 'spec', workload controllers wrap it at 'spec.template.spec'. Unknown
kinds fall back to 'spec'; if that guess is wrong the result is simply empty.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from kubegetinfo.core.config import MergePolicy
from kubegetinfo.core.models import (
    ContainerResources,
    Document,
    FieldLocation,
    SchedulingSnapshot,
)
from kubegetinfo.extraction.document import (
    nested_bool,
    nested_int,
    nested_list,
    nested_map,
    nested_string,
    nested_string_map,
)
from kubegetinfo.extraction.quantity import sum_quantities

logger = logging.getLogger("kubegetinfo.extractor")

POD_SPEC: FieldLocation = ("spec",)
TEMPLATE_POD_SPEC: FieldLocation = ("spec", "template", "spec")

# Closed set of kinds that wrap a pod template
TEMPLATE_KINDS: Dict[str, FieldLocation] = {
    "Pod": POD_SPEC,
    "Deployment": TEMPLATE_POD_SPEC,
    "StatefulSet": TEMPLATE_POD_SPEC,
    "DaemonSet": TEMPLATE_POD_SPEC,
    "ReplicaSet": TEMPLATE_POD_SPEC,
    "Job": TEMPLATE_POD_SPEC,
    "CronJob": TEMPLATE_POD_SPEC,
}


class SchedulingField(str, Enum):
    """The narrowed field groups offered by 'scheduling <field>'."""
    TOLERATIONS = "tolerations"
    AFFINITY = "affinity"
    NODESELECTOR = "nodeselector"
    RESOURCES = "resources"
    TOPOLOGY = "topology"
    PRIORITY = "priority"
    RUNTIME = "runtime"

    @classmethod
    def names(cls) -> List[str]:
        return [f.value for f in cls]

    @classmethod
    def parse(cls, raw: str) -> "SchedulingField":
        for member in cls:
            if member.value == raw:
                return member
        raise ValueError(f"unknown scheduling field '{raw}' (allowed: {', '.join(cls.names())})")


FieldView = Union[List[Any], Dict[str, Any], List[ContainerResources], None]


def locate_spec_root(kind: Optional[str]) -> FieldLocation:
    """Path to the pod-level spec for objects of `kind`."""
    return TEMPLATE_KINDS.get(kind or "", POD_SPEC)


def _non_empty(value):
    return value if value else None


class DocumentFieldExtractor:
    """
    Read-only extraction over a single Document. One instance can serve
    any number of documents; it holds nothing but the merge policy.
    """

    def __init__(self, merge_policy: MergePolicy = MergePolicy.CONCAT):
        self.merge_policy = merge_policy

    # --- FULL SNAPSHOT ---

    def extract_scheduling_snapshot(self, doc: Document) -> Optional[SchedulingSnapshot]:
        """
        Builds the aggregated snapshot for `doc`. Returns None (not an
        empty snapshot) when no scheduling information is present at all.
        """
        root = locate_spec_root(nested_string(doc, ("kind",)))

        def at(key: str) -> FieldLocation:
            return root + (key,)

        requests, limits = self._merge_container_resources(doc, root)

        snapshot = SchedulingSnapshot(
            node_selector=_non_empty(nested_string_map(doc, at("nodeSelector"))),
            node_name=_non_empty(nested_string(doc, at("nodeName"))),
            affinity=_non_empty(nested_map(doc, at("affinity"))),
            tolerations=_non_empty(nested_list(doc, at("tolerations"))),
            topology_spread_constraints=_non_empty(nested_list(doc, at("topologySpreadConstraints"))),
            resource_requests=_non_empty(requests),
            resource_limits=_non_empty(limits),
            scheduler_name=_non_empty(nested_string(doc, at("schedulerName"))),
            priority_class_name=_non_empty(nested_string(doc, at("priorityClassName"))),
            # Existence, not truthiness: priority 0 is a real value
            priority=nested_int(doc, at("priority")),
            preemption_policy=_non_empty(nested_string(doc, at("preemptionPolicy"))),
            runtime_class_name=_non_empty(nested_string(doc, at("runtimeClassName"))),
            host_network=bool(nested_bool(doc, at("hostNetwork"))),
            host_pid=bool(nested_bool(doc, at("hostPID"))),
            host_ipc=bool(nested_bool(doc, at("hostIPC"))),
        )

        if snapshot.is_empty():
            return None
        return snapshot

    def _merge_container_resources(self, doc: Document, root: FieldLocation):
        requests: Dict[str, Any] = {}
        limits: Dict[str, Any] = {}

        for container in nested_list(doc, root + ("containers",)) or []:
            if not isinstance(container, dict):
                continue
            self._merge_into(requests, nested_map(container, ("resources", "requests")))
            self._merge_into(limits, nested_map(container, ("resources", "limits")))

        return requests, limits

    def _merge_into(self, merged: Dict[str, Any], incoming: Optional[Dict[str, Any]]):
        for key, value in (incoming or {}).items():
            if key not in merged:
                merged[key] = value
                continue

            existing = merged[key]
            # Only string pairs combine; anything else keeps the first value seen
            if not (isinstance(existing, str) and isinstance(value, str)):
                continue

            if self.merge_policy is MergePolicy.SUM:
                total = sum_quantities([existing, value])
                if total is not None:
                    merged[key] = total
                    continue
                logger.debug(f"Cannot sum '{existing}' and '{value}' for '{key}', concatenating instead")

            # Known limitation: concatenation is not resource accounting
            merged[key] = f"{existing},{value}"

    # --- SINGLE FIELD ---

    def extract_field(self, doc: Document, field: Union[SchedulingField, str]) -> FieldView:
        """
        Returns only the requested field group, or None when it is absent.
        The shape depends on the field (see SchedulingField).
        """
        field = field if isinstance(field, SchedulingField) else SchedulingField.parse(field)
        root = locate_spec_root(nested_string(doc, ("kind",)))

        def at(key: str) -> FieldLocation:
            return root + (key,)

        if field is SchedulingField.TOLERATIONS:
            return _non_empty(nested_list(doc, at("tolerations")))
        if field is SchedulingField.AFFINITY:
            return _non_empty(nested_map(doc, at("affinity")))
        if field is SchedulingField.NODESELECTOR:
            return _non_empty(nested_string_map(doc, at("nodeSelector")))
        if field is SchedulingField.TOPOLOGY:
            return _non_empty(nested_list(doc, at("topologySpreadConstraints")))
        if field is SchedulingField.RESOURCES:
            return _non_empty(self._per_container_resources(doc, root))

        if field is SchedulingField.PRIORITY:
            priority: Dict[str, Any] = {}
            class_name = nested_string(doc, at("priorityClassName"))
            if class_name:
                priority["priorityClassName"] = class_name
            value = nested_int(doc, at("priority"))
            if value is not None:
                priority["priority"] = value
            policy = nested_string(doc, at("preemptionPolicy"))
            if policy:
                priority["preemptionPolicy"] = policy
            return _non_empty(priority)

        # SchedulingField.RUNTIME: flags are kept whenever the key is present, False included
        runtime: Dict[str, Any] = {}
        runtime_class = nested_string(doc, at("runtimeClassName"))
        if runtime_class:
            runtime["runtimeClassName"] = runtime_class
        for key in ("hostNetwork", "hostPID", "hostIPC"):
            flag = nested_bool(doc, at(key))
            if flag is not None:
                runtime[key] = flag
        return _non_empty(runtime)

    def _per_container_resources(self, doc: Document, root: FieldLocation) -> List[ContainerResources]:
        out: List[ContainerResources] = []
        for container in nested_list(doc, root + ("containers",)) or []:
            if not isinstance(container, dict):
                continue
            requests = _non_empty(nested_map(container, ("resources", "requests")))
            limits = _non_empty(nested_map(container, ("resources", "limits")))
            if requests is None and limits is None:
                continue
            out.append(ContainerResources(
                name=nested_string(container, ("name",)) or "",
                requests=requests,
                limits=limits,
            ))
        return out
