#!/usr/bin/env python3
"""
KUBEGETINFO CORE MODELS
-----------------------
Defines the fundamental data structures shared by the resolver, the
extractor and the output layer. Retrieved objects themselves stay plain
dictionaries; these models describe what we know ABOUT them.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from typing import Optional, Any, Dict, List, Tuple

# A path of keys into a retrieved object, e.g. ("spec", "template", "spec")
FieldLocation = Tuple[str, ...]

# One retrieved object, exactly as the API server returned it (decoded JSON)
Document = Dict[str, Any]


@dataclass(frozen=True)
class CatalogEntry:
    """
    One object type advertised by the cluster's discovery endpoints.

    Sub-resources (e.g. 'pods/log') are reported by discovery as well;
    they stay in the catalog but are never a resolution target.
    """
    api_group: str                  # '' for the core group
    api_version: str                # e.g. 'v1', 'v1beta1'
    plural_name: str                # e.g. 'deployments'
    kind: str                       # e.g. 'Deployment'
    short_aliases: Tuple[str, ...] = ()  # e.g. ('deploy',)
    namespaced: bool = False

    @property
    def is_subresource(self) -> bool:
        return "/" in self.plural_name


@dataclass(frozen=True)
class ResourceCoordinate:
    """The fully-qualified address of an object type at the API boundary."""
    api_group: str
    api_version: str
    plural_name: str
    namespaced: bool = False

    @property
    def group_version(self) -> str:
        if not self.api_group:
            return self.api_version
        return f"{self.api_group}/{self.api_version}"

    @property
    def api_path(self) -> str:
        """Root REST path for this group-version ('/api/v1' or '/apis/<g>/<v>')."""
        if not self.api_group:
            return f"/api/{self.api_version}"
        return f"/apis/{self.api_group}/{self.api_version}"

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "ResourceCoordinate":
        return cls(
            api_group=entry.api_group,
            api_version=entry.api_version,
            plural_name=entry.plural_name,
            namespaced=entry.namespaced,
        )

    def __str__(self) -> str:
        return f"{self.plural_name}.{self.group_version}"


@dataclass
class ContainerResources:
    """Requests and limits of a single container (no cross-container merge)."""
    name: str
    requests: Optional[Dict[str, Any]] = None
    limits: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.requests:
            out["requests"] = self.requests
        if self.limits:
            out["limits"] = self.limits
        return out


@dataclass
class SchedulingSnapshot:
    """
    Aggregated scheduling data of one object.

    None means 'absent', which is different from an empty collection.
    The three host flags have no presence distinction and default to False.
    """
    node_selector: Optional[Dict[str, str]] = None
    node_name: Optional[str] = None
    affinity: Optional[Dict[str, Any]] = None
    tolerations: Optional[List[Any]] = None
    topology_spread_constraints: Optional[List[Any]] = None
    resource_requests: Optional[Dict[str, Any]] = None
    resource_limits: Optional[Dict[str, Any]] = None
    scheduler_name: Optional[str] = None
    priority_class_name: Optional[str] = None
    priority: Optional[int] = None
    preemption_policy: Optional[str] = None
    runtime_class_name: Optional[str] = None
    host_network: bool = False
    host_pid: bool = False
    host_ipc: bool = False

    # Attribute -> API field name, in output order
    FIELD_NAMES = (
        ("node_selector", "nodeSelector"),
        ("node_name", "nodeName"),
        ("affinity", "affinity"),
        ("tolerations", "tolerations"),
        ("topology_spread_constraints", "topologySpreadConstraints"),
        ("resource_requests", "resourceRequests"),
        ("resource_limits", "resourceLimits"),
        ("scheduler_name", "schedulerName"),
        ("priority_class_name", "priorityClassName"),
        ("priority", "priority"),
        ("preemption_policy", "preemptionPolicy"),
        ("runtime_class_name", "runtimeClassName"),
        ("host_network", "hostNetwork"),
        ("host_pid", "hostPID"),
        ("host_ipc", "hostIPC"),
    )

    def is_empty(self) -> bool:
        """True when every field is absent and every host flag is False."""
        for attr, _ in self.FIELD_NAMES:
            value = getattr(self, attr)
            if isinstance(value, bool):
                if value:
                    return False
            elif value is not None:
                return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for attr, api_name in self.FIELD_NAMES:
            value = getattr(self, attr)
            if value is None or value is False:
                continue
            out[api_name] = value
        return out


@dataclass
class OwnerReference:
    kind: str = ""
    name: str = ""
    namespace: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.namespace:
            out["namespace"] = self.namespace
        out["kind"] = self.kind
        out["name"] = self.name
        return out


@dataclass
class OutputItem:
    """
    One row of output. Only the attributes relevant to the requested
    command are filled; everything else stays None and is not emitted.
    """
    name: str
    namespace: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None
    owner_references: Optional[List[OwnerReference]] = None
    scheduling: Optional[SchedulingSnapshot] = None
    # Single-field scheduling views
    tolerations: Optional[List[Any]] = None
    affinity: Optional[Dict[str, Any]] = None
    node_selector: Optional[Dict[str, str]] = None
    resources: Optional[List[ContainerResources]] = None
    topology_spread_constraints: Optional[List[Any]] = None
    priority: Optional[Dict[str, Any]] = None
    runtime: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.namespace:
            out["namespace"] = self.namespace
        # labels/annotations are emitted even when empty: the command asked for them
        if self.labels is not None:
            out["labels"] = self.labels
        if self.annotations is not None:
            out["annotations"] = self.annotations
        if self.owner_references:
            out["ownerReferences"] = [ref.to_dict() for ref in self.owner_references]
        if self.scheduling is not None:
            out["scheduling"] = self.scheduling.to_dict()
        if self.tolerations:
            out["tolerations"] = self.tolerations
        if self.affinity:
            out["affinity"] = self.affinity
        if self.node_selector:
            out["nodeSelector"] = self.node_selector
        if self.resources:
            out["resources"] = [res.to_dict() for res in self.resources]
        if self.topology_spread_constraints:
            out["topologySpreadConstraints"] = self.topology_spread_constraints
        if self.priority:
            out["priority"] = self.priority
        if self.runtime:
            out["runtime"] = self.runtime
        return out


@dataclass
class Output:
    items: List[OutputItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}
