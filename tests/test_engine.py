#!/usr/bin/env python3
"""
KUBEGETINFO ENGINE TESTS
------------------------
End-to-end query flow against in-memory discovery and store: namespace
scoping, fail-fast retrieval by name and the per-command output shape.
"""

import pytest

from kubegetinfo.core.config import GetInfoConfig, MergePolicy
from kubegetinfo.core.engine import GetInfoEngine, QueryRequest
from kubegetinfo.core.errors import ObjectRetrievalError, ResourceNotFoundError
from kubegetinfo.core.models import CatalogEntry, OwnerReference
from kubegetinfo.discovery.catalog import DiscoveryResult
from kubegetinfo.extraction.extractor import SchedulingField

CATALOG = [
    CatalogEntry("", "v1", "pods", "Pod", ("po",), True),
    CatalogEntry("", "v1", "nodes", "Node", ("no",), False),
    CatalogEntry("apps", "v1", "deployments", "Deployment", ("deploy",), True),
]


class MemoryDiscovery:
    def list_resource_catalog(self):
        return DiscoveryResult(entries=list(CATALOG))


class MemoryStore:
    """Objects keyed by (plural, namespace, name); records every call."""

    def __init__(self, objects):
        self.objects = objects
        self.calls = []

    def get(self, coordinate, namespace, name):
        self.calls.append(("get", coordinate.plural_name, namespace, name))
        try:
            return self.objects[(coordinate.plural_name, namespace, name)]
        except KeyError:
            raise ObjectRetrievalError(f"error getting {name}: 404 Not Found") from None

    def list(self, coordinate, namespace, label_selector=None):
        self.calls.append(("list", coordinate.plural_name, namespace, label_selector))
        return [doc for (plural, ns, _), doc in self.objects.items()
                if plural == coordinate.plural_name and namespace in (None, ns)]


@pytest.fixture
def store(deployment_doc, pod_doc):
    node = {"kind": "Node", "metadata": {"name": "node-1", "labels": {"zone": "a"}}, "spec": {}}
    other = {"kind": "Pod", "metadata": {"name": "api-0", "namespace": "staging"}, "spec": {}}
    return MemoryStore({
        ("deployments", "prod", "web"): deployment_doc,
        ("pods", "prod", "web-7d4f-abcde"): pod_doc,
        ("pods", "staging", "api-0"): other,
        ("nodes", None, "node-1"): node,
    })


@pytest.fixture
def engine(store):
    return GetInfoEngine(MemoryDiscovery(), store, current_namespace=lambda: "prod")


def test_labels_for_named_object(engine):
    result = engine.run(QueryRequest(command="labels", resource_type="deploy", names=["web"]))
    assert result.namespaced
    assert result.output.to_dict() == {
        "items": [{"name": "web", "namespace": "prod", "labels": {"app": "web", "tier": "frontend"}}],
    }


def test_list_uses_current_namespace(engine, store):
    result = engine.run(QueryRequest(command="annotations", resource_type="pods"))
    assert [i.name for i in result.output.items] == ["web-7d4f-abcde"]
    assert result.output.items[0].annotations == {}
    assert store.calls == [("list", "pods", "prod", None)]


def test_explicit_namespace_and_selector(engine, store):
    engine.run(QueryRequest(command="labels", resource_type="po", namespace="staging", selector="app=api"))
    assert store.calls == [("list", "pods", "staging", "app=api")]


def test_all_namespaces(engine, store):
    result = engine.run(QueryRequest(command="labels", resource_type="pods", namespace="staging",
                                     all_namespaces=True))
    assert store.calls == [("list", "pods", None, None)]
    assert {i.namespace for i in result.output.items} == {"prod", "staging"}


def test_cluster_scoped_type_ignores_namespace(engine, store):
    result = engine.run(QueryRequest(command="labels", resource_type="nodes", namespace="prod"))
    assert store.calls == [("list", "nodes", None, None)]
    assert not result.namespaced
    assert result.output.to_dict() == {"items": [{"name": "node-1", "labels": {"zone": "a"}}]}


def test_current_namespace_not_consulted_when_not_needed(store):
    def fail():
        raise AssertionError("current namespace should not be read")

    engine = GetInfoEngine(MemoryDiscovery(), store, current_namespace=fail)
    engine.run(QueryRequest(command="labels", resource_type="nodes"))
    engine.run(QueryRequest(command="labels", resource_type="pods", namespace="prod"))


def test_names_are_fetched_in_order_and_fail_fast(engine, store):
    with pytest.raises(ObjectRetrievalError, match="error getting ghost"):
        engine.run(QueryRequest(command="owner", resource_type="pods",
                                names=["web-7d4f-abcde", "ghost", "never-fetched"]))
    assert [c[3] for c in store.calls] == ["web-7d4f-abcde", "ghost"]


def test_owner_command(engine):
    result = engine.run(QueryRequest(command="owner", resource_type="pods", names=["web-7d4f-abcde"]))
    assert result.output.items[0].owner_references == [
        OwnerReference(kind="ReplicaSet", name="web-7d4f", namespace="prod"),
    ]


def test_scheduling_snapshot_command(engine):
    result = engine.run(QueryRequest(command="scheduling", resource_type="deployments", names=["web"]))
    item = result.output.to_dict()["items"][0]
    assert item["scheduling"]["nodeSelector"] == {"disktype": "ssd"}
    assert item["scheduling"]["resourceRequests"] == {"cpu": "1,500m", "memory": "128Mi,1Gi"}


def test_scheduling_snapshot_respects_merge_policy(store):
    engine = GetInfoEngine(MemoryDiscovery(), store, config=GetInfoConfig(resource_merge=MergePolicy.SUM),
                           current_namespace=lambda: "prod")
    result = engine.run(QueryRequest(command="scheduling", resource_type="deployments", names=["web"]))
    assert result.output.items[0].scheduling.resource_requests == {"cpu": "1500m", "memory": "1152Mi"}


@pytest.mark.parametrize("field, key", [
    (SchedulingField.TOLERATIONS, "tolerations"),
    (SchedulingField.NODESELECTOR, "nodeSelector"),
    (SchedulingField.RESOURCES, "resources"),
    (SchedulingField.PRIORITY, "priority"),
])
def test_scheduling_field_command(engine, field, key):
    result = engine.run(QueryRequest(command="scheduling", resource_type="deploy", names=["web"],
                                     scheduling_field=field))
    item = result.output.to_dict()["items"][0]
    assert set(item) == {"name", "namespace", key}


def test_absent_field_leaves_only_identity(engine):
    result = engine.run(QueryRequest(command="scheduling", resource_type="deploy", names=["web"],
                                     scheduling_field=SchedulingField.AFFINITY))
    assert result.output.to_dict() == {"items": [{"name": "web", "namespace": "prod"}]}


def test_unknown_resource_type(engine, store):
    with pytest.raises(ResourceNotFoundError):
        engine.run(QueryRequest(command="labels", resource_type="widgets"))
    assert store.calls == []


def test_unknown_command(engine):
    with pytest.raises(ValueError, match="unknown command"):
        engine.run(QueryRequest(command="describe", resource_type="pods"))
