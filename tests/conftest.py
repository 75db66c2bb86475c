"""
Shared fixtures. Nothing here needs a cluster: the fake ApiClient serves
canned JSON per path and raises ApiException for anything it doesn't know.
"""

import json

import pytest
from kubernetes.client.rest import ApiException


class FakeResponse:
    def __init__(self, body):
        self.data = json.dumps(body).encode("utf-8")


class FakeApiClient:
    """Stands in for kubernetes.client.ApiClient.call_api."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def call_api(self, path, method, query_params=None, **kwargs):
        self.calls.append((method, path, list(query_params or [])))
        body = self.routes.get(path)
        if body is None:
            raise ApiException(status=404, reason="Not Found")
        if isinstance(body, Exception):
            raise body
        return FakeResponse(body)

    def paths(self):
        return [path for _, path, _ in self.calls]


CORE_V1 = {
    "kind": "APIResourceList",
    "groupVersion": "v1",
    "resources": [
        {"name": "pods", "kind": "Pod", "namespaced": True, "shortNames": ["po"]},
        {"name": "pods/log", "kind": "Pod", "namespaced": True},
        {"name": "nodes", "kind": "Node", "namespaced": False, "shortNames": ["no"]},
        {"name": "services", "kind": "Service", "namespaced": True, "shortNames": ["svc"]},
    ],
}

APPS_V1 = {
    "kind": "APIResourceList",
    "groupVersion": "apps/v1",
    "resources": [
        {"name": "deployments", "kind": "Deployment", "namespaced": True, "shortNames": ["deploy"]},
        {"name": "deployments/scale", "kind": "Scale", "namespaced": True},
    ],
}

DISCOVERY_ROUTES = {
    "/api": {"kind": "APIVersions", "versions": ["v1"]},
    "/apis": {
        "kind": "APIGroupList",
        "groups": [
            {"name": "apps", "versions": [{"groupVersion": "apps/v1", "version": "v1"}]},
            {"name": "metrics.k8s.io", "versions": [{"groupVersion": "metrics.k8s.io/v1beta1", "version": "v1beta1"}]},
        ],
    },
    "/api/v1": CORE_V1,
    "/apis/apps/v1": APPS_V1,
    "/apis/metrics.k8s.io/v1beta1": ApiException(status=503, reason="Service Unavailable"),
}


@pytest.fixture
def fake_api():
    """Factory: fake_api({path: body}) -> FakeApiClient with discovery routes preloaded."""
    def build(extra_routes=None, discovery=True):
        routes = dict(DISCOVERY_ROUTES) if discovery else {}
        routes.update(extra_routes or {})
        return FakeApiClient(routes)
    return build


@pytest.fixture
def deployment_doc():
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {
            "name": "web",
            "namespace": "prod",
            "labels": {"app": "web", "tier": "frontend"},
            "annotations": {"team": "platform"},
        },
        "spec": {
            "replicas": 2,
            "template": {
                "metadata": {"labels": {"app": "web"}},
                "spec": {
                    "nodeSelector": {"disktype": "ssd"},
                    "tolerations": [{"key": "dedicated", "operator": "Equal", "value": "web", "effect": "NoSchedule"}],
                    "priorityClassName": "high",
                    "containers": [
                        {"name": "app", "image": "nginx",
                         "resources": {"requests": {"cpu": "1", "memory": "128Mi"}, "limits": {"cpu": "2"}}},
                        {"name": "sidecar", "image": "envoy",
                         "resources": {"requests": {"cpu": "500m", "memory": "1Gi"}}},
                        {"name": "plain", "image": "busybox"},
                    ],
                },
            },
        },
    }


@pytest.fixture
def pod_doc():
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": "web-7d4f-abcde",
            "namespace": "prod",
            "ownerReferences": [
                {"apiVersion": "apps/v1", "kind": "ReplicaSet", "name": "web-7d4f", "controller": True},
            ],
        },
        "spec": {
            "nodeName": "node-1",
            "schedulerName": "default-scheduler",
            "priority": 0,
            "hostNetwork": False,
            "containers": [{"name": "app", "image": "nginx"}],
        },
    }
