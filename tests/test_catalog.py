#!/usr/bin/env python3
"""
KUBEGETINFO DISCOVERY TESTS
---------------------------
Catalog building against a fake ApiClient: partial failures are tolerated,
a discovery that yields nothing is fatal.
"""

import pytest
from kubernetes.client.rest import ApiException

from kubegetinfo.core.config import CatalogOrder
from kubegetinfo.core.errors import CatalogUnavailableError
from kubegetinfo.core.models import CatalogEntry
from kubegetinfo.discovery.catalog import (
    KubeDiscovery,
    entries_from_resource_list,
    order_catalog,
    parse_group_version,
)


@pytest.mark.parametrize("gv, expected", [
    ("v1", ("", "v1")),
    ("apps/v1", ("apps", "v1")),
    ("metrics.k8s.io/v1beta1", ("metrics.k8s.io", "v1beta1")),
    ("", None),
    ("a/b/c", None),
    ("apps/", None),
])
def test_parse_group_version(gv, expected):
    assert parse_group_version(gv) == expected


def test_entries_from_resource_list_keeps_subresources():
    entries = entries_from_resource_list({
        "groupVersion": "apps/v1",
        "resources": [
            {"name": "deployments", "kind": "Deployment", "namespaced": True, "shortNames": ["deploy"]},
            {"name": "deployments/scale", "kind": "Scale", "namespaced": True},
            {"kind": "Nameless"},
            "junk",
        ],
    })
    assert entries == [
        CatalogEntry("apps", "v1", "deployments", "Deployment", ("deploy",), True),
        CatalogEntry("apps", "v1", "deployments/scale", "Scale", (), True),
    ]


def test_entries_from_resource_list_uses_fallback_group_version():
    entries = entries_from_resource_list({"resources": [{"name": "pods", "kind": "Pod"}]}, "v1")
    assert entries[0].api_group == "" and entries[0].api_version == "v1"
    assert entries_from_resource_list({"groupVersion": "a/b/c", "resources": [{"name": "x"}]}) == []


def test_discovery_walks_all_group_versions(fake_api):
    api = fake_api()
    result = KubeDiscovery(api, request_timeout=5).list_resource_catalog()

    assert [e.plural_name for e in result.entries] == [
        "pods", "pods/log", "nodes", "services", "deployments", "deployments/scale",
    ]
    assert api.paths() == ["/api", "/apis", "/api/v1", "/apis/apps/v1", "/apis/metrics.k8s.io/v1beta1"]


def test_discovery_failing_group_is_partial(fake_api):
    result = KubeDiscovery(fake_api()).list_resource_catalog()
    assert result.partial
    assert list(result.failed_groups) == ["metrics.k8s.io/v1beta1"]


def test_discovery_survives_missing_group_list(fake_api):
    api = fake_api({"/apis": ApiException(status=500, reason="Internal Server Error")})
    result = KubeDiscovery(api).list_resource_catalog()
    assert {e.api_group for e in result.entries} == {""}
    assert list(result.failed_groups) == ["/apis"]


def test_discovery_root_failure_is_fatal(fake_api):
    api = fake_api(discovery=False)
    with pytest.raises(CatalogUnavailableError, match="API discovery failed"):
        KubeDiscovery(api).list_resource_catalog()


def test_discovery_with_no_entries_and_failures_is_fatal(fake_api):
    api = fake_api({
        "/api/v1": ApiException(status=503, reason="Service Unavailable"),
        "/apis/apps/v1": ApiException(status=503, reason="Service Unavailable"),
    })
    with pytest.raises(CatalogUnavailableError):
        KubeDiscovery(api).list_resource_catalog()


def test_order_catalog_group_puts_core_first():
    entries = [
        CatalogEntry("networking.k8s.io", "v1", "ingresses", "Ingress"),
        CatalogEntry("extensions", "v1beta1", "ingresses", "Ingress"),
        CatalogEntry("", "v1", "events", "Event"),
        CatalogEntry("events.k8s.io", "v1", "events", "Event"),
        CatalogEntry("extensions", "v1", "ingresses", "Ingress"),
    ]
    ordered = order_catalog(entries, CatalogOrder.GROUP)
    assert [(e.api_group, e.api_version) for e in ordered] == [
        ("", "v1"),
        ("events.k8s.io", "v1"),
        ("extensions", "v1beta1"),   # stable: server version order kept within a group
        ("extensions", "v1"),
        ("networking.k8s.io", "v1"),
    ]
    assert order_catalog(entries, CatalogOrder.DISCOVERY) == entries
