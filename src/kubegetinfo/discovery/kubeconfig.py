#!/usr/bin/env python3
"""
KUBEGETINFO CLUSTER ACCESS
--------------------------
The single place where cluster credentials are loaded, so everything
downstream only ever sees an ApiClient.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

import logging
from typing import Any

from kubernetes import client
from kubernetes import config as kube_config
from kubernetes.config.config_exception import ConfigException

from kubegetinfo.core.config import GetInfoConfig
from kubegetinfo.core.errors import ClusterConnectionError

logger = logging.getLogger("kubegetinfo.kubeconfig")

DEFAULT_NAMESPACE = "default"


def load_api_client(cfg: GetInfoConfig) -> Any:
    """
    In-cluster service account first (unless a kubeconfig or context was
    asked for explicitly), then the kubeconfig file.
    """
    if not cfg.kubeconfig and not cfg.context:
        try:
            configuration = client.Configuration()
            kube_config.load_incluster_config(client_configuration=configuration)
            logger.debug("Using in-cluster configuration")
            return client.ApiClient(configuration)
        except ConfigException:
            logger.debug("Not running in a cluster, falling back to kubeconfig")

    try:
        return kube_config.new_client_from_config(config_file=cfg.kubeconfig, context=cfg.context)
    except (ConfigException, OSError) as e:
        raise ClusterConnectionError(f"error building config from kubeconfig: {e}") from e


def current_namespace(cfg: GetInfoConfig) -> str:
    """Namespace of the selected kubeconfig context, 'default' when unset."""
    try:
        contexts, active = kube_config.list_kube_config_contexts(config_file=cfg.kubeconfig)
    except (ConfigException, OSError):
        return DEFAULT_NAMESPACE

    selected = active
    if cfg.context:
        selected = next((c for c in contexts or [] if c.get("name") == cfg.context), None)
    if not selected:
        return DEFAULT_NAMESPACE

    return (selected.get("context") or {}).get("namespace") or DEFAULT_NAMESPACE
