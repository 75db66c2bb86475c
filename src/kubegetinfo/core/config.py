#!/usr/bin/env python3
"""
KUBEGETINFO CONFIGURATION
-------------------------
Runtime configuration, read from the environment and then overridden
by command-line flags.

Env vars:
- KUBECONFIG: path to the kubeconfig file
- KUBEGETINFO_CONTEXT: kube context name
- KUBEGETINFO_CATALOG_ORDER: group|discovery (default: group)
- KUBEGETINFO_RESOURCE_MERGE: concat|sum (default: concat)
- KUBEGETINFO_LOG_LEVEL: logging level name (default: WARNING)
- KUBEGETINFO_REQUEST_TIMEOUT: seconds per API call (default: 30)

Author: KubeGetInfo Team
Date: 2026-10-18
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class CatalogOrder(str, Enum):
    """How discovered catalog entries are ordered before first-match resolution."""
    GROUP = "group"          # core group first, then groups by name
    DISCOVERY = "discovery"  # exactly as the API server listed them

    @classmethod
    def parse(cls, raw: str) -> "CatalogOrder":
        return _parse_choice(cls, raw, "catalog order")


class MergePolicy(str, Enum):
    """How the snapshot combines one resource key declared by several containers."""
    CONCAT = "concat"  # '1' + '2' -> '1,2'
    SUM = "sum"        # '1' + '500m' -> '1500m'

    @classmethod
    def parse(cls, raw: str) -> "MergePolicy":
        return _parse_choice(cls, raw, "resource merge policy")


def _parse_choice(enum_cls, raw: str, label: str):
    value = (raw or "").strip().lower()
    for member in enum_cls:
        if member.value == value:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"invalid {label} '{raw}' (allowed: {allowed})")


def env_str(name: str, default: str, *, strip: bool = True) -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip() if strip else value


def env_optional_str(name: str, default: Optional[str] = None, *, strip: bool = True) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip() if strip else value
    return value or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class GetInfoConfig:
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    catalog_order: CatalogOrder = CatalogOrder.GROUP
    resource_merge: MergePolicy = MergePolicy.CONCAT
    log_level: str = "WARNING"
    request_timeout: int = 30

    @classmethod
    def from_env(cls) -> "GetInfoConfig":
        return cls(
            kubeconfig=env_optional_str("KUBECONFIG"),
            context=env_optional_str("KUBEGETINFO_CONTEXT"),
            catalog_order=CatalogOrder.parse(env_str("KUBEGETINFO_CATALOG_ORDER", CatalogOrder.GROUP.value)),
            resource_merge=MergePolicy.parse(env_str("KUBEGETINFO_RESOURCE_MERGE", MergePolicy.CONCAT.value)),
            log_level=env_str("KUBEGETINFO_LOG_LEVEL", "WARNING").upper(),
            request_timeout=env_int("KUBEGETINFO_REQUEST_TIMEOUT", 30),
        )

    def with_overrides(
        self,
        *,
        kubeconfig: Optional[str] = None,
        context: Optional[str] = None,
        catalog_order: Optional[str] = None,
        resource_merge: Optional[str] = None,
        verbose: bool = False,
    ) -> "GetInfoConfig":
        """Returns a copy where every explicitly given flag wins over the environment."""
        changes = {}
        if kubeconfig:
            changes["kubeconfig"] = kubeconfig
        if context:
            changes["context"] = context
        if catalog_order:
            changes["catalog_order"] = CatalogOrder.parse(catalog_order)
        if resource_merge:
            changes["resource_merge"] = MergePolicy.parse(resource_merge)
        if verbose:
            changes["log_level"] = "DEBUG"
        return replace(self, **changes)
