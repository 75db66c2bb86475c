#!/usr/bin/env python3
"""
KUBEGETINFO METADATA READERS
----------------------------
Labels, annotations and owner references live at the same place for every
kind, so these readers need no spec-root lookup.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

from typing import Dict, List, Optional

from kubegetinfo.core.models import Document, OwnerReference
from kubegetinfo.extraction.document import nested_list, nested_string, nested_string_map


def object_name(doc: Document) -> str:
    return nested_string(doc, ("metadata", "name")) or ""


def object_namespace(doc: Document) -> Optional[str]:
    return nested_string(doc, ("metadata", "namespace")) or None


def extract_labels(doc: Document) -> Dict[str, str]:
    return nested_string_map(doc, ("metadata", "labels")) or {}


def extract_annotations(doc: Document) -> Dict[str, str]:
    return nested_string_map(doc, ("metadata", "annotations")) or {}


def extract_owner_references(doc: Document) -> List[OwnerReference]:
    """
    Reads metadata.ownerReferences. A reference without its own namespace
    belongs to the namespace of the object that carries it.
    """
    refs: List[OwnerReference] = []
    for raw in nested_list(doc, ("metadata", "ownerReferences")) or []:
        if not isinstance(raw, dict):
            continue
        refs.append(OwnerReference(
            kind=nested_string(raw, ("kind",)) or "",
            name=nested_string(raw, ("name",)) or "",
            namespace=nested_string(raw, ("namespace",)) or object_namespace(doc),
        ))
    return refs
