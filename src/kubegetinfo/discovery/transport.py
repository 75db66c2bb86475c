#!/usr/bin/env python3
"""
KUBEGETINFO TRANSPORT
---------------------
Raw JSON GETs through the official kubernetes ApiClient. Discovery and the
object store both talk to paths that have no typed API class, so they use
call_api directly, the same way kubernetes.dynamic does.

Author: KubeGetInfo Team
Date: 2026-10-18
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger("kubegetinfo.transport")


def get_json(api_client: Any, path: str,
             query_params: Optional[List[Tuple[str, str]]] = None,
             timeout: Optional[int] = None) -> Dict[str, Any]:
    """
    GETs `path` and decodes the body. Raises kubernetes ApiException on
    HTTP errors, urllib3 errors on transport failures and ValueError on
    an undecodable body; callers translate these into GetInfoError.
    """
    logger.debug(f"GET {path} {query_params or ''}")
    response = api_client.call_api(
        path,
        "GET",
        query_params=query_params or [],
        header_params={"Accept": "application/json"},
        auth_settings=["BearerToken"],
        _return_http_data_only=True,
        _preload_content=False,
        _request_timeout=timeout,
    )
    data = response.data
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return json.loads(data)
