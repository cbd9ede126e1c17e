"""Audit log queries against the provisioning API."""

from __future__ import annotations

from typing import Optional

from provadmin.core.api.client import ProvisioningClient, client_for_request
from provadmin.domains.audit.schemas import AuditLogResponse, AuditQuery

AUDIT_PATH = "/api/v1/audit"


def get_audit_logs(query: AuditQuery, client: Optional[ProvisioningClient] = None) -> AuditLogResponse:
    body = (client or client_for_request()).get(AUDIT_PATH, params=query.to_params())
    return AuditLogResponse.model_validate(body or {})
