"""Audit log HTML page."""

from __future__ import annotations

from urllib.parse import urlencode

from flask import Blueprint, current_app, render_template, request

from provadmin.core.api.client import ProvisioningApiError
from provadmin.core.utils.decorators import expire_on_unauthorized
from provadmin.domains.audit.schemas import AuditPage, AuditQuery
from provadmin.domains.audit.services import get_audit_logs

audit_pages_bp = Blueprint("audit_pages", __name__)


def _page_link(query: AuditQuery, skip: int) -> str:
    params = {**query.to_params(), "skip": str(skip)}
    params.pop("limit", None)
    return f"?{urlencode(params)}"


@audit_pages_bp.get("/")
@expire_on_unauthorized
def audit_page():
    query = AuditQuery.from_args(request.args, limit=current_app.config.get("AUDIT_PAGE_SIZE", 25))
    try:
        data = get_audit_logs(query)
    except ProvisioningApiError as exc:
        if exc.status == 401:
            raise
        return render_template("audit/index.html", query=query, data=None, page=None, error=exc.message), exc.status

    page = AuditPage(skip=query.skip, limit=query.limit, total=data.total)
    return render_template(
        "audit/index.html",
        query=query,
        data=data,
        page=page,
        error=None,
        prev_link=_page_link(query, page.prev_skip),
        next_link=_page_link(query, page.next_skip),
    )
