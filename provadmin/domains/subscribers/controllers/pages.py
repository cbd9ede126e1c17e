"""Subscriber HTML pages (search, detail/edit, create, delete)."""

from __future__ import annotations

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for
from pydantic import ValidationError

from provadmin.core.api.client import ProvisioningApiError
from provadmin.core.utils.decorators import csrf_protected, expire_on_unauthorized
from provadmin.domains.subscribers.forms import field_errors, parse_create_form, parse_section_form
from provadmin.domains.subscribers.schemas import CreateSubscriberRequest, DeleteSubscriberForm, SearchForm
from provadmin.domains.subscribers.services import (
    SECTION_UPDATERS,
    create_subscriber,
    delete_subscriber,
    get_subscriber,
)

subscriber_pages_bp = Blueprint("subscriber_pages", __name__)


@subscriber_pages_bp.get("/")
def search_page():
    return render_template("subscribers/search.html", form={"mode": "iccid", "value": ""}, errors={})


@subscriber_pages_bp.post("/")
@csrf_protected
def search_submit():
    form = {"mode": request.form.get("mode", "iccid"), "value": request.form.get("value", "")}
    try:
        data = SearchForm.model_validate(form)
    except ValidationError as exc:
        return render_template("subscribers/search.html", form=form, errors=field_errors(exc)), 400
    return redirect(url_for("subscriber_pages.detail_page", identifier=data.value))


@subscriber_pages_bp.route("/new", methods=["GET", "POST"])
@expire_on_unauthorized
@csrf_protected
def create_page():
    if request.method == "GET":
        return render_template("subscribers/new.html", form={}, errors={}, api_error=None)

    try:
        data = CreateSubscriberRequest.model_validate(parse_create_form(request.form))
    except ValidationError as exc:
        return render_template("subscribers/new.html", form=request.form, errors=field_errors(exc), api_error=None), 400

    try:
        create_subscriber(data)
    except ProvisioningApiError as exc:
        if exc.status == 401:
            raise
        return render_template("subscribers/new.html", form=request.form, errors={}, api_error=exc.message), 400

    flash(f"Subscriber {data.iccid} created", "success")
    return redirect(url_for("subscriber_pages.detail_page", identifier=data.iccid))


@subscriber_pages_bp.route("/delete", methods=["GET", "POST"])
@expire_on_unauthorized
@csrf_protected
def delete_page():
    if request.method == "GET":
        return render_template("subscribers/delete.html", form={}, errors={}, api_error=None)

    form = {"identifier": request.form.get("identifier", "")}
    try:
        data = DeleteSubscriberForm.model_validate(form)
    except ValidationError as exc:
        return render_template("subscribers/delete.html", form=form, errors=field_errors(exc), api_error=None), 400

    try:
        delete_subscriber(data.identifier)
    except ProvisioningApiError as exc:
        if exc.status == 401:
            raise
        return render_template("subscribers/delete.html", form=form, errors={}, api_error=exc.message), 400

    flash(f"Subscriber {data.identifier} deleted", "success")
    return redirect(url_for("subscriber_pages.delete_page"))


@subscriber_pages_bp.get("/<identifier>")
@expire_on_unauthorized
def detail_page(identifier: str):
    try:
        result = get_subscriber(identifier)
    except ProvisioningApiError as exc:
        if exc.status == 401:
            raise
        template = "subscribers/not_found.html" if exc.status == 404 else "subscribers/load_error.html"
        return render_template(template, identifier=identifier, message=exc.message), exc.status
    return render_template("subscribers/detail.html", identifier=identifier, result=result, subscriber=result.data)


@subscriber_pages_bp.post("/<identifier>/<section>")
@expire_on_unauthorized
@csrf_protected
def update_section(identifier: str, section: str):
    if section not in SECTION_UPDATERS:
        abort(404)
    schema, patch = SECTION_UPDATERS[section]
    try:
        payload = schema.model_validate(parse_section_form(section, request.form))
    except ValidationError as exc:
        for field, message in field_errors(exc).items():
            flash(f"{section} / {field}: {message}", "error")
        return redirect(url_for("subscriber_pages.detail_page", identifier=identifier))

    try:
        patch(identifier, payload)
    except ProvisioningApiError as exc:
        if exc.status == 401:
            raise
        flash(f"Could not update {section}: {exc.message}", "error")
    else:
        flash(f"Updated {section}", "success")
    return redirect(url_for("subscriber_pages.detail_page", identifier=identifier))
