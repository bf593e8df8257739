from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_view, request_data
from ..common.serializers import region_json
from ..container import Container
from ..core.enums import RegionKind

# URL label used by the mobile client for each kind.
_LABELS = {RegionKind.ZONE: ("Zone", "Zones"), RegionKind.DISTRICT: ("District", "Districts")}


def register(app: Flask, container: Container) -> None:
    service = container.region_service

    for kind, (label, plural) in _LABELS.items():
        _register_kind(app, service, kind, label, plural)


def _register_kind(app: Flask, service, kind: RegionKind, label: str, plural: str) -> None:
    key = kind.value

    @api_view
    def add():
        region = service.add(kind, request_data().get(key))
        return jsonify(region_json(region)), 200

    @api_view
    def list_active():
        return jsonify([region_json(r) for r in service.list_active(kind)]), 200

    @api_view
    def update(region_id: int):
        region = service.update(kind, region_id, request_data().get(key))
        return jsonify(region_json(region)), 200

    @api_view
    def delete(region_id: int):
        return jsonify(region_json(service.delete(kind, region_id))), 200

    @api_view
    def search():
        return jsonify([region_json(r) for r in service.search(kind, request.args.get("q"))]), 200

    app.add_url_rule(f"/user/add{label}", f"add_{key}", add, methods=["POST"])
    app.add_url_rule(f"/user/get{label}", f"get_{key}", list_active, methods=["GET"])
    app.add_url_rule(f"/user/update{label}/<int:region_id>", f"update_{key}", update, methods=["PUT"])
    app.add_url_rule(f"/user/delete{label}/<int:region_id>", f"delete_{key}", delete, methods=["PATCH"])
    app.add_url_rule(f"/user/search{plural}", f"search_{key}", search, methods=["GET"])
