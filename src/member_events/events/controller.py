from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_view, fail, request_data
from ..common.serializers import event_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.event_service
    images = container.image_storage

    def _json(event) -> dict:
        return event_json(event, encode_image=images.encode_base64)

    def _with_upload(action):
        data = request_data()
        with images.staged(request.files.get("image")) as path:
            if path:
                data["image"] = path
            return action(data)

    @app.route("/user/addEvent", methods=["POST"], endpoint="add_event")
    @api_view
    def add_event():
        return jsonify(_json(_with_upload(service.add_event))), 200

    @app.route("/user/getEvent", methods=["GET"], endpoint="get_events_default")
    @app.route("/user/getEvent/<entry>", methods=["GET"], endpoint="get_events")
    @api_view
    def get_events(entry: str | None = None):
        events = service.list_events(entry)
        if not events:
            return fail("No Event Added yet!", 404)
        return jsonify([_json(e) for e in events]), 200

    @app.route("/user/updateEvent/<int:event_id>", methods=["PUT"], endpoint="update_event")
    @api_view
    def update_event(event_id: int):
        return jsonify(_json(_with_upload(lambda data: service.update_event(event_id, data)))), 200

    @app.route("/user/deleteEvent/<int:event_id>", methods=["PATCH"], endpoint="delete_event")
    @api_view
    def delete_event(event_id: int):
        return jsonify(_json(service.delete_event(event_id))), 200

    @app.route("/user/searchEvent", methods=["GET"], endpoint="search_event")
    @api_view
    def search_event():
        return jsonify([_json(e) for e in service.search_events(request.args.get("q"))]), 200

    @app.route("/user/getEventById/<int:event_id>", methods=["GET"], endpoint="get_event_by_id")
    @api_view
    def get_event_by_id(event_id: int):
        return jsonify(_json(service.get_event(event_id))), 200
