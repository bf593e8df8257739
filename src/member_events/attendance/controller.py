from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_view, fail, request_data
from ..common.serializers import detail_json, event_json, join_json, page_json
from ..common.validators import parse_page
from ..container import Container
from ..core.enums import AttendanceState

# Listing endpoints per state, with the message shown when a page is empty.
_LISTINGS = {
    AttendanceState.JOIN: ("/user/getJoinMembers/<int:event_id>", "get_join_members", "No joined members found!"),
    AttendanceState.LEAVE: ("/user/getLeaveMembers/<int:event_id>", "get_leave_members", "No leave members found!"),
    AttendanceState.END: ("/user/getEndMembers/<int:event_id>", "get_end_members", "No ended members found!"),
}


def register(app: Flask, container: Container) -> None:
    tracker = container.attendance_tracker

    @app.route("/user/startEvent/<int:event_id>", methods=["POST"], endpoint="start_event")
    @api_view
    def start_event(event_id: int):
        event = tracker.start_event(event_id)
        return jsonify(event_json(event)), 200

    @app.route("/user/joinEvent/<int:event_id>/<int:member_id>", methods=["POST"], endpoint="join_event")
    @api_view
    def join_event(event_id: int, member_id: int):
        result = tracker.join_event(event_id, member_id)
        return jsonify(join_json(result)), 200

    @app.route("/user/endEvent/<int:event_id>", methods=["POST"], endpoint="end_event")
    @api_view
    def end_event(event_id: int):
        end_note = request_data().get("end_note")
        details = tracker.end_event(event_id, end_note)
        return jsonify([detail_json(d) for d in details]), 200

    @app.route("/user/searchEventDetail", methods=["GET"], endpoint="search_event_detail")
    @api_view
    def search_event_detail():
        details = tracker.search_event_details(request.args.get("q"))
        return jsonify([detail_json(d) for d in details]), 200

    for state, (rule, endpoint, empty_message) in _LISTINGS.items():
        app.add_url_rule(rule, endpoint, _listing_view(tracker, state, empty_message), methods=["GET"])


def _listing_view(tracker, state: AttendanceState, empty_message: str):
    @api_view
    def view(event_id: int):
        page = tracker.list_by_state(event_id, state, parse_page(request.args.get("page")))
        if not page.items:
            return fail(empty_message, 404)
        return jsonify(page_json(page, detail_json)), 200

    return view
