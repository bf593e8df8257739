from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.http import api_view, fail, request_data
from ..common.serializers import member_json, page_json
from ..common.validators import parse_page
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.member_service
    images = container.image_storage

    def _json(member) -> dict:
        return member_json(member, encode_image=images.encode_base64)

    def _with_upload(action):
        data = request_data()
        with images.staged(request.files.get("image")) as path:
            if path:
                data["image"] = path
            return action(data)

    @app.route("/user/registerMember", methods=["POST"], endpoint="register_member")
    @api_view
    def register_member():
        member = _with_upload(service.register_member)
        return jsonify(_json(member)), 201

    @app.route("/user/getMembers", methods=["GET"], endpoint="get_members")
    @api_view
    def get_members():
        page = service.list_members(parse_page(request.args.get("page")))
        if not page.items:
            return fail("No users found!", 404)
        return jsonify(page_json(page, _json)), 200

    @app.route("/user/deleteMember/<int:member_id>", methods=["PATCH"], endpoint="delete_member")
    @api_view
    def delete_member(member_id: int):
        return jsonify(_json(service.delete_member(member_id))), 200

    @app.route("/user/updateMember/<int:member_id>", methods=["PUT"], endpoint="update_member")
    @api_view
    def update_member(member_id: int):
        member = _with_upload(lambda data: service.update_member(member_id, data))
        return jsonify(_json(member)), 200

    @app.route("/user/searchMember", methods=["GET"], endpoint="search_member")
    @api_view
    def search_member():
        members = service.search_members(request.args.get("q"))
        return jsonify([_json(m) for m in members]), 200

    @app.route("/user/getMemberImage/<int:member_id>", methods=["GET"], endpoint="member_image")
    @api_view
    def member_image(member_id: int):
        return send_file(service.get_member_image(member_id))

    @app.route("/user/uploadImage", methods=["POST"], endpoint="upload_image")
    @api_view
    def upload_image():
        path = images.save(request.files.get("image"))
        return jsonify({"message": "Image uploaded successfully", "image_path": path}), 200
