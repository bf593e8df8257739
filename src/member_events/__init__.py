"""Member Events backend package.

Feature modules (users, members, regions, events, attendance) each follow the
same layout: model -> repository protocol -> MySQL repository -> service ->
thin Flask controller.
"""
