"""Paging defaults shared by controllers and services."""

# Rows per page on member and attendance listings.
DEFAULT_PAGE_SIZE = 10
# Events returned by /user/getEvent when no entry count is given.
DEFAULT_EVENT_ENTRIES = 10
