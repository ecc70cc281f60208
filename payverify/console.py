"""
Admin Console — client side of the admin API.

The console holds one list of submissions fetched from the server and
derives every view (search, status filter, name order, stats) from it.
The list only changes through refresh() or by replacing a record with
the server's response to a transition.
"""

import logging

import requests

from payverify.errors import AppError, AuthError, ConflictError, NotFoundError, ValidationError
from payverify.models.submission import SubmissionStatus

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"

_ERRORS_BY_STATUS = {
    400: ValidationError,
    401: AuthError,
    403: AuthError,
    404: NotFoundError,
    409: ConflictError,
}


def sort_by_name(submissions):
    """Case-insensitive ascending by name."""
    return sorted(submissions, key=lambda s: (s.get("name") or "").lower())


def filter_submissions(submissions, search="", status=ALL_STATUSES):
    """Substring match on name OR phone, AND exact status (unless "all")."""
    term = (search or "").strip().lower()
    result = list(submissions)

    if term:
        result = [
            s for s in result
            if term in (s.get("name") or "").lower()
            or term in (s.get("phone") or "").lower()
        ]

    if status and status != ALL_STATUSES:
        result = [s for s in result if s.get("status") == status]

    return result


def submission_stats(submissions):
    counts = {status: 0 for status in SubmissionStatus.ALL}
    for s in submissions:
        status = s.get("status") or SubmissionStatus.PENDING
        if status in counts:
            counts[status] += 1
    counts["total"] = len(submissions)
    return counts


class AdminConsole:
    def __init__(self, base_url, session=None, timeout=10.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.submissions = []

    def _request(self, method, path, **kwargs):
        response = self.session.request(
            method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs
        )
        if response.status_code >= 400:
            try:
                message = response.json().get("message")
            except ValueError:
                message = None
            error_cls = _ERRORS_BY_STATUS.get(response.status_code, AppError)
            logger.warning("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise error_cls(message, status_code=response.status_code)
        return response.json()

    # --- Session ---------------------------------------------------------
    def login(self, username, password):
        self._request("POST", "/admin/login", json={"username": username, "password": password})

    def logout(self):
        self._request("POST", "/admin/logout")
        self.submissions = []

    def session_info(self):
        return self._request("GET", "/admin/session")

    def is_logged_in(self):
        return bool(self.session_info().get("loggedIn"))

    # --- Data ------------------------------------------------------------
    def refresh(self):
        self.submissions = self._request("GET", "/submissions")["data"]
        return self.submissions

    def view(self, search="", status=ALL_STATUSES):
        return sort_by_name(filter_submissions(self.submissions, search, status))

    def stats(self):
        return submission_stats(self.submissions)

    def _apply(self, updated):
        self.submissions = [
            updated if s.get("id") == updated.get("id") else s
            for s in self.submissions
        ]
        return updated

    def verify(self, submission_id):
        return self._apply(self._request("POST", f"/verify/{submission_id}")["data"])

    def check_in(self, submission_id):
        return self._apply(self._request("POST", f"/checkin/{submission_id}")["data"])

    def uncheck(self, submission_id):
        return self._apply(self._request("POST", f"/uncheckin/{submission_id}")["data"])

    def delete(self, submission_id):
        deleted = self._request("DELETE", f"/submissions/{submission_id}")["data"]
        self.submissions = [s for s in self.submissions if s.get("id") != submission_id]
        return deleted
