import unittest

from payverify.console import AdminConsole, filter_submissions, sort_by_name, submission_stats
from payverify.errors import AuthError, NotFoundError
from tests.base import ADMIN_PASSWORD, ADMIN_USERNAME, AppTestCase

RECORDS = [
    {"id": 1, "name": "Bob", "phone": "+2348030000001", "status": "pending"},
    {"id": 2, "name": "alice", "phone": "+2348030000002", "status": "verified"},
    {"id": 3, "name": "Chidi", "phone": "+2348039999999", "status": "pending"},
    {"id": 4, "name": "Dayo", "phone": "+2348030000004", "status": "checked_in"},
]


class _Response:
    def __init__(self, resp):
        self.status_code = resp.status_code
        self._json = resp.get_json()

    def json(self):
        if self._json is None:
            raise ValueError("no JSON body")
        return self._json


class FlaskClientSession:
    """Routes the console's requests.Session calls into the Flask test client."""

    def __init__(self, client):
        self.client = client

    def request(self, method, url, timeout=None, json=None):
        path = url.split("http://testserver", 1)[1]
        return _Response(self.client.open(path, method=method, json=json))


class TestViewDerivation(unittest.TestCase):

    def test_sort_is_case_insensitive(self):
        names = [s["name"] for s in sort_by_name([{"name": "Bob"}, {"name": "alice"}])]
        self.assertEqual(names, ["alice", "Bob"])

    def test_sort_tolerates_missing_names(self):
        self.assertIsNone(sort_by_name([{"name": "b"}, {"name": None}])[0]["name"])

    def test_filter_by_status(self):
        pending = filter_submissions(RECORDS, status="pending")
        self.assertEqual([s["id"] for s in pending], [1, 3])

    def test_filter_all_statuses(self):
        self.assertEqual(filter_submissions(RECORDS, status="all"), RECORDS)

    def test_search_matches_name_or_phone(self):
        self.assertEqual([s["id"] for s in filter_submissions(RECORDS, search="ALI")], [2])
        self.assertEqual([s["id"] for s in filter_submissions(RECORDS, search=" 9999 ")], [3])

    def test_search_and_status_compose(self):
        result = filter_submissions(RECORDS, search="+23480300", status="pending")
        self.assertEqual([s["id"] for s in result], [1])

    def test_stats(self):
        self.assertEqual(submission_stats(RECORDS), {
            "pending": 2,
            "verified": 1,
            "checked_in": 1,
            "total": 4,
        })


class TestAdminConsole(AppTestCase):

    def setUp(self):
        super().setUp()
        self.console = AdminConsole("http://testserver/", session=FlaskClientSession(self.client))

    def test_requires_login(self):
        self.assertFalse(self.console.is_logged_in())
        with self.assertRaises(AuthError) as ctx:
            self.console.refresh()
        self.assertEqual(ctx.exception.status_code, 401)

    def test_bad_login(self):
        with self.assertRaises(AuthError) as ctx:
            self.console.login(ADMIN_USERNAME, "wrong")
        self.assertEqual(ctx.exception.message, "Invalid credentials")

    def test_refresh_view_and_transitions(self):
        self.submit(name="Bob", phone="08030000001")
        self.submit(name="alice", phone="08030000002")

        self.console.login(ADMIN_USERNAME, ADMIN_PASSWORD)
        self.assertTrue(self.console.is_logged_in())

        self.console.refresh()
        view = self.console.view()
        self.assertEqual([s["name"] for s in view], ["alice", "Bob"])

        bob = view[1]
        self.assertEqual(self.console.verify(bob["id"])["status"], "verified")
        self.assertEqual(self.console.check_in(bob["id"])["status"], "checked_in")
        self.assertEqual([s["name"] for s in self.console.view(status="checked_in")], ["Bob"])
        self.assertEqual(self.console.uncheck(bob["id"])["status"], "verified")

        self.assertEqual(self.console.stats(), {"pending": 1, "verified": 1, "checked_in": 0, "total": 2})
        self.assertEqual([s["name"] for s in self.console.view(search="ali", status="pending")], ["alice"])

    def test_unknown_id(self):
        self.console.login(ADMIN_USERNAME, ADMIN_PASSWORD)
        with self.assertRaises(NotFoundError):
            self.console.check_in(12345)

    def test_delete_drops_local_copy(self):
        self.submit()
        self.console.login(ADMIN_USERNAME, ADMIN_PASSWORD)
        record = self.console.refresh()[0]

        self.console.delete(record["id"])
        self.assertEqual(self.console.submissions, [])
        self.assertEqual(self.console.refresh(), [])

    def test_logout(self):
        self.console.login(ADMIN_USERNAME, ADMIN_PASSWORD)
        self.console.logout()
        self.assertFalse(self.console.is_logged_in())


if __name__ == '__main__':
    unittest.main()
