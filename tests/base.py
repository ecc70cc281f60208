import io
import os
import shutil
import tempfile
import unittest

from payverify.app import create_app
from payverify.extensions import db
from payverify.services.auth_service import hash_password

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class AppTestCase(unittest.TestCase):
    """Fresh app, in-memory database and upload folder for every test."""

    config_overrides = {}

    def setUp(self):
        tmp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tmp_dir, ignore_errors=True)
        self.upload_dir = os.path.join(tmp_dir, "uploads")

        config = {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
            "JWT_COOKIE_SECURE": False,
            "ADMIN_USERNAME": ADMIN_USERNAME,
            "ADMIN_PASSWORD_HASH": ADMIN_PASSWORD_HASH,
            "STORAGE_BACKEND": "local",
            "UPLOAD_FOLDER": self.upload_dir,
            "STRICT_TRANSITIONS": False,
        }
        config.update(self.config_overrides)

        self.app = create_app(config)
        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()
        self.client = self.app.test_client()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()

    def login(self):
        resp = self.client.post("/admin/login", json={
            "username": ADMIN_USERNAME,
            "password": ADMIN_PASSWORD,
        })
        self.assertEqual(resp.status_code, 200)

    def submit(self, name="Ada Obi", phone="0803 123 4567", filename="proof.png"):
        data = {"name": name, "phone": phone}
        if filename is not None:
            data["screenshot"] = (io.BytesIO(PNG_BYTES), filename)
        return self.client.post("/submit", data=data, content_type="multipart/form-data")

    def stored_files(self):
        if not os.path.isdir(self.upload_dir):
            return []
        return os.listdir(self.upload_dir)
