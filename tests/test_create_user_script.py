"""Unit tests for app.scripts.create_user: argument handling, duplicates, validation."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from app.core.database import SessionLocal
from app.models import User
from app.scripts.create_user import main
from tests.support import USER_USERNAME, seed_users


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        seed_users()

    def test_creates_admin(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["root@example.com", "root-password", "--age", "40", "--hobby", "Chess", "--admin"])
        self.assertEqual(code, 0)
        self.assertIn("role 'Admin'", out.getvalue())
        db = SessionLocal()
        try:
            user = db.query(User).filter(User.username == "root@example.com").one()
            self.assertTrue(user.is_admin)
            self.assertEqual(user.hobbies, ["Chess"])
            self.assertNotEqual(user.password_hash, "root-password")
        finally:
            db.close()

    def test_creates_regular_user_by_default(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["plain@example.com", "plain-password", "--age", "19"])
        self.assertEqual(code, 0)
        self.assertIn("role 'User'", out.getvalue())

    def test_duplicate_username_fails(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err):
            code = main([USER_USERNAME, "another-password", "--age", "22"])
        self.assertEqual(code, 1)
        self.assertIn("already taken", err.getvalue())

    def test_short_password_fails(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err):
            code = main(["new@example.com", "short", "--age", "22"])
        self.assertEqual(code, 1)
        self.assertIn("password", err.getvalue())


if __name__ == "__main__":
    unittest.main()
