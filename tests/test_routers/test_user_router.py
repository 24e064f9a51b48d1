import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch
from fastapi.testclient import TestClient


from main import app
from core.database import get_db
from core.exceptions import ConflictError, NotFoundError
from auth.services.auth_service import get_current_active_user
from application.schemas import MenuItem


def _user(**kw):
    data = dict(id=1, email="admin@example.com", is_active=True, display_name="Ad Min", role_names=["Administrator"])
    data.update(kw)
    return Obj(**data)


class UserRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        self.current = _user()
        app.dependency_overrides[get_db] = _fake_db
        app.dependency_overrides[get_current_active_user] = lambda: self.current

        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_active_user, None)

    # --- admin gate ---

    @patch("user.router.service.get_users")
    def test_list_users_admin(self, mock_list):
        mock_list.return_value = [_user()]
        resp = self.client.get("/api/users")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["role_names"], ["Administrator"])

    def test_list_users_forbidden_for_non_admin(self):
        self.current = _user(role_names=["User"])
        resp = self.client.get("/api/users")
        self.assertEqual(resp.status_code, 403)

    def test_admin_check_is_case_insensitive(self):
        self.current = _user(role_names=["administrator"])
        with patch("user.router.service.get_users", return_value=[]):
            resp = self.client.get("/api/users")
        self.assertEqual(resp.status_code, 200)

    # --- create ---

    @patch("user.router.service.create_user")
    def test_create_user_201(self, mock_create):
        mock_create.return_value = _user(id=2, email="new@example.com", role_names=["User"])
        resp = self.client.post("/api/users", json={"email": "new@example.com", "password": "long-enough", "roles": ["User"]})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(mock_create.call_args.kwargs["created_by"], 1)

    @patch("user.router.service.create_user")
    def test_create_user_409(self, mock_create):
        mock_create.side_effect = ConflictError("dup")
        resp = self.client.post("/api/users", json={"email": "new@example.com", "password": "long-enough"})
        self.assertEqual(resp.status_code, 409)

    def test_create_user_short_password_422(self):
        resp = self.client.post("/api/users", json={"email": "new@example.com", "password": "short"})
        self.assertEqual(resp.status_code, 422)

    # --- roles ---

    @patch("user.router.service.assign_roles_to_user")
    def test_put_roles(self, mock_assign):
        mock_assign.return_value = [Obj(id=2, name="Manager")]
        resp = self.client.put("/api/users/5/roles", json={"roles": ["manager"]})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json(), [{"id": 2, "name": "Manager"}])
        mock_assign.assert_called_once()
        self.assertEqual(mock_assign.call_args[0][1:], (5, ["manager"]))

    @patch("user.router.service.assign_roles_to_user")
    def test_put_roles_unknown_404(self, mock_assign):
        mock_assign.side_effect = NotFoundError("Role(s) not found: ghost")
        resp = self.client.put("/api/users/5/roles", json={"roles": ["ghost"]})
        self.assertEqual(resp.status_code, 404)

    # --- me / menu ---

    @patch("user.router.service.get_profile")
    def test_me(self, mock_profile):
        self.current = _user(role_names=["User"])
        mock_profile.return_value = self.current
        resp = self.client.get("/api/users/me")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["email"], "admin@example.com")

    @patch("user.router.menu.get_user_menu")
    def test_menu_for_any_user(self, mock_menu):
        self.current = _user(role_names=["User"])
        child = MenuItem(id=11, name="Company Details", parent_id=10, area_name="Setup", url="/setup/company")
        mock_menu.return_value = [MenuItem(id=10, name="Setup", area_name="Setup", children=[child])]
        resp = self.client.get("/api/users/menu")
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body[0]["id"], 10)
        self.assertEqual(body[0]["children"][0]["name"], "Company Details")
        mock_menu.assert_called_once()
        self.assertEqual(mock_menu.call_args[0][1], 1)

    @patch("user.router.menu.get_user_menu")
    def test_menu_empty(self, mock_menu):
        mock_menu.return_value = []
        resp = self.client.get("/api/users/menu")
        self.assertEqual(resp.json(), [])

    # --- delete ---

    @patch("user.router.service.delete_user")
    def test_delete_404(self, mock_delete):
        mock_delete.return_value = False
        resp = self.client.delete("/api/users/99")
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()
