import unittest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models_bootstrap  # noqa: F401
from main import app
from core.config_loader import settings
from core.database import Base, get_db
from seed.seeder import run_seed
from user import service as user_service


def _bearer(user_id):
    claims = {"sub": str(user_id), "exp": datetime.now(timezone.utc) + timedelta(minutes=5)}
    token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


class AdminFlowTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine(
            "sqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
        Base.metadata.create_all(self.engine)
        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.SessionLocal = TestingSession

        # --- Dependency overrides ---
        def _get_db_override():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _get_db_override
        self.client = TestClient(app)

        # --- Seed menu, roles and the admin account ---
        with self.SessionLocal() as db:
            run_seed(db)
            self.admin_id = user_service.get_user_by_email(db, settings.ADMIN_EMAIL).id
        self.admin = _bearer(self.admin_id)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        self.engine.dispose()

    def test_requests_without_token_are_rejected(self):
        r = self.client.get("/api/locations")
        self.assertEqual(r.status_code, 401)

    def test_location_hierarchy_flow(self):
        # 1) Build Plant A > Line 1 > Station 1
        r = self.client.post("/api/locations", json={"name": "Plant A"}, headers=self.admin)
        self.assertEqual(r.status_code, 201, r.text)
        plant = r.json()["id"]
        r = self.client.post("/api/locations", json={"name": "Line 1", "parent_location_id": plant}, headers=self.admin)
        self.assertEqual(r.status_code, 201, r.text)
        line = r.json()["id"]
        r = self.client.post("/api/locations", json={"name": "Station 1", "parent_location_id": line}, headers=self.admin)
        self.assertEqual(r.status_code, 201, r.text)
        station = r.json()["id"]

        # 2) Resolve the tree
        r = self.client.get(f"/api/locations/{plant}/descendants", headers=self.admin)
        self.assertEqual([x["name"] for x in r.json()], ["Line 1", "Station 1"])
        r = self.client.get(f"/api/locations/{station}/ancestors", headers=self.admin)
        self.assertEqual([x["name"] for x in r.json()], ["Line 1", "Plant A"])
        r = self.client.get("/api/locations/hierarchy", headers=self.admin)
        tree = r.json()
        self.assertEqual(tree[0]["child_locations"][0]["child_locations"][0]["id"], station)
        r = self.client.get(f"/api/locations/{station}/path", headers=self.admin)
        self.assertEqual(r.json()["path"], "Plant A > Line 1 > Station 1")

        # 3) A cycle is refused, an unknown node is 404
        r = self.client.patch(f"/api/locations/{plant}", json={"parent_location_id": station}, headers=self.admin)
        self.assertEqual(r.status_code, 409, r.text)
        r = self.client.get("/api/locations/999999/ancestors", headers=self.admin)
        self.assertEqual(r.status_code, 404)

        # 4) Leaf delete is soft and drops out of the tree
        r = self.client.delete(f"/api/locations/{station}", headers=self.admin)
        self.assertEqual(r.status_code, 200, r.text)
        r = self.client.get(f"/api/locations/{line}/children", headers=self.admin)
        self.assertEqual(r.json(), [])

    def test_patch_with_null_required_fields(self):
        r = self.client.post("/api/locations", json={"name": "Plant A"}, headers=self.admin)
        loc = r.json()["id"]
        r = self.client.patch(f"/api/locations/{loc}", json={"name": None}, headers=self.admin)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(r.json()["name"], "Plant A")
        r = self.client.patch(f"/api/locations/{loc}", json={"is_active": None}, headers=self.admin)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertTrue(r.json()["is_active"])

    def test_user_roles_and_menu_flow(self):
        # 1) Admin sees the seeded menu
        r = self.client.get("/api/users/menu", headers=self.admin)
        self.assertEqual(r.status_code, 200, r.text)
        menu = r.json()
        self.assertEqual(menu[0]["name"], "Setup")
        self.assertIn("Company Details", [c["name"] for c in menu[0]["children"]])

        # 2) Create a plain user; no roles means no menu and no admin access
        r = self.client.post("/api/users", json={"email": "op@example.com", "password": "operator-pass"}, headers=self.admin)
        self.assertEqual(r.status_code, 201, r.text)
        op_id = r.json()["id"]
        op = _bearer(op_id)
        self.assertEqual(self.client.get("/api/users/menu", headers=op).json(), [])
        self.assertEqual(self.client.get("/api/users", headers=op).status_code, 403)

        # 3) Grant the Manager role the Equipment menu and assign it
        r = self.client.get("/api/applications", headers=self.admin)
        equipment_app = next(a["id"] for a in r.json() if a["name"] == "Equipment")
        manager = next(x["id"] for x in self.client.get("/api/roles", headers=self.admin).json() if x["name"] == "Manager")
        r = self.client.put(f"/api/roles/{manager}/applications", json={"application_ids": [equipment_app]}, headers=self.admin)
        self.assertEqual(r.status_code, 200, r.text)
        r = self.client.put(f"/api/users/{op_id}/roles", json={"roles": ["manager"]}, headers=self.admin)
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual([x["name"] for x in self.client.get("/api/users/menu", headers=op).json()], ["Equipment"])

        # 4) Unknown role leaves the assignment alone
        r = self.client.put(f"/api/users/{op_id}/roles", json={"roles": ["Manager", "Ghost"]}, headers=self.admin)
        self.assertEqual(r.status_code, 404)
        self.assertEqual(self.client.get("/api/users/me", headers=op).json()["role_names"], ["Manager"])

        # 5) Soft-deleted user loses access
        r = self.client.delete(f"/api/users/{op_id}", headers=self.admin)
        self.assertEqual(r.status_code, 200)
        self.assertEqual(self.client.get("/api/users/me", headers=op).status_code, 401)


if __name__ == "__main__":
    unittest.main()
