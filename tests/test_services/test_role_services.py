# tests/test_services/test_role_services.py
import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import models_bootstrap  # noqa: F401
from application.models import Application
from core.database import Base
from core.exceptions import ConflictError, NotFoundError
from role import service


class RoleServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db = TestingSession()

        self.db.add_all([
            Application(id=1, name="Setup", area_name="Setup"),
            Application(id=2, name="Users", parent_id=1, area_name="Setup"),
            Application(id=3, name="Equipment", area_name="Equipment"),
        ])
        self.db.commit()
        self.role = service.create_role(self.db, "Manager")

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_create_role_duplicate_name(self):
        with self.assertRaises(ConflictError):
            service.create_role(self.db, "manager")

    def test_get_role_by_name_case_insensitive(self):
        self.assertEqual(service.get_role_by_name(self.db, "MANAGER").id, self.role.id)
        self.assertIsNone(service.get_role_by_name(self.db, "Ghost"))

    def test_get_roles_sorted_by_name(self):
        service.create_role(self.db, "Administrator")
        self.assertEqual([r.name for r in service.get_roles(self.db)], ["Administrator", "Manager"])

    def test_set_role_applications_replaces(self):
        service.set_role_applications(self.db, self.role.id, [1, 2])
        apps = service.set_role_applications(self.db, self.role.id, [3, 1, 3])
        self.assertEqual([a.id for a in apps], [1, 3])

    def test_set_role_applications_unknown_application(self):
        service.set_role_applications(self.db, self.role.id, [1])
        with self.assertRaises(NotFoundError):
            service.set_role_applications(self.db, self.role.id, [1, 99])
        self.assertEqual([a.id for a in service.get_role_applications(self.db, self.role.id)], [1])

    def test_set_role_applications_unknown_role(self):
        with self.assertRaises(NotFoundError):
            service.set_role_applications(self.db, 999, [1])

    def test_grant_is_idempotent(self):
        service.grant_application(self.db, self.role.id, 2)
        service.grant_application(self.db, self.role.id, 2)
        self.assertEqual([a.id for a in service.get_role_applications(self.db, self.role.id)], [2])

    def test_revoke(self):
        service.set_role_applications(self.db, self.role.id, [1, 2])
        service.revoke_application(self.db, self.role.id, 1)
        self.assertEqual([a.id for a in service.get_role_applications(self.db, self.role.id)], [2])


if __name__ == "__main__":
    unittest.main()
