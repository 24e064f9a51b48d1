# tests/test_services/test_certificate_services.py
import unittest
from datetime import date, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import models_bootstrap  # noqa: F401
from certificate import service
from certificate.models import Certificate, CertificateStatus, CertificateType
from certificate.schema import CertificateCreate, CertificateUpdate
from core.database import Base
from core.exceptions import ConflictError, InvalidOperationError, NotFoundError
from equipment.models import Equipment
from location.models import Location
from user.models import User

TODAY = date(2024, 6, 1)


class CertificateServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db = TestingSession()

        # --- seed refs ---
        self.equipment = Equipment(name="Crane 7", equipment_type="Crane")
        self.location = Location(name="Plant A")
        self.approver = User(email="boss@example.com", password_hash="x")
        self.db.add_all([self.equipment, self.location, self.approver])
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _dto(self, number="C-1", **overrides):
        data = dict(
            certificate_type=CertificateType.LIFTING_MACHINE,
            certificate_number=number,
            issue_date=date(2024, 1, 1),
            expiry_date=date(2025, 1, 1),
            equipment_id=self.equipment.id,
            location_id=self.location.id,
        )
        data.update(overrides)
        return CertificateCreate(**data)

    def _row(self, number, expiry, status):
        row = Certificate(
            certificate_type=CertificateType.PRESSURE_VESSEL,
            certificate_number=number,
            issue_date=date(2023, 1, 1),
            expiry_date=expiry,
            status=status,
            equipment_id=self.equipment.id,
            location_id=self.location.id,
        )
        self.db.add(row)
        self.db.commit()
        return row

    # ---- create ----
    def test_create_certificate_starts_as_draft(self):
        row = service.create_certificate(self.db, self._dto(created_by=self.approver.id))
        self.assertEqual(row.status, CertificateStatus.DRAFT)
        self.assertEqual(row.created_by, self.approver.id)
        self.assertEqual(row.equipment.name, "Crane 7")

    def test_create_certificate_duplicate_number(self):
        service.create_certificate(self.db, self._dto())
        with self.assertRaises(ConflictError):
            service.create_certificate(self.db, self._dto())

    def test_create_certificate_expiry_before_issue(self):
        with self.assertRaises(InvalidOperationError):
            service.create_certificate(self.db, self._dto(expiry_date=date(2023, 12, 31)))

    def test_create_certificate_unknown_equipment(self):
        with self.assertRaises(NotFoundError):
            service.create_certificate(self.db, self._dto(equipment_id=999))

    # ---- update / delete ----
    def test_update_certificate(self):
        row = service.create_certificate(self.db, self._dto())
        updated = service.update_certificate(self.db, row.id, CertificateUpdate(issued_by="Inspector X"), updated_by=self.approver.id)
        self.assertEqual(updated.issued_by, "Inspector X")
        self.assertEqual(updated.updated_by, self.approver.id)

    def test_update_certificate_dates_checked_against_stored(self):
        row = service.create_certificate(self.db, self._dto())
        with self.assertRaises(InvalidOperationError):
            service.update_certificate(self.db, row.id, CertificateUpdate(expiry_date=date(2023, 6, 1)))

    def test_update_certificate_number_taken(self):
        service.create_certificate(self.db, self._dto("C-1"))
        other = service.create_certificate(self.db, self._dto("C-2"))
        with self.assertRaises(ConflictError):
            service.update_certificate(self.db, other.id, CertificateUpdate(certificate_number="C-1"))

    def test_delete_certificate_is_soft(self):
        row = service.create_certificate(self.db, self._dto())
        self.assertTrue(service.delete_certificate(self.db, row.id, deleted_by=self.approver.id))
        self.assertIsNone(service.get_certificate(self.db, row.id))
        self.assertEqual(service.get_certificates(self.db), [])

    def test_filters(self):
        service.create_certificate(self.db, self._dto("C-1"))
        service.create_certificate(self.db, self._dto("C-2", certificate_type=CertificateType.PRESSURE_VESSEL))
        rows = service.get_certificates(self.db, certificate_type=CertificateType.PRESSURE_VESSEL)
        self.assertEqual([r.certificate_number for r in rows], ["C-2"])
        self.assertEqual(len(service.get_certificates(self.db, equipment_id=self.equipment.id)), 2)
        self.assertEqual(service.get_certificates(self.db, status=CertificateStatus.APPROVED), [])

    # ---- workflow ----
    def test_submit_approve(self):
        row = service.create_certificate(self.db, self._dto())
        self.assertEqual(service.submit_for_approval(self.db, row.id).status, CertificateStatus.PENDING_APPROVAL)
        approved = service.approve_certificate(self.db, row.id, self.approver.id)
        self.assertEqual(approved.status, CertificateStatus.APPROVED)
        self.assertEqual(approved.approved_by_id, self.approver.id)

    def test_reject(self):
        row = service.create_certificate(self.db, self._dto())
        service.submit_for_approval(self.db, row.id)
        rejected = service.reject_certificate(self.db, row.id, "Missing load test", self.approver.id)
        self.assertEqual(rejected.status, CertificateStatus.REJECTED)
        self.assertEqual(rejected.rejection_reason, "Missing load test")

    def test_approve_draft_rejected_and_row_untouched(self):
        row = service.create_certificate(self.db, self._dto())
        with self.assertRaises(InvalidOperationError):
            service.approve_certificate(self.db, row.id, self.approver.id)
        self.db.expire_all()
        fresh = service.get_certificate(self.db, row.id)
        self.assertEqual(fresh.status, CertificateStatus.DRAFT)
        self.assertIsNone(fresh.approved_by_id)

    def test_submit_twice_rejected(self):
        row = service.create_certificate(self.db, self._dto())
        service.submit_for_approval(self.db, row.id)
        with self.assertRaises(InvalidOperationError):
            service.submit_for_approval(self.db, row.id)

    def test_workflow_unknown_certificate(self):
        with self.assertRaises(NotFoundError):
            service.submit_for_approval(self.db, 999)

    # ---- expiry ----
    def test_expiring_and_expired(self):
        self._row("SOON", TODAY + timedelta(days=10), CertificateStatus.APPROVED)
        self._row("REVIEW", TODAY + timedelta(days=20), CertificateStatus.UNDER_REVIEW)
        self._row("LATER", TODAY + timedelta(days=90), CertificateStatus.APPROVED)
        self._row("GONE", TODAY - timedelta(days=1), CertificateStatus.APPROVED)
        self._row("DRAFT", TODAY + timedelta(days=5), CertificateStatus.DRAFT)

        soon = service.find_expiring_soon(self.db, 30, today=TODAY)
        self.assertEqual([r.certificate_number for r in soon], ["SOON", "REVIEW"])
        self.assertEqual([r.certificate_number for r in service.find_expiring_soon(self.db, 100, today=TODAY)],
                         ["SOON", "REVIEW", "LATER"])
        self.assertEqual([r.certificate_number for r in service.find_expired(self.db, today=TODAY)], ["GONE"])

    def test_stats(self):
        self._row("SOON", TODAY + timedelta(days=10), CertificateStatus.APPROVED)
        self._row("GONE", TODAY - timedelta(days=1), CertificateStatus.APPROVED)
        self._row("WAIT", TODAY + timedelta(days=200), CertificateStatus.PENDING_APPROVAL)
        self._row("NO", TODAY + timedelta(days=200), CertificateStatus.REJECTED)
        stats = service.get_certificate_stats(self.db, today=TODAY)
        self.assertEqual(stats, {
            "total": 4, "approved": 2, "pending": 1, "rejected": 1, "expired": 1, "expiring_soon": 1,
        })


if __name__ == "__main__":
    unittest.main()
