"""Shared fixtures for the RWH Genius test suite."""
import pytest

from config.feasibility import DEFAULT_CONFIG
from services.feasibility import FeasibilityService
from services.models import RainfallEstimate, SiteInput, RAINFALL_FALLBACK


class StubResolver:
    """Rainfall resolver returning a fixed estimate and recording lookups"""

    def __init__(self, annual_mm=850, source=RAINFALL_FALLBACK):
        self.estimate = RainfallEstimate(annual_mm, source)
        self.calls = []

    def resolve(self, location):
        self.calls.append(location)
        return self.estimate


class FakeDatabaseService:
    """In-memory stand-in for DatabaseService"""

    def __init__(self, enabled=True):
        self.enabled = enabled
        self.users = {}
        self.assessments = {}
        self.reports = {}

    def check_tables(self):
        return ['users', 'assessments', 'reports']

    def find_or_create_user(self, phone_number, full_name=None):
        for user in self.users.values():
            if user['phone_number'] == phone_number:
                if full_name:
                    user['full_name'] = full_name
                return dict(user)
        user = {'id': f'user_{len(self.users) + 1}', 'phone_number': phone_number, 'full_name': full_name}
        self.users[user['id']] = user
        return dict(user)

    def get_user(self, user_id):
        return self.users.get(user_id)

    def list_users(self):
        return list(self.users.values())

    def save_assessment(self, assessment_id, user_id, site):
        self.assessments[assessment_id] = {'id': assessment_id, 'user_id': user_id, 'site': site}
        return {'status': 'success'}

    def save_report(self, report_id, assessment_id, result):
        self.reports[assessment_id] = result
        return {'status': 'success'}

    def get_assessment(self, assessment_id):
        return self.assessments.get(assessment_id)

    def get_report(self, assessment_id):
        return self.reports.get(assessment_id)


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def storage_site():
    return SiteInput(
        location='Nowhere In Particular',
        roof_area_sqm=100,
        roof_type='rcc',
        existing_well='none',
        purpose='storage',
    )


@pytest.fixture
def fake_db():
    return FakeDatabaseService()


@pytest.fixture
def stub_resolver():
    return StubResolver()


@pytest.fixture
def client(monkeypatch, fake_db, stub_resolver):
    import server
    from routes import assessments, users

    monkeypatch.setattr(assessments, 'db_service', fake_db)
    monkeypatch.setattr(users, 'db_service', fake_db)
    monkeypatch.setattr(assessments, 'feasibility_service', FeasibilityService(stub_resolver, DEFAULT_CONFIG))

    server.app.config['TESTING'] = True
    with server.app.test_client() as test_client:
        yield test_client
