"""
Database service for users, assessments and feasibility reports
"""
import os
import logging
import json
import uuid
from typing import Optional, Dict, Any, List
import psycopg2
from psycopg2.extras import RealDictCursor

from services.models import SiteInput, FeasibilityResult

logger = logging.getLogger(__name__)

EXPECTED_TABLES = ['users', 'assessments', 'reports']


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


class DatabaseService:
    """Database service for users, assessments and reports"""

    def __init__(self, db_url: Optional[str] = None):
        self.db_url = db_url or os.getenv('DATABASE_URL')
        if not self.db_url:
            logger.warning("DATABASE_URL not set, database operations will be disabled")
            self.enabled = False
        else:
            self.enabled = True
            logger.info("Database service initialized with DATABASE_URL")
            # Test database connection
            self._test_connection()

    def _test_connection(self):
        """Test database connection"""
        try:
            conn = psycopg2.connect(self.db_url)
            conn.close()
            logger.info("Database connection successful")
        except Exception as e:
            logger.error(f"Database connection failed: {str(e)}")
            self.enabled = False

    def _get_connection(self):
        """Get database connection"""
        if not self.enabled:
            return None
        try:
            return psycopg2.connect(self.db_url, cursor_factory=RealDictCursor)
        except Exception as e:
            logger.error(f"Failed to connect to database: {str(e)}")
            return None

    def check_tables(self) -> Optional[List[str]]:
        """Names of the expected tables that exist, None when unreachable"""
        conn = self._get_connection()
        if not conn:
            return None

        try:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT table_name
                FROM information_schema.tables
                WHERE table_schema = 'public'
                AND table_name = ANY(%s)
            """, (EXPECTED_TABLES,))
            existing = [row['table_name'] for row in cursor.fetchall()]
            cursor.close()
            conn.close()
            return existing
        except Exception as e:
            logger.error(f"Error checking tables: {str(e)}")
            conn.close()
            return None

    def find_or_create_user(self, phone_number: str, full_name: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Look a user up by phone number, creating it when missing.

        An existing user's name is updated when a different non-empty name is supplied.
        """
        conn = self._get_connection()
        if not conn:
            return None

        try:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO users (id, phone_number, full_name, created_at, updated_at)
                VALUES (%s, %s, %s, NOW(), NOW())
                ON CONFLICT (phone_number) DO UPDATE SET
                    full_name = COALESCE(NULLIF(EXCLUDED.full_name, ''), users.full_name),
                    updated_at = CASE
                        WHEN NULLIF(EXCLUDED.full_name, '') IS NOT NULL
                             AND EXCLUDED.full_name IS DISTINCT FROM users.full_name
                        THEN NOW() ELSE users.updated_at END
                RETURNING id, phone_number, full_name, created_at
            """, (new_id('user'), phone_number, full_name))

            user = dict(cursor.fetchone())
            conn.commit()
            cursor.close()
            conn.close()

            logger.info(f"Resolved user {user['id']} for phone {phone_number}")
            return user
        except Exception as e:
            logger.error(f"Error resolving user: {str(e)}")
            conn.rollback()
            conn.close()
            return None

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self._fetch_one("""
            SELECT id, phone_number, full_name, created_at
            FROM users
            WHERE id = %s
        """, (user_id,), 'user')

    def list_users(self) -> Optional[List[Dict[str, Any]]]:
        conn = self._get_connection()
        if not conn:
            return None

        try:
            cursor = conn.cursor()
            cursor.execute("SELECT id, phone_number, full_name, created_at FROM users ORDER BY created_at")
            users = [dict(row) for row in cursor.fetchall()]
            cursor.close()
            conn.close()
            return users
        except Exception as e:
            logger.error(f"Error listing users: {str(e)}")
            conn.close()
            return None

    def save_assessment(self, assessment_id: str, user_id: str, site: SiteInput) -> Dict[str, Any]:
        """Save the submitted site input"""
        return self._execute_write("""
            INSERT INTO assessments (id, user_id, site, created_at, updated_at)
            VALUES (%s, %s, %s, NOW(), NOW())
        """, (assessment_id, user_id, json.dumps(site.to_dict())), f"assessment {assessment_id}")

    def save_report(self, report_id: str, assessment_id: str, result: FeasibilityResult) -> Dict[str, Any]:
        """Save the feasibility result keyed by its assessment"""
        return self._execute_write("""
            INSERT INTO reports (id, assessment_id, result, created_at, updated_at)
            VALUES (%s, %s, %s, NOW(), NOW())
            ON CONFLICT (assessment_id) DO UPDATE SET
                result = EXCLUDED.result,
                updated_at = NOW()
        """, (report_id, assessment_id, json.dumps(result.to_dict())), f"report for assessment {assessment_id}")

    def get_assessment(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        """Stored assessment with its SiteInput rebuilt"""
        record = self._fetch_one("""
            SELECT id, user_id, site, created_at
            FROM assessments
            WHERE id = %s
        """, (assessment_id,), 'assessment')

        if record:
            site = record['site']
            if isinstance(site, str):
                site = json.loads(site)
            record['site'] = SiteInput.from_dict(site)
        return record

    def get_report(self, assessment_id: str) -> Optional[FeasibilityResult]:
        """Stored FeasibilityResult for an assessment"""
        record = self._fetch_one("""
            SELECT id, result
            FROM reports
            WHERE assessment_id = %s
        """, (assessment_id,), 'report')

        if not record:
            return None
        result = record['result']
        if isinstance(result, str):
            result = json.loads(result)
        return FeasibilityResult.from_dict(result)

    def _fetch_one(self, query, params, what):
        conn = self._get_connection()
        if not conn:
            return None

        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            result = cursor.fetchone()
            cursor.close()
            conn.close()

            if result:
                return dict(result)
            return None

        except Exception as e:
            logger.error(f"Error getting {what}: {str(e)}")
            conn.close()
            return None

    def _execute_write(self, query, params, what):
        if not self.enabled:
            return {'status': 'disabled', 'message': 'Database not configured'}

        conn = self._get_connection()
        if not conn:
            return {'status': 'error', 'message': 'Database connection failed'}

        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            conn.commit()
            cursor.close()
            conn.close()

            logger.info(f"Saved {what}")
            return {'status': 'success', 'message': f'Saved {what}'}
        except Exception as e:
            logger.error(f"Error saving {what}: {str(e)}")
            conn.rollback()
            conn.close()
            return {'status': 'error', 'message': str(e)}
