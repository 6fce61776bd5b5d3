#!/usr/bin/env python3
"""
Create database tables for the RWH Genius feasibility service
"""
import os
import sys
import logging

import psycopg2

logger = logging.getLogger(__name__)

SCHEMA = [
    ("users", """
        CREATE TABLE IF NOT EXISTS users (
            id VARCHAR(255) PRIMARY KEY,
            phone_number VARCHAR(20) UNIQUE NOT NULL,
            full_name VARCHAR(255),
            created_at TIMESTAMP DEFAULT NOW(),
            updated_at TIMESTAMP DEFAULT NOW()
        );
    """),
    ("assessments", """
        CREATE TABLE IF NOT EXISTS assessments (
            id VARCHAR(255) PRIMARY KEY,
            user_id VARCHAR(255) NOT NULL,
            site JSONB NOT NULL,
            created_at TIMESTAMP DEFAULT NOW(),
            updated_at TIMESTAMP DEFAULT NOW(),
            FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
        );
    """),
    ("reports", """
        CREATE TABLE IF NOT EXISTS reports (
            id VARCHAR(255) PRIMARY KEY,
            assessment_id VARCHAR(255) UNIQUE NOT NULL,
            result JSONB NOT NULL,
            created_at TIMESTAMP DEFAULT NOW(),
            updated_at TIMESTAMP DEFAULT NOW(),
            FOREIGN KEY (assessment_id) REFERENCES assessments(id) ON DELETE CASCADE
        );
    """),
]

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_assessments_user_id ON assessments(user_id);",
]


def create_tables(db_url=None):
    """Create all required database tables"""

    db_url = db_url or os.getenv('DATABASE_URL')
    if not db_url:
        logger.error("DATABASE_URL not set in environment variables")
        return False

    conn = None
    try:
        conn = psycopg2.connect(db_url)
        cursor = conn.cursor()

        logger.info("Connected to database successfully")

        for table, ddl in SCHEMA:
            cursor.execute(ddl)
            logger.info(f"Created {table} table")

        for statement in INDEXES:
            cursor.execute(statement)
        logger.info("Created database indexes")

        conn.commit()
        cursor.close()
        conn.close()

        logger.info("Database tables created successfully")
        return True

    except Exception as e:
        logger.error(f"Error creating tables: {str(e)}")
        if conn:
            conn.rollback()
            conn.close()
        return False


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    if not create_tables():
        logger.error("Database setup failed!")
        sys.exit(1)
    logger.info("Database setup complete!")
