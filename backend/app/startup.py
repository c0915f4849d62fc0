"""
Application startup validation and initialization.

This module performs startup checks so that a misconfigured deployment is
reported before the first request is served.
"""

import logging
from typing import List, Optional, Tuple

import sqlalchemy as sa
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from core.config import DEV_JWT_SECRET, Settings, get_settings
from core.database import engine

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("customers", "sales")


def configure_startup_logging(settings: Optional[Settings] = None):
    """Configure root logging once for the whole process"""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_environment_config(self) -> bool:
        if self.settings.jwt_secret_key == DEV_JWT_SECRET:
            self.warnings.append(
                "Using development JWT_SECRET_KEY - change for production"
            )
        return True

    def check_database_connection(self) -> bool:
        """Check database connectivity"""
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except SQLAlchemyError as e:
            self.errors.append(f"Database connection failed: {e}")
            return False

    def check_required_tables(self) -> bool:
        """Warn when migrations have not been applied yet"""
        existing_tables = sa.inspect(engine).get_table_names()
        missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]
        if missing_tables:
            self.warnings.append(
                f"Missing database tables: {', '.join(missing_tables)}. "
                "Run migrations with: alembic upgrade head"
            )
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        checks = [
            ("Environment Configuration", self.check_environment_config),
            ("Database Connection", self.check_database_connection),
        ]
        if not self.settings.auto_create_tables:
            checks.append(("Database Tables", self.check_required_tables))

        all_passed = True
        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False
                # Nothing else can be inspected without a database
                break

        return all_passed, self.errors, self.warnings


def run_startup_checks(settings: Optional[Settings] = None) -> Tuple[bool, List[str]]:
    """Run all startup validation checks and log the outcome"""
    settings = settings or get_settings()
    logger.info(f"Starting Storyst API ({settings.environment})")

    validator = StartupValidator(settings)
    passed, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"Startup warning: {warning}")
    for error in errors:
        logger.error(f"Startup error: {error}")

    if not passed and settings.is_production:
        raise RuntimeError("Cannot start in production with failing startup checks")
    if passed:
        logger.info("All startup checks passed")

    return passed, warnings
