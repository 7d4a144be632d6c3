#!/usr/bin/env python3
import logging
import sys
import os

# Add the current directory to Python path
sys.path.insert(0, os.path.dirname(__file__))

from core.config import settings
from database.connection import create_tables, engine

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

def create_all_tables(bind=None):
    """Create all database tables"""
    bind = bind or engine
    try:
        logger.info(f"Creating database tables on {bind.url}...")
        create_tables(bind)
        logger.info("All tables created successfully")
        return True
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        return False

if __name__ == "__main__":
    success = create_all_tables()
    sys.exit(0 if success else 1)
