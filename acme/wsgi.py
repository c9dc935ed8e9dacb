"""
Acme Dashboard - WSGI Application

Initializes Django settings and validates the environment before
handing the application to Gunicorn.
"""

import os
import sys
import logging

logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "acme.settings")

try:
    from acme.env_validation import validate_env
    validate_env()
except Exception as e:
    logger.critical(f"Environment validation failed: {e}")
    sys.exit(1)

from django.core.wsgi import get_wsgi_application

application = get_wsgi_application()
