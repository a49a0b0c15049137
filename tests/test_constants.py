"""
Centralized test credentials and secrets.

All test-only credentials are loaded from environment variables when available,
with clearly non-production placeholders as fallbacks.
"""

from __future__ import annotations

import os

# App config used by conftest and API tests
TEST_ADMIN_TOKEN = os.environ.get("TEST_ADMIN_TOKEN") or "test-admin-token"
TEST_INTERNAL_JOB_TOKEN = os.environ.get("TEST_INTERNAL_JOB_TOKEN") or "test-internal-token"

ADMIN_HEADERS = {"Authorization": f"Bearer {TEST_ADMIN_TOKEN}"}
INTERNAL_HEADERS = {"X-Internal-Token": TEST_INTERNAL_JOB_TOKEN}
