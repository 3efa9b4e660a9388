"""
Settings for the access control app.

Values are read from the ``ACCESS_CONTROL`` dict in Django settings, falling
back to the defaults below. Lookups hit ``django.conf.settings`` every time
so ``override_settings`` in tests takes effect immediately.

    ACCESS_CONTROL = {
        'PERMISSION_CACHE_TTL': 300,
        'EMPTY_JOB_SCOPE_DENIES_ALL': True,
    }
"""
from django.conf import settings

from .catalog import EXTERNAL_RECRUITER_ALLOWED_PATHS, EXTERNAL_RECRUITER_LANDING_PATH


DEFAULTS = {
    # Seconds a resolved permission set stays cached per user
    'PERMISSION_CACHE_TTL': 300,
    # Which entry of settings.CACHES holds resolved permission sets
    'PERMISSION_CACHE_ALIAS': 'default',
    'PERMISSION_CACHE_PREFIX': 'access_control:perms',
    # Unknown or unresolved components render unless this is False
    'COMPONENTS_DEFAULT_VISIBLE': True,
    # A job_viewer with an empty allow-list sees no jobs unless this is False
    'EMPTY_JOB_SCOPE_DENIES_ALL': True,
    'EXTERNAL_RECRUITER_ALLOWED_PATHS': EXTERNAL_RECRUITER_ALLOWED_PATHS,
    'EXTERNAL_RECRUITER_LANDING_PATH': EXTERNAL_RECRUITER_LANDING_PATH,
    'REDACTION_MARKER': '*** restricted ***',
}


class AccessSettings:
    """Attribute access to ACCESS_CONTROL settings with defaults."""

    def __init__(self, defaults=None):
        self.defaults = defaults or DEFAULTS

    @property
    def user_settings(self):
        return getattr(settings, 'ACCESS_CONTROL', {}) or {}

    def __getattr__(self, attr):
        if attr not in self.defaults:
            raise AttributeError(f"Invalid access control setting: '{attr}'")
        return self.user_settings.get(attr, self.defaults[attr])


access_settings = AccessSettings(DEFAULTS)
