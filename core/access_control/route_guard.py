"""
Route guard for external recruiter accounts.

The browser asks for a decision on every navigation event
(``GET /core/access_control/route-check/?path=...``). External recruiters may
only reach a fixed allow-list of path prefixes; anything else sends them to
the landing path. This sits on top of server-side permission checks, never
in place of them: the data endpoints still enforce page permissions.

States:
    unauthenticated -> defer (the login flow handles it)
    restricted      -> external_recruiter role type present
    unrestricted    -> any other authenticated user, always allowed
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from .conf import access_settings

logger = logging.getLogger(__name__)


class GuardState:
    UNAUTHENTICATED = 'unauthenticated'
    RESTRICTED = 'restricted'
    UNRESTRICTED = 'unrestricted'


class GuardAction:
    DEFER = 'defer'
    ALLOW = 'allow'
    REDIRECT = 'redirect'


@dataclass(frozen=True)
class GuardDecision:
    action: str
    state: str
    path: str
    redirect_to: Optional[str] = None

    @property
    def is_redirect(self):
        return self.action == GuardAction.REDIRECT

    def to_dict(self):
        return {
            'action': self.action,
            'state': self.state,
            'path': self.path,
            'redirect_to': self.redirect_to,
        }


def _normalize_path(path):
    """Strip query string and fragment; collapse trailing slashes."""
    path = urlsplit(path or '').path or '/'
    if not path.startswith('/'):
        path = '/' + path
    if len(path) > 1:
        path = path.rstrip('/') or '/'
    return path


def _matches_prefix(path, prefix):
    # Segment-aware: '/my-jobs' matches '/my-jobs' and '/my-jobs/12', not '/my-jobs-archive'
    prefix = _normalize_path(prefix)
    return path == prefix or path.startswith(prefix + '/')


class RouteGuard:
    """
    Decides allow / redirect / defer for a navigation target.

    Args:
        allowed_prefixes: Path prefixes external recruiters may reach
        landing_path: Where blocked navigations are sent. Always allowed,
            even if missing from allowed_prefixes, so a redirect can never
            trigger another redirect.
    """

    def __init__(self, allowed_prefixes=None, landing_path=None):
        if allowed_prefixes is None:
            allowed_prefixes = access_settings.EXTERNAL_RECRUITER_ALLOWED_PATHS
        if landing_path is None:
            landing_path = access_settings.EXTERNAL_RECRUITER_LANDING_PATH
        self.landing_path = _normalize_path(landing_path)
        self.allowed_prefixes = tuple(_normalize_path(p) for p in allowed_prefixes)

    def state_for(self, perm_set, is_authenticated=True):
        if not is_authenticated or perm_set is None:
            return GuardState.UNAUTHENTICATED
        if perm_set.is_external_recruiter:
            return GuardState.RESTRICTED
        return GuardState.UNRESTRICTED

    def is_allowed_path(self, path):
        path = _normalize_path(path)
        if _matches_prefix(path, self.landing_path):
            return True
        # '/' is never allowed by prefix; every path would match it
        return any(
            _matches_prefix(path, prefix)
            for prefix in self.allowed_prefixes
            if prefix != '/'
        )

    def evaluate(self, path, perm_set, is_authenticated=True):
        """
        Evaluate one navigation event.

        Args:
            path: Requested client-side path (query/fragment ignored)
            perm_set: Resolved EffectivePermissionSet, or None if not logged in
            is_authenticated: False forces the unauthenticated state

        Returns:
            GuardDecision
        """
        normalized = _normalize_path(path)
        state = self.state_for(perm_set, is_authenticated)

        if state == GuardState.UNAUTHENTICATED:
            return GuardDecision(GuardAction.DEFER, state, normalized)

        if state == GuardState.UNRESTRICTED:
            return GuardDecision(GuardAction.ALLOW, state, normalized)

        if normalized == self.landing_path or (normalized != '/' and self.is_allowed_path(normalized)):
            return GuardDecision(GuardAction.ALLOW, state, normalized)

        logger.warning(f"External recruiter blocked from '{normalized}', redirecting to '{self.landing_path}'")
        return GuardDecision(GuardAction.REDIRECT, state, normalized, redirect_to=self.landing_path)


def evaluate_route(path, perm_set, is_authenticated=True):
    """Evaluate with the configured allow-list and landing path."""
    return RouteGuard().evaluate(path, perm_set, is_authenticated)
