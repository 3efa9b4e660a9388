"""
Page, menu and component access checks.

All predicates accept ``None`` for a permission set that has not been
resolved (anonymous user, still loading) and never raise: they gate
rendering paths and must degrade to a safe default instead.

Defaults:
    - Pages and menus fail closed (None or missing -> False)
    - Components fail open (None, never populated, or unknown -> True),
      unless ACCESS_CONTROL['COMPONENTS_DEFAULT_VISIBLE'] is False
"""
import logging

from .catalog import ALL_COMPONENTS, Namespace, namespace_of
from .conf import access_settings
from .resolver import normalize_job_ids

logger = logging.getLogger(__name__)


def can_access_page(perm_set, page):
    """True if the page permission is in the resolved set."""
    if perm_set is None:
        return False
    return page in perm_set.pages


def can_use_menu(perm_set, menu):
    """True if the menu/action permission is in the resolved set."""
    if perm_set is None:
        return False
    return menu in perm_set.menus


def can_view_component(perm_set, component):
    """
    True if the UI fragment may be shown.

    Components are opt-out: an unresolved set, a set whose component data was
    never populated, and a component the catalog does not know about all
    render by default so new fragments are not hidden before they are
    registered.
    """
    default_visible = access_settings.COMPONENTS_DEFAULT_VISIBLE
    if perm_set is None or not perm_set.components:
        return default_visible
    if component not in ALL_COMPONENTS:
        return default_visible
    return component in perm_set.components


_NAMESPACE_CHECKS = {
    Namespace.PAGE: can_access_page,
    Namespace.MENU: can_use_menu,
    Namespace.COMPONENT: can_view_component,
}


def check_permission(perm_set, token):
    """
    Check any catalog token, dispatching on its namespace tag.

    Tokens the catalog does not know are denied and logged: they mean a
    caller references a permission that was never registered.
    """
    namespace = namespace_of(token)
    if namespace is None:
        logger.warning(f"Permission check for unknown token '{token}' denied (not in catalog)")
        return False
    return _NAMESPACE_CHECKS[namespace](perm_set, token)


def can_view_job(perm_set, job_id):
    """
    True if the job is inside the viewer's scope.

    Only job viewers are scoped; everyone else who can open the jobs page
    sees every job.
    """
    if perm_set is None:
        return False
    scope = job_scope(perm_set)
    return scope is None or str(job_id) in scope


def job_scope(perm_set):
    """
    The set of job ids a job viewer is limited to, or None for no limit.

    An empty allow-list denies everything unless
    ACCESS_CONTROL['EMPTY_JOB_SCOPE_DENIES_ALL'] is False.
    """
    if perm_set is None or not perm_set.is_job_viewer:
        return None
    allowed = normalize_job_ids(perm_set.allowed_job_ids)
    if not allowed and not access_settings.EMPTY_JOB_SCOPE_DENIES_ALL:
        return None
    return allowed
