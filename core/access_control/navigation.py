"""
Navigation filtering.

Maps a resolved permission set onto the static navigation catalog. The
catalog order is the display order; filtering only removes entries.
"""
from .catalog import NAVIGATION, NAV_ICONS
from .checks import can_access_page


def get_allowed_navigation(perm_set, navigation=NAVIGATION):
    """
    Return the navigation entries the user may see, in catalog order.

    Args:
        perm_set: EffectivePermissionSet or None (unresolved -> empty list)
        navigation: Ordered NavEntry sequence; defaults to the app catalog

    Returns:
        list of NavEntry
    """
    if perm_set is None:
        return []
    return [entry for entry in navigation if can_access_page(perm_set, entry.permission)]


def serialize_navigation(entries):
    """Render NavEntry tuples for the API, resolving icon tokens via NAV_ICONS."""
    return [
        {
            'permission': entry.permission,
            'name': entry.name,
            'path': entry.path,
            'icon': entry.icon,
            'icon_id': NAV_ICONS.get(entry.icon),
        }
        for entry in entries
    ]
