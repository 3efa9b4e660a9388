"""
Short-lived cache of resolved permission sets, keyed by user id.

Backed by Django's cache framework so a shared backend (Redis, Memcached)
works across processes. A cached set may be served for up to the TTL after
a role change that bypassed the invalidation signals; that staleness window
is accepted.
"""
import logging

from django.core.cache import caches

from .conf import access_settings

logger = logging.getLogger(__name__)


class PermissionCache:
    """
    Cache object injected into ``services.get_effective_permissions``.

    Args:
        alias: Entry of settings.CACHES to use (default from settings)
        ttl: Seconds to keep a resolved set (default from settings)
        prefix: Key prefix
    """

    def __init__(self, alias=None, ttl=None, prefix=None):
        self._alias = alias
        self._ttl = ttl
        self._prefix = prefix

    @property
    def backend(self):
        return caches[self._alias or access_settings.PERMISSION_CACHE_ALIAS]

    @property
    def ttl(self):
        return self._ttl if self._ttl is not None else access_settings.PERMISSION_CACHE_TTL

    def key(self, user_id):
        prefix = self._prefix or access_settings.PERMISSION_CACHE_PREFIX
        return f"{prefix}:{user_id}"

    def get(self, user_id):
        perm_set = self.backend.get(self.key(user_id))
        if perm_set is None:
            logger.debug(f"Permission cache miss for user {user_id}")
        else:
            logger.debug(f"Permission cache hit for user {user_id}")
        return perm_set

    def set(self, user_id, perm_set):
        if self.ttl <= 0:
            return
        self.backend.set(self.key(user_id), perm_set, timeout=self.ttl)

    def invalidate(self, user_id):
        """Drop one user's cached set (called when their roles change)."""
        self.backend.delete(self.key(user_id))
        logger.debug(f"Permission cache invalidated for user {user_id}")

    def invalidate_many(self, user_ids):
        keys = [self.key(user_id) for user_id in set(user_ids)]
        if keys:
            self.backend.delete_many(keys)
            logger.debug(f"Permission cache invalidated for {len(keys)} user(s)")


class NullPermissionCache(PermissionCache):
    """Cache that never stores anything; resolves on every call."""

    def get(self, user_id):
        return None

    def set(self, user_id, perm_set):
        pass

    def invalidate(self, user_id):
        pass

    def invalidate_many(self, user_ids):
        pass


permission_cache = PermissionCache()
