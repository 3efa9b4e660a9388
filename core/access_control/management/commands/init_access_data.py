"""
Initialize Access Control Data

This management command mirrors the static catalog into the database:
- Permissions (every page, menu and component token with its namespace)
- Roles (one default role per role type)
- Role grants (DEFAULT_ROLE_GRANTS for each default role)

Usage:
    python manage.py init_access_data
    python manage.py init_access_data --reset-grants

This is idempotent - safe to run multiple times. Without --reset-grants,
grants an administrator added to a default role are left in place.
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from core.access_control.catalog import ALL_PERMISSIONS, DEFAULT_ROLES, DEFAULT_ROLE_GRANTS
from core.access_control.models import Permission, Role, RolePermission


class Command(BaseCommand):
    help = 'Initialize access control data (permissions, default roles, grants)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset-grants',
            action='store_true',
            help='Remove grants on default roles that are not in the default grant list'
        )

    def handle(self, *args, **options):
        reset_grants = options['reset_grants']
        self.stdout.write('Starting access control data initialization...\n')

        try:
            with transaction.atomic():
                # 1. Mirror the permission catalog
                self.stdout.write('Creating permissions...')
                permissions_created = 0
                for definition in ALL_PERMISSIONS:
                    permission, created = Permission.objects.update_or_create(
                        code=definition.code,
                        defaults={
                            'name': definition.name,
                            'namespace': definition.namespace,
                        }
                    )
                    if created:
                        permissions_created += 1
                        self.stdout.write(f"  ✓ Created permission: {permission.code}")

                stale = Permission.objects.exclude(code__in=[p.code for p in ALL_PERMISSIONS])
                for permission in stale:
                    self.stdout.write(self.style.WARNING(
                        f"  ! Permission not in catalog: {permission.code}"
                    ))

                self.stdout.write(self.style.SUCCESS(
                    f"\n✓ Permissions: {permissions_created} created, "
                    f"{len(ALL_PERMISSIONS) - permissions_created} already existed\n"
                ))

                # 2. Default roles and their grants
                self.stdout.write('Creating roles...')
                roles_created = 0
                permissions_by_code = {p.code: p for p in Permission.objects.all()}
                for role_data in DEFAULT_ROLES:
                    role, created = Role.objects.get_or_create(
                        code=role_data['code'],
                        defaults={
                            'name': role_data['name'],
                            'role_type': role_data['role_type'],
                            'description': role_data['description'],
                        }
                    )
                    if created:
                        roles_created += 1
                        self.stdout.write(f"  ✓ Created role: {role.code}")
                    else:
                        self.stdout.write(f"  - Role already exists: {role.code}")

                    grant_codes = set(DEFAULT_ROLE_GRANTS[role.role_type])
                    grants_created = 0
                    for code in sorted(grant_codes):
                        _, rp_created = RolePermission.objects.get_or_create(
                            role=role,
                            permission=permissions_by_code[code]
                        )
                        if rp_created:
                            grants_created += 1

                    if grants_created > 0:
                        self.stdout.write(f"    → Granted {grants_created} permissions to {role.code}")

                    if reset_grants:
                        extra = RolePermission.objects.filter(role=role).exclude(
                            permission__code__in=grant_codes
                        )
                        removed = extra.count()
                        if removed:
                            extra.delete()
                            self.stdout.write(f"    → Removed {removed} non-default grants from {role.code}")

                self.stdout.write(self.style.SUCCESS(
                    f"\n✓ Roles: {roles_created} created, "
                    f"{len(DEFAULT_ROLES) - roles_created} already existed\n"
                ))

                # Summary
                self.stdout.write(self.style.SUCCESS('\n' + '='*60))
                self.stdout.write(self.style.SUCCESS('ACCESS CONTROL INITIALIZATION COMPLETE'))
                self.stdout.write(self.style.SUCCESS('='*60))
                self.stdout.write(f"\nPermissions: {len(ALL_PERMISSIONS)} total")
                self.stdout.write(f"Roles: {len(DEFAULT_ROLES)} total")

        except Exception as e:
            self.stdout.write(self.style.ERROR(f'\n❌ Error: {str(e)}\n'))
            raise
