"""
Access Control Catalog - Hardcoded Setup
========================================

Defines the foundational structure for the permission system:
- Permission tokens, each tagged with its namespace (page, menu, component)
- The closed set of role types
- Default grants per role type (used to seed one role per type)
- The navigation catalog, in display order

This module is the source of truth. The `init_access_data` management
command mirrors it into the database so roles can reference permissions.
Namespace is carried explicitly on every token; it is never inferred from
the token's spelling.
"""
from collections import namedtuple


# ============================================================================
# NAMESPACES
# ============================================================================

class Namespace:
    """Permission namespace identifiers."""
    PAGE = 'page'
    MENU = 'menu'
    COMPONENT = 'component'

    CHOICES = [
        (PAGE, 'Page'),
        (MENU, 'Menu'),
        (COMPONENT, 'Component'),
    ]


PermissionDef = namedtuple('PermissionDef', ['code', 'namespace', 'name'])


# ============================================================================
# PAGE PERMISSIONS
# ============================================================================

class Pages:
    """Page permission identifiers. Gate access to an entire route."""
    DASHBOARD = 'view_dashboard'
    CANDIDATES = 'view_candidates'
    ADD_CANDIDATE = 'create_candidates'
    CANDIDATE_DETAIL = 'view_candidate_details'
    EDIT_CANDIDATE = 'edit_candidates'
    DELETE_CANDIDATE = 'delete_candidates'
    RECENTLY_UPDATED = 'view_recently_updated'
    CV_SEARCH = 'view_cv_search'
    CALENDAR = 'view_calendar'
    CLIENTS = 'view_clients'
    CREATE_CLIENT = 'create_clients'
    EDIT_CLIENT = 'edit_clients'
    DELETE_CLIENT = 'delete_clients'
    JOBS = 'view_jobs'
    CREATE_JOB = 'create_jobs'
    EDIT_JOB = 'edit_jobs'
    DELETE_JOB = 'delete_jobs'
    INTERVIEWS = 'view_interviews'
    SCHEDULE_INTERVIEW = 'schedule_interviews'
    MANAGE_INTERVIEW = 'manage_interviews'
    EMAILS = 'view_emails'
    SEND_EMAIL = 'send_emails'
    EMAIL_SETTINGS = 'manage_email_settings'
    SYSTEM_SETTINGS = 'manage_system_settings'
    USER_MANAGEMENT = 'manage_users'
    SETTINGS = 'access_settings'
    REPORTS = 'view_reports'
    ANALYTICS = 'view_analytics'
    EXTERNAL_RECRUITERS = 'manage_external_recruiters'
    PENDING_APPROVALS = 'view_pending_approvals'
    MY_JOBS = 'view_my_jobs'


PAGE_PERMISSIONS = [
    PermissionDef(Pages.DASHBOARD, Namespace.PAGE, 'Dashboard'),
    PermissionDef(Pages.CANDIDATES, Namespace.PAGE, 'Candidates'),
    PermissionDef(Pages.ADD_CANDIDATE, Namespace.PAGE, 'Add Candidate'),
    PermissionDef(Pages.CANDIDATE_DETAIL, Namespace.PAGE, 'Candidate Details'),
    PermissionDef(Pages.EDIT_CANDIDATE, Namespace.PAGE, 'Edit Candidate'),
    PermissionDef(Pages.DELETE_CANDIDATE, Namespace.PAGE, 'Delete Candidate'),
    PermissionDef(Pages.RECENTLY_UPDATED, Namespace.PAGE, 'Recently Updated'),
    PermissionDef(Pages.CV_SEARCH, Namespace.PAGE, 'CV Search'),
    PermissionDef(Pages.CALENDAR, Namespace.PAGE, 'Calendar'),
    PermissionDef(Pages.CLIENTS, Namespace.PAGE, 'Clients'),
    PermissionDef(Pages.CREATE_CLIENT, Namespace.PAGE, 'Create Client'),
    PermissionDef(Pages.EDIT_CLIENT, Namespace.PAGE, 'Edit Client'),
    PermissionDef(Pages.DELETE_CLIENT, Namespace.PAGE, 'Delete Client'),
    PermissionDef(Pages.JOBS, Namespace.PAGE, 'Jobs'),
    PermissionDef(Pages.CREATE_JOB, Namespace.PAGE, 'Create Job'),
    PermissionDef(Pages.EDIT_JOB, Namespace.PAGE, 'Edit Job'),
    PermissionDef(Pages.DELETE_JOB, Namespace.PAGE, 'Delete Job'),
    PermissionDef(Pages.INTERVIEWS, Namespace.PAGE, 'Interviews'),
    PermissionDef(Pages.SCHEDULE_INTERVIEW, Namespace.PAGE, 'Schedule Interview'),
    PermissionDef(Pages.MANAGE_INTERVIEW, Namespace.PAGE, 'Manage Interviews'),
    PermissionDef(Pages.EMAILS, Namespace.PAGE, 'Emails'),
    PermissionDef(Pages.SEND_EMAIL, Namespace.PAGE, 'Send Email'),
    PermissionDef(Pages.EMAIL_SETTINGS, Namespace.PAGE, 'Email Settings'),
    PermissionDef(Pages.SYSTEM_SETTINGS, Namespace.PAGE, 'System Settings'),
    PermissionDef(Pages.USER_MANAGEMENT, Namespace.PAGE, 'User Management'),
    PermissionDef(Pages.SETTINGS, Namespace.PAGE, 'Settings'),
    PermissionDef(Pages.REPORTS, Namespace.PAGE, 'Reports'),
    PermissionDef(Pages.ANALYTICS, Namespace.PAGE, 'Analytics'),
    PermissionDef(Pages.EXTERNAL_RECRUITERS, Namespace.PAGE, 'External Recruiters'),
    PermissionDef(Pages.PENDING_APPROVALS, Namespace.PAGE, 'Pending Approvals'),
    PermissionDef(Pages.MY_JOBS, Namespace.PAGE, 'My Jobs'),
]


# ============================================================================
# MENU PERMISSIONS
# ============================================================================

class Menus:
    """Menu permission identifiers. Gate a specific action or button."""
    MAIN_NAVIGATION = 'view_main_navigation'
    QUICK_ACTIONS = 'view_quick_actions'
    ADD_CANDIDATE_QUICK = 'quick_add_candidate'
    ADD_JOB_QUICK = 'quick_add_job'
    ADD_CLIENT_QUICK = 'quick_add_client'
    VIEW_CLIENT_NAMES = 'view_client_names'
    EXPORT_DATA = 'export_data'
    BULK_ACTIONS = 'perform_bulk_actions'
    UPLOAD_CV = 'upload_cv'
    DOWNLOAD_CV = 'download_cv'
    ADD_NOTES = 'add_candidate_notes'
    VIEW_CANDIDATE_HISTORY = 'view_candidate_history'
    SEND_CANDIDATE_EMAIL = 'send_candidate_email'
    CLOSE_JOB = 'close_jobs'
    ASSIGN_CANDIDATE_TO_JOB = 'assign_candidates'
    VIEW_JOB_ANALYTICS = 'view_job_analytics'
    OCR_PROCESSING = 'use_ocr_processing'
    ADVANCED_SEARCH = 'use_advanced_search'
    SYSTEM_BACKUP = 'perform_system_backup'
    VIEW_SYSTEM_LOGS = 'view_system_logs'


MENU_PERMISSIONS = [
    PermissionDef(Menus.MAIN_NAVIGATION, Namespace.MENU, 'Main Navigation'),
    PermissionDef(Menus.QUICK_ACTIONS, Namespace.MENU, 'Quick Actions'),
    PermissionDef(Menus.ADD_CANDIDATE_QUICK, Namespace.MENU, 'Quick Add Candidate'),
    PermissionDef(Menus.ADD_JOB_QUICK, Namespace.MENU, 'Quick Add Job'),
    PermissionDef(Menus.ADD_CLIENT_QUICK, Namespace.MENU, 'Quick Add Client'),
    PermissionDef(Menus.VIEW_CLIENT_NAMES, Namespace.MENU, 'View Client Names'),
    PermissionDef(Menus.EXPORT_DATA, Namespace.MENU, 'Export Data'),
    PermissionDef(Menus.BULK_ACTIONS, Namespace.MENU, 'Bulk Actions'),
    PermissionDef(Menus.UPLOAD_CV, Namespace.MENU, 'Upload CV'),
    PermissionDef(Menus.DOWNLOAD_CV, Namespace.MENU, 'Download CV'),
    PermissionDef(Menus.ADD_NOTES, Namespace.MENU, 'Add Candidate Notes'),
    PermissionDef(Menus.VIEW_CANDIDATE_HISTORY, Namespace.MENU, 'View Candidate History'),
    PermissionDef(Menus.SEND_CANDIDATE_EMAIL, Namespace.MENU, 'Send Candidate Email'),
    PermissionDef(Menus.CLOSE_JOB, Namespace.MENU, 'Close Jobs'),
    PermissionDef(Menus.ASSIGN_CANDIDATE_TO_JOB, Namespace.MENU, 'Assign Candidates'),
    PermissionDef(Menus.VIEW_JOB_ANALYTICS, Namespace.MENU, 'View Job Analytics'),
    PermissionDef(Menus.OCR_PROCESSING, Namespace.MENU, 'OCR Processing'),
    PermissionDef(Menus.ADVANCED_SEARCH, Namespace.MENU, 'Advanced Search'),
    PermissionDef(Menus.SYSTEM_BACKUP, Namespace.MENU, 'System Backup'),
    PermissionDef(Menus.VIEW_SYSTEM_LOGS, Namespace.MENU, 'View System Logs'),
]


# ============================================================================
# COMPONENT PERMISSIONS
# ============================================================================

class Components:
    """Component permission identifiers. Gate visibility of a UI fragment."""
    SIDEBAR = 'view_sidebar'
    NAVBAR = 'view_navbar'
    USER_DROPDOWN = 'view_user_dropdown'
    NOTIFICATIONS = 'view_notifications'
    LOGOUT_BUTTON = 'access_logout'
    PROFILE_SETTINGS = 'access_profile'
    HELP_SECTION = 'view_help'
    CANDIDATE_TABLE = 'view_candidate_table'
    JOB_TABLE = 'view_job_table'
    CLIENT_TABLE = 'view_client_table'
    STATS_DASHBOARD = 'view_statistics'
    SEARCH_FILTERS = 'use_search_filters'
    SORT_OPTIONS = 'use_sort_options'
    PAGINATION = 'use_pagination'


COMPONENT_PERMISSIONS = [
    PermissionDef(Components.SIDEBAR, Namespace.COMPONENT, 'Sidebar'),
    PermissionDef(Components.NAVBAR, Namespace.COMPONENT, 'Navbar'),
    PermissionDef(Components.USER_DROPDOWN, Namespace.COMPONENT, 'User Dropdown'),
    PermissionDef(Components.NOTIFICATIONS, Namespace.COMPONENT, 'Notifications'),
    PermissionDef(Components.LOGOUT_BUTTON, Namespace.COMPONENT, 'Logout Button'),
    PermissionDef(Components.PROFILE_SETTINGS, Namespace.COMPONENT, 'Profile Settings'),
    PermissionDef(Components.HELP_SECTION, Namespace.COMPONENT, 'Help Section'),
    PermissionDef(Components.CANDIDATE_TABLE, Namespace.COMPONENT, 'Candidate Table'),
    PermissionDef(Components.JOB_TABLE, Namespace.COMPONENT, 'Job Table'),
    PermissionDef(Components.CLIENT_TABLE, Namespace.COMPONENT, 'Client Table'),
    PermissionDef(Components.STATS_DASHBOARD, Namespace.COMPONENT, 'Statistics'),
    PermissionDef(Components.SEARCH_FILTERS, Namespace.COMPONENT, 'Search Filters'),
    PermissionDef(Components.SORT_OPTIONS, Namespace.COMPONENT, 'Sort Options'),
    PermissionDef(Components.PAGINATION, Namespace.COMPONENT, 'Pagination'),
]


ALL_PERMISSIONS = PAGE_PERMISSIONS + MENU_PERMISSIONS + COMPONENT_PERMISSIONS

# code -> namespace
PERMISSION_NAMESPACES = {p.code: p.namespace for p in ALL_PERMISSIONS}

ALL_PAGES = frozenset(p.code for p in PAGE_PERMISSIONS)
ALL_MENUS = frozenset(p.code for p in MENU_PERMISSIONS)
ALL_COMPONENTS = frozenset(p.code for p in COMPONENT_PERMISSIONS)


def namespace_of(code):
    """Return the catalog namespace of a permission token, or None if unknown."""
    return PERMISSION_NAMESPACES.get(code)


# ============================================================================
# ROLE TYPES
# ============================================================================

class RoleTypes:
    """Closed enumeration of role types."""
    SUPER_ADMIN = 'super_admin'
    ADMIN = 'admin'
    RESTRICTED_ADMIN = 'restricted_admin'
    JOB_VIEWER = 'job_viewer'
    EXTERNAL_RECRUITER = 'external_recruiter'
    USER = 'user'

    CHOICES = [
        (SUPER_ADMIN, 'Super Admin'),
        (ADMIN, 'Admin'),
        (RESTRICTED_ADMIN, 'Restricted Admin'),
        (JOB_VIEWER, 'Job Viewer'),
        (EXTERNAL_RECRUITER, 'External Recruiter'),
        (USER, 'User'),
    ]

    ADMIN_TYPES = frozenset({SUPER_ADMIN, ADMIN, RESTRICTED_ADMIN})


# ============================================================================
# DEFAULT ROLE GRANTS
# ============================================================================

_BASIC_COMPONENTS = [
    Components.SIDEBAR,
    Components.NAVBAR,
    Components.USER_DROPDOWN,
    Components.LOGOUT_BUTTON,
    Components.CANDIDATE_TABLE,
    Components.JOB_TABLE,
    Components.SEARCH_FILTERS,
    Components.SORT_OPTIONS,
    Components.PAGINATION,
]

_STAFF_PAGES = [
    Pages.DASHBOARD,
    Pages.CANDIDATES,
    Pages.ADD_CANDIDATE,
    Pages.CANDIDATE_DETAIL,
    Pages.EDIT_CANDIDATE,
    Pages.RECENTLY_UPDATED,
    Pages.CV_SEARCH,
    Pages.CALENDAR,
    Pages.CLIENTS,
    Pages.CREATE_CLIENT,
    Pages.EDIT_CLIENT,
    Pages.JOBS,
    Pages.CREATE_JOB,
    Pages.EDIT_JOB,
    Pages.INTERVIEWS,
    Pages.SCHEDULE_INTERVIEW,
    Pages.MANAGE_INTERVIEW,
    Pages.EMAILS,
    Pages.SEND_EMAIL,
    Pages.REPORTS,
    Pages.ANALYTICS,
]

DEFAULT_ROLE_GRANTS = {
    RoleTypes.SUPER_ADMIN: [p.code for p in ALL_PERMISSIONS],
    RoleTypes.ADMIN: (
        _STAFF_PAGES
        + [Pages.EMAIL_SETTINGS]
        + [p.code for p in MENU_PERMISSIONS]
        + [p.code for p in COMPONENT_PERMISSIONS]
    ),
    RoleTypes.RESTRICTED_ADMIN: (
        _STAFF_PAGES
        + _BASIC_COMPONENTS
        + [
            Components.NOTIFICATIONS,
            Components.CLIENT_TABLE,
            Components.STATS_DASHBOARD,
            Menus.MAIN_NAVIGATION,
            Menus.QUICK_ACTIONS,
            Menus.ADD_CANDIDATE_QUICK,
            Menus.ADD_JOB_QUICK,
            Menus.ADD_CLIENT_QUICK,
            Menus.VIEW_CLIENT_NAMES,
            Menus.UPLOAD_CV,
            Menus.DOWNLOAD_CV,
            Menus.ADD_NOTES,
            Menus.VIEW_CANDIDATE_HISTORY,
            Menus.SEND_CANDIDATE_EMAIL,
            Menus.ASSIGN_CANDIDATE_TO_JOB,
            Menus.OCR_PROCESSING,
            Menus.ADVANCED_SEARCH,
        ]
    ),
    # No VIEW_CLIENT_NAMES: job viewers see jobs with the client redacted
    RoleTypes.JOB_VIEWER: (
        [
            Pages.DASHBOARD,
            Pages.CANDIDATES,
            Pages.CANDIDATE_DETAIL,
            Pages.JOBS,
            Pages.INTERVIEWS,
            Pages.CV_SEARCH,
        ]
        + _BASIC_COMPONENTS
        + [
            Menus.MAIN_NAVIGATION,
            Menus.UPLOAD_CV,
            Menus.DOWNLOAD_CV,
            Menus.ADD_NOTES,
            Menus.VIEW_CANDIDATE_HISTORY,
            Menus.OCR_PROCESSING,
        ]
    ),
    RoleTypes.USER: (
        [
            Pages.DASHBOARD,
            Pages.CANDIDATES,
            Pages.CANDIDATE_DETAIL,
            Pages.RECENTLY_UPDATED,
            Pages.CV_SEARCH,
            Pages.CALENDAR,
            Pages.JOBS,
            Pages.INTERVIEWS,
        ]
        + _BASIC_COMPONENTS
        + [
            Menus.MAIN_NAVIGATION,
            Menus.VIEW_CLIENT_NAMES,
            Menus.DOWNLOAD_CV,
            Menus.VIEW_CANDIDATE_HISTORY,
        ]
    ),
    RoleTypes.EXTERNAL_RECRUITER: [
        Pages.MY_JOBS,
        Pages.ADD_CANDIDATE,
        Pages.SETTINGS,
        Components.SIDEBAR,
        Components.NAVBAR,
        Components.USER_DROPDOWN,
        Components.LOGOUT_BUTTON,
        Menus.MAIN_NAVIGATION,
        Menus.UPLOAD_CV,
        Menus.ADD_CANDIDATE_QUICK,
    ],
}

DEFAULT_ROLES = [
    {
        'code': RoleTypes.SUPER_ADMIN,
        'name': 'Super Admin',
        'role_type': RoleTypes.SUPER_ADMIN,
        'description': 'Full access to every page, menu and component',
    },
    {
        'code': RoleTypes.ADMIN,
        'name': 'Admin',
        'role_type': RoleTypes.ADMIN,
        'description': 'Everything except user and system administration',
    },
    {
        'code': RoleTypes.RESTRICTED_ADMIN,
        'name': 'Restricted Admin',
        'role_type': RoleTypes.RESTRICTED_ADMIN,
        'description': 'Staff access without settings or user management',
    },
    {
        'code': RoleTypes.JOB_VIEWER,
        'name': 'Job Viewer',
        'role_type': RoleTypes.JOB_VIEWER,
        'description': 'Scoped to specific jobs, client names hidden',
    },
    {
        'code': RoleTypes.EXTERNAL_RECRUITER,
        'name': 'External Recruiter',
        'role_type': RoleTypes.EXTERNAL_RECRUITER,
        'description': 'Sees assigned jobs only and may upload candidates',
    },
    {
        'code': RoleTypes.USER,
        'name': 'User',
        'role_type': RoleTypes.USER,
        'description': 'Read-mostly access for regular staff',
    },
]


# ============================================================================
# NAVIGATION
# ============================================================================

NavEntry = namedtuple('NavEntry', ['permission', 'name', 'path', 'icon'])

# icon token -> icon set identifier used by the browser client
NAV_ICONS = {
    'Users': 'users',
    'RefreshCw': 'refresh-cw',
    'Search': 'search',
    'Calendar': 'calendar',
    'Building2': 'building-2',
    'Briefcase': 'briefcase',
    'UserCheck': 'user-check',
    'UserCog': 'user-cog',
    'Clock': 'clock',
    'BarChart3': 'bar-chart-3',
    'Settings': 'settings',
}

# Display order is part of the UI contract; filters never re-sort it.
NAVIGATION = (
    NavEntry(Pages.CANDIDATES, 'Candidates', '/candidates', 'Users'),
    NavEntry(Pages.RECENTLY_UPDATED, 'Recently Updated', '/candidates/recently-updated', 'RefreshCw'),
    NavEntry(Pages.CV_SEARCH, 'CV Search', '/cv-search', 'Search'),
    NavEntry(Pages.CALENDAR, 'Calendar', '/calendar', 'Calendar'),
    NavEntry(Pages.CLIENTS, 'Clients', '/clients', 'Building2'),
    NavEntry(Pages.JOBS, 'Jobs', '/jobs', 'Briefcase'),
    NavEntry(Pages.INTERVIEWS, 'Interviews', '/interviews', 'UserCheck'),
    NavEntry(Pages.EXTERNAL_RECRUITERS, 'External Recruiters', '/external-recruiters', 'UserCog'),
    NavEntry(Pages.PENDING_APPROVALS, 'Pending Approvals', '/pending-approvals', 'Clock'),
    NavEntry(Pages.REPORTS, 'Reports & Analytics', '/reports', 'BarChart3'),
    NavEntry(Pages.SETTINGS, 'Settings', '/settings', 'Settings'),
)


# ============================================================================
# ROUTE GUARD
# ============================================================================

EXTERNAL_RECRUITER_ALLOWED_PATHS = ('/my-jobs', '/upload-candidate', '/login')
EXTERNAL_RECRUITER_LANDING_PATH = '/my-jobs'
