"""English string table. Every other locale falls back to this one."""

EN_TRANSLATIONS = {
    # Roles resource
    "roles-collection-label-plural": "Roles",
    "roles-collection-label-singular": "Role",
    "roles-field-description-description": "Optional description of this role",
    "roles-field-description-label": "Description",
    "roles-field-privileges-description": "Select the privileges this role should have",
    "roles-field-privileges-label": "Privileges",
    "roles-field-slug-description": "Unique identifier for this role",
    "roles-field-slug-label": "Slug",
    "roles-field-title-label": "Role Title",
    # Collection privilege prefixes
    "privilege-prefix-admin": "Admin Access to",
    "privilege-prefix-create": "Create",
    "privilege-prefix-delete": "Delete",
    "privilege-prefix-read": "Read",
    "privilege-prefix-readVersions": "Read Versions:",
    "privilege-prefix-unlock": "Unlock",
    "privilege-prefix-update": "Update",
    # Collection privilege description templates
    "privilege-template-admin": "Access the {label} admin panel and UI",
    "privilege-template-create": "Ability to create new {label}",
    "privilege-template-delete": "Remove {label} from the system",
    "privilege-template-read": "View {label} content and information",
    "privilege-template-readVersions": "Access and view previous versions of {label}",
    "privilege-template-unlock": "Unlock {label} that are being edited by other users",
    "privilege-template-update": "Modify existing {label} data",
    # Singleton privilege prefixes
    "privilege-prefix-singleton-read": "Read",
    "privilege-prefix-singleton-readDrafts": "Read Drafts:",
    "privilege-prefix-singleton-readVersions": "Read Versions:",
    "privilege-prefix-singleton-update": "Update",
    # Singleton privilege description templates
    "privilege-template-singleton-read": "View {label} content and settings",
    "privilege-template-singleton-readDrafts": "Access and view draft versions of {label}",
    "privilege-template-singleton-readVersions": "Access and view previous versions of {label}",
    "privilege-template-singleton-update": "Modify {label} settings and data",
    # Catalog entry descriptions
    "privilege-collection-description": "Manage {label} in the system",
    "privilege-singleton-description": "Manage {label} global settings",
    # Super admin role
    "super-admin-title": "Super Admin",
    "super-admin-description": "Super administrator with full system access and all privileges",
    # Errors
    "error-cannot-delete-super-admin": "Cannot delete the Super Admin role",
    "error-cannot-modify-super-admin-slug": "Cannot modify the Super Admin role slug",
    "error-cannot-assign-super-admin-slug": "Only the Super Admin role can use the super-admin slug",
}
