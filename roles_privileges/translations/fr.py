FR_TRANSLATIONS = {
    "roles-collection-label-plural": "Rôles",
    "roles-collection-label-singular": "Rôle",
    "roles-field-description-description": "Description optionnelle de ce rôle",
    "roles-field-description-label": "Description",
    "roles-field-privileges-description": "Sélectionnez les privilèges que ce rôle devrait avoir",
    "roles-field-privileges-label": "Privilèges",
    "roles-field-slug-description": "Identifiant unique pour ce rôle",
    "roles-field-slug-label": "Slug",
    "roles-field-title-label": "Titre du rôle",
    "privilege-prefix-admin": "Accès administrateur à",
    "privilege-prefix-create": "Créer",
    "privilege-prefix-delete": "Supprimer",
    "privilege-prefix-read": "Lire",
    "privilege-prefix-readVersions": "Lire les versions:",
    "privilege-prefix-unlock": "Déverrouiller",
    "privilege-prefix-update": "Modifier",
    "privilege-template-admin": "Accéder au panneau d'administration et à l'interface utilisateur des {label}",
    "privilege-template-create": "Possibilité de créer de nouveaux {label}",
    "privilege-template-delete": "Supprimer {label} du système",
    "privilege-template-read": "Voir le contenu et les informations de {label}",
    "privilege-template-readVersions": "Accéder et voir les versions précédentes des {label}",
    "privilege-template-unlock": "Déverrouiller {label} en cours de modification par d'autres utilisateurs",
    "privilege-template-update": "Modifier les données existantes de {label}",
    "privilege-prefix-singleton-read": "Lire",
    "privilege-prefix-singleton-readDrafts": "Lire les brouillons:",
    "privilege-prefix-singleton-readVersions": "Lire les versions:",
    "privilege-prefix-singleton-update": "Modifier",
    "privilege-template-singleton-read": "Voir le contenu et les paramètres de {label}",
    "privilege-template-singleton-readDrafts": "Accéder et voir les brouillons de {label}",
    "privilege-template-singleton-readVersions": "Accéder et voir les versions précédentes de {label}",
    "privilege-template-singleton-update": "Modifier les paramètres et données de {label}",
    "privilege-collection-description": "Gérer {label} dans le système",
    "privilege-singleton-description": "Gérer les paramètres globaux de {label}",
    "super-admin-title": "Super Admin",
    "super-admin-description": "Super administrateur avec un accès complet au système et tous les privilèges",
    "error-cannot-delete-super-admin": "Impossible de supprimer le rôle Super Admin",
    "error-cannot-modify-super-admin-slug": "Impossible de modifier le slug du rôle Super Admin",
    "error-cannot-assign-super-admin-slug": "Seul le rôle Super Admin peut utiliser le slug super-admin",
}
