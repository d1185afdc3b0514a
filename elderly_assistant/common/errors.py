"""
Erreurs métier du backend.
- AppError: base commune, porte un code d'enveloppe (500 par défaut, comme l'API historique).
- InvalidArgument: identifiant obligatoire manquant.
- NotFound: entité référencée absente.
- PersistenceError: écriture refusée (0 ligne affectée) ou erreur de transport vers la base.
- ExternalServiceError: erreur du fournisseur de reconnaissance vocale (err_no != 0, réseau, parsing).
"""
from typing import Optional


class AppError(Exception):
    code: int = 500

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InvalidArgument(AppError):
    pass


class NotFound(AppError):
    pass


class PersistenceError(AppError):
    pass


class ExternalServiceError(AppError):
    def __init__(self, message: str, provider_code: Optional[int] = None, code: Optional[int] = None):
        super().__init__(message, code=code)
        self.provider_code = provider_code
