# 📄 File: identity_store/modules/user_management/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the data access contracts for user accounts and for the generic record storage under them.
# 🧪 Purpose (Technical Summary):
# Package initialization for repository interfaces following the Repository pattern.
# 🔄 Connected Modules / Calls From:
# Domain services, infrastructure implementations

"""
User Management Domain Repositories

Repository Interfaces:
- UserRepository: lifecycle and lookups for IdentityUser entities
- DocumentRepository: generic document collection the user store is mapped onto

Implementation Note:
- These are interfaces/abstract classes only
- Concrete implementations are in the infrastructure layer
"""

from .document_repository import Document, DocumentRepository
from .user_repository import UserRepository

__all__ = [
    "Document",
    "DocumentRepository",
    "UserRepository",
]
