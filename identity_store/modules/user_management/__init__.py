# 📄 File: identity_store/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the user management system: checking accounts before they are saved and storing
# them, together with the outside logins linked to them.
# 🧪 Purpose (Technical Summary):
# Package initialization for the user management module, layered as domain (entities, rules,
# interfaces) and infrastructure (document repositories, store adapter, wiring).

"""
User Management Module

Architecture follows Domain-Driven Design:
- Domain: IdentityUser entity, validation rules, repository interfaces, UserManager
- Infrastructure: document repositories (memory, SQLAlchemy), UserStore adapter, factories
"""

__module_name__ = "user_management"
