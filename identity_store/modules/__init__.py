# 📄 File: identity_store/modules/__init__.py
# 🧭 Purpose (Layman Explanation):
# Home of the identity store's feature modules.
