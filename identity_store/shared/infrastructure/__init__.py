# 📄 File: identity_store/shared/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# Technical building blocks for talking to outside systems, currently the SQL database.
