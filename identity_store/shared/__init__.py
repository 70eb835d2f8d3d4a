# 📄 File: identity_store/shared/__init__.py
# 🧭 Purpose (Layman Explanation):
# The shared toolbox of the identity store: configuration, error types, logging and storage plumbing.
# 🧪 Purpose (Technical Summary):
# Shared kernel package; submodules are imported explicitly by callers.
