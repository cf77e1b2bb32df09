# backend/unravel/__init__.py
from __future__ import annotations

"""
Marks `unravel` as a Python package.

Routers live in unravel/api, the classifiers and the execution pipeline in
unravel/services, request/response contracts in unravel/schemas.
"""
