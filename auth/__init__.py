"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt)
  • Credential and session stores
  • Sign-up / sign-in / sign-out service and API routes
  • ``get_current_user_id`` FastAPI dependency
"""
