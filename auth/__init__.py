"""
auth — User authentication module.

Provides:
  • Signed, expiring bearer tokens (HMAC-SHA256)
  • Password hashing (bcrypt)
  • Register / Login / current-user API routes
  • ``get_current_user`` FastAPI dependency
"""
