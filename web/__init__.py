"""
FastAPI layer for TeamCal.

Routers:
- web.auth_routes.router   (/login, /logout, /check-auth)
- web.user_routes.router   (users and roles)
- web.event_routes.router  (/events)

web.main.create_app() mounts them behind the identity middleware.
"""
