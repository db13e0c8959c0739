"""서비스 패키지 — 고객 관리 및 인증 비즈니스 규칙.

Service package. ``client_service`` owns uniqueness checks, the SUPER_ADMIN
creation guard and partial updates; ``auth_service`` issues access tokens.
Routers commit the unit of work after a service call returns.
"""
