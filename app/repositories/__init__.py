"""레포지토리 패키지 — 사용자, 고객, 개인정보 쿼리 계층.

Repository package for users, clients and personal info.
Repositories only build and run queries; they never commit. Dynamic client
filters live in ``client_specification`` as composable predicates.
"""
