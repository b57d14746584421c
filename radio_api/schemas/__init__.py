"""Pydantic schemas package.

Folder intent:
  common.py    — CamelModel base + HealthResponse (all API schemas inherit CamelModel)
  auth.py      — login/refresh DTOs, Credential, UserInfo
  site.py      — Site / Device / Radio topology and radio-control DTOs
  app_info.py  — version + log buffer responses for /api/app/*
"""
