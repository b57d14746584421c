"""Routers package — HTTP endpoint definitions, all mounted under /api.

Files:
  auth.py      — /api/auth/* (login, refresh, logout, me)
  sites.py     — /api/sites/* (sites, devices)
  radios.py    — /api/sites/{site_id}/devices/{device_id}/radios/*
  app_info.py  — /api/app/* (version, recent logs)

Rule: Routers only handle HTTP (request parsing, response shaping).
      All vendor work delegates to radio_api/services/.
"""
