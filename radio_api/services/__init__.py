"""Services package — all business logic lives here, never in routers.

Files:
  aruba_client.py   — httpx client for the Instant On SSO + device APIs (ApiResult envelope)
  mock_client.py    — canned stub client for local development (USE_MOCK_ARUBA_CLIENT)
  aruba_service.py  — aggregation: auth → Credential, site/device/radio fan-out and merge
  token_store.py    — optional server-side credential stores (memory / database)
  log_collector.py  — in-memory log buffer behind /api/app/logs

Rule: routers call services, services call the vendor client.
      No FastAPI imports in services.
"""
