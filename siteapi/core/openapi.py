"""OpenAPI metadata and customization utilities.

Adds to the generated schema:
- Tags metadata
- The API Key security scheme (``X-API-Key``) on operations that check it
- The 429 rate-limit response on every operation under the governed prefix
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {"name": "Admin", "description": "Runtime site configuration."},
    {"name": "Config", "description": "Read-only export of allow-listed configuration."},
    {"name": "Content", "description": "Article tagging and deletion."},
    {"name": "Contact", "description": "User-to-user contact relay."},
    {"name": "Weather", "description": "Cached current weather conditions."},
    {"name": "Health", "description": "Liveness checks."},
]

RATE_LIMITED_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {
        "application/json": {
            "example": {"error": "Rate limit exceeded", "retry_after": 42},
        }
    },
}

# Operations whose routes declare an API key dependency
_PROTECTED_TAGS = {"Admin", "Config", "Content"}


def apply_openapi_customizations(app: FastAPI, *, rate_limit_prefix: str) -> None:
    """Patch FastAPI's OpenAPI generation to add metadata, security and 429s."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        components = schema.setdefault("components", {})
        components.setdefault("securitySchemes", {}).setdefault(
            "ApiKeyAuth",
            {
                "type": "apiKey",
                "in": "header",
                "name": "X-API-Key",
                "description": "Provide your API key via the X-API-Key header.",
            },
        )

        tags = schema.setdefault("tags", [])
        existing = {t.get("name") for t in tags}
        tags.extend(t for t in TAGS_METADATA if t["name"] not in existing)

        for path, methods in schema.get("paths", {}).items():
            for operation in methods.values():
                if not isinstance(operation, dict):
                    continue
                if _PROTECTED_TAGS.intersection(operation.get("tags", [])):
                    operation["security"] = [{"ApiKeyAuth": []}]
                if path.startswith(rate_limit_prefix):
                    operation.setdefault("responses", {}).setdefault("429", RATE_LIMITED_RESPONSE)

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
