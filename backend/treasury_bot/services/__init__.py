"""Services layer - business logic and external integrations.

This module is organized into domain-based subpackages:
- access/: Chat authorization and broadcast subscriptions
- notifications/: Scheduled broadcasts
- repositories/: Data access layer
- shared/: Shared utilities (HTTP client)
- telegram/: Bot API client, rendering and command routing
- treasury/: Check classification, aggregation and reports
"""
