# Middleware package init
"""
Snippetbox: Middleware Package
==============================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    Request ID runs first so the access log line can include it.
"""
