"""AI Relay: FastAPI REST API layer.

This package contains the FastAPI application, Pydantic request models, the
per-endpoint system instructions and the shared endpoint flow.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request validation.
prompts
    Fixed system instruction for each endpoint.
endpoints
    The validate, template, dispatch and respond flow shared by the routes.
"""
