"""Top-level sample_backend package.

Sub-packages
------------
sample_backend.api
    FastAPI app factory (app.py), per-resource routers (routes/), dependencies
sample_backend.core
    configuration, logging, exceptions, database models, layout checker
sample_backend.schemas
    pydantic request / response models and the response envelope
sample_backend.services
    resource services over the database
sample_backend.cli
    ``sample-backend`` command-line entry point

The React + TypeScript client lives in ``sample-client/`` and is not a
Python package.
"""

from __future__ import annotations

__version__ = "0.1.0"
