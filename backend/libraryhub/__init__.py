"""LibraryHub — multi-site library lending service.

Layout:
    - core/: pure domain (entities, domain services, protocols), no IO
    - services/: async command handlers (imperative shell around core)
    - api/, schemas/: FastAPI routes and Pydantic request/response models
    - models/, db/, infrastructure/: SQLAlchemy persistence, logging, clock
"""
