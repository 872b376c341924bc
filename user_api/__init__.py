"""Users resource service (FastAPI + SQLAlchemy, ports and adapters)."""

__version__ = "0.1.0"
