"""
inmo_service package

Backend for a real-estate listing service. It includes:

- FastAPI application factory (`main.py`) and routers (`routes/`)
- SQLAlchemy models and database handle (`models.py`, `db.py`)
- Stores with soft-delete semantics (`repositories.py`)
- Account and listing business rules (`services.py`)
- Password hashing (`hashing.py`) and pydantic schemas (`schemas.py`)
"""
