# =============================================================================
# core/ - Domain Layer
# =============================================================================
# - models/: Pydantic schemas and per-request collections
# - services/: Aggregation over the loaded data
# =============================================================================
