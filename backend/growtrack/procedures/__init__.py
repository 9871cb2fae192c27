"""Data access procedures for genetics, batches and plants."""
from growtrack.procedures import batch, dashboard, genetic, plant
from growtrack.procedures.context import ProcedureContext
from growtrack.procedures.errors import ErrorCode, ProcedureError

__all__ = ["batch", "dashboard", "genetic", "plant", "ProcedureContext", "ErrorCode", "ProcedureError"]
