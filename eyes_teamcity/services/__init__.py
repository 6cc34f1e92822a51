# Services module - batch ids, build environment and Eyes integration
from .batch import generate_batch_id, resolve_batch_id
from .environment import batch_environment, export_environment

__all__ = ["batch_environment", "export_environment", "generate_batch_id", "resolve_batch_id"]
