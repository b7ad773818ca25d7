"""
Validation package for generated wall meshes.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationStage: Pipeline stage enumeration
    - MeshValidator: Orchestrator for buffer and variant checks
    - get_validator(): Get configured validator instance
    - ValidationError: Exception raised on FAIL issues
"""

from .core import (
    Severity,
    ValidationStage,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .mesh_validator import MeshValidator, get_validator, reset_validator

__all__ = [
    # Core types
    'Severity',
    'ValidationStage',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    # Validator
    'MeshValidator',
    'get_validator',
    'reset_validator',
]
