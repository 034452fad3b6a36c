"""Coordinators - Orchestration layer connecting UI with the stores."""

from .library_coordinator import LibraryCoordinator

__all__ = ["LibraryCoordinator"]
