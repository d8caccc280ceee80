"""
Feature modules for the wallet-users backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py: Business logic implementation
- exceptions.py: Module-specific exceptions

Storage-backed modules add repository.py (PostgreSQL) and memory.py
(in-process) implementations of their repository interface.

Modules communicate through interfaces, not concrete implementations.
"""
