"""
Feature modules for the Studex identity backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- exceptions.py: Module-specific exceptions
- implementation modules (service, controller, state machine)

Modules communicate through interfaces, not concrete implementations.
"""
