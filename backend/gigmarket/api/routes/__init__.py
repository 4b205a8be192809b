"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter; main.py mounts them under settings.api_prefix
    - Routes never contain business logic (delegate to services)

Design Decisions:
    - Explicit registration in main.py over auto-discovery (ADR: ExMA anti-pattern)
"""
