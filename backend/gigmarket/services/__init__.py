"""Services Layer — marketplace operation handlers and the Marketplace facade.

Invariants:
    - Handlers split by concern (max ~5 methods each)
    - Every mutation runs inside exactly one RecordStore.transaction()
    - Handlers authorize through core.authorization, transition through core functions

Design Decisions:
    - One handler file per concern for locality (ADR: ExMA no god objects)
"""
