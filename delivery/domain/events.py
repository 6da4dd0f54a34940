# Lifecycle event names published by the order orchestrator.
NEW_PENDING_ORDER = "NEW_PENDING_ORDER"  # payload: {"order": ..., "owner_id": ...}
NEW_COOKED_ORDER = "NEW_COOKED_ORDER"  # payload: order
NEW_ORDER_UPDATE = "NEW_ORDER_UPDATE"  # payload: order