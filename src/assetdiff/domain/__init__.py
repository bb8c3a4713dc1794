"""Domain layer: inventory records, reconciliation rules and ports."""
