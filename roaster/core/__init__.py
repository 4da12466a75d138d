"""Pure business logic: order numbers, production aggregation, pricing,
reminder timing and analytics. Nothing here touches the database."""
