"""Block-seeded creature generation and evolution engine."""
