"""External integrations — credential lookup."""
