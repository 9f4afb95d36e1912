"""Output layer — Rich renderers and JSON/quiet formatting for ServiceResult."""
