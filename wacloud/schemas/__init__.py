"""Schema layer: request and response shapes with parse-or-fail validation."""
