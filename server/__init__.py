"""HTTP API for quiz competition grading."""
