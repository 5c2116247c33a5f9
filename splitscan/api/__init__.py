"""HTTP service exposing the parse and decode workflows."""
