"""Twilio API mock server (Chat, Autopilot and REST slices)."""
