"""Route modules for the Twilio mock."""
