"""Settings and the application error taxonomy for Honest Meals."""
