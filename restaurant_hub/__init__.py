"""Restaurant Hub backend package."""
