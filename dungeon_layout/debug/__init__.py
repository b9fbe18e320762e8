"""Debug utilities for layout inspection."""
