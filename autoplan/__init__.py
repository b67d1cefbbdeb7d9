"""Auto-scheduling engine and service for free-text tasks."""
