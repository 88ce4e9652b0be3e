"""Complaint letter generation: prompts, fallback templates, and the service."""
