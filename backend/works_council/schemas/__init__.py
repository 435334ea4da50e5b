"""API Schemas — Pydantic request/response models for the works-council routes."""
