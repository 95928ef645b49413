"""Pydantic schemas: applicant input, engine wire contract, advisor outputs."""
