"""
Feature modules for gpx-explore.

Each feature is a self-contained module with:
- models.py - Data types
- schemas.py - Pydantic schemas (optional)
- parser.py / processor.py - Core logic
"""
