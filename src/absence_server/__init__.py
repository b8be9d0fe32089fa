"""absence_server — FastAPI REST API for the absence question engine.

Exposes the question catalog, answer recording, visible-question
resolution, risk assessment, and the mental-health follow-up check over
HTTP.
"""
