"""HTTP API for the gloss converter.

WHY: Hosts that cannot import the package (the browser story viewer,
shell scripts) format sentences by POSTing the same JSON the UI holds.

HOW: app.py defines the FastAPI app and its ResultBoard render target;
models.py holds the pydantic request/response schemas.
"""
