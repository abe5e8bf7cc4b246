"""Pure domain logic: path gating, artifact redirects, response descriptors.

Nothing here imports FastAPI or Starlette, so the gate and the redirector
can be unit-tested and hosted on any platform that hands over a path.
"""
__all__ = ["artifacts", "pathgate", "responses"]
