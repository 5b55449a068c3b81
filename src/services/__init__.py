"""Application services layer (host integration).

Services wire the Gemini client, rate limiter and audit log together and give
the UI a boundary that never raises.
"""
