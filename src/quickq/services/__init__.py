"""Service layer: remote gateway, job search, interview sessions and the local API."""
