"""
Shared service utilities.

- http.py      - pre-configured ``requests.Session`` used by every API client
"""
